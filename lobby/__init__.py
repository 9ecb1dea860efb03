"""Two-player game lobby: create and join game sessions backed by an external store."""
