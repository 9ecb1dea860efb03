"""CORS policy shared by the lobby endpoints."""

from litestar.config.cors import CORSConfig

ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

# Answers browser preflights on every route
cors_config = CORSConfig(
    allow_origins=["*"],
    allow_headers=ALLOWED_HEADERS,
    allow_methods=["POST", "OPTIONS"],
)
