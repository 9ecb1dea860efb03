"""Utility helpers for the lobby service."""
