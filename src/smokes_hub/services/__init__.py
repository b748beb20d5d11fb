# src/smokes_hub/services/__init__.py
"""Business logic services for the Smokes Hub application."""

from .steam import SteamAuthError, SteamOpenIDClient, SteamProfile, get_steam_client

__all__ = [
    "SteamAuthError",
    "SteamOpenIDClient",
    "SteamProfile",
    "get_steam_client",
]
