"""Steam OpenID 2.0 handshake and profile lookup.

Steam only speaks the stateless flavour of OpenID 2.0: the browser is sent to
``steamcommunity.com/openid/login``, comes back to our return URL with a
signed assertion, and we ask Steam to confirm that assertion with a
``check_authentication`` round trip. The player's public profile is then read
from the Steam Web API.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlencode, urlsplit

import httpx

from smokes_hub.core.settings import settings

logger = logging.getLogger(__name__)

STEAM_OPENID_URL = "https://steamcommunity.com/openid/login"
STEAM_PLAYER_SUMMARIES_URL = "https://api.steampowered.com/ISteamUser/GetPlayerSummaries/v0002/"
OPENID_NS = "http://specs.openid.net/auth/2.0"
OPENID_IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"

HTTP_OK = 200

_CLAIMED_ID_RE = re.compile(r"^https?://steamcommunity\.com/openid/id/(?P<steam_id>\d{17})/?$")
_VANITY_RE = re.compile(r"^https?://steamcommunity\.com/id/(?P<vanity>[^/]+)/?$")


class SteamAuthError(RuntimeError):
    """Raised when the Steam handshake cannot produce a verified profile."""


@dataclass(frozen=True)
class SteamConfig:
    """Immutable configuration for the Steam handshake."""

    api_key: str
    realm: str
    return_url: str
    timeout_seconds: float


@dataclass(frozen=True)
class SteamProfile:
    """Profile bundle handed to identity reconciliation.

    ``avatar_urls`` is ordered from smallest to largest resolution.
    """

    steam_id: str
    display_name: str | None = None
    username: str | None = None
    avatar_urls: tuple[str, ...] = field(default_factory=tuple)


def load_steam_config() -> SteamConfig:
    """Build configuration object from global settings."""
    return SteamConfig(
        api_key=settings.steam_api_key,
        realm=settings.steam_realm,
        return_url=settings.steam_return_url,
        timeout_seconds=float(settings.steam_http_timeout_seconds),
    )


def _same_endpoint(left: str, right: str) -> bool:
    a, b = urlsplit(left), urlsplit(right)
    return (a.scheme, a.netloc, a.path.rstrip("/")) == (b.scheme, b.netloc, b.path.rstrip("/"))


class SteamOpenIDClient:
    """HTTP client wrapper for the Steam login handshake."""

    def __init__(
        self,
        config: SteamConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_steam_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def close(self) -> None:
        """Release the underlying connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_login_url(self) -> str:
        """Return the Steam URL the browser should be redirected to."""
        params = {
            "openid.ns": OPENID_NS,
            "openid.mode": "checkid_setup",
            "openid.return_to": self.config.return_url,
            "openid.realm": self.config.realm,
            "openid.identity": OPENID_IDENTIFIER_SELECT,
            "openid.claimed_id": OPENID_IDENTIFIER_SELECT,
        }
        return f"{STEAM_OPENID_URL}?{urlencode(params)}"

    async def verify_assertion(self, params: Mapping[str, str]) -> str:
        """Confirm a callback assertion with Steam and return the SteamID64.

        Args:
            params: Query parameters Steam appended to the return URL.

        Raises:
            SteamAuthError: If the assertion is missing, tampered with or rejected.
        """
        if params.get("openid.mode") != "id_res":
            raise SteamAuthError("Steam did not return a positive assertion")

        return_to = params.get("openid.return_to", "")
        if not _same_endpoint(return_to, self.config.return_url):
            raise SteamAuthError("Assertion was issued for a different return URL")

        match = _CLAIMED_ID_RE.match(params.get("openid.claimed_id", ""))
        if match is None:
            raise SteamAuthError("Assertion does not carry a Steam identity")

        check = {key: value for key, value in params.items() if key.startswith("openid.")}
        check["openid.mode"] = "check_authentication"

        client = await self._ensure_client()
        try:
            response = await client.post(STEAM_OPENID_URL, data=check)
        except httpx.HTTPError as exc:
            raise SteamAuthError(f"Steam verification request failed: {exc}") from exc

        if response.status_code != HTTP_OK or "is_valid:true" not in response.text:
            raise SteamAuthError("Steam rejected the assertion")

        return match.group("steam_id")

    async def fetch_profile(self, steam_id: str) -> SteamProfile:
        """Read a player's public profile from the Steam Web API."""
        client = await self._ensure_client()
        try:
            response = await client.get(
                STEAM_PLAYER_SUMMARIES_URL,
                params={"key": self.config.api_key, "steamids": steam_id},
            )
        except httpx.HTTPError as exc:
            raise SteamAuthError(f"Steam profile request failed: {exc}") from exc

        if response.status_code != HTTP_OK:
            raise SteamAuthError(f"Steam profile lookup returned {response.status_code}")

        try:
            players = response.json()["response"]["players"]
        except (ValueError, KeyError, TypeError) as exc:
            raise SteamAuthError("Unexpected Steam profile payload") from exc

        player = next((p for p in players if str(p.get("steamid")) == steam_id), None)
        if player is None:
            raise SteamAuthError("No user data received from Steam")

        vanity = _VANITY_RE.match(player.get("profileurl") or "")
        avatars = tuple(
            url for url in (player.get(key) for key in ("avatar", "avatarmedium", "avatarfull")) if url
        )
        return SteamProfile(
            steam_id=steam_id,
            display_name=player.get("personaname") or None,
            username=vanity.group("vanity") if vanity else None,
            avatar_urls=avatars,
        )

    async def authenticate(self, params: Mapping[str, str]) -> SteamProfile:
        """Run the full callback verification and return the player's profile."""
        steam_id = await self.verify_assertion(params)
        profile = await self.fetch_profile(steam_id)
        logger.debug("Steam assertion verified for %s", steam_id)
        return profile


_steam_client: SteamOpenIDClient | None = None


def get_steam_client() -> SteamOpenIDClient:
    """Return a shared Steam client instance."""
    global _steam_client
    if _steam_client is None:
        _steam_client = SteamOpenIDClient()
    return _steam_client
