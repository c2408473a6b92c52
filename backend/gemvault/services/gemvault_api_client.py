"""Client for the Gemvault admin API, used by the owner edit session."""

import logging
from typing import Any

import httpx

from gemvault.config import settings
from gemvault.services.shared.http_client import HTTPClient

logger = logging.getLogger(__name__)


class GemvaultAPIClient(HTTPClient):
    """Admin API client.

    Example usage:
        with GemvaultAPIClient() as api:
            api.login("admin", "secret")
            owners = api.get_owners(gemstone_id=1)
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or settings.api_timeout_seconds,
            transport=transport,
        )
        self.token = token

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def login(self, username: str, password: str) -> dict[str, Any]:
        """Log in and keep the access token for later calls."""
        result = self.post_json("/admin/login", json={"username": username, "password": password})
        self.token = result["access_token"]
        logger.info(f"Logged in to {self.base_url} as {username}")
        return result

    def get_owners(self, gemstone_id: int) -> list[dict[str, Any]]:
        return self.get_json(f"/gemstones/{gemstone_id}/owners", headers=self._auth_headers())

    def add_owner(self, gemstone_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return self.post_json(
            f"/gemstones/{gemstone_id}/owners", json=data, headers=self._auth_headers()
        )

    def update_owner(
        self, gemstone_id: int, owner_id: int | str, data: dict[str, Any]
    ) -> dict[str, Any]:
        return self.put_json(
            f"/gemstones/{gemstone_id}/owners/{owner_id}", json=data, headers=self._auth_headers()
        )

    def delete_owner(self, gemstone_id: int, owner_id: int | str) -> None:
        self.delete(f"/gemstones/{gemstone_id}/owners/{owner_id}", headers=self._auth_headers())

    def get_all_owners(self) -> list[dict[str, Any]]:
        """Distinct owner contacts across all gemstones."""
        return self.get_json("/owners/all", headers=self._auth_headers())

    def get_photos(self, gemstone_id: int) -> list[dict[str, Any]]:
        return self.get_json(f"/gemstones/{gemstone_id}/photos", headers=self._auth_headers())

    def add_photo(
        self, gemstone_id: int, photo_url: str, caption: str | None = None
    ) -> dict[str, Any]:
        return self.post_json(
            f"/gemstones/{gemstone_id}/photos",
            json={"photo_url": photo_url, "caption": caption},
            headers=self._auth_headers(),
        )

    def update_photo(self, gemstone_id: int, photo_id: int, caption: str | None) -> dict[str, Any]:
        return self.put_json(
            f"/gemstones/{gemstone_id}/photos/{photo_id}",
            json={"caption": caption},
            headers=self._auth_headers(),
        )

    def delete_photo(self, gemstone_id: int, photo_id: int) -> None:
        self.delete(f"/gemstones/{gemstone_id}/photos/{photo_id}", headers=self._auth_headers())

    def get_public_photos(self, unique_id: str) -> list[dict[str, Any]]:
        """Public gallery; needs no token."""
        return self.get_json(f"/gemstones/{unique_id}/photos/public")
