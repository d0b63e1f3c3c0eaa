"""HTTP client for the Gem Finder API.

Credentials live on an :class:`ApiSession` that callers create and pass in;
nothing is cached at module level, so two clients with two sessions never
share a token.

    session = ApiSession("http://localhost:5000")
    client = GemFinderClient(session)
    client.login("ana@example.com", "secret123")
    client.add_place("Hidden lake", "12.97, 77.59", category="nature")
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Optional

import requests

from gem_finder.utils.logger import get_logger


logger = get_logger("client")


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, error: str, payload: Any = None):
        self.status_code = status_code
        self.error = error
        self.payload = payload
        super().__init__(f"{status_code}: {error}")


@dataclass
class ApiSession:
    base_url: str
    token: Optional[str] = None
    timeout: float = 10.0
    http: requests.Session = field(default_factory=requests.Session)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def logout(self) -> None:
        self.token = None


class GemFinderClient:
    def __init__(self, session: ApiSession):
        self.session = session

    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.session.base_url.rstrip('/')}{path}"
        headers = {**self.session.headers(), **kwargs.pop("headers", {})}
        response = self.session.http.request(
            method, url, headers=headers, timeout=self.session.timeout, **kwargs
        )
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.ok:
            error = payload.get("error") if isinstance(payload, dict) else None
            logger.warning(f"{method} {path} failed with {response.status_code}")
            raise ApiError(response.status_code, error or response.reason, payload)
        return payload

    # ---------------- auth -------------------------------------------
    def signup(self, name: str, email: str, password: str) -> dict:
        data = self._request(
            "POST",
            "/api/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        self.session.token = data["token"]
        return data

    def login(self, email: str, password: str) -> str:
        data = self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        self.session.token = data["token"]
        return self.session.token

    def my_profile(self) -> dict:
        return self._request("GET", "/api/profile/my-profile")

    # ---------------- places -----------------------------------------
    def list_places(self) -> list:
        return self._request("GET", "/api/places")

    def all_places(self) -> list:
        return self._request("GET", "/api/places/all")["places"]

    def search_places(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> list:
        params = {k: v for k, v in {"query": query, "category": category}.items() if v}
        return self._request("GET", "/api/places/search", params=params)["places"]

    def top_rated(self) -> list:
        return self._request("GET", "/api/places/top-rated")["topPlaces"]

    def place_details(self, place_id: int) -> dict:
        return self._request("GET", f"/api/places/{place_id}/details")

    def add_place(
        self,
        title: str,
        location: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        image: Optional[BinaryIO] = None,
        image_name: str = "image.jpg",
        image_type: str = "image/jpeg",
    ) -> dict:
        form = {"title": title, "location": location}
        if description is not None:
            form["description"] = description
        if category is not None:
            form["category"] = category
        files = {"image": (image_name, image, image_type)} if image else None
        return self._request("POST", "/api/places/add", data=form, files=files)["place"]

    def edit_place(self, place_id: int, **changes) -> dict:
        return self._request("PUT", f"/api/places/edit/{place_id}", json=changes)["place"]

    def delete_place(self, place_id: int) -> dict:
        return self._request("DELETE", f"/api/places/{place_id}")

    # ---------------- community --------------------------------------
    def rate(self, place_id: int, rating: int) -> dict:
        return self._request("POST", f"/api/places/{place_id}/rate", json={"rating": rating})

    def ratings(self, place_id: int) -> dict:
        return self._request("GET", f"/api/places/{place_id}/ratings")

    def comment(self, place_id: int, content: str) -> dict:
        return self._request(
            "POST", f"/api/places/{place_id}/comment", json={"content": content}
        )["comment"]

    def comments(self, place_id: int) -> list:
        return self._request("GET", f"/api/places/{place_id}/comments")["comments"]

    def favorite(self, place_id: int) -> dict:
        return self._request("POST", f"/api/places/favorite/{place_id}")

    def unfavorite(self, place_id: int) -> dict:
        return self._request("DELETE", f"/api/places/favorite/{place_id}")

    def favorites(self) -> list:
        return self._request("GET", "/api/places/favorites")["favorites"]

    def report(self, place_id: int, reason: str) -> dict:
        return self._request(
            "POST", f"/api/places/report/{place_id}", json={"reason": reason}
        )
