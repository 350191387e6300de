"""HTTP client for the TaskFlow REST API."""

from __future__ import annotations

from typing import Any

import httpx


class TaskflowClient:
    """Thin wrapper over the REST endpoints used by the realtime client.

    Example:
        with TaskflowClient("http://localhost:8000") as client:
            client.login("ana@example.com", "secret")
            tasks = client.list_tasks(project=3)
    """

    DEFAULT_BASE_URL = "http://localhost:8000"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url or self.DEFAULT_BASE_URL
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)
        self.token: str | None = None
        self.user: dict[str, Any] | None = None

    def __enter__(self) -> "TaskflowClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        response = self._client.request(method, url, headers=self._headers(), **kwargs)
        response.raise_for_status()
        return response.json()

    # Auth

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in and keep the bearer token for later calls."""
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["access_token"]
        self.user = data["user"]
        return data

    def logout(self) -> None:
        self.token = None
        self.user = None

    # Tasks

    def list_tasks(self, **filters: Any) -> list[dict[str, Any]]:
        params = {key: value for key, value in filters.items() if value is not None}
        return self._request("GET", "/tasks/", params=params)

    def create_task(self, **fields: Any) -> dict[str, Any]:
        return self._request("POST", "/tasks/", json=fields)

    def update_task(self, task_id: int, **changes: Any) -> dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}", json=changes)

    def delete_task(self, task_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}")

    # Comments

    def list_comments(self, task_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/comments/task/{task_id}")

    def create_comment(self, task_id: int, content: str) -> dict[str, Any]:
        return self._request("POST", "/comments/", json={"task_id": task_id, "content": content})

    # Notifications

    def list_notifications(self, *, unread_only: bool = False, limit: int = 20) -> dict[str, Any]:
        """Return ``{"notifications": [...], "unread_count": n}``."""
        params = {"unread_only": str(unread_only).lower(), "limit": limit}
        return self._request("GET", "/notifications/", params=params)

    def mark_read(self, notification_id: int) -> dict[str, Any]:
        return self._request("PUT", f"/notifications/{notification_id}/read")

    def mark_all_read(self) -> dict[str, Any]:
        return self._request("PUT", "/notifications/read-all")

    def delete_notification(self, notification_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/notifications/{notification_id}")

    def clear_read(self) -> dict[str, Any]:
        return self._request("DELETE", "/notifications/read")


__all__ = ["TaskflowClient"]
