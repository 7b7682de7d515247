from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from .models import ApiResult, TaskDraft, TaskId
from .storage import TokenStore

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized. Please log in again."


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP error! Status: {response.status_code}"
    if isinstance(payload, dict):
        if payload.get("message"):
            return str(payload["message"])
        if payload.get("errors"):
            return json.dumps(payload["errors"])
    return "An unknown error occurred."


def _unwrap(payload: Any) -> Any:
    if isinstance(payload, dict) and payload.get("data"):
        return payload["data"]
    return payload


class TaskFlowClient:
    """Talks to the TaskFlow REST backend.

    Every public call returns an :class:`ApiResult` holding either data or an
    error message; transport and HTTP failures never escape as exceptions.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        token_store: TokenStore | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store
        if token is None and token_store is not None:
            token = token_store.load()
        self.token = token
        self.headers = {
            "Accept": "application/json",
            "ngrok-skip-browser-warning": "true",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self.client = httpx.Client(timeout=30.0, headers=self.headers, transport=transport)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "TaskFlowClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        backoff = 1.0
        for attempt in range(5):
            response = self.client.request(method, url, **kwargs)
            if response.status_code != 429:
                return response
            retry_after = response.headers.get("Retry-After")
            wait = float(retry_after) if retry_after else backoff
            logger.info("Rate limited on %s %s, retrying in %.1fs", method, path, wait)
            time.sleep(wait)
            backoff *= 2
        return response

    def _request(self, method: str, path: str, **kwargs: Any) -> ApiResult:
        try:
            response = self._send(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            return ApiResult(error=str(exc) or "A network error occurred.")

        if response.status_code == 401:
            if self.token_store is not None:
                self.token_store.clear()
            return ApiResult(error=UNAUTHORIZED_MESSAGE)

        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s returned %s: %s", method, path, response.status_code, message)
            return ApiResult(error=message)

        if response.status_code == 204:
            return ApiResult(data={"success": True})

        try:
            payload = response.json()
        except ValueError:
            return ApiResult(error="A network error occurred.")
        return ApiResult(data=_unwrap(payload))

    def get_tasks(self) -> ApiResult:
        return self._request("GET", "/api/tasks")

    def get_projects(self) -> ApiResult:
        return self._request("GET", "/api/projects")

    def create_task(self, draft: TaskDraft) -> ApiResult:
        # Sent as multipart form data; tags go out as tags[0], tags[1], ...
        fields: list[tuple[str, tuple[None, str]]] = [
            ("title", (None, draft.title or "")),
            ("description", (None, draft.description or "")),
        ]
        if draft.project_id is not None:
            fields.append(("project_id", (None, str(draft.project_id))))
        if draft.due_date:
            fields.append(("due_date", (None, draft.due_date)))
        fields.append(("status", (None, draft.status or "todo")))
        for index, tag_id in enumerate(draft.tag_ids or []):
            fields.append((f"tags[{index}]", (None, str(tag_id))))
        return self._request("POST", "/api/add-tasks", files=fields)

    def update_task(self, task_id: TaskId, draft: TaskDraft) -> ApiResult:
        payload = {
            "title": draft.title,
            "description": draft.description,
            "project_id": draft.project_id,
            "due_date": draft.due_date,
            "status": draft.status,
            "tags": draft.tag_ids,
        }
        payload = {key: value for key, value in payload.items() if value is not None}
        return self._request("PUT", f"/api/update-tasks/{task_id}", json=payload)

    def delete_task(self, task_id: TaskId) -> ApiResult:
        return self._request("DELETE", f"/api/delete-tasks/{task_id}")
