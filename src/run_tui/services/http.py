from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.context import Context, timeout_for
from ..errors import ApiError, AuthenticationError, DeadlineExceeded

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def api_error(response: httpx.Response) -> ApiError:
    """Map a failed Google API response onto ApiError, keeping its message."""
    message = response.reason_phrase or "request failed"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message") or message
    if response.status_code in (401, 403):
        return AuthenticationError(response.status_code, message)
    return ApiError(response.status_code, message)


class ApiClient:
    def __init__(self, base_url: str, token: str, timeout: float = DEFAULT_TIMEOUT,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.Client(
            base_url=self.base,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def request(self, method: str, path: str, ctx: Optional[Context] = None, **kwargs) -> Dict[str, Any]:
        try:
            r = self._client.request(method, path, timeout=timeout_for(ctx, self.timeout), **kwargs)
        except httpx.TimeoutException as e:
            if ctx is not None and ctx.expired:
                raise DeadlineExceeded() from e
            raise
        try:
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise api_error(e.response) from e
        if not r.content:
            return {}
        return r.json()

    def get(self, path: str, ctx: Optional[Context] = None, **params) -> Dict[str, Any]:
        return self.request("GET", path, ctx, params=params)

    def post(self, path: str, json: Optional[Dict[str, Any]] = None, ctx: Optional[Context] = None) -> Dict[str, Any]:
        return self.request("POST", path, ctx, json=json or {})

    def patch(self, path: str, json: Dict[str, Any], ctx: Optional[Context] = None, **params) -> Dict[str, Any]:
        return self.request("PATCH", path, ctx, json=json, params=params)

    def list_all(self, path: str, key: str, ctx: Optional[Context] = None, **params) -> List[Dict[str, Any]]:
        """Follow nextPageToken until the collection is exhausted."""
        items: List[Dict[str, Any]] = []
        while True:
            page = self.get(path, ctx, **params)
            items.extend(page.get(key, []))
            token = page.get("nextPageToken")
            if not token:
                return items
            params["pageToken"] = token

    def wait_operation(self, op: Dict[str, Any], ctx: Optional[Context] = None,
                       interval: float = 1.0) -> Dict[str, Any]:
        """Poll a long-running operation until done; returns its response."""
        ctx = ctx or Context()
        while not op.get("done"):
            if ctx.wait(interval):
                ctx.raise_if_cancelled()
            log.debug("waiting on %s", op.get("name"))
            op = self.get(f"/v2/{op['name']}", ctx)
        if "error" in op:
            error = op["error"]
            raise ApiError(error.get("code", 0), error.get("message", "operation failed"))
        return op.get("response", {})
