"""
HTTP client used by the admin console to talk to the gateway's /api routes.
"""
import logging
from typing import Any, Optional, Sequence, Tuple, Type

import requests
from pydantic import BaseModel

from studio_gateway.admin.uploads import SelectedFile
from studio_gateway.schemas import BackendRecord, PaginatedResponse

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Non-2xx answer from the gateway, carrying the human readable message."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class GatewayClient:
    """
    Calls the gateway on behalf of an admin console page.

    Args:
        base_url: Gateway origin (e.g. http://localhost:8080)
        session: requests session; carries the admin_token cookie after login
        timeout: Seconds per request
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)

        if not 200 <= response.status_code < 300:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = None
            if isinstance(body, dict):
                message = body.get("error") or body.get("message")
            raise GatewayError(response.status_code, message or f"HTTP error! status: {response.status_code}")

        if not response.content:
            return None
        return response.json()

    def list(
        self, path: str, params: Optional[dict] = None, record: Type[BaseModel] = BackendRecord
    ) -> PaginatedResponse:
        """
        Fetch one page and parse its rows.

        Args:
            path: Gateway route of the collection
            params: Query parameters
            record: Model each row is validated against

        Returns:
            PaginatedResponse: rows from {data, last_page} or a bare array (one page)

        Raises:
            ValidationError: If a row does not match the record model
        """
        body = self._request("GET", path, params=params)
        if isinstance(body, list):
            body = {"data": body}
        elif not (isinstance(body, dict) and isinstance(body.get("data"), list)):
            body = {"data": []}
        return PaginatedResponse[record].model_validate(body)

    def create(self, path: str, fields: Sequence[Tuple[str, str]], files: Sequence[Tuple[str, SelectedFile]]) -> Any:
        return self._request("POST", path, data=list(fields), files=_encode_files(files))

    def update(self, path: str, item_id: Any, fields: Sequence[Tuple[str, str]], files: Sequence[Tuple[str, SelectedFile]]) -> Any:
        return self._request("PUT", f"{path}/{item_id}", data=list(fields), files=_encode_files(files))

    def delete(self, path: str, item_id: Any) -> Any:
        return self._request("DELETE", f"{path}/{item_id}")

    def login(self, email: str, password: str) -> Any:
        """Log in; the session keeps the admin_token cookie for later calls."""
        return self._request("POST", "/api/admin/login", json={"email": email, "password": password})


def _encode_files(files: Sequence[Tuple[str, SelectedFile]]) -> list:
    return [(key, (f.filename, f.content, f.content_type)) for key, f in files]
