"""
Client for the Laravel content API.
Forwards gateway requests (query strings, JSON bodies, multipart uploads) to the
backend and turns its answers into relayable results or typed errors.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import requests
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from studio_gateway.config import settings

logger = logging.getLogger(__name__)

FormFields = List[Tuple[str, str]]
FormFiles = List[Tuple[str, Tuple[str, bytes, str]]]


class BackendError(Exception):
    """
    Raised when the backend answers with a non-2xx status.

    Attributes:
        status_code: Upstream HTTP status
        payload: Parsed JSON error body, or None when the body was not JSON
    """

    def __init__(self, status_code: int, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"Backend API error: {status_code}")

    @property
    def message(self) -> Optional[str]:
        if isinstance(self.payload, dict):
            return self.payload.get("error") or self.payload.get("message")
        return None

    def to_detail(self, fallback: str) -> dict:
        """Build the error document relayed to the caller."""
        message = self.message or fallback
        detail = {"error": message, "message": message}
        if isinstance(self.payload, dict) and self.payload.get("errors"):
            detail["errors"] = self.payload["errors"]
        return detail


@dataclass
class BackendResponse:
    status_code: int
    data: Any = None


@dataclass
class ForwardPayload:
    """Body of an incoming request, ready to be re-sent upstream."""
    json: Any = None
    data: FormFields = field(default_factory=list)
    files: FormFiles = field(default_factory=list)

    @property
    def is_multipart(self) -> bool:
        return self.json is None


class BackendClient:
    """
    Thin wrapper around a requests session pointed at the content API.
    Blocking calls are pushed to the threadpool so async routes stay responsive.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        payload: Optional[ForwardPayload] = None,
        token: Optional[str] = None,
    ) -> BackendResponse:
        url = self.url_for(path)
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        kwargs: dict = {"params": params, "headers": headers, "timeout": self.timeout}
        if payload is not None:
            if payload.is_multipart:
                kwargs["data"] = payload.data
                if payload.files:
                    kwargs["files"] = payload.files
            else:
                kwargs["json"] = payload.json

        logger.debug(f"Forwarding {method} {url} params={params}")
        response = self.session.request(method, url, **kwargs)
        logger.info(f"Backend responded {response.status_code} for {method} {url}")

        if not 200 <= response.status_code < 300:
            try:
                error_payload = response.json()
            except ValueError:
                logger.warning(f"Non-JSON error body from backend: {response.text[:200]}")
                error_payload = None
            raise BackendError(response.status_code, error_payload)

        if response.status_code == status.HTTP_204_NO_CONTENT or not response.content:
            return BackendResponse(status_code=response.status_code)

        # A 2xx body that is not JSON is treated as a transport failure
        return BackendResponse(status_code=response.status_code, data=response.json())

    async def send(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        payload: Optional[ForwardPayload] = None,
        token: Optional[str] = None,
    ) -> BackendResponse:
        return await run_in_threadpool(self._send, method, path, params, payload, token)

    async def get(self, path: str, params: Optional[dict] = None, token: Optional[str] = None) -> BackendResponse:
        return await self.send("GET", path, params=params, token=token)

    async def post(self, path: str, payload: ForwardPayload, token: Optional[str] = None) -> BackendResponse:
        return await self.send("POST", path, payload=payload, token=token)

    async def put(self, path: str, payload: ForwardPayload, token: Optional[str] = None) -> BackendResponse:
        """
        Update a record.
        Multipart bodies go out as POST with _method=PUT, which is how Laravel
        accepts file uploads on updates.
        """
        if payload.is_multipart:
            spoofed = ForwardPayload(data=payload.data + [("_method", "PUT")], files=payload.files)
            return await self.send("POST", path, payload=spoofed, token=token)
        return await self.send("PUT", path, payload=payload, token=token)

    async def delete(self, path: str, token: Optional[str] = None) -> BackendResponse:
        return await self.send("DELETE", path, token=token)

    def ping(self) -> bool:
        """Check that the backend host answers at all (any status)."""
        try:
            self.session.request("HEAD", self.base_url, timeout=min(self.timeout, 5.0))
            return True
        except requests.RequestException as e:
            logger.warning(f"Backend ping failed: {str(e)}")
            return False


async def read_forward_payload(request: Request) -> ForwardPayload:
    """
    Read the incoming body for forwarding.
    JSON bodies are re-serialized; anything else is parsed as form data and
    re-encoded field by field, keeping repeated keys such as images[].

    Args:
        request: Incoming FastAPI request

    Returns:
        ForwardPayload: JSON value, or form fields and files
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        return ForwardPayload(json=await request.json())

    form = await request.form()
    payload = ForwardPayload()
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            content = await value.read()
            payload.files.append(
                (key, (value.filename or "upload", content, value.content_type or "application/octet-stream"))
            )
        else:
            payload.data.append((key, value))
    return payload


async def relay(
    call,
    action: str,
    success_status: Optional[int] = None,
    empty_body: Optional[dict] = None,
) -> JSONResponse:
    """
    Await a backend call and translate its outcome into a gateway response.

    Args:
        call: Awaitable returning a BackendResponse
        action: Human readable action used in fixed error messages ("fetch news")
        success_status: Status to answer on success instead of the upstream one
        empty_body: Document returned when the upstream body is empty

    Returns:
        JSONResponse: Upstream body, unchanged in shape

    Raises:
        HTTPException: Upstream status with relayed message, or 500 on transport failure
    """
    try:
        result = await call
    except BackendError as e:
        logger.warning(f"Backend rejected request to {action}: {e.status_code} {e.payload}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail(f"Failed to {action}"))
    except Exception as e:
        logger.error(f"Failed to {action}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": f"Failed to {action}", "detail": str(e)},
        )

    status_code = success_status or result.status_code
    if result.data is None:
        # A 204 cannot carry the replacement document
        if status_code == status.HTTP_204_NO_CONTENT:
            status_code = status.HTTP_200_OK
        return JSONResponse(status_code=status_code, content=empty_body or {})
    return JSONResponse(status_code=status_code, content=result.data)


_client: Optional[BackendClient] = None


def get_backend_client() -> BackendClient:
    """FastAPI dependency returning the shared backend client."""
    global _client
    if _client is None:
        _client = BackendClient(settings.API_URL, timeout=settings.BACKEND_TIMEOUT)
    return _client


def close_backend_client() -> None:
    """Close the shared session; used on application shutdown."""
    global _client
    if _client is not None:
        _client.session.close()
        _client = None
        logger.info("Backend client session closed")
