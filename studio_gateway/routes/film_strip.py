"""
Film strip gallery proxy routes.
The same image list feeds the admin table and the public film strip.
"""
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Optional
import logging

from studio_gateway.services.backend_client import (
    BackendClient,
    get_backend_client,
    read_forward_payload,
    relay,
)
from studio_gateway.utils.auth import get_admin_token
from studio_gateway.utils.pagination import MAX_PER_PAGE, page_params

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/film-strip", tags=["film-strip"])


@router.get("")
async def list_film_strip_images(
    page: int = Query(1, ge=1),
    per_page_camel: Optional[int] = Query(None, alias="perPage", ge=1, le=MAX_PER_PAGE),
    per_page: Optional[int] = Query(None, ge=1, le=MAX_PER_PAGE),
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """Get one page of film strip images, relayed unchanged."""
    params = page_params(page, per_page_camel or per_page, size_key="perPage")
    return await relay(client.get("film-strip", params=params, token=token), "fetch film strip images")


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_film_strip_images(
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """
    Upload one or more film strip images (multipart images[]).
    """
    payload = await read_forward_payload(request)
    logger.info(f"Uploading {len(payload.files)} film strip image(s)")
    return await relay(
        client.post("film-strip", payload, token=token),
        "upload film strip images",
        success_status=status.HTTP_201_CREATED,
    )


@router.delete("/{image_id}")
async def delete_film_strip_image(
    image_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(
        client.delete(f"film-strip/{image_id}", token=token),
        "delete film strip image",
        empty_body={"message": "Image deleted successfully"},
    )
