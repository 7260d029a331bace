"""
Category proxy routes.
Forwards category listing, creation (multipart with images[]) and per-record
operations to the content backend.
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

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
async def list_categories(
    page: int = Query(1, ge=1),
    per_page_camel: Optional[int] = Query(None, alias="perPage", ge=1, le=MAX_PER_PAGE),
    per_page: Optional[int] = Query(None, ge=1, le=MAX_PER_PAGE),
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """
    Get one page of categories.

    Args:
        page: 1-based page number
        per_page_camel / per_page: Page size, either spelling (default: 10), forwarded as perPage

    Returns:
        Backend page ({data, last_page}) unchanged
    """
    params = page_params(page, per_page_camel or per_page, size_key="perPage")
    return await relay(client.get("categories", params=params, token=token), "fetch categories")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """
    Create a category with its images.
    Expects multipart form data: name, description (optional), images[] (files).
    """
    payload = await read_forward_payload(request)
    logger.info(f"Creating category with {len(payload.files)} image(s)")
    return await relay(
        client.post("categories", payload, token=token),
        "create category",
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{category_id}")
async def get_category(
    category_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(client.get(f"categories/{category_id}", token=token), "fetch category")


@router.put("/{category_id}")
async def update_category(
    category_id: int,
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    payload = await read_forward_payload(request)
    return await relay(client.put(f"categories/{category_id}", payload, token=token), "update category")


@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(
        client.delete(f"categories/{category_id}", token=token),
        "delete category",
        empty_body={"message": "Category deleted successfully"},
    )
