"""
Hero section proxy routes.
Listing supports status filtering, search and sorting on top of paging.
"""
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Optional
import logging

from studio_gateway.schemas import HeroStatus
from studio_gateway.services.backend_client import (
    BackendClient,
    get_backend_client,
    read_forward_payload,
    relay,
)
from studio_gateway.utils.auth import get_admin_token
from studio_gateway.utils.pagination import MAX_PER_PAGE, drop_empty, page_params, sort_params

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hero-sections", tags=["hero-sections"])


@router.get("")
async def list_hero_sections(
    page: int = Query(1, ge=1),
    per_page_camel: Optional[int] = Query(None, alias="perPage", ge=1, le=MAX_PER_PAGE),
    per_page: Optional[int] = Query(None, ge=1, le=MAX_PER_PAGE),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    hero_status: Optional[HeroStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """
    Get one page of hero sections.

    Args:
        page, perPage: Paging (forwarded as page / per_page)
        sortBy, sortOrder: Sorting (forwarded as sort_by / sort_order, default created_at desc)
        status: Optional active/inactive filter
        search: Optional free text filter

    Returns:
        Backend page ({data, last_page}) unchanged
    """
    params = {
        **page_params(page, per_page_camel or per_page),
        **sort_params(sort_by, sort_order),
        **drop_empty({"status": hero_status, "search": search}),
    }
    return await relay(client.get("hero-sections", params=params, token=token), "fetch hero sections")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_hero_section(
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """
    Create a hero section.
    Expects multipart form data: status (active/inactive), images[] (files).
    """
    payload = await read_forward_payload(request)
    logger.info(f"Creating hero section with {len(payload.files)} image(s)")
    return await relay(
        client.post("hero-sections", payload, token=token),
        "create hero section",
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{hero_id}")
async def get_hero_section(
    hero_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(client.get(f"hero-sections/{hero_id}", token=token), "fetch hero section")


@router.put("/{hero_id}")
async def update_hero_section(
    hero_id: int,
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """
    Update a hero section.
    Only newly added files are sent; images already on the server are kept by the backend.
    """
    payload = await read_forward_payload(request)
    logger.info(f"Updating hero section {hero_id} with {len(payload.files)} new image(s)")
    return await relay(client.put(f"hero-sections/{hero_id}", payload, token=token), "update hero section")


@router.delete("/{hero_id}")
async def delete_hero_section(
    hero_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(
        client.delete(f"hero-sections/{hero_id}", token=token),
        "delete hero section",
        empty_body={"message": "Hero section deleted successfully"},
    )
