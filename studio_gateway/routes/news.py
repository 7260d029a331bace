"""
News proxy routes, shared by the public news page and the admin table.
"""
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Optional

from studio_gateway.services.backend_client import (
    BackendClient,
    get_backend_client,
    read_forward_payload,
    relay,
)
from studio_gateway.utils.auth import get_admin_token
from studio_gateway.utils.pagination import MAX_PER_PAGE, page_params

router = APIRouter(prefix="/news", tags=["news"])


@router.get("")
async def list_news(
    page: int = Query(1, ge=1),
    per_page_camel: Optional[int] = Query(None, alias="perPage", ge=1, le=MAX_PER_PAGE),
    per_page: Optional[int] = Query(None, ge=1, le=MAX_PER_PAGE),
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    params = page_params(page, per_page_camel or per_page)
    return await relay(client.get("news", params=params, token=token), "fetch news")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_news(
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """Create a news item (multipart: title, description, date, images[])."""
    payload = await read_forward_payload(request)
    return await relay(
        client.post("news", payload, token=token),
        "create news",
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{news_id}")
async def get_news_item(
    news_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(client.get(f"news/{news_id}", token=token), "fetch news item")


@router.put("/{news_id}")
async def update_news_item(
    news_id: int,
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    payload = await read_forward_payload(request)
    return await relay(client.put(f"news/{news_id}", payload, token=token), "update news")


@router.delete("/{news_id}")
async def delete_news_item(
    news_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(
        client.delete(f"news/{news_id}", token=token),
        "delete news item",
        empty_body={"message": "News item deleted successfully"},
    )
