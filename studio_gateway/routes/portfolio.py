"""
Portfolio proxy routes.
Categories are free text; the category list endpoint always answers with a
list so the public filter bar can render even when the backend is down.
"""
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from studio_gateway.services.backend_client import (
    BackendClient,
    BackendError,
    get_backend_client,
    read_forward_payload,
    relay,
)
from studio_gateway.utils.auth import get_admin_token
from studio_gateway.utils.pagination import MAX_PER_PAGE, drop_empty

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("")
async def list_portfolio(
    category: Optional[str] = None,
    page: Optional[int] = Query(None, ge=1),
    per_page_camel: Optional[int] = Query(None, alias="perPage", ge=1, le=MAX_PER_PAGE),
    per_page: Optional[int] = Query(None, ge=1, le=MAX_PER_PAGE),
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """
    Get portfolio items, optionally filtered by category.
    Paging is only forwarded when the caller asks for it; the public page loads everything.
    """
    params = drop_empty({
        "category": category,
        "page": page,
        "per_page": per_page_camel or per_page,
    })
    return await relay(client.get("portfolio", params=params or None, token=token), "fetch portfolio items")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_portfolio_item(
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    """Create a portfolio item (multipart: title, category, camera, alt, image)."""
    payload = await read_forward_payload(request)
    return await relay(
        client.post("portfolio", payload, token=token),
        "create portfolio item",
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/category")
async def list_portfolio_categories(
    client: BackendClient = Depends(get_backend_client),
):
    """
    Get the distinct portfolio categories.

    Returns:
        Backend answer unchanged, or 500 with an empty data list on failure
    """
    try:
        result = await client.get("portfolio/categories")
        return JSONResponse(content=result.data if result.data is not None else [])
    except BackendError as e:
        logger.error(f"Portfolio categories request rejected: {e.status_code}")
        error = e.message or f"API returned {e.status_code}"
    except Exception as e:
        logger.error(f"Error fetching portfolio categories: {str(e)}", exc_info=True)
        error = "Failed to fetch categories"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": error, "data": []},
    )


@router.get("/{item_id}")
async def get_portfolio_item(
    item_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(client.get(f"portfolio/{item_id}", token=token), "fetch portfolio item")


@router.put("/{item_id}")
async def update_portfolio_item(
    item_id: int,
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    payload = await read_forward_payload(request)
    return await relay(client.put(f"portfolio/{item_id}", payload, token=token), "update portfolio item")


@router.delete("/{item_id}")
async def delete_portfolio_item(
    item_id: int,
    client: BackendClient = Depends(get_backend_client),
    token: Optional[str] = Depends(get_admin_token),
):
    return await relay(
        client.delete(f"portfolio/{item_id}", token=token),
        "delete portfolio item",
        empty_body={"message": "Portfolio item deleted successfully"},
    )
