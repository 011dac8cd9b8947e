import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from portfolio_api.config import settings
from portfolio_api.schemas import (
    SLUG_PATTERN,
    RelatedItemsQuery,
    RelatedItemsResponse,
    is_valid_uuid,
)
from portfolio_api.services.knowledge_graph import RelatedContentService, RelatedItem

logger = logging.getLogger(__name__)

router = APIRouter()


def get_related_content_service() -> RelatedContentService:
    return RelatedContentService()


def _parse_limit(limit: Optional[str]) -> int:
    """Validate the ?limit= query value: a positive integer up to the configured maximum."""
    try:
        query = RelatedItemsQuery(limit=limit if limit is not None else settings.related_default_limit)
    except ValidationError as e:
        logger.warning(f"Invalid query params in related posts request: {e.errors()}")
        raise HTTPException(status_code=400, detail="Invalid query parameters")

    if query.limit > settings.related_max_limit:
        logger.warning(f"Related posts limit {query.limit} exceeds maximum {settings.related_max_limit}")
        raise HTTPException(status_code=400, detail="Invalid query parameters")

    return query.limit


def _related_response(items: List[RelatedItem]) -> JSONResponse:
    # Raises ValidationError if a computed item breaks the response contract
    response = RelatedItemsResponse(data=[asdict(item) for item in items])
    return JSONResponse(
        content=response.model_dump(),
        headers={"Cache-Control": settings.related_cache_control},
    )


@router.get("/{blog_id}/related")
def get_related_blogs(
    blog_id: str,
    limit: Optional[str] = None,
    service: RelatedContentService = Depends(get_related_content_service),
):
    """Related published posts for a post id, ranked by relatedness score."""
    if not is_valid_uuid(blog_id):
        logger.warning(f"Invalid blog ID in related posts request: {blog_id!r}")
        raise HTTPException(status_code=400, detail="Invalid blog ID format")

    parsed_limit = _parse_limit(limit)

    try:
        items = service.get_related_items_by_id(blog_id, parsed_limit)
        return _related_response(items)
    except Exception as e:
        logger.error(f"Error fetching related blogs for id '{blog_id}': {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch related blogs")


@router.get("/slug/{slug}/related")
def get_related_blogs_by_slug(
    slug: str,
    limit: Optional[str] = None,
    service: RelatedContentService = Depends(get_related_content_service),
):
    """Related published posts for a post slug."""
    if not SLUG_PATTERN.match(slug):
        logger.warning(f"Invalid blog slug in related posts request: {slug!r}")
        raise HTTPException(status_code=400, detail="Invalid blog slug format")

    parsed_limit = _parse_limit(limit)

    try:
        items = service.get_related_items(slug, parsed_limit)
        return _related_response(items)
    except Exception as e:
        logger.error(f"Error fetching related blogs for slug '{slug}': {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch related blogs")
