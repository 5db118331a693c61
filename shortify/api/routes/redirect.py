"""Short code redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import RedirectResponse

from shortify.api import schemas
from shortify.api.dependencies import get_shortener_service
from shortify.db.session import get_db
from shortify.services.exceptions import URLLookupError
from shortify.services.shortener import ShortLinkService

router = APIRouter(tags=["redirect"])

INVALID_CODE_DETAIL = "Invalid short code"


@router.get("/", include_in_schema=False)
async def redirect_without_code():
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CODE_DETAIL)


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Empty short code"},
        404: {"model": schemas.ErrorResponse, "description": "Unknown short code"},
        500: {"model": schemas.ErrorResponse, "description": "Store error"},
    },
)
async def redirect_to_long_url(
    short_code: str,
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortLinkService = Depends(get_shortener_service),
):
    """Redirect to the long URL stored for ``short_code``."""
    if not short_code.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CODE_DETAIL)

    try:
        long_url = await shortener_service.resolve(db, short_code)
    except URLLookupError as e:
        logger.error("Store unavailable while redirecting", short_code=short_code, error=str(e))
        raise HTTPException(status_code=500, detail="Error redirecting URL")

    if long_url is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Short code not found")

    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
