"""Short link creation endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from shortify.api import schemas
from shortify.api.dependencies import get_base_url, get_shortener_service
from shortify.db.session import get_db
from shortify.services.exceptions import (
    CustomCodeAlreadyExistsError,
    ShortCodeGenerationError,
    URLCreationError,
)
from shortify.services.shortener import ShortLinkService

router = APIRouter(tags=["shortener"])

CREATE_FAILED_DETAIL = "Error shortening URL"


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Malformed body or invalid fields"},
        500: {"model": schemas.ErrorResponse, "description": "The link could not be stored"},
    },
)
async def create_short_url(
    request: Request,
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortLinkService = Depends(get_shortener_service),
    base_url: str = Depends(get_base_url),
):
    """Shorten ``longUrl`` (or ``url``), optionally under ``customAlias``."""
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")

    # URLValidationError is turned into a 400 by the application handler
    url_data = schemas.validate_shorten_request(payload)

    try:
        link = await shortener_service.shorten(
            db=db,
            long_url=url_data.long_url,
            custom_alias=url_data.custom_alias,
            expires_at=url_data.expires_at,
        )
    except CustomCodeAlreadyExistsError as e:
        logger.warning("Duplicate custom alias", alias=url_data.custom_alias, error=str(e))
        raise HTTPException(status_code=500, detail=CREATE_FAILED_DETAIL)
    except ShortCodeGenerationError as e:
        logger.error("Short code retries exhausted", attempts=e.attempts)
        raise HTTPException(status_code=500, detail=CREATE_FAILED_DETAIL)
    except URLCreationError as e:
        logger.error("Store unavailable while shortening", error=str(e))
        raise HTTPException(status_code=500, detail=CREATE_FAILED_DETAIL)

    logger.info(f"Created short link {link.short_code}", custom=link.is_custom)
    return schemas.ShortenResponse(
        short_id=link.short_code,
        original_url=link.long_url,
        short_url=f"{base_url}/{link.short_code}",
        created_at=link.created_at,
        expires_at=link.expires_at,
    )
