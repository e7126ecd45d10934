"""URL shortening endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status

from shorturl.api import schemas
from shorturl.api.dependencies import get_shortener_service, get_request_logger
from shorturl.services.exceptions import ServiceError
from shorturl.services.shortener import ShortenerService

router = APIRouter(tags=["shortener"])


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Empty or invalid URL, or malformed JSON"},
        405: {"model": schemas.ErrorResponse, "description": "Method not allowed"},
        500: {"model": schemas.ErrorResponse, "description": "Internal or storage error"},
    }
)
async def shorten_url(
    payload: schemas.ShortenRequest,
    shortener_service: ShortenerService = Depends(get_shortener_service),
    log=Depends(get_request_logger),
):
    if not payload.url.strip():
        log.info("Rejected shorten request: url field is empty")
        raise HTTPException(status_code=400, detail="The url field must not be empty")

    try:
        short_id = await shortener_service.create_short_url(payload.url)
    except ServiceError as e:
        log.bind(error_kind=e.kind.value).warning(f"Failed to shorten '{payload.url}': {e}")
        raise

    log.bind(short_id=short_id).info(f"Shortened '{payload.url}' -> '{short_id}'")
    return schemas.ShortenResponse(short_url=short_id)
