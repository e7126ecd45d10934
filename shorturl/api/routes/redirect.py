"""URL redirection endpoint."""

from fastapi import APIRouter, Depends, status
from starlette.responses import RedirectResponse

from shorturl.api import schemas
from shorturl.api.dependencies import get_shortener_service, get_request_logger
from shorturl.services.exceptions import ServiceError
from shorturl.services.shortener import ShortenerService

# Create router with tags
router = APIRouter(tags=["redirect"])

ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse, "description": "Empty short ID"},
    404: {"model": schemas.ErrorResponse, "description": "Unknown short ID"},
    405: {"model": schemas.ErrorResponse, "description": "Method not allowed"},
    500: {"model": schemas.ErrorResponse, "description": "Internal or storage error"},
}


async def _redirect(short_id: str, shortener_service: ShortenerService, log) -> RedirectResponse:
    try:
        original_url = await shortener_service.get_original_url(short_id)
    except ServiceError as e:
        log.bind(short_id=short_id, error_kind=e.kind.value).info(
            f"Could not redirect '{short_id}': {e}"
        )
        raise

    log.bind(short_id=short_id).info(f"Redirecting '{short_id}' -> '{original_url}'")
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)


@router.get(
    "/",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses=ERROR_RESPONSES,
    include_in_schema=False,
)
async def redirect_without_short_id(
    shortener_service: ShortenerService = Depends(get_shortener_service),
    log=Depends(get_request_logger),
):
    """A bare "/" carries no short ID; rejected as a bad request."""
    return await _redirect("", shortener_service, log)


@router.get(
    "/{short_id}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses=ERROR_RESPONSES,
)
async def redirect_to_original_url(
    short_id: str,
    shortener_service: ShortenerService = Depends(get_shortener_service),
    log=Depends(get_request_logger),
):
    """Redirect to the original URL stored for short_id."""
    return await _redirect(short_id, shortener_service, log)
