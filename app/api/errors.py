import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from app.models.search_response import SearchResponse
from app.core.exceptions import SearchError

logger = logging.getLogger(__name__)

async def search_error_handler(request: Request, exc: Exception):
    assert isinstance(exc, SearchError)

    logger.warning("%s on %s: %s (details=%r)", exc.code, request.url.path, exc.message, exc.details)

    return JSONResponse(
        status_code=exc.status_code,
        content=SearchResponse.failure(exc.message).model_dump(mode="json", exclude_none=True)
    )
