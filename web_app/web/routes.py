"""Redirect route implementation."""

import logging
import os

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from shortener.errors import AliasNotFound, InvalidShortCode, StoreError

router = APIRouter()
logger = logging.getLogger("shortener.web")

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


@router.get("/{code}", include_in_schema=False)
async def redirect_to_url(request: Request, code: str):
    """Redirect to the original URL (301)."""
    service = request.app.state.service

    try:
        original_url = await service.resolve(code)
    except InvalidShortCode as e:
        return PlainTextResponse(e.message, status_code=status.HTTP_400_BAD_REQUEST)
    except AliasNotFound:
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"code": code},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except StoreError as e:
        logger.error(f"Error resolving {code}: {e!r}")
        return PlainTextResponse(
            "Internal server error.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
