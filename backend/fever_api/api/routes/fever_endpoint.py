"""Fever Endpoint: the single URL every Fever client talks to.

Invariants:
    - GET / reads (flags select fragments); POST / mutates (mark/as/id/before)
    - Parameters merged from query string and form body (form wins); api_key may
      also arrive as an `api_key` / `Api-Key` header
    - HTTP 200 for every syntactically valid request; authentication is reported
      by the body's auth flag, not the status code
    - Collaborators resolved through Depends so tests can override each one

Design Decisions:
    - Presence-based flags read from raw parameters instead of typed Query() params:
      Fever clients send bare keys (`?api&groups`) that carry no value
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from fever_api.config import Settings, get_settings
from fever_api.core.repository_protocols import ApiKeyLookup, Clock
from fever_api.infrastructure.clock import SystemClock
from fever_api.infrastructure.database import get_db
from fever_api.services.compose_response import FeverResponseComposer
from fever_api.services.dispatch_mark import MarkDispatch
from fever_api.services.handle_fever import FeverHandlers
from fever_api.services.key_lookup import RegisteredKeyLookup
from fever_api.services.repositories import (
    FeedRepository, GroupRepository, StoryRepository,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["fever"])

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
_KEY_HEADERS = ("api_key", "api-key")


async def read_params(request: Request) -> dict[str, str]:
    """Flatten query string, form body, and api_key header into one mapping."""
    params = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        params.update({k: v for k, v in form.items() if isinstance(v, str)})
    if "api_key" not in params:
        for header in _KEY_HEADERS:
            if header in request.headers:
                params["api_key"] = request.headers[header]
                break
    return params


def get_clock() -> Clock:
    return SystemClock()


def get_key_lookup(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiKeyLookup:
    return RegisteredKeyLookup(db, settings.registered_api_key())


def get_fever_handlers(
    db: AsyncSession = Depends(get_db),
    key_lookup: ApiKeyLookup = Depends(get_key_lookup),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> FeverHandlers:
    stories = StoryRepository(db)
    return FeverHandlers(
        key_lookup=key_lookup,
        clock=clock,
        composer=FeverResponseComposer(
            GroupRepository(db), FeedRepository(db), stories,
        ),
        dispatch=MarkDispatch(stories),
        api_version=settings.fever_api_version,
    )


@router.get("/")
async def fever_read(
    request: Request, handlers: FeverHandlers = Depends(get_fever_handlers),
):
    """Fever read: envelope plus the fragments selected by flags."""
    body = await handlers.handle_read(await read_params(request))
    return JSONResponse(content=body)


@router.post("/")
async def fever_write(
    request: Request, handlers: FeverHandlers = Depends(get_fever_handlers),
):
    """Fever write: one mark command, bare envelope back."""
    body = await handlers.handle_write(await read_params(request))
    return JSONResponse(content=body)
