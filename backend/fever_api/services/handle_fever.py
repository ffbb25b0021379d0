"""Fever Handlers: authenticate, then read (GET) or mutate (POST).

Invariants:
    - AuthGate runs first on every request; a failed check returns {"auth": 0}
      without touching any provider or command
    - GET never mutates; POST never computes data fragments
    - POST always answers with the bare authenticated envelope, whatever the command did
    - Collaborator exceptions propagate untouched (the API layer maps them)

Design Decisions:
    - Thin routes delegate here (ADR: impureim sandwich): params in, body dict out
"""

import logging
from collections.abc import Mapping

from fever_api.core.authenticate import is_authenticated
from fever_api.core.mark_request import parse_mark_request
from fever_api.core.repository_protocols import ApiKeyLookup, Clock
from fever_api.core.request_flags import interpret_read_request
from fever_api.services.compose_response import (
    FeverResponseComposer,
    build_auth_failure,
    build_envelope,
)
from fever_api.services.dispatch_mark import MarkDispatch

logger = logging.getLogger(__name__)


class FeverHandlers:
    """Per-request entry points for the Fever endpoint."""

    def __init__(
        self,
        key_lookup: ApiKeyLookup,
        clock: Clock,
        composer: FeverResponseComposer,
        dispatch: MarkDispatch,
        api_version: int = 3,
    ):
        self.key_lookup = key_lookup
        self.clock = clock
        self.composer = composer
        self.dispatch = dispatch
        self.api_version = api_version

    async def authenticate(self, params: Mapping[str, str]) -> bool:
        registered = await self.key_lookup.current_registered_key()
        return is_authenticated(params.get("api_key"), registered)

    async def handle_read(self, params: Mapping[str, str]) -> dict:
        """GET: envelope merged with every fragment the flags select."""
        if not await self.authenticate(params):
            logger.info("Fever read rejected: bad or missing api_key")
            return build_auth_failure()
        request = interpret_read_request(params)
        logger.debug(
            "Fever read",
            extra={"flags": ",".join(f.value for f in request.flags)},
        )
        envelope = build_envelope(self.api_version, self.clock)
        return await self.composer.compose(request, envelope)

    async def handle_write(self, params: Mapping[str, str]) -> dict:
        """POST: run at most one mark command, answer with the bare envelope."""
        if not await self.authenticate(params):
            logger.info("Fever write rejected: bad or missing api_key")
            return build_auth_failure()
        await self.dispatch.dispatch(parse_mark_request(params))
        return build_envelope(self.api_version, self.clock)
