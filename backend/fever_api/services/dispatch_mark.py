"""Mark Dispatch: explicit routing from (mark, as) to one mark command.

Invariants:
    - Every (mark, as) -> command mapping is visible here: no getattr magic
    - At most one command constructed and executed per request, never retried
    - Unmapped pairs and missing required params are logged no-ops (never raise)
    - id/before forwarded as the exact strings the client sent

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
      (ADR: no convention-over-config)
    - Permissive no-op for unknown pairs: Fever has no mutation error payload, and
      clients that send extensions (e.g. mark=group&as=unread) must still get an envelope
    - Command classes looked up at call time so tests can swap them for recorders
"""

import logging

from fever_api.core.domain_types import MarkAs, MarkTarget
from fever_api.core.mark_request import MarkRequest
from fever_api.services.repositories import StoryRepository
from fever_api.services import mark_commands

logger = logging.getLogger(__name__)


class MarkDispatch:
    """Routes a MarkRequest to its command. Explicit registration, no auto-discovery."""

    def __init__(self, stories: StoryRepository):
        self._stories = stories

        # ADR: every mapping explicit: adding a command requires editing this dict
        self._handlers = {
            (MarkTarget.ITEM, MarkAs.READ): lambda r: mark_commands.MarkAsRead(r.id, self._stories),
            (MarkTarget.ITEM, MarkAs.UNREAD): lambda r: mark_commands.MarkAsUnread(r.id, self._stories),
            (MarkTarget.ITEM, MarkAs.SAVED): lambda r: mark_commands.MarkAsStarred(r.id, self._stories),
            (MarkTarget.ITEM, MarkAs.UNSAVED): lambda r: mark_commands.MarkAsUnstarred(r.id, self._stories),
            (MarkTarget.GROUP, MarkAs.READ): lambda r: mark_commands.MarkGroupAsRead(r.id, r.before, self._stories),
            (MarkTarget.FEED, MarkAs.READ): lambda r: mark_commands.MarkFeedAsRead(r.id, r.before, self._stories),
        }

    @property
    def supported(self) -> frozenset[tuple[MarkTarget, MarkAs]]:
        return frozenset(self._handlers)

    async def dispatch(self, request: MarkRequest | None) -> bool:
        """Execute the command for request. Returns whether one ran."""
        if request is None:
            logger.info("Ignoring POST without a recognized mark/as pair")
            return False
        build = self._handlers.get(request.key)
        if not build:
            logger.info(
                "Ignoring unsupported mark request",
                extra={"fever_mark": request.target.value, "fever_as": request.action.value},
            )
            return False
        missing = request.missing_params
        if missing:
            logger.info(
                f"Ignoring mark request missing {', '.join(missing)}",
                extra={"fever_mark": request.target.value, "fever_as": request.action.value},
            )
            return False
        command = build(request)
        await command.execute()
        return True
