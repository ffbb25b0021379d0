"""Mark Request: normalizes POST mutation parameters.

Invariants:
    - Only (mark, as) values that name a MarkTarget/MarkAs parse; anything else is None
    - id and before are forwarded exactly as received (strings, never coerced)
    - group and feed marks require `before`; item marks do not

Design Decisions:
    - Parsing returns None instead of raising: unrecognized operations are a
      protocol-level no-op, not an error
"""

from collections.abc import Mapping
from dataclasses import dataclass

from fever_api.core.domain_types import MarkAs, MarkTarget, UnixTimestamp

TARGETS_REQUIRING_BEFORE = frozenset({MarkTarget.GROUP, MarkTarget.FEED})


@dataclass(frozen=True)
class MarkRequest:
    """A POST mark request: (mark, as, id, before?)."""
    target: MarkTarget
    action: MarkAs
    id: str | None = None
    before: UnixTimestamp | None = None

    @property
    def key(self) -> tuple[MarkTarget, MarkAs]:
        return (self.target, self.action)

    @property
    def missing_params(self) -> list[str]:
        """Names of required parameters this request lacks."""
        missing = []
        if not self.id:
            missing.append("id")
        if self.target in TARGETS_REQUIRING_BEFORE and not self.before:
            missing.append("before")
        return missing


def parse_mark_request(params: Mapping[str, str]) -> MarkRequest | None:
    """Parse mark/as/id/before. None when mark or as is absent or unknown."""
    try:
        target = MarkTarget(params.get("mark"))
        action = MarkAs(params.get("as"))
    except ValueError:
        return None
    before = params.get("before")
    return MarkRequest(
        target=target,
        action=action,
        id=params.get("id"),
        before=UnixTimestamp(before) if before is not None else None,
    )
