"""Clock: wall-clock source for the envelope's last_refreshed_on_time.

Design Decisions:
    - Injected (FastAPI Depends) so tests pin time without patching the time module
"""

import time


class SystemClock:
    """Clock backed by time.time(), truncated to whole seconds."""

    def now(self) -> int:
        return int(time.time())
