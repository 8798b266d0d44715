"""Per-session bookkeeping of the latest processed command id.

External simulators tag each request with a monotonically increasing
``latest`` sequence number and poll ``/latest`` until the server reports the
number of the write they issued last. The tracker only remembers numbers; it
never gates or delays request handling.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

NONE_OBSERVED = -1
UNSPECIFIED = -1


@dataclass
class Checkpoint:
    value: int
    last_seen: float


class CommandTracker:
    """Keyed store of checkpoints, one per client session token.

    Entries are created on first observation and dropped once a session has
    not been seen for ``ttl_seconds``.
    """

    def __init__(self, ttl_seconds: float = 3600, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # Least recently seen first, so expiry only inspects the stale prefix.
        self._sessions: "OrderedDict[str, Checkpoint]" = OrderedDict()
        self._lock = threading.Lock()

    def observe(self, session_token: str, sequence: Optional[int]) -> int:
        """Record ``sequence`` for the session and return the stored checkpoint."""
        now = self._clock()
        with self._lock:
            self._expire(now)
            checkpoint = self._sessions.get(session_token)
            if sequence is None or sequence == UNSPECIFIED:
                if checkpoint is None:
                    return NONE_OBSERVED
                self._touch(session_token, checkpoint, now)
                return checkpoint.value
            if checkpoint is None:
                checkpoint = Checkpoint(value=sequence, last_seen=now)
                self._sessions[session_token] = checkpoint
            else:
                checkpoint.value = max(checkpoint.value, sequence)
                self._touch(session_token, checkpoint, now)
            return checkpoint.value

    def current_checkpoint(self, session_token: str) -> int:
        now = self._clock()
        with self._lock:
            self._expire(now)
            checkpoint = self._sessions.get(session_token)
            return checkpoint.value if checkpoint else NONE_OBSERVED

    def discard(self, session_token: str) -> None:
        with self._lock:
            self._sessions.pop(session_token, None)

    def __len__(self) -> int:
        with self._lock:
            self._expire(self._clock())
            return len(self._sessions)

    def _touch(self, session_token: str, checkpoint: Checkpoint, now: float) -> None:
        checkpoint.last_seen = now
        self._sessions.move_to_end(session_token)

    def _expire(self, now: float) -> None:
        cutoff = now - self.ttl_seconds
        while self._sessions:
            token, checkpoint = next(iter(self._sessions.items()))
            if checkpoint.last_seen > cutoff:
                break
            del self._sessions[token]


def parse_sequence(raw: Optional[str]) -> Optional[int]:
    """Parse a ``latest`` query value; anything that is not an int is unspecified."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None
