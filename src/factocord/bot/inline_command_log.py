"""
Bookkeeping for inline ``[[search]]`` responses.

Maps the id of a user message that triggered an inline response to the
channel and id of the bot's response, so editing the user message can
update the response in place. Entries expire after an hour.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict

DEFAULT_MAX_AGE_SECONDS = 3600.0


@dataclass(frozen=True, slots=True)
class InlineResponse:
    channel_id: int
    response_id: int
    created_at: float = field(default_factory=time.monotonic)


class InlineCommandLog:
    def __init__(self, max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS) -> None:
        self.max_age_seconds = max_age_seconds
        self._entries: Dict[int, InlineResponse] = {}

    def __contains__(self, message_id: int) -> bool:
        return message_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, message_id: int, channel_id: int, response_id: int) -> None:
        self._entries[message_id] = InlineResponse(channel_id=channel_id, response_id=response_id)

    def get(self, message_id: int) -> InlineResponse | None:
        return self._entries.get(message_id)

    def prune(self, now: float | None = None) -> int:
        """Drop entries older than ``max_age_seconds``. Returns how many were dropped."""
        cutoff = (time.monotonic() if now is None else now) - self.max_age_seconds
        expired = [message_id for message_id, entry in self._entries.items() if entry.created_at < cutoff]
        for message_id in expired:
            del self._entries[message_id]
        return len(expired)


inline_command_log = InlineCommandLog()
