"""
Unread signal - Whether assistant replies arrived while the chat surface was collapsed.
"""
from pydantic import BaseModel, Field
from typing import Sequence


def _assistant_count(messages: Sequence) -> int:
    return sum(1 for message in messages if message.role == "assistant")


class UnreadSignal(BaseModel):
    """
    Derived from the message log and the chat visibility flag.

    The signal remembers how many assistant replies the user has seen;
    anything beyond that while the surface is inactive is unread.
    """
    active: bool = Field(
        default=False,
        description="Whether the chat surface is currently visible"
    )
    seen_replies: int = Field(
        default=0,
        ge=0,
        description="Assistant replies already seen by the user"
    )

    def has_unread(self, messages: Sequence) -> bool:
        return not self.active and _assistant_count(messages) > self.seen_replies

    def message_appended(self, messages: Sequence) -> bool:
        """Observe an append to the log; returns the resulting unread flag."""
        if self.active:
            self.seen_replies = _assistant_count(messages)
        return self.has_unread(messages)

    def activate(self, messages: Sequence):
        """Chat surface opened: everything in the log counts as read."""
        self.active = True
        self.seen_replies = _assistant_count(messages)

    def deactivate(self):
        self.active = False

    def reset(self):
        """Message log was cleared."""
        self.seen_replies = 0
