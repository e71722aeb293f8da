"""Inbox message model."""

from dataclasses import dataclass
from typing import Optional

from scoutsim.core.enums import MessageType


@dataclass
class InboxMessage:
    id: str
    week: int
    season: int
    message_type: MessageType
    title: str
    body: str
    read: bool = False
    action_required: bool = False
    related_id: Optional[str] = None


__all__ = ["InboxMessage"]
