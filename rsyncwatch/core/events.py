"""
Change event model
"""

from dataclasses import dataclass
from enum import Enum


class EventType(str, Enum):
    """Kinds of change reported by the event source"""
    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"
    MOVED = "moved"


@dataclass(frozen=True)
class ChangeEvent:
    """A single notification that a path under the watch root changed"""
    path: str
    event_type: EventType = EventType.MODIFIED
    is_directory: bool = False
