"""
Event filter

Drops notifications for paths that no longer exist by the time they
are inspected (editor temp files, rolled-back writes, deletions).
"""

import os
import structlog

from rsyncwatch.core.events import ChangeEvent


class EventFilter:
    """Accepts an event only while its path exists"""

    def __init__(self, logger=None):
        self.logger = logger or structlog.get_logger()

    def accept(self, event: ChangeEvent) -> bool:
        """
        Check an event against the file system.

        Broken symlinks count as existing, since rsync copies the
        link itself.

        Args:
            event: Change notification

        Returns:
            True if the event should be propagated
        """
        if os.path.lexists(event.path):
            return True

        self.logger.debug(
            "Event dropped (path vanished)",
            path=event.path,
            type=event.event_type.value
        )
        return False
