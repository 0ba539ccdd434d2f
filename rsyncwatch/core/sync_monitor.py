"""
Change monitoring loop

Pulls events one at a time from the event source and drives each
through filter -> relativizer -> propagator. A single consumer keeps
transfers in the order their events arrived.
"""

from enum import Enum
import structlog

from rsyncwatch.core.events import ChangeEvent
from rsyncwatch.core.filter import EventFilter
from rsyncwatch.core.propagator import ChangePropagator
from rsyncwatch.core.relativizer import PathRelativizer


class MonitorState(str, Enum):
    IDLE = "idle"
    WATCHING = "watching"
    FILTERING = "filtering"
    PROPAGATING = "propagating"
    STOPPED = "stopped"


class SyncMonitor:
    """Single-consumer event loop"""

    def __init__(
        self,
        event_source,
        event_filter: EventFilter,
        relativizer: PathRelativizer,
        propagator: ChangePropagator,
        logger=None
    ):
        """
        Args:
            event_source: Object with an async ``get()`` returning the next
                ChangeEvent, or None at end of stream
            event_filter: Drops stale events
            relativizer: Splits paths at the watch root
            propagator: Issues the transfer for accepted events
            logger: Bound logger, structlog default when omitted
        """
        self.event_source = event_source
        self.event_filter = event_filter
        self.relativizer = relativizer
        self.propagator = propagator
        self.logger = logger or structlog.get_logger()
        self.state = MonitorState.IDLE

        self.stats = {
            'events_received': 0,
            'events_dropped': 0,
            'transfers': 0,
            'transfers_failed': 0,
        }

    async def run(self):
        """
        Subscribe to the event source and process events until the
        stream ends.

        Raises:
            EventSourceError: if the subscription fails; the monitor is
                left in the STOPPED state
        """
        try:
            await self.event_source.start()
            self.state = MonitorState.WATCHING
            self.logger.info("Watching for changes")

            while True:
                event = await self.event_source.get()
                if event is None:
                    break
                await self.handle_event(event)
        finally:
            self.state = MonitorState.STOPPED
            self.logger.info("Monitor stopped", stats=self.get_stats())

    async def handle_event(self, event: ChangeEvent):
        """Filter, relativize and propagate one event"""
        self.stats['events_received'] += 1
        self.logger.debug("Event received", path=event.path, type=event.event_type.value)

        self.state = MonitorState.FILTERING
        if not self.event_filter.accept(event):
            self.stats['events_dropped'] += 1
            self.state = MonitorState.WATCHING
            return

        try:
            change = self.relativizer.relativize(event.path)
        except ValueError as e:
            self.logger.warning("Event outside watch root dropped", path=event.path, error=str(e))
            self.stats['events_dropped'] += 1
            self.state = MonitorState.WATCHING
            return

        self.state = MonitorState.PROPAGATING
        try:
            result = await self.propagator.propagate(change)
        finally:
            self.state = MonitorState.WATCHING

        self.stats['transfers'] += 1
        if not result.success:
            self.stats['transfers_failed'] += 1

    async def stop(self):
        """Close the event subscription"""
        await self.event_source.stop()

    def get_stats(self) -> dict:
        return dict(self.stats)
