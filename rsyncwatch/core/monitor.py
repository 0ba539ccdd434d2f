"""
File system event source

Supports:
- Native notifications (inotify, FSEvents, ReadDirectoryChangesW) via watchdog
- Polling mode for file systems where native delivery is unreliable
- Exclude pattern applied before events are queued
"""

import asyncio
import os
import re
from typing import Callable, Optional
import structlog
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from rsyncwatch.config.models import MonitorConfig
from rsyncwatch.core.events import ChangeEvent, EventType
from rsyncwatch.exceptions import EventSourceError

# seconds between observer liveness checks while waiting for events
LIVENESS_CHECK_INTERVAL = 1.0


class ChangeHandler(FileSystemEventHandler):
    """Converts watchdog events into ChangeEvents"""

    def __init__(
        self,
        callback: Callable[[ChangeEvent], None],
        watch_path: str,
        exclude_pattern: Optional[re.Pattern] = None
    ):
        super().__init__()
        self.callback = callback
        self.watch_path = watch_path.rstrip(os.sep)
        self.exclude_pattern = exclude_pattern

    def _emit(self, path, event_type: EventType, is_directory: bool):
        path = os.fsdecode(path)
        if path == self.watch_path:
            return
        if self.exclude_pattern and self.exclude_pattern.search(path):
            return
        self.callback(ChangeEvent(path=path, event_type=event_type, is_directory=is_directory))

    def on_created(self, event):
        self._emit(event.src_path, EventType.CREATED, event.is_directory)

    def on_modified(self, event):
        # directory mtime changes accompany every child event
        if not event.is_directory:
            self._emit(event.src_path, EventType.MODIFIED, False)

    def on_deleted(self, event):
        self._emit(event.src_path, EventType.DELETED, event.is_directory)

    def on_moved(self, event):
        self._emit(event.src_path, EventType.MOVED, event.is_directory)
        self._emit(event.dest_path, EventType.MOVED, event.is_directory)


class FileMonitor:
    """
    Watches a directory tree and queues ChangeEvents in arrival order.

    The watchdog observer runs in its own thread; events are handed to
    the asyncio loop with ``call_soon_threadsafe`` and read back one at a
    time through :meth:`get`.
    """

    def __init__(
        self,
        watch_path: str,
        config: MonitorConfig,
        exclude_pattern: Optional[re.Pattern] = None,
        logger=None,
        observer_factory: Optional[Callable] = None
    ):
        """
        Args:
            watch_path: Directory to watch recursively
            config: Event source configuration
            exclude_pattern: Paths matching this pattern are never reported
            logger: Bound logger, structlog default when omitted
            observer_factory: Builds the watchdog observer, chosen from
                ``config.poll`` when omitted
        """
        self.watch_path = watch_path
        self.config = config
        self.logger = logger or structlog.get_logger()
        self.handler = ChangeHandler(self._on_event, watch_path, exclude_pattern)
        self._observer_factory = observer_factory or self._default_observer
        self.observer = None
        self.backend = "polling" if config.poll else "native"
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._queue: Optional[asyncio.Queue] = None
        self._running = False

    def _default_observer(self):
        if self.config.poll:
            return PollingObserver(timeout=self.config.poll_interval)
        return Observer()

    async def start(self):
        """
        Subscribe to file system events.

        Raises:
            EventSourceError: if the observer cannot be started
        """
        if self._running:
            self.logger.warning("Monitor already running")
            return

        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self.observer = self._observer_factory()

        try:
            self.observer.schedule(self.handler, self.watch_path, recursive=True)
            self.observer.start()
        except OSError as e:
            raise EventSourceError(f"Cannot watch {self.watch_path}: {e}") from e

        self._running = True
        self.logger.info(
            "File monitor started",
            path=self.watch_path,
            backend=self.backend
        )

    def _on_event(self, event: ChangeEvent):
        """Observer-thread callback"""
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    async def get(self) -> Optional[ChangeEvent]:
        """
        Wait for the next event.

        Returns:
            The next ChangeEvent, or None once the monitor has been stopped

        Raises:
            EventSourceError: if the observer thread or its watch on the
                root died while running
        """
        if self._queue is None:
            raise EventSourceError("Monitor has not been started")

        # the timeout only paces liveness checks, the wait itself is unbounded
        while True:
            try:
                return await asyncio.wait_for(
                    self._queue.get(),
                    timeout=LIVENESS_CHECK_INTERVAL
                )
            except asyncio.TimeoutError:
                if not self._running:
                    return None
                reason = self._subscription_failure()
                if reason:
                    self._abort()
                    raise EventSourceError(f"{reason}: {self.watch_path}")

    def _subscription_failure(self) -> Optional[str]:
        if not self.observer.is_alive():
            return "Observer stopped unexpectedly"
        # an emitter stops itself when its watch root is deleted or unmounted
        emitters = self.observer.emitters
        if not emitters or not all(e.is_alive() for e in emitters):
            return "Watch lost"
        return None

    def _abort(self):
        self._running = False
        self.observer.stop()
        self.observer.join(timeout=5)

    async def stop(self):
        """Stop watching and close the event stream"""
        if not self._running:
            return

        self._running = False
        self.logger.info("Stopping file monitor")

        self.observer.stop()
        self.observer.join(timeout=5)
        self._queue.put_nowait(None)

        self.logger.info("File monitor stopped")

    def is_running(self) -> bool:
        return self._running
