"""
rsyncwatch main engine

Features:
- Wires the event source, filter, relativizer and propagator together
- Runs the baseline sync before monitoring
- Stops the event source on shutdown
"""

import structlog

from rsyncwatch.config.models import AppConfig
from rsyncwatch.core.filter import EventFilter
from rsyncwatch.core.initial_sync import InitialSyncRunner
from rsyncwatch.core.monitor import FileMonitor
from rsyncwatch.core.propagator import ChangePropagator
from rsyncwatch.core.relativizer import PathRelativizer
from rsyncwatch.core.sync_monitor import SyncMonitor
from rsyncwatch.core.transfer import RsyncTransfer, TransferResult


class RsyncWatchEngine:
    """Keeps a destination tree mirrored from a watched source tree"""

    def __init__(
        self,
        config: AppConfig,
        logger=None,
        transfer: RsyncTransfer = None,
        event_source=None
    ):
        """
        Args:
            config: Immutable application configuration
            logger: Bound logger passed on to every component
            transfer: Transfer primitive, rsync for ``config.watch`` when omitted
            event_source: Event source, a watchdog FileMonitor when omitted
        """
        self.config = config
        self.logger = logger or structlog.get_logger()
        spec = config.watch

        self.transfer = transfer or RsyncTransfer(spec, logger=self.logger)
        self.event_source = event_source or FileMonitor(
            watch_path=spec.source_root,
            config=config.monitor,
            exclude_pattern=spec.exclude_pattern,
            logger=self.logger
        )

        self.initial_sync = InitialSyncRunner(self.transfer, logger=self.logger)
        self.monitor = SyncMonitor(
            event_source=self.event_source,
            event_filter=EventFilter(logger=self.logger),
            relativizer=PathRelativizer(spec.source_root, spec.relativize_strategy),
            propagator=ChangePropagator(self.transfer, logger=self.logger),
            logger=self.logger
        )

        self.logger.info(
            "rsyncwatch engine initialized",
            source=spec.source_root,
            destination=spec.dest_root,
            checksum=spec.use_checksum,
            poll=config.monitor.poll
        )

    async def start(self) -> TransferResult:
        """
        Run the baseline sync, then monitor until the event stream ends.

        Monitoring starts even when the baseline fails.

        Returns:
            Result of the baseline transfer

        Raises:
            EventSourceError: if the event subscription fails
        """
        baseline = await self.initial_sync.run()

        try:
            await self.monitor.run()
        finally:
            await self.monitor.stop()

        return baseline

    async def stop(self):
        """Close the event stream"""
        await self.monitor.stop()

    def get_stats(self) -> dict:
        return self.monitor.get_stats()
