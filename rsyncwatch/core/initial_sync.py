"""
Baseline synchronization
"""

import structlog

from rsyncwatch.core.transfer import RsyncTransfer, TransferResult


class InitialSyncRunner:
    """Runs one full source -> destination pass before monitoring starts"""

    def __init__(self, transfer: RsyncTransfer, logger=None):
        self.transfer = transfer
        self.logger = logger or structlog.get_logger()

    async def run(self) -> TransferResult:
        """
        Execute the baseline transfer.

        A failed baseline is logged but does not raise: the caller goes on
        to watch the source anyway.

        Returns:
            TransferResult
        """
        spec = self.transfer.spec
        self.logger.info(
            "Performing initial full sync",
            source=spec.source_root,
            destination=spec.dest_root
        )

        result = await self.transfer.sync_full()

        if result.success:
            self.logger.info("Initial full sync completed successfully")
        elif result.vanished:
            self.logger.warning(
                "Initial full sync completed, some source files vanished",
                returncode=result.returncode
            )
        else:
            self.logger.error(
                "Initial full sync failed, destination may be inconsistent until paths change again",
                returncode=result.returncode,
                stderr=result.stderr[:500]
            )

        return result
