"""
Change propagation

One rsync invocation per accepted change, awaited before the next
change is looked at.
"""

import structlog

from rsyncwatch.core.relativizer import RelativeChange
from rsyncwatch.core.transfer import RsyncTransfer, TransferResult


class ChangePropagator:
    """Mirrors a single relativized change into the destination"""

    def __init__(self, transfer: RsyncTransfer, logger=None):
        self.transfer = transfer
        self.logger = logger or structlog.get_logger()

    async def propagate(self, change: RelativeChange) -> TransferResult:
        """
        Transfer the subtree named by ``change``.

        Failures are logged and returned, never raised.

        Args:
            change: Relativized change

        Returns:
            TransferResult of the rsync invocation
        """
        result = await self.transfer.sync_relative(change.marked_path)

        if result.success:
            self.logger.info("Change synced", path=change.relative_path)
        elif result.vanished:
            self.logger.warning(
                "Source vanished during sync",
                path=change.relative_path,
                returncode=result.returncode
            )
        else:
            self.logger.error(
                "Change sync failed",
                path=change.relative_path,
                returncode=result.returncode,
                stderr=result.stderr[:500]
            )

        return result
