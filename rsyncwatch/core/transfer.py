"""
Rsync transfer primitive

Features:
- Builds rsync command lines for full-tree and relative transfers
- Runs rsync as an asyncio subprocess
- Classifies vanished-source exits as non-fatal
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional
import structlog

from rsyncwatch.config.models import WatchSpec

# rsync exit codes
RERR_PARTIAL = 23  # partial transfer due to error
RERR_VANISHED = 24  # some source files vanished before transfer

_VANISHED_MARKER = "No such file or directory"


@dataclass
class TransferResult:
    """Outcome of one rsync invocation"""
    command: List[str]
    returncode: Optional[int]
    stdout: str = ''
    stderr: str = ''

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def vanished(self) -> bool:
        """True when rsync failed only because source files disappeared"""
        if self.returncode == RERR_VANISHED:
            return True
        return self.returncode == RERR_PARTIAL and _VANISHED_MARKER in self.stderr


class RsyncTransfer:
    """Runs rsync for a WatchSpec"""

    def __init__(self, spec: WatchSpec, rsync_binary: str = 'rsync', logger=None):
        """
        Args:
            spec: Source/destination mapping and transfer flags
            rsync_binary: rsync executable name or path
            logger: Bound logger, structlog default when omitted
        """
        self.spec = spec
        self.rsync_binary = rsync_binary
        self.logger = logger or structlog.get_logger()

    def _base_cmd(self) -> List[str]:
        options = self.spec.transfer_options

        cmd = [self.rsync_binary, '--archive']
        if options.checksum:
            cmd.append('--checksum')
        if options.compress:
            cmd.append('--compress')
        if options.progress:
            cmd.append('--progress')
        cmd.extend(options.extra_args)
        return cmd

    def build_full_cmd(self) -> List[str]:
        """Command mirroring the whole source root into the destination root"""
        cmd = self._base_cmd()
        if self.spec.transfer_options.delete:
            cmd.append('--delete')
        # trailing separators: copy the contents of the source, not the directory
        cmd.extend([self.spec.source_root, self.spec.dest_root])
        return cmd

    def build_relative_cmd(self, marked_path: str) -> List[str]:
        """
        Command mirroring one path below the watch root.

        Args:
            marked_path: Source path carrying the ``/./`` relative-root marker

        Returns:
            Command list
        """
        cmd = self._base_cmd()
        cmd.append('--relative')
        cmd.extend([marked_path, self.spec.dest_root])
        return cmd

    async def sync_full(self) -> TransferResult:
        """Transfer the entire source tree"""
        return await self.run(self.build_full_cmd())

    async def sync_relative(self, marked_path: str) -> TransferResult:
        """Transfer a single path, preserving its directories below the root"""
        return await self.run(self.build_relative_cmd(marked_path))

    async def run(self, cmd: List[str]) -> TransferResult:
        """
        Execute an rsync command and wait for it to exit.

        Never raises for rsync failures: a non-zero exit status, or a
        binary that cannot be started, is reported in the result.

        Args:
            cmd: Command list

        Returns:
            TransferResult
        """
        self.logger.debug("Executing rsync", command=' '.join(cmd))

        # progress output goes straight to the terminal
        stdout_target = None if self.spec.transfer_options.progress else asyncio.subprocess.PIPE

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=stdout_target,
                stderr=asyncio.subprocess.PIPE
            )
            stdout, stderr = await process.communicate()
        except OSError as e:
            self.logger.error("Rsync could not be started", command=cmd[0], error=str(e))
            return TransferResult(command=cmd, returncode=None, stderr=str(e))

        result = TransferResult(
            command=cmd,
            returncode=process.returncode,
            stdout=stdout.decode('utf-8', errors='ignore') if stdout else '',
            stderr=stderr.decode('utf-8', errors='ignore') if stderr else '',
        )

        if result.stdout:
            self.logger.debug("Rsync output", output=result.stdout.strip())

        return result
