"""
Command-line configuration parser

Features:
- Validates the SOURCE/DESTINATION pair
- Normalizes both roots to end in a path separator
- Compiles the exclude pattern
- Builds the immutable AppConfig passed to the engine
"""

import os
import re
import shutil
from typing import Optional, Sequence

from rsyncwatch.config.models import (
    AppConfig,
    LoggingConfig,
    MonitorConfig,
    RelativizeStrategy,
    TransferOptions,
    WatchSpec,
)
from rsyncwatch.exceptions import ConfigError

LOG_LEVELS = ('DEBUG', 'INFO', 'WARN', 'ERROR')
LOG_FORMATS = ('text', 'json')

# host:path, user@host:path, host::module (a colon before the first slash)
_REMOTE_RE = re.compile(r'^[^/]*:')


def is_remote_path(path: str) -> bool:
    """Check whether rsync would treat ``path`` as a remote location"""
    return path.startswith('rsync://') or bool(_REMOTE_RE.match(path))


def normalize_root(path: str) -> str:
    """
    Make a root path absolute and make it end in a separator.

    Remote rsync locations are kept verbatim apart from the trailing
    ``/``, since they are not resolved on this host.

    Args:
        path: Root as typed by the user

    Returns:
        Normalized root
    """
    if is_remote_path(path):
        return path if path.endswith('/') else path + '/'

    root = os.path.abspath(os.path.expanduser(path))
    if not root.endswith(os.sep):
        root += os.sep
    return root


class ConfigParser:
    """Builds an AppConfig from parsed command-line values"""

    def __init__(self, rsync_binary: str = 'rsync'):
        self.rsync_binary = rsync_binary

    def parse(
        self,
        paths: Sequence[str],
        checksum: bool = False,
        progress: bool = False,
        compress: bool = False,
        delete: bool = False,
        exclude: Optional[str] = None,
        poll: bool = False,
        poll_interval: float = 1.0,
        log_level: str = 'INFO',
        log_format: str = 'text',
        relativize_strategy: RelativizeStrategy = RelativizeStrategy.PREFIX,
    ) -> AppConfig:
        """
        Validate command-line values and build the configuration.

        Args:
            paths: Positional arguments, expected to be SOURCE and DESTINATION
            checksum: Compare files by checksum instead of size and mtime
            progress: Let rsync report transfer progress
            compress: Compress file data during transfer
            delete: Remove extraneous destination entries during the baseline
            exclude: Regular expression of paths the event source ignores
            poll: Use the polling observer instead of native notifications
            poll_interval: Seconds between polling scans
            log_level: DEBUG, INFO, WARN or ERROR
            log_format: text or json
            relativize_strategy: How changed paths are split at the watch root

        Returns:
            AppConfig

        Raises:
            ConfigError: if the values do not describe a usable watch
        """
        if len(paths) < 2:
            raise ConfigError("SOURCE and DESTINATION are both required")
        if len(paths) > 2:
            raise ConfigError(f"Expected SOURCE and DESTINATION, got {len(paths)} paths")

        level = log_level.upper()
        if level == 'WARNING':
            level = 'WARN'
        if level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {log_level}")
        if log_format not in LOG_FORMATS:
            raise ConfigError(f"Invalid log format: {log_format}")

        source, destination = paths
        if is_remote_path(source):
            raise ConfigError(f"SOURCE must be a local directory: {source}")
        source_root = normalize_root(source)
        if not os.path.isdir(source_root):
            raise ConfigError(f"SOURCE is not a directory: {source}")
        dest_root = normalize_root(destination)

        pattern = None
        if exclude:
            try:
                pattern = re.compile(exclude)
            except re.error as e:
                raise ConfigError(f"Invalid exclude pattern {exclude!r}: {e}") from e

        if poll_interval <= 0:
            raise ConfigError("Poll interval must be positive")

        if shutil.which(self.rsync_binary) is None:
            raise ConfigError(f"{self.rsync_binary} not found on PATH")

        watch = WatchSpec(
            source_root=source_root,
            dest_root=dest_root,
            exclude_pattern=pattern,
            transfer_options=TransferOptions(
                checksum=checksum,
                progress=progress,
                compress=compress,
                delete=delete,
            ),
            relativize_strategy=relativize_strategy,
        )

        config = AppConfig(
            watch=watch,
            monitor=MonitorConfig(poll=poll, poll_interval=poll_interval),
            logging=LoggingConfig(level=level, format=log_format),
        )
        return config
