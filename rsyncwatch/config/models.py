"""
Configuration data models

All values here are built once at startup and never mutated afterwards.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class RelativizeStrategy(str, Enum):
    """How a changed path is split into watch root and mirrored subtree"""
    PREFIX = "prefix"  # split on the watch-root length
    SUBSTITUTE = "substitute"  # textual replace of every occurrence of the root


@dataclass(frozen=True)
class TransferOptions:
    """Rsync flags shared by every transfer"""
    checksum: bool = False
    progress: bool = False
    compress: bool = False
    delete: bool = False  # baseline sync only
    extra_args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class WatchSpec:
    """
    Source/destination mapping of one watcher process.

    Both roots always end in a path separator so that
    ``root + relative_path`` is unambiguous.
    """
    source_root: str
    dest_root: str
    exclude_pattern: Optional[re.Pattern] = None
    transfer_options: TransferOptions = field(default_factory=TransferOptions)
    relativize_strategy: RelativizeStrategy = RelativizeStrategy.PREFIX

    @property
    def use_checksum(self) -> bool:
        return self.transfer_options.checksum


@dataclass(frozen=True)
class MonitorConfig:
    """Event source configuration"""
    poll: bool = False
    poll_interval: float = 1.0  # seconds, polling mode only


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"  # DEBUG, INFO, WARN, ERROR
    format: str = "text"  # text, json


@dataclass(frozen=True)
class AppConfig:
    """Top-level rsyncwatch configuration"""
    watch: WatchSpec
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
