from rsyncwatch.config.models import (
    AppConfig,
    LoggingConfig,
    MonitorConfig,
    RelativizeStrategy,
    TransferOptions,
    WatchSpec,
)
from rsyncwatch.config.parser import ConfigParser

__all__ = [
    "AppConfig",
    "ConfigParser",
    "LoggingConfig",
    "MonitorConfig",
    "RelativizeStrategy",
    "TransferOptions",
    "WatchSpec",
]
