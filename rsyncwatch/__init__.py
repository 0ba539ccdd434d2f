"""
rsyncwatch - keep a destination tree mirrored from a watched source tree

- One full rsync pass at startup
- Incremental rsync of every changed path afterwards
- Native or polling file system notifications (watchdog)
"""

__version__ = "0.1.0"

from rsyncwatch.config.models import AppConfig, WatchSpec
from rsyncwatch.core.engine import RsyncWatchEngine

__all__ = ["AppConfig", "RsyncWatchEngine", "WatchSpec", "__version__"]
