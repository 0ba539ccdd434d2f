from rsyncwatch.core.engine import RsyncWatchEngine
from rsyncwatch.core.events import ChangeEvent, EventType
from rsyncwatch.core.filter import EventFilter
from rsyncwatch.core.initial_sync import InitialSyncRunner
from rsyncwatch.core.monitor import FileMonitor
from rsyncwatch.core.propagator import ChangePropagator
from rsyncwatch.core.relativizer import PathRelativizer, RelativeChange
from rsyncwatch.core.sync_monitor import MonitorState, SyncMonitor
from rsyncwatch.core.transfer import RsyncTransfer, TransferResult

__all__ = [
    "ChangeEvent",
    "ChangePropagator",
    "EventFilter",
    "EventType",
    "FileMonitor",
    "InitialSyncRunner",
    "MonitorState",
    "PathRelativizer",
    "RelativeChange",
    "RsyncTransfer",
    "RsyncWatchEngine",
    "SyncMonitor",
    "TransferResult",
]
