"""
Exception hierarchy

Transfer failures are reported as values (see ``TransferResult``),
so only startup and subscription problems are exceptions.
"""


class RsyncWatchError(Exception):
    """Base class for all rsyncwatch errors"""


class ConfigError(RsyncWatchError):
    """Raised when the command line does not describe a usable watch"""


class EventSourceError(RsyncWatchError):
    """Raised when the file-system event subscription cannot continue"""
