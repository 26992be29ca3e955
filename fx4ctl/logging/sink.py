"""
Host Log Sink

The host hands every module a `log(level, message)` call. HostLogSink
provides that call on top of a standard library logger so the module
never reaches for a process-wide handle.
"""

import logging
from typing import Optional


LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


class HostLogSink:
    """Routes host-style `log(level, message)` calls to a logger"""
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
    
    def log(self, level: str, message: str):
        """
        Emit a message at a host log level.
        
        Unknown level names are logged at INFO.
        """
        self.logger.log(LEVELS.get(str(level).lower(), logging.INFO), message)