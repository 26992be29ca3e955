"""
FX4CTL Exceptions

InvalidArgument is raised synchronously when a command cannot be built.
TransportFailure is the rejection value of a command future.
"""


class FX4Error(Exception):
    """Base class for all fx4ctl errors"""


class InvalidArgument(FX4Error, ValueError):
    """Malformed command path or unsupported HTTP method"""


class ConfigError(FX4Error, ValueError):
    """Module configuration is missing or malformed"""


class TransportFailure(FX4Error):
    """
    A request failed or returned a non-200 status.
    
    The human-readable message is kept on `.message` and is also the
    string form of the exception, so callers can format it into logs.
    """
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
    
    def __str__(self) -> str:
        return self.message
