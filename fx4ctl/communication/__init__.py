"""
FX4CTL Communication Module

REST result formats, the host transport contract, and the command client.
"""

from .rest_format import HttpMethod, RestResponse, RestError, RestResult, CommandRequest
from .transport import RestTransport, HTTPTransport
from .rest_client import RestCommandClient

__all__ = [
    'HttpMethod',
    'RestResponse',
    'RestError',
    'RestResult',
    'CommandRequest',
    'RestTransport',
    'HTTPTransport',
    'RestCommandClient'
]
