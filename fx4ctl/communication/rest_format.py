"""
REST Result Format

Shapes exchanged with the transport collaborator. A transport calls back
once with `(error, result)` where `result` is a RestResult carrying either
the HTTP response and raw body, or a transport-level error.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class HttpMethod(Enum):
    """HTTP verbs the appliance accepts"""
    GET = "GET"
    POST = "POST"


@dataclass
class RestResponse:
    """Status line of an HTTP response"""
    status_code: int
    status_message: str = ""
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RestResponse':
        """Accepts the host's statusCode/statusMessage keys or snake_case ones"""
        return cls(
            status_code=data.get("statusCode", data.get("status_code")),
            status_message=data.get("statusMessage", data.get("status_message", ""))
        )


@dataclass
class RestError:
    """Transport-level failure (connection refused, reset, timeout...)"""
    code: str
    message: str
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RestError':
        return cls(code=data.get("code"), message=data.get("message"))


@dataclass
class RestResult:
    """What the transport hands back to the callback"""
    response: Optional[RestResponse] = None
    data: bytes = b""
    error: Optional[RestError] = None
    
    def __post_init__(self):
        """
        Coerce nested mappings and text bodies.

        Raises:
            TypeError: If a nested mapping has an unusable shape
            ValueError: If a text body cannot be encoded as UTF-8
        """
        if isinstance(self.response, dict):
            self.response = RestResponse.from_dict(self.response)
        elif self.response is not None and not isinstance(self.response, RestResponse):
            raise TypeError(f"response must be a mapping, got {type(self.response).__name__}")
        if isinstance(self.error, dict):
            self.error = RestError.from_dict(self.error)
        if self.data is None:
            self.data = b""
        elif isinstance(self.data, str):
            self.data = self.data.encode("utf-8")
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RestResult':
        return cls(
            response=data.get("response"),
            data=data.get("data", b""),
            error=data.get("error")
        )


@dataclass
class CommandRequest:
    """One outgoing call to the appliance"""
    method: HttpMethod
    path: str
    body: Dict[str, Any] = field(default_factory=dict)
    
    def __post_init__(self):
        if isinstance(self.method, str):
            self.method = HttpMethod(self.method.upper())
