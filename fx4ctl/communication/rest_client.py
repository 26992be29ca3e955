"""
REST Command Client

Turns a logical appliance command (path + payload) into a call on the
host transport, and the transport's callback into a single-resolution
future.

A 200 response resolves with the parsed JSON body. An empty or unparsable
200 body resolves with {} rather than failing. Everything else fails the
future with a TransportFailure whose message is readable enough to go
straight into a log line.
"""

from concurrent.futures import Future
from typing import Any, Dict, Optional, Union
import json
import logging
import time

from fx4ctl.config.module_config import ModuleConfig
from fx4ctl.exceptions import InvalidArgument, TransportFailure
from fx4ctl.logging.logger import command_context
from fx4ctl.monitoring.metrics import track_command, track_command_latency

from .rest_format import HttpMethod, RestError, RestResponse, RestResult
from .transport import RestTransport


class RestCommandClient:
    """
    HTTP command client for a single appliance.

    The appliance address is read from the current config on every call,
    so a config replaced between calls takes effect on the next command.
    """

    def __init__(self, transport: RestTransport, config: ModuleConfig):
        """
        Initialize client.

        Args:
            transport: Host-provided rest/rest_get service
            config: Current module configuration
        """
        self.transport = transport
        self.config = config
        self.logger = logging.getLogger(__name__)

    def update_config(self, config: ModuleConfig):
        """Replace the configuration used for subsequent commands"""
        self.config = config

    def build_url(self, path: str) -> str:
        """
        Make the complete URL for a command.

        Args:
            path: Command path, must start with '/'

        Returns:
            "http://<host><path>", no encoding applied

        Raises:
            InvalidArgument: If path does not start with '/'
        """
        if not isinstance(path, str) or not path.startswith('/'):
            raise InvalidArgument('cmd must start with a /')

        return 'http://' + self.config.host + path

    def get(self, path: str) -> Future:
        """Retrieve information via GET"""
        return self.execute(HttpMethod.GET, path)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Future:
        """Request/retrieve information via POST with a JSON body"""
        return self.execute(HttpMethod.POST, path, body)

    def execute(
        self,
        method: Union[HttpMethod, str],
        path: str,
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Future:
        """
        Perform a REST command.

        The URL is built before the transport is touched, so a bad path or
        method raises here and no request is issued.

        Args:
            method: GET or POST
            path: Command path, must start with '/'
            body: POST body; ignored for GET (default: {})
            headers: Extra request headers (default: none)

        Returns:
            Future resolving to the parsed JSON body, or failing with
            TransportFailure

        Raises:
            InvalidArgument: If path or method is invalid
        """
        method = _coerce_method(method)
        url = self.build_url(path)
        headers = headers or {}

        future = Future()
        future.set_running_or_notify_cancel()
        started = time.monotonic()

        def handle_response(error, result):
            track_command_latency(method.value, path, time.monotonic() - started)
            self._settle(future, method, path, error, result)

        if method is HttpMethod.POST:
            self.transport.rest(url, body or {}, handle_response, headers)
        else:
            self.transport.rest_get(url, handle_response, headers)

        return future

    def _settle(self, future: Future, method: HttpMethod, path: str, error, result):
        """Resolve or fail the future from one transport callback"""
        context = command_context(host=self.config.host, method=method.value, path=path)

        if future.done():
            self.logger.debug(f"Ignoring repeated callback for {method.value} {path}", extra=context)
            return

        try:
            if isinstance(result, dict):
                result = RestResult.from_dict(result)
        except (AttributeError, TypeError, ValueError) as e:
            self.logger.debug(f"Unusable result for {method.value} {path}: {e}", extra=context)
            result = None

        if is_success(error, result):
            track_command(method.value, path, "success")
            self.logger.debug(f"{method.value} {path} succeeded", extra=dict(context, outcome="success"))
            future.set_result(parse_body(result.data))
            return

        message = failure_message(result)
        track_command(method.value, path, "failure")
        self.logger.debug(f"{method.value} {path} failed: {message}", extra=dict(context, outcome="failure"))
        future.set_exception(TransportFailure(message))


def _coerce_method(method) -> HttpMethod:
    if isinstance(method, HttpMethod):
        return method
    try:
        return HttpMethod(str(method).upper())
    except ValueError:
        raise InvalidArgument('Invalid method') from None


def is_success(error, result) -> bool:
    """True for an error-free callback carrying a 200 response"""
    return (
        error is None
        and isinstance(result, RestResult)
        and getattr(result.response, "status_code", None) == 200
    )


def parse_body(data) -> Any:
    """
    Parse a 200 body as JSON.

    Empty bodies, non-text bodies and bodies that are not valid UTF-8
    JSON give {}.
    """
    if not data:
        return {}
    try:
        if isinstance(data, (bytes, bytearray)):
            data = data.decode('utf-8')
        return json.loads(data)
    except (TypeError, ValueError):
        return {}


def failure_message(result) -> str:
    """
    Human-readable reason for a failed command.

    Precedence: HTTP status line, then transport error, then
    'Unknown error'.
    """
    if isinstance(result, RestResult):
        response, error = result.response, result.error
        if isinstance(response, RestResponse):
            return f"{response.status_code}: {response.status_message}"
        if isinstance(error, RestError):
            return f"{error.code}: {error.message}"
    return 'Unknown error'
