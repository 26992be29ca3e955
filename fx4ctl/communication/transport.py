"""
REST Transport

The host performs HTTP on behalf of its modules through two named
services, `rest` (POST) and `rest_get` (GET). Both return immediately and
call back exactly once with `(error, result)`.

RestTransport is that contract. HTTPTransport implements it with a
requests.Session driven from an executor, so the module can run outside
a host (CLI, tests against a real appliance).
"""

from abc import ABC, abstractmethod
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional
import errno
import logging

import requests

from .rest_format import RestError, RestResponse, RestResult


RestCallback = Callable[[Optional[Exception], Optional[RestResult]], None]


class RestTransport(ABC):
    """Host-side HTTP service consumed by RestCommandClient"""

    @abstractmethod
    def rest(
        self,
        url: str,
        body: Dict[str, Any],
        callback: RestCallback,
        headers: Optional[Dict[str, str]] = None
    ):
        """
        POST `body` as JSON to `url`.

        Args:
            url: Complete request URL
            body: JSON-serializable mapping
            callback: Called once with (error, result)
            headers: Extra request headers (default: none)
        """

    @abstractmethod
    def rest_get(
        self,
        url: str,
        callback: RestCallback,
        headers: Optional[Dict[str, str]] = None
    ):
        """
        GET `url`.

        Args:
            url: Complete request URL
            callback: Called once with (error, result)
            headers: Extra request headers (default: none)
        """

    def close(self):
        """Release transport resources"""


class HTTPTransport(RestTransport):
    """
    requests-backed transport.

    Every HTTP response, whatever its status, is reported as
    `(None, RestResult(response=..., data=...))`. Only failures to get a
    response at all are reported with an error. Deciding what counts as
    success is left to the caller.
    """

    def __init__(
        self,
        timeout: float = 10,
        executor: Optional[Executor] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize transport.

        Args:
            timeout: Per-request timeout in seconds
            executor: Where requests run (default: a small thread pool)
            session: requests session to reuse (default: a new one)
        """
        self.timeout = timeout
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=4,
            thread_name_prefix="fx4-rest"
        )
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'fx4ctl/1.0'
        })
        self.logger = logging.getLogger(__name__)

    def rest(self, url, body, callback, headers=None):
        self.logger.debug(f"HTTP POST {url} body={body}")
        self.executor.submit(
            self._perform, callback,
            self.session.post, url,
            json=body, headers=headers or {}, timeout=self.timeout
        )

    def rest_get(self, url, callback, headers=None):
        self.logger.debug(f"HTTP GET {url}")
        self.executor.submit(
            self._perform, callback,
            self.session.get, url,
            headers=headers or {}, timeout=self.timeout
        )

    def _perform(self, callback: RestCallback, send: Callable, url: str, **kwargs):
        """Run one request and report it through the callback"""
        try:
            response = send(url, **kwargs)
        except requests.exceptions.RequestException as e:
            self.logger.debug(f"Request to {url} failed: {e}")
            error = RestError(code=error_code(e), message=str(e))
            self._invoke(callback, e, RestResult(error=error))
            return

        result = RestResult(
            response=RestResponse(
                status_code=response.status_code,
                status_message=response.reason or ""
            ),
            data=response.content or b""
        )
        self._invoke(callback, None, result)

    def _invoke(self, callback: RestCallback, error, result):
        try:
            callback(error, result)
        except Exception:
            self.logger.exception("Transport callback raised")

    def close(self):
        """Stop accepting requests and close the HTTP session"""
        if self._owns_executor:
            self.executor.shutdown(wait=False)
        self.session.close()


def error_code(exc: BaseException) -> str:
    """
    Symbolic code for a transport exception.

    Walks the exception chain (including urllib3's wrapped `reason`) looking
    for an OSError with a known errno, e.g. ECONNREFUSED. Timeouts map to
    ETIMEDOUT. Otherwise the exception class name is used.
    """
    if isinstance(exc, requests.exceptions.Timeout):
        return 'ETIMEDOUT'

    pending = [exc]
    seen = set()
    while pending:
        current = pending.pop(0)
        if not isinstance(current, BaseException) or id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, OSError) and current.errno in errno.errorcode:
            return errno.errorcode[current.errno]

        pending.append(getattr(current, 'reason', None))
        pending.append(current.__cause__)
        pending.append(current.__context__)
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))

    return type(exc).__name__
