"""
Command Dispatcher

Maps an action invocation to an appliance command and sends it.

Nothing escapes dispatch(): errors raised while building a command are
logged at the boundary, failed requests are logged when their future
settles, and unknown actions are ignored without a trace.
"""

from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional
import logging

from fx4ctl.communication.rest_client import RestCommandClient
from fx4ctl.communication.rest_format import CommandRequest, HttpMethod
from fx4ctl.logging.logger import command_context

from .definitions import ActionInvocation, PREFERRED_INPUT, REBOOT


PREFERRED_INPUT_PATH = '/PreferredInput.cgx'
REBOOT_PATH = '/RebootDevice.cgx'


def build_preferred_input(options: Dict[str, Any]) -> CommandRequest:
    """POST /PreferredInput.cgx {"Input": <n>}"""
    return CommandRequest(
        method=HttpMethod.POST,
        path=PREFERRED_INPUT_PATH,
        body={"Input": int(str(options.get('input')).strip())}
    )


def build_reboot(options: Dict[str, Any]) -> CommandRequest:
    """POST /RebootDevice.cgx {}"""
    return CommandRequest(method=HttpMethod.POST, path=REBOOT_PATH, body={})


class CommandDispatcher:
    """
    Stateless action table.
    
    Each entry turns the invocation's options into a CommandRequest.
    """
    
    COMMANDS: Dict[str, Callable[[Dict[str, Any]], CommandRequest]] = {
        PREFERRED_INPUT: build_preferred_input,
        REBOOT: build_reboot,
    }
    
    def __init__(self, client: RestCommandClient, sink):
        """
        Initialize dispatcher.
        
        Args:
            client: Command client bound to the appliance
            sink: Host log sink exposing log(level, message)
        """
        self.client = client
        self.sink = sink
        self.logger = logging.getLogger(__name__)
    
    def build(self, invocation: ActionInvocation) -> Optional[CommandRequest]:
        """Command for an invocation, or None for an unknown action"""
        builder = self.COMMANDS.get(invocation.action)
        if builder is None:
            return None
        return builder(invocation.options or {})
    
    def dispatch(self, invocation: ActionInvocation) -> Optional[Future]:
        """
        Run an action.
        
        Args:
            invocation: Action id and options from the host
        
        Returns:
            The command future, or None if nothing was sent
        """
        try:
            command = self.build(invocation)
            if command is None:
                return None
            
            self.logger.debug(
                f"Dispatching {invocation.action}",
                extra=command_context(
                    host=self.client.config.host,
                    action=invocation.action,
                    method=command.method.value,
                    path=command.path
                )
            )
            return self.send(command)

        except Exception as e:
            self.sink.log('error', str(e))
            return None

    def do_command(self, path: str, body: Optional[Dict[str, Any]] = None) -> Future:
        """
        POST a command and log it if it fails.

        Args:
            path: Command path, must start with '/'
            body: POST body (default: {})
        """
        return self.send(CommandRequest(method=HttpMethod.POST, path=path, body=body or {}))

    def send(self, command: CommandRequest) -> Future:
        """Issue a command; only a failure is reported, as an error log line"""
        future = self.client.execute(command.method, command.path, command.body)
        future.add_done_callback(self._log_failure)
        return future
    
    def _log_failure(self, future: Future):
        error = future.exception()
        if error is not None:
            host = self.client.config.host
            self.sink.log('error', f"{host} : {error}")
