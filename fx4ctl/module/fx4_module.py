"""
Datapath FX4 Module

Host-facing module for the FX4. Holds the injected transport and log sink,
and composes the command client and dispatcher around them.
"""

from concurrent.futures import Future
from typing import Any, Dict, List, Optional, Union
import logging

from fx4ctl.actions.definitions import ActionInvocation, action_definitions
from fx4ctl.actions.dispatcher import CommandDispatcher
from fx4ctl.communication.rest_client import RestCommandClient
from fx4ctl.communication.transport import RestTransport
from fx4ctl.config.module_config import ModuleConfig, config_fields
from fx4ctl.core.base_module import DeviceModule, ModuleStatus


class FX4Module(DeviceModule):
    """
    Device module for a Datapath FX4 matrix switcher.
    
    Actions are registered at construction so the host can list them
    before init() runs.
    """
    
    def __init__(
        self,
        config: Union[ModuleConfig, Dict[str, Any]],
        transport: RestTransport,
        sink
    ):
        """
        Initialize module.
        
        Args:
            config: Initial configuration (ModuleConfig or host mapping)
            transport: Host rest/rest_get service
            sink: Host log sink exposing log(level, message)
        """
        super().__init__()
        self.config = _coerce_config(config)
        self.transport = transport
        self.sink = sink
        self.logger = logging.getLogger(__name__)
        
        self.client = RestCommandClient(transport, self.config)
        self.dispatcher = CommandDispatcher(self.client, sink)
        
        self.actions = self.register_actions()
    
    def init(self):
        self.status = ModuleStatus.OK
        self.sink.log('debug', f"init {self.config.host}")
    
    def configure(self, config):
        """Config updated by the user"""
        self.config = _coerce_config(config)
        self.client.update_config(self.config)
        self.logger.debug(f"Configuration updated: host={self.config.host}")
    
    def config_fields(self) -> List[Dict[str, Any]]:
        return config_fields()
    
    def register_actions(self) -> Dict[str, Dict[str, Any]]:
        return action_definitions()
    
    def dispatch(self, invocation) -> Optional[Future]:
        """
        Run the specified action.
        
        Accepts an ActionInvocation or the host's {"action", "options"}
        mapping. Returns the command future, or None when nothing was sent.
        """
        try:
            if isinstance(invocation, dict):
                invocation = ActionInvocation.from_dict(invocation)
        except Exception as e:
            self.sink.log('error', str(e))
            return None
        
        return self.dispatcher.dispatch(invocation)
    
    def shutdown(self):
        """Cleanup when the module gets deleted"""
        self.sink.log('debug', "destroy")
        self.status = ModuleStatus.UNKNOWN
        close = getattr(self.transport, 'close', None)
        if callable(close):
            close()


def _coerce_config(config) -> ModuleConfig:
    if isinstance(config, ModuleConfig):
        return config
    return ModuleConfig.from_dict(config or {})
