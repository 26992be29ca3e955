"""
DeviceModule — Host Capability Interface

Contract between the host runtime and a device module:
init → configure* → dispatch* → shutdown

Design notes:
- The host owns the lifecycle. It constructs the module with its config,
    calls init() once, configure() on every config change, dispatch() for
    each triggered action and shutdown() when the instance is deleted.
- Modules receive their collaborators (transport, log sink) at construction
    and keep no process-wide handles.
- dispatch() must never raise into the host. Failures end at the log sink.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List


class ModuleStatus(Enum):
    """Status a module reports to the host"""
    UNKNOWN = "unknown"
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


class DeviceModule(ABC):
    """
    Base lifecycle interface for device modules.
    """
    
    def __init__(self):
        self.status = ModuleStatus.UNKNOWN
    
    @abstractmethod
    def init(self) -> None:
        """Start the module. Called once, after construction."""
    
    @abstractmethod
    def configure(self, config: Any) -> None:
        """
        Replace the module configuration.
        
        Args:
            config: New configuration; the previous one is discarded.
        """
    
    @abstractmethod
    def config_fields(self) -> List[Dict[str, Any]]:
        """Config field descriptors for the host's settings form"""
    
    @abstractmethod
    def register_actions(self) -> Dict[str, Dict[str, Any]]:
        """
        Declare the module's actions.
        
        Returns:
            Action descriptors keyed by action id
        """
    
    @abstractmethod
    def dispatch(self, invocation: Any) -> Any:
        """
        Run one action. Must not raise.
        
        Args:
            invocation: Action id and options from the host
        """
    
    @abstractmethod
    def shutdown(self) -> None:
        """Release resources when the host deletes the instance"""
