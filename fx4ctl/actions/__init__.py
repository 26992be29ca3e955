"""
FX4CTL Actions Module

Action schema exposed to the host and the dispatcher that runs them.
"""

from .definitions import (
    ActionDefinition,
    ActionOption,
    ActionInvocation,
    Choice,
    ACTIONS,
    PREFERRED_INPUT,
    REBOOT,
    action_definitions
)
from .dispatcher import CommandDispatcher

__all__ = [
    'ActionDefinition',
    'ActionOption',
    'ActionInvocation',
    'Choice',
    'ACTIONS',
    'PREFERRED_INPUT',
    'REBOOT',
    'action_definitions',
    'CommandDispatcher'
]
