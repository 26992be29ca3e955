"""
Action Definitions

Declarative description of the actions the module offers. The host
renders these as buttons and option widgets and sends back an
ActionInvocation when one is triggered.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


PREFERRED_INPUT = "preferred_input"
REBOOT = "reboot"


@dataclass
class Choice:
    """One entry of a dropdown option"""
    id: str
    label: str
    
    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label}


@dataclass
class ActionOption:
    """Input widget shown alongside an action"""
    type: str
    id: str
    label: str
    default: Optional[str] = None
    choices: List[Choice] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": self.type,
            "label": self.label,
            "id": self.id
        }
        if self.default is not None:
            data["default"] = self.default
        if self.choices:
            data["choices"] = [choice.to_dict() for choice in self.choices]
        return data


@dataclass
class ActionDefinition:
    """An action exposed to the host"""
    id: str
    label: str
    options: List[ActionOption] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        data = {"label": self.label}
        if self.options:
            data["options"] = [option.to_dict() for option in self.options]
        return data


@dataclass
class ActionInvocation:
    """A host request to run one action"""
    action: str
    options: Dict[str, Any] = field(default_factory=dict)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ActionInvocation':
        return cls(
            action=data.get("action", ""),
            options=data.get("options") or {}
        )


ACTIONS = [
    ActionDefinition(
        id=PREFERRED_INPUT,
        label='Preferred Input',
        options=[
            ActionOption(
                type='dropdown',
                id='input',
                label='Input Number',
                default='2',
                choices=[
                    Choice(id='0', label='Input 1'),
                    Choice(id='1', label='Input 2'),
                    Choice(id='2', label='Input 3'),
                ]
            )
        ]
    ),
    ActionDefinition(
        id=REBOOT,
        label='Reboot Device'
    ),
]


def action_definitions() -> Dict[str, Dict[str, Any]]:
    """Action schema in host form, keyed by action id"""
    return {action.id: action.to_dict() for action in ACTIONS}
