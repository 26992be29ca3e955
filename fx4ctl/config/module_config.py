"""
Module Configuration

The host supplies a configuration mapping at startup and again on every
change. The module keeps whichever ModuleConfig it was handed last.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import re

from fx4ctl.exceptions import ConfigError


# Dotted-quad IPv4, the pattern the host applies to the `host` field
REGEX_IP = (
    r'^((25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}'
    r'(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$'
)

INFO_TEXT = 'This module will control a Datapath FX4.'


@dataclass
class ConfigField:
    """Declarative config field handed to the host's schema engine"""
    type: str
    id: str
    label: str
    width: int
    value: Optional[str] = None
    regex: Optional[str] = None
    
    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": self.type,
            "id": self.id,
            "label": self.label,
            "width": self.width
        }
        if self.value is not None:
            data["value"] = self.value
        if self.regex is not None:
            data["regex"] = self.regex
        return data


CONFIG_FIELDS = [
    ConfigField(
        type='text',
        id='info',
        label='Information',
        width=12,
        value=INFO_TEXT
    ),
    ConfigField(
        type='textinput',
        id='host',
        label='IP Address',
        width=4,
        regex=REGEX_IP
    ),
]


@dataclass
class ModuleConfig:
    """Appliance address as configured by the operator"""
    host: str = ""
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ModuleConfig':
        """Build from the host's config mapping; unknown keys are ignored"""
        host = data.get("host") or ""
        return cls(host=str(host).strip())
    
    def to_dict(self) -> Dict[str, Any]:
        return {"host": self.host}
    
    def validate(self) -> 'ModuleConfig':
        """
        Check `host` the way the host's schema engine would.
        
        Raises:
            ConfigError: If host is empty or not an IPv4 address
        """
        if not self.host:
            raise ConfigError("Missing required config field: host")
        if not re.match(REGEX_IP, self.host):
            raise ConfigError(f"host must be an IPv4 address, got '{self.host}'")
        return self


def config_fields() -> List[Dict[str, Any]]:
    """Config field descriptors in host form"""
    return [field.to_dict() for field in CONFIG_FIELDS]
