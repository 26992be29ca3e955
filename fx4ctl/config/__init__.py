"""
FX4CTL Configuration Module

Module configuration and the config-field schema exposed to the host.
"""

from .module_config import (
    ModuleConfig,
    ConfigField,
    CONFIG_FIELDS,
    REGEX_IP,
    config_fields
)

__all__ = [
    'ModuleConfig',
    'ConfigField',
    'CONFIG_FIELDS',
    'REGEX_IP',
    'config_fields'
]
