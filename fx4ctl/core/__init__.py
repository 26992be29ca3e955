"""
FX4CTL Core Module

Provides the device module lifecycle interface.
"""

from .base_module import DeviceModule, ModuleStatus

__all__ = ['DeviceModule', 'ModuleStatus']
