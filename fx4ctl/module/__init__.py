"""
FX4CTL Module Package

Provides the host-facing FX4 device module.
"""

from .fx4_module import FX4Module

__all__ = ['FX4Module']
