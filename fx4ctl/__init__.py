"""
FX4CTL — Datapath FX4 Control Module

Device-control module that drives a Datapath FX4 matrix switcher
over its REST control surface on behalf of a show-control host.
"""

from .__version__ import __version__

__all__ = [
    '__version__',
    'actions',
    'communication',
    'config',
    'core',
    'logging',
    'module',
    'monitoring',
    'utils'
]
