"""
FX4CTL Logging Module

Provides structured JSON logging and the host log sink.
"""

from .logger import command_context, configure_logging, get_logger, StructuredFormatter
from .sink import HostLogSink

__all__ = ['command_context', 'configure_logging', 'get_logger', 'StructuredFormatter', 'HostLogSink']
