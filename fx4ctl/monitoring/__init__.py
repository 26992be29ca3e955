from .metrics import start_metrics_server, track_command, track_command_latency

__all__ = ['start_metrics_server', 'track_command', 'track_command_latency']
