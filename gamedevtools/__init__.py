"""Debug logging, a gameplay event log and memory usage estimates for game development."""

__version__ = "0.1.0"
__all__ = ["debug_tools", "event_logger", "memory_tracker"]