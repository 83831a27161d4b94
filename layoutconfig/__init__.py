"""Resource-qualifier configuration resolution for layout editors."""

__version__ = "0.3.0"
