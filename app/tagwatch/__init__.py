"""tagwatch - client tools for a container image update notifier.

Provides the webhook notification backend and a CLI to manage the
manifest database of a running tagwatch server.
"""

__version__ = "0.3.0"
