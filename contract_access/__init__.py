"""Authorization and workflow-transition core for contract management."""

__version__ = "1.0.0"
