"""dthread: Digital Thread Navigator."""

__version__ = "0.1.0"
