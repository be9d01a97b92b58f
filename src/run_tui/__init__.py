"""Terminal dashboard for Cloud Run."""

__version__ = "0.1.0"
