"""
Common utility functions used across multiple routes.
"""

from datetime import datetime


def iso_format(dt: datetime) -> str:
    """Format datetime as ISO string with Z suffix."""
    return dt.isoformat() + "Z"
