"""nanushi website backend: content, missions, waitlist and email."""

__version__ = "0.1.0"
