"""
Instagram private API client.
"""

from .instagram_client import InstagramClient
from .instagram_http import InstagramHttpClient

__all__ = ["InstagramClient", "InstagramHttpClient"]
