"""Confluence REST API access."""

from .api_client import ApiClient, PageInfo
from .config import Config
from .exceptions import ApiError

__all__ = ["ApiClient", "ApiError", "Config", "PageInfo"]
