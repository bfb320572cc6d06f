"""Confluence REST API client."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

import requests
from requests.auth import HTTPBasicAuth

from confluence.config import Config
from confluence.exceptions import ApiError


@dataclass
class PageInfo:
    page_id: str
    title: str
    relative_link_path: str  # "_links.webui", relative to base_url


class ApiClientProtocol(Protocol):
    """Protocol for API client operations"""

    base_url: str

    def make_request(self, url: str, description: str, params: Optional[Dict] = None) -> Optional[Dict]:
        ...

    def find_page(self, space: str, title: str, kind: str = "page") -> Optional[PageInfo]:
        ...


class ApiClient:
    """Handles all API-related operations"""

    def __init__(self, config: Config, logger: logging.Logger):
        self.config = config
        self.logger = logger
        self.base_url = config.base_url
        self.auth = HTTPBasicAuth(config.username, config.api_token) if config.username else None
        self.headers = {"Accept": "application/json"}

    def make_request(self, url: str, description: str, params: Optional[Dict] = None) -> Optional[Dict]:
        """Make API request and return response"""
        try:
            self.logger.debug(f"Making {description} request to: {url} params={params}")
            response = requests.get(
                url,
                params=params,
                headers=self.headers,
                auth=self.auth,
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            return response.json()
        except Exception as e:
            self.logger.error(f"Error making {description} request to {url}: {str(e)}")
            raise ApiError(f"Failed to make {description} request: {str(e)}") from e

    def find_page(self, space: str, title: str, kind: str = "page") -> Optional[PageInfo]:
        """Find a page by space key and title; None if it does not exist"""
        url = f"{self.base_url}/rest/api/content"
        params = {
            "spaceKey": space,
            "title": title,
            "type": kind,
            "expand": "ancestors,version",
        }
        data = self.make_request(url, f"find {kind}", params=params)

        results = (data or {}).get("results") or []
        if not results:
            self.logger.debug(f"No {kind} found: {space} / {title}")
            return None

        result = results[0]
        links = result.get("_links") or {}
        page = PageInfo(
            page_id=str(result.get("id", "")),
            title=str(result.get("title", title)),
            relative_link_path=str(links.get("webui", "")),
        )
        self.logger.debug(f"Found {kind} {page.page_id}: {space} / {title} at {page.relative_link_path}")
        return page
