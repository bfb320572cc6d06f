"""Centralized configuration management."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Config:
    """Centralized configuration management"""
    base_url: Optional[str] = None  # e.g. https://example.atlassian.net/wiki
    username: Optional[str] = None
    api_token: Optional[str] = None
    timeout: float = 30.0  # seconds, per API request
    templates_dir: Optional[Path] = None  # overrides for built-in macro templates
    drop_h1: bool = False

    def __post_init__(self):
        if self.base_url is None:
            self.base_url = os.environ.get('CONFLUENCE_BASE_URL', 'http://localhost:8090')
        if self.username is None:
            self.username = os.environ.get('CONFLUENCE_USERNAME', '')
        if self.api_token is None:
            self.api_token = os.environ.get('CONFLUENCE_TOKEN', '')

        # Links are built as base_url + "/display/..." or base_url + API path
        self.base_url = self.base_url.rstrip('/')

        if self.templates_dir is not None and not isinstance(self.templates_dir, Path):
            self.templates_dir = Path(self.templates_dir)
