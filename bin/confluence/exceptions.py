"""Exceptions raised by the Confluence API client."""


class ApiError(Exception):
    """A Confluence REST API request failed"""
