"""Clients for remote word services."""

from .datamuse import DatamuseClient, DatamuseError, UrlBuilder, WordsApiItem

__all__ = ["DatamuseClient", "DatamuseError", "UrlBuilder", "WordsApiItem"]
