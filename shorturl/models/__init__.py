"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

from shorturl.models.url import URLMapping

__all__ = ["URLMapping"]
