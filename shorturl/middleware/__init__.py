"""HTTP middleware for the URL shortener application."""

from shorturl.middleware.logging import LoggingMiddleware, get_client_ip

__all__ = ["LoggingMiddleware", "get_client_ip"]
