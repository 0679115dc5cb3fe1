"""
Adapters for fetch_request.
"""
from .httpx_adapter import to_httpx_request

__all__ = ["to_httpx_request"]
