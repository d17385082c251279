"""Generic webhook module for posting JSON payloads to arbitrary endpoints."""

from .client import post_json

__all__ = ["post_json"]
