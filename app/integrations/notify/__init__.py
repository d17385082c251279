"""Notify module for sending templated emails through the GC Notify API."""

from .client import (
    epoch_seconds,
    create_jwt_token,
    create_authorization_header,
    post_event,
    send_email,
    send_bulk_email,
)

__all__ = [
    "epoch_seconds",
    "create_jwt_token",
    "create_authorization_header",
    "post_event",
    "send_email",
    "send_bulk_email",
]
