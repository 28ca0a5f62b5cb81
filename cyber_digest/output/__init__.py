"""Delivery of the digest to the downstream webhook."""

from .dispatcher import Dispatcher, build_payload
from .webhook_client import WebhookClient

__all__ = ["Dispatcher", "WebhookClient", "build_payload"]
