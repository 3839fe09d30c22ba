"""HTTP capability and its httpx implementation."""
from __future__ import annotations

from hal_walk.client.http import ClientConfig, HalClient, HttpCapability, HttpResult

__all__ = ["ClientConfig", "HalClient", "HttpCapability", "HttpResult"]
