"""Firecrawl job client package."""

import logging

from .client import JobClient
from .config import Config, load_config
from .exceptions import (
    AuthenticationError,
    FirecrawlError,
    JobInitiationError,
    JobTimeoutError,
    RemoteJobError,
    TransportError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "JobClient",
    "Config",
    "load_config",
    "FirecrawlError",
    "AuthenticationError",
    "TransportError",
    "JobInitiationError",
    "RemoteJobError",
    "JobTimeoutError",
]

__version__ = "0.1.0"
