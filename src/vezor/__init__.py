"""
Vezor - Python SDK

A client for the Vezor GitOps-native secrets management API.
"""

from typing import Optional

from vezor.types import (
    JSON,
    ClientConfig,
    GroupFormat,
    ValueType,
    DEFAULT_API_URL,
)
from vezor.errors import (
    VezorError,
    AuthError,
    PermissionError,
    NotFoundError,
    ValidationError,
    APIError,
)
from vezor.client import VezorClient
from vezor.version import __version__


def default_client(config: Optional[ClientConfig] = None) -> VezorClient:
    """
    Create a client from a config, or from the environment when none is given.

    Reads VEZOR_API_URL, VEZOR_TOKEN and VEZOR_ORGANIZATION_ID.
    """
    return VezorClient.from_config(config or ClientConfig.from_env())


__all__ = [
    # Types
    "JSON",
    "ClientConfig",
    "GroupFormat",
    "ValueType",
    "DEFAULT_API_URL",
    # Errors
    "VezorError",
    "AuthError",
    "PermissionError",
    "NotFoundError",
    "ValidationError",
    "APIError",
    # Client
    "VezorClient",
    "default_client",
    "__version__",
]
