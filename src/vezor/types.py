"""Vezor SDK Types"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union
import os

# Response payloads are passed through as parsed JSON
JSON = Union[Dict[str, Any], List[Any]]

DEFAULT_API_URL = "https://api.vezor.io"

ENV_API_URL = "VEZOR_API_URL"
ENV_TOKEN = "VEZOR_TOKEN"
ENV_ORGANIZATION_ID = "VEZOR_ORGANIZATION_ID"


class ValueType(Enum):
    """Kinds of secret values."""
    STRING = "string"
    PASSWORD = "password"
    URL = "url"
    CONNECTION_STRING = "connection_string"


class GroupFormat(Enum):
    """Output formats for pulling a group's secrets."""
    JSON = "json"
    ENV = "env"
    EXPORT = "export"

    @staticmethod
    def is_raw_format(name: str) -> bool:
        """Whether the server answers format ``name`` with plain text."""
        return name in (GroupFormat.ENV.value, GroupFormat.EXPORT.value)


def enum_value(value: Union[Enum, str]) -> str:
    """Return the wire value of an enum member, or a plain string unchanged."""
    return value.value if isinstance(value, Enum) else value


def normalize_tags(tags: Mapping[Any, Any]) -> Dict[str, Any]:
    """Return a copy of ``tags`` with every key converted to ``str``."""
    return {str(key): value for key, value in tags.items()}


@dataclass
class ClientConfig:
    """Connection settings for a VezorClient."""
    base_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    organization_id: Optional[str] = None
    timeout: Optional[float] = None

    @classmethod
    def from_env(
        cls,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        organization_id: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        """
        Build a config from explicit values, falling back to the environment.

        Args:
            base_url: API URL; defaults to VEZOR_API_URL, then DEFAULT_API_URL
            token: API token; defaults to VEZOR_TOKEN
            organization_id: Organization UUID; defaults to VEZOR_ORGANIZATION_ID
            environ: Mapping to read instead of os.environ

        Returns:
            ClientConfig
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=base_url or env.get(ENV_API_URL) or DEFAULT_API_URL,
            token=token or env.get(ENV_TOKEN),
            organization_id=organization_id or env.get(ENV_ORGANIZATION_ID),
        )
