"""Vezor Client - Main entry point for the Vezor API."""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote_plus

import httpx

from vezor.errors import raise_for_status
from vezor.types import (
    JSON,
    ClientConfig,
    GroupFormat,
    ValueType,
    enum_value,
    normalize_tags,
)
from vezor.version import __version__

logger = logging.getLogger(__name__)


class VezorClient:
    """
    Vezor API Client.

    Every public method is a single request to the Vezor API, except
    get_secret_by_name which searches first and then fetches by id.

    Example:
        >>> client = VezorClient(
        ...     base_url="https://api.vezor.io",
        ...     token="your-api-token",
        ...     organization_id="your-org-uuid",
        ... )
        >>> secrets = client.list_secrets(tags={"env": "prod"})
    """

    USER_AGENT = f"vezor-python/{__version__}"

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        organization_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the Vezor client.

        Args:
            base_url: Base URL of the Vezor API
            token: API authentication token
            organization_id: Organization UUID
            timeout: Request timeout in seconds (httpx default when omitted)
            transport: Custom httpx transport
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.organization_id = organization_id

        client_kwargs: Dict[str, Any] = {}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "VezorClient":
        """Create a client from a ClientConfig."""
        return cls(
            base_url=config.base_url,
            token=config.token,
            organization_id=config.organization_id,
            timeout=config.timeout,
            transport=transport,
        )

    # Health

    def health(self) -> JSON:
        """Check API health status."""
        return self._request("GET", "/api/v1/health")

    # Organizations

    def list_organizations(self) -> JSON:
        """List organizations the authenticated user belongs to."""
        return self._request("GET", "/api/v1/organizations")

    def get_organization(self, org_id: str) -> JSON:
        """Get organization details by ID."""
        return self._request("GET", f"/api/v1/organizations/{org_id}")

    def create_organization(self, name: str, description: str = "") -> JSON:
        """
        Create a new organization.

        Args:
            name: Organization name
            description: Optional description

        Returns:
            Created organization details
        """
        return self._request(
            "POST",
            "/api/v1/organizations",
            body={"name": name, "description": description},
        )

    # Secrets

    def list_secrets(
        self,
        tags: Optional[Mapping[Any, Any]] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> JSON:
        """
        List secrets with optional filtering, search, and pagination.

        Args:
            tags: Filter by tags, e.g. {"env": "prod", "app": "api"}
            search: Search query for key_name
            limit: Maximum number of results
            offset: Pagination offset

        Returns:
            Dict with secrets, count, total, limit and offset
        """
        params: Dict[str, Any] = {}
        if tags:
            params.update(normalize_tags(tags))
        if search is not None:
            params["search"] = search
        if limit is not None:
            params["limit"] = limit
        params["offset"] = offset

        return self._request("GET", "/api/v1/secrets", params=params)

    def get_secret(self, secret_id: str, version: Optional[int] = None) -> JSON:
        """
        Get a secret by ID, including its decrypted value.

        Args:
            secret_id: Secret UUID
            version: Optional version number; the latest when omitted

        Returns:
            Secret details

        Raises:
            NotFoundError: If the secret or version doesn't exist
        """
        params: Dict[str, Any] = {}
        if version is not None:
            params["version"] = version

        return self._request("GET", f"/api/v1/secrets/{secret_id}", params=params)

    def get_secret_by_name(
        self,
        key_name: str,
        tags: Optional[Mapping[Any, Any]] = None,
    ) -> Optional[JSON]:
        """
        Get a secret by key name and optional tags.

        Only the first 100 search results are matched against key_name.

        Args:
            key_name: Secret key name, e.g. "DATABASE_URL" (case-insensitive)
            tags: Optional tag filters

        Returns:
            The secret with its value, or None if no secret matches
        """
        result = self.list_secrets(tags=tags, search=key_name, limit=100)
        wanted = key_name.lower()
        for secret in result.get("secrets") or []:
            if (secret.get("key_name") or "").lower() == wanted:
                return self.get_secret(secret["id"])

        logger.debug("No secret named %s in search results", key_name)
        return None

    def create_secret(
        self,
        key_name: str,
        value: str,
        tags: Mapping[Any, Any],
        description: str = "",
        value_type: Union[ValueType, str] = ValueType.STRING,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> JSON:
        """
        Create a new secret.

        Args:
            key_name: Secret key name
            value: Secret value
            tags: Tags for the secret (should include env and app)
            description: Optional description
            value_type: string, password, url or connection_string
            metadata: Optional metadata

        Returns:
            Created secret details
        """
        body: Dict[str, Any] = {
            "key_name": key_name,
            "value": value,
            "tags": normalize_tags(tags),
            "path": key_name.lower(),
        }
        if description:
            body["description"] = description
        body["value_type"] = enum_value(value_type)
        if metadata is not None:
            body["metadata"] = metadata

        return self._request("POST", "/api/v1/secrets", body=body)

    def update_secret(
        self,
        secret_id: str,
        value: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[Mapping[Any, Any]] = None,
    ) -> JSON:
        """
        Update an existing secret. A new value creates a new version.

        Only the fields given are sent.
        """
        body: Dict[str, Any] = {}
        if value is not None:
            body["value"] = value
        if description is not None:
            body["description"] = description
        if tags is not None:
            body["tags"] = normalize_tags(tags)

        return self._request("PUT", f"/api/v1/secrets/{secret_id}", body=body)

    def delete_secret(self, secret_id: str) -> JSON:
        """Delete a secret and all its versions."""
        return self._request("DELETE", f"/api/v1/secrets/{secret_id}")

    def get_secret_versions(self, secret_id: str) -> JSON:
        """Get version history for a secret."""
        return self._request("GET", f"/api/v1/secrets/{secret_id}/versions")

    # Tags

    def get_tags(self) -> JSON:
        """Get known tag values grouped by tag key."""
        return self._request("GET", "/api/v1/tags")

    # Import/Export

    def export_env(self, tags: Optional[Mapping[Any, Any]] = None) -> str:
        """
        Export secrets in .env format.

        Args:
            tags: Optional tag filters

        Returns:
            The .env content, unparsed
        """
        params = normalize_tags(tags) if tags else {}
        return self._request("GET", "/api/v1/export", params=params, raw=True)

    def import_env(self, environment: str, content: str) -> JSON:
        """
        Import secrets from .env content.

        Args:
            environment: Target environment
            content: .env file content

        Returns:
            Import results
        """
        return self._request(
            "POST",
            f"/api/v1/import/{environment}",
            body=content,
            content_type="text/plain",
        )

    # Groups

    def list_groups(self) -> JSON:
        """List all secret groups in the organization."""
        return self._request("GET", "/api/v1/groups")

    def get_group(self, name: str) -> JSON:
        """Get a group, including its tag filter."""
        return self._request("GET", f"/api/v1/groups/{quote_plus(name)}")

    def get_group_secret_count(self, name: str) -> JSON:
        """Count the secrets matching a group's tags."""
        return self._request("GET", f"/api/v1/groups/{quote_plus(name)}/count")

    def pull_group_secrets(
        self,
        name: str,
        format: Union[GroupFormat, str] = GroupFormat.JSON,
    ) -> Union[JSON, str]:
        """
        Pull all secrets matching a group's tags.

        Args:
            name: Group name
            format: json, env or export

        Returns:
            Parsed JSON for json, the raw text for env and export
        """
        format_name = enum_value(format)
        return self._request(
            "GET",
            f"/api/v1/groups/{quote_plus(name)}/secrets",
            params={"format": format_name},
            raw=GroupFormat.is_raw_format(format_name),
        )

    # Validation

    def validate_schema(self, content: str, environment: str = "development") -> JSON:
        """
        Validate a schema against stored secrets.

        Args:
            content: YAML schema content
            environment: Environment to validate against

        Returns:
            Validation results with valid and missing
        """
        return self._request(
            "POST",
            "/api/v1/validate",
            body={"schema": content, "environment": environment},
        )

    # Audit

    def get_audit_log(self, limit: int = 100, offset: int = 0) -> JSON:
        """Get audit log entries."""
        return self._request(
            "GET", "/api/v1/audit", params={"limit": limit, "offset": offset}
        )

    def _headers(self, content_type: str) -> Dict[str, str]:
        headers = {"User-Agent": self.USER_AGENT}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if self.organization_id:
            headers["X-Organization-Id"] = self.organization_id
        headers["Content-Type"] = content_type
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Union[Mapping[str, Any], str]] = None,
        raw: bool = False,
        content_type: str = "application/json",
    ) -> Any:
        """
        Send one request and map the response.

        Raises:
            VezorError: For any non-2xx response
            httpx.TransportError: If the request could not be sent
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}

        content = None
        if body is not None:
            content = body if isinstance(body, str) else json.dumps(body)

        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        response = self._client.request(
            method,
            url,
            params=query or None,
            content=content,
            headers=self._headers(content_type),
        )
        logger.debug("%s %s -> %s", method, url, response.status_code)

        raise_for_status(response)

        if raw:
            return response.text
        if not response.content:
            return None
        return response.json()

    def close(self) -> None:
        """Close the client and release resources."""
        self._client.close()

    def __enter__(self) -> "VezorClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
