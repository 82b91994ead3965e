"""
Strapi API Client
Handles all interactions with the Strapi v4 REST API:
- Create collection entries and single types
- Look up and upload media library files
- Read and update users-permissions roles
"""
import json
from typing import Any, Dict, List, Optional

import httpx
import structlog

from ..config import get_settings
from ..exceptions import StrapiAPIError
from ..models import FileData

logger = structlog.get_logger(__name__)


def flatten_params(value: Any, prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested query parameters into Strapi's bracket notation

    Example:
        {"filters": {"name": {"$eq": "cover"}}} -> {"filters[name][$eq]": "cover"}
    """
    if not isinstance(value, dict):
        return {prefix: value}

    flat = {}
    for key, item in value.items():
        name = f"{prefix}[{key}]" if prefix else key
        flat.update(flatten_params(item, name))
    return flat


class StrapiClient:
    """
    Client for the Strapi REST API

    The client is the seeder's only handle on the running Strapi instance;
    it is created once per run and passed to every operation that needs it.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize Strapi client

        Args:
            base_url: Strapi base URL (from settings if not provided)
            api_token: Full-access API token (from settings if not provided)
            timeout: Per-request timeout in seconds, None waits indefinitely
            transport: Optional httpx transport, used to stub the server in tests
        """
        if not base_url or not api_token:
            settings = get_settings()
            base_url = base_url or settings.strapi_url
            api_token = api_token or settings.strapi_api_token
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token

        if not self.api_token or not self.base_url:
            raise ValueError("Strapi API token and base URL are required")

        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.api_token}"},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._client.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        json: Optional[Dict] = None,
        data: Optional[Dict] = None,
        files: Optional[List] = None,
    ) -> Any:
        """
        Make API request

        Raises:
            StrapiAPIError: If Strapi returns an error or cannot be reached
        """
        try:
            response = self._client.request(
                method,
                endpoint,
                params=flatten_params(params) if params else None,
                json=json,
                data=data,
                files=files,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            error_msg = f"Strapi API error: {method} {endpoint} returned {e.response.status_code}"
            try:
                error_data = e.response.json().get("error") or {}
                if error_data.get("message"):
                    error_msg += f" - {error_data['message']}"
            except ValueError:
                pass
            raise StrapiAPIError(error_msg, status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            raise StrapiAPIError(f"Failed to connect to Strapi at {self.base_url}: {e}") from e

    # Content API

    def create(self, plural: str, data: Dict) -> Dict:
        """Create one entry of a collection type"""
        result = self._request("POST", f"/api/{plural}", json={"data": data})
        return result.get("data") or {}

    def put_single(self, singular: str, data: Dict) -> Dict:
        """Create or replace a single type"""
        result = self._request("PUT", f"/api/{singular}", json={"data": data})
        return result.get("data") or {}

    # Upload plugin

    def find_file(self, name: str) -> Optional[Dict]:
        """Get the first media library file whose stored name matches exactly"""
        result = self._request(
            "GET",
            "/api/upload/files",
            params={"filters": {"name": {"$eq": name}}},
        )
        return result[0] if result else None

    def upload(self, file_data: FileData, file_info: Dict) -> List[Dict]:
        """
        Upload one file to the media library

        Returns:
            List of created file records (Strapi always answers with a list)
        """
        with open(file_data.filepath, "rb") as fh:
            return self._request(
                "POST",
                "/api/upload",
                data={"fileInfo": json.dumps(file_info)},
                files=[("files", (file_data.original_file_name, fh, file_data.mimetype or "application/octet-stream"))],
            )

    # Users & permissions plugin

    def get_roles(self) -> List[Dict]:
        result = self._request("GET", "/api/users-permissions/roles")
        return result.get("roles") or []

    def get_role(self, role_id: int) -> Dict:
        result = self._request("GET", f"/api/users-permissions/roles/{role_id}")
        return result.get("role") or {}

    def update_role(self, role_id: int, role: Dict) -> Dict:
        return self._request("PUT", f"/api/users-permissions/roles/{role_id}", json=role)
