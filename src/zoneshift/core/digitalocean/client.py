"""DigitalOcean API client implementation."""

import logging
import uuid
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from zoneshift.core.base import BaseProviderClient
from zoneshift.core.exceptions import ProbeError, ProviderError
from zoneshift.core.models import (
    AccountInfo,
    Instance,
    RecordUpdate,
    Zone,
    ZoneCreate,
    ZoneRecord,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_API_URL = "https://api.digitalocean.com/v2"


class DigitalOceanClient(BaseProviderClient):
    """Client for the DigitalOcean v2 REST API."""

    PER_PAGE = 200
    PROBE_TAG_PREFIX = "zoneshift-write-probe"

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self._http_client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Initialize the HTTP client."""
        self._http_client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=self.timeout,
            transport=self.transport,
            headers={"Content-Type": "application/json"},
        )

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        if not self._http_client:
            raise RuntimeError("Client not connected. Call connect() first.")
        return self._http_client

    # ========================================================================
    # Internal helpers
    # ========================================================================

    async def _request(
        self,
        method: str,
        url: str,
        token: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request and return the raw response (caller checks status)."""
        logger.debug("%s %s", method, url)
        try:
            return await self.http_client.request(
                method,
                url,
                params=params,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"{method} {url} failed: {e}") from e

    async def _call(
        self,
        method: str,
        url: str,
        token: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the parsed JSON body, raising on error status."""
        response = await self._request(method, url, token, params=params, json=json)
        if response.is_error:
            raise ProviderError(_error_message(response), response.status_code)
        if response.status_code == 204 or not response.content:
            return {}

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError(
                f"{method} {url} returned a non-JSON body", response.status_code
            ) from e
        if not isinstance(body, dict):
            raise ProviderError(
                f"{method} {url} returned an unexpected body", response.status_code
            )
        return body

    async def _paginate(self, url: str, token: str, key: str) -> list[dict[str, Any]]:
        """Collect ``key`` items across every page of a list endpoint."""
        items: list[dict[str, Any]] = []
        next_url: str | None = url
        params: dict[str, Any] | None = {"per_page": self.PER_PAGE}

        while next_url:
            payload = await self._call("GET", next_url, token, params=params)
            items.extend(payload.get(key) or [])
            # The next link already carries page and per_page.
            next_url = ((payload.get("links") or {}).get("pages") or {}).get("next")
            params = None

        return items

    # ========================================================================
    # Account
    # ========================================================================

    async def get_account(self, token: str) -> AccountInfo:
        payload = await self._call("GET", "/account", token)
        return _parse(AccountInfo, payload, "account")

    async def probe_account_writable(self, token: str) -> bool:
        """
        Probe write access by deleting a tag that cannot exist.

        The API has no "am I writable" endpoint. A read-only token gets 403
        for any delete, while a writable token reaches the lookup and gets
        404 for the missing tag.
        """
        tag = f"{self.PROBE_TAG_PREFIX}-{uuid.uuid4().hex}"
        response = await self._request("DELETE", f"/tags/{tag}", token)

        if response.status_code == 404:
            return True
        if response.status_code == 403:
            return False

        raise ProbeError(
            f"Unexpected write probe response ({response.status_code}): "
            f"{_error_message(response)}",
            response.status_code,
        )

    # ========================================================================
    # Instances
    # ========================================================================

    async def list_instances(self, token: str) -> list[Instance]:
        droplets = await self._paginate("/droplets", token, "droplets")
        logger.info("Found %d droplets", len(droplets))
        return [_parse(Instance, d) for d in droplets]

    # ========================================================================
    # Zones
    # ========================================================================

    async def list_zones(self, token: str) -> list[Zone]:
        domains = await self._paginate("/domains", token, "domains")
        return [_parse(Zone, d) for d in domains]

    async def create_zone(self, token: str, zone: ZoneCreate) -> Zone:
        payload = await self._call("POST", "/domains", token, json=zone.model_dump())
        return _parse(Zone, payload, "domain")

    async def delete_zone(self, token: str, zone_name: str) -> None:
        await self._call("DELETE", f"/domains/{zone_name}", token)

    # ========================================================================
    # Records
    # ========================================================================

    async def list_zone_records(self, token: str, zone_name: str) -> list[ZoneRecord]:
        records = await self._paginate(
            f"/domains/{zone_name}/records", token, "domain_records"
        )
        return [_parse(ZoneRecord, r) for r in records]

    async def create_zone_record(
        self, token: str, zone_name: str, record: ZoneRecord
    ) -> ZoneRecord:
        body = record.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
        payload = await self._call(
            "POST", f"/domains/{zone_name}/records", token, json=body
        )
        return _parse(ZoneRecord, payload, "domain_record")

    async def update_zone_record(
        self, token: str, zone_name: str, record_id: int, update: RecordUpdate
    ) -> ZoneRecord:
        body = {
            key: value
            for key, value in update.model_dump(by_alias=True, exclude_none=True).items()
            if value != ""
        }
        payload = await self._call(
            "PUT", f"/domains/{zone_name}/records/{record_id}", token, json=body
        )
        return _parse(ZoneRecord, payload, "domain_record")


def _error_message(response: httpx.Response) -> str:
    """Extract the API's error message, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    message = body.get("message") if isinstance(body, dict) else None
    return message or response.text or response.reason_phrase


def _parse(model: type[ModelT], payload: Any, key: str | None = None) -> ModelT:
    """Validate a response object, optionally unwrapping it from ``key`` first."""
    try:
        return model.model_validate(payload[key] if key else payload)
    except (KeyError, TypeError, ValidationError) as e:
        raise ProviderError(f"Unexpected {key or model.__name__} in response: {e}") from e
