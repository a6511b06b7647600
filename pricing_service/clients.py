"""HTTP clients for the services the Pricing Service depends on."""
import httpx
import logging
from urllib.parse import quote

from shared.exceptions import DuplicateIdError, NotFoundError, UpstreamServiceError
from . import schemas

logger = logging.getLogger(__name__)


class ServiceClient:
    service_name = "service"

    def __init__(self, base_url: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    def _status_error(self, e: httpx.HTTPStatusError) -> UpstreamServiceError:
        error_body = e.response.text
        logger.error(f"{self.service_name} returned status {e.response.status_code}. Response: {error_body[:500]}")
        return UpstreamServiceError(
            self.service_name,
            f"status {e.response.status_code}: {error_body[:500]}",
            status_code=e.response.status_code,
        )

    def _request_error(self, e: httpx.RequestError) -> UpstreamServiceError:
        logger.error(f"Could not connect to {self.service_name} ({e.request.url}): {e}")
        return UpstreamServiceError(self.service_name, f"connection error: {e}")


class InventoryClient(ServiceClient):
    service_name = "inventory"

    async def get_item(self, item_id: str) -> schemas.ItemSnapshot:
        try:
            async with self._client() as client:
                response = await client.get(f"/items/{quote(item_id, safe='')}")
                if response.status_code == 404:
                    raise NotFoundError(item_id, kind="item")
                response.raise_for_status()
                return schemas.ItemSnapshot.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise self._status_error(e) from e
        except httpx.RequestError as e:
            raise self._request_error(e) from e
        except ValueError as e: # Malformed JSON or item body
            logger.error(f"Malformed item response from inventory for '{item_id}': {e}")
            raise UpstreamServiceError(self.service_name, f"malformed item response: {e}") from e


class LedgerClient(ServiceClient):
    service_name = "ledger"

    async def record(self, transaction_id: str, action_type: str, details: str, actor: str) -> str:
        payload = {
            "transaction_id": transaction_id,
            "action_type": action_type,
            "details": details,
            "actor": actor,
        }
        try:
            async with self._client() as client:
                response = await client.post("/transactions", json=payload)
                if response.status_code == 409:
                    raise DuplicateIdError(transaction_id)
                response.raise_for_status()
                return response.json().get("message", "")
        except httpx.HTTPStatusError as e:
            raise self._status_error(e) from e
        except httpx.RequestError as e:
            raise self._request_error(e) from e
        except ValueError as e:
            raise UpstreamServiceError(self.service_name, f"malformed ledger response: {e}") from e
