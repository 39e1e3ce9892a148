import httpx
import structlog

from presigner.core.config import Settings
from presigner.integrations.storage.base import ObjectStoreClient, StoreResponse

logger = structlog.get_logger()


class R2StoreClient(ObjectStoreClient):
    """Sends already-signed requests to R2; one attempt, no retries."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.timeout = settings.store_timeout_seconds
        self.transport = transport

    async def send(
        self,
        method: str,
        url: str,
        body: str | bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> StoreResponse:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.request(method, url, content=body, headers=headers)
        logger.info("store_call", method=method, status=resp.status_code)
        return StoreResponse(status_code=resp.status_code, text=resp.text)
