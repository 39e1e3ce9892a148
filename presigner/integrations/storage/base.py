from dataclasses import dataclass


@dataclass
class StoreResponse:
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ObjectStoreClient:
    async def send(
        self,
        method: str,
        url: str,
        body: str | bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> StoreResponse:
        raise NotImplementedError
