from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from presigner.core.config import Settings
from presigner.core.security import verify_bearer_token
from presigner.integrations.storage.base import ObjectStoreClient
from presigner.services.presign_service import PresignService
from presigner.signing.signer import QuerySigner

bearer = HTTPBearer(auto_error=False)


def require_presigner_token(
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> None:
    presented = credentials.credentials if credentials else None
    verify_bearer_token(presented, settings.credentials.bearer_token)


def build_presign_service(settings: Settings, store: ObjectStoreClient) -> PresignService:
    signer = QuerySigner(
        settings.credentials,
        domain=settings.r2_domain,
        region=settings.r2_region,
    )
    return PresignService(signer=signer, store=store)
