from fastapi import Depends

from presigner.core.config import Settings, get_settings
from presigner.integrations.storage.base import ObjectStoreClient
from presigner.integrations.storage.r2 import R2StoreClient


def get_store_client(settings: Settings = Depends(get_settings)) -> ObjectStoreClient:
    return R2StoreClient(settings)
