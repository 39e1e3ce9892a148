import hashlib
import hmac
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from presigner.core.constants import (
    ALGORITHM,
    MAX_EXPIRES_SECONDS,
    MIN_EXPIRES_SECONDS,
    PUT_EXPIRES_SECONDS,
    SIGNED_HEADERS,
    UNSIGNED_PAYLOAD,
)
from presigner.core.errors import ConfigurationError, ValidationError
from presigner.signing.canonical import (
    amz_timestamp,
    canonical_query_string,
    encode_object_path,
)
from presigner.signing.keys import credential_scope, derive_signing_key


@dataclass(frozen=True)
class Credentials:
    account_id: str
    access_key_id: str
    secret_access_key: str = field(repr=False)
    bucket: str
    bearer_token: str | None = field(default=None, repr=False)


def clamp_expiry(expires: int) -> int:
    return min(max(int(expires), MIN_EXPIRES_SECONDS), MAX_EXPIRES_SECONDS)


def normalize_object_key(object_key: str | None) -> str:
    return str(object_key or "").lstrip("/")


class QuerySigner:
    """Builds SigV4 presigned URLs for a single bucket.

    Only the ``host`` header is signed and the payload is always
    ``UNSIGNED-PAYLOAD``, so the caller is free to send any body.
    """

    def __init__(
        self,
        credentials: Credentials,
        domain: str = "r2.cloudflarestorage.com",
        region: str = "auto",
        service: str = "s3",
        host: str | None = None,
    ) -> None:
        required = ["access_key_id", "secret_access_key"]
        if host is None:
            required += ["account_id", "bucket"]
        missing = [name for name in required if not getattr(credentials, name)]
        if missing:
            raise ConfigurationError(f"Missing presigner credentials: {', '.join(missing)}")
        self.credentials = credentials
        self.region = region
        self.service = service
        self.host = host or f"{credentials.bucket}.{credentials.account_id}.{domain}"

    def object_url(self, object_key: str) -> str:
        return f"https://{self.host}/{encode_object_path(normalize_object_key(object_key))}"

    def canonical_request(self, method: str, path: str, query: str) -> str:
        return "\n".join(
            [
                method,
                path,
                query,
                f"host:{self.host}\n",
                SIGNED_HEADERS,
                UNSIGNED_PAYLOAD,
            ]
        )

    def sign(
        self,
        method: str,
        object_key: str,
        extra_query: Mapping[str, str | int] | None = None,
        expires: int = PUT_EXPIRES_SECONDS,
        now: datetime | None = None,
    ) -> str:
        key = normalize_object_key(object_key)
        if not key:
            raise ValidationError("Missing object_key")

        stamp = amz_timestamp(now)
        scope = credential_scope(stamp.date_stamp, self.region, self.service)
        path = f"/{encode_object_path(key)}"
        params: dict[str, str | int] = dict(extra_query or {})
        params.update(
            {
                "X-Amz-Algorithm": ALGORITHM,
                "X-Amz-Credential": f"{self.credentials.access_key_id}/{scope}",
                "X-Amz-Date": stamp.amz_date,
                "X-Amz-Expires": clamp_expiry(expires),
                "X-Amz-SignedHeaders": SIGNED_HEADERS,
            }
        )
        query = canonical_query_string(params)

        canonical = self.canonical_request(method.upper(), path, query)
        string_to_sign = "\n".join(
            [
                ALGORITHM,
                stamp.amz_date,
                scope,
                hashlib.sha256(canonical.encode("utf-8")).hexdigest(),
            ]
        )
        signing_key = derive_signing_key(
            self.credentials.secret_access_key, stamp.date_stamp, self.region, self.service
        )
        signature = hmac.new(signing_key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()
        return f"https://{self.host}{path}?{query}&X-Amz-Signature={signature}"
