import hashlib
import hmac


def hmac_sha256(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def credential_scope(date_stamp: str, region: str = "auto", service: str = "s3") -> str:
    return f"{date_stamp}/{region}/{service}/aws4_request"


def derive_signing_key(secret: str, date_stamp: str, region: str = "auto", service: str = "s3") -> bytes:
    """Derive the scoped SigV4 signing key.

    Every link of the chain is raw HMAC-SHA256 output, never hex.
    """
    if not secret:
        raise ValueError("secret access key must not be empty")
    k_date = hmac_sha256(f"AWS4{secret}".encode("utf-8"), date_stamp)
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, "aws4_request")
