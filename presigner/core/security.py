import hmac

from presigner.core.errors import AuthError


def token_matches(presented: str | None, expected: str) -> bool:
    if not presented:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def verify_bearer_token(presented: str | None, expected: str | None) -> None:
    """Raise ``AuthError`` unless ``presented`` equals the configured token.

    An unset ``expected`` token disables the check.
    """
    if not expected:
        return
    if not token_matches(presented, expected):
        raise AuthError("Unauthorized")
