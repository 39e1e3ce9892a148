"""Canonical forms used by the query-string signer.

Encoding follows RFC 3986: only ``A-Z a-z 0-9 - _ . ~`` pass through,
everything else (including ``! ' ( ) *``) becomes ``%XX`` with upper-case
hex digits over the UTF-8 bytes.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import NamedTuple
from urllib.parse import quote


class AmzTimestamp(NamedTuple):
    amz_date: str
    date_stamp: str


def percent_encode(value: str | int) -> str:
    # quote() never leaves anything outside the unreserved set unescaped when safe="".
    return quote(str(value), safe="", encoding="utf-8")


def encode_object_path(key: str) -> str:
    return "/".join(percent_encode(segment) for segment in key.split("/"))


def canonical_query_string(params: Mapping[str, str | int]) -> str:
    pairs = sorted((percent_encode(name), percent_encode(value)) for name, value in params.items())
    return "&".join(f"{name}={value}" for name, value in pairs)


def amz_timestamp(now: datetime | None = None) -> AmzTimestamp:
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    else:
        now = now.astimezone(UTC)
    amz_date = now.strftime("%Y%m%dT%H%M%SZ")
    return AmzTimestamp(amz_date=amz_date, date_stamp=amz_date[:8])
