from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from xml.sax.saxutils import escape

from presigner.integrations.storage.payloads import unquote_etag


@dataclass(frozen=True)
class PartDescriptor:
    part_number: int
    etag: str


def _coerce_part_number(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not number.is_integer():
        return 0
    return int(number)


def normalize_parts(raw_parts: Iterable[Any]) -> list[PartDescriptor]:
    """Turn caller-supplied parts into a sorted completion list.

    Accepts ``part_number``/``etag`` as well as the store's ``PartNumber``/``ETag``
    spellings. Entries without a positive part number or a non-empty ETag are
    dropped without being reported.
    """
    parts: list[PartDescriptor] = []
    for raw in raw_parts:
        if not isinstance(raw, dict):
            continue
        number = _coerce_part_number(raw.get("part_number") or raw.get("PartNumber") or 0)
        etag = unquote_etag(str(raw.get("etag") or raw.get("ETag") or ""))
        if number > 0 and etag:
            parts.append(PartDescriptor(part_number=number, etag=etag))
    return sorted(parts, key=lambda p: p.part_number)


def build_complete_manifest(parts: Iterable[PartDescriptor]) -> str:
    entries = "".join(
        f'<Part><PartNumber>{part.part_number}</PartNumber><ETag>"{escape(part.etag)}"</ETag></Part>'
        for part in parts
    )
    return f"<CompleteMultipartUpload>{entries}</CompleteMultipartUpload>"
