"""Value extraction from the store's multipart XML responses.

Only the flat, well-formed documents the store returns are understood
(``<UploadId>``, ``<ETag>``, ``<Code>``); this is not an XML parser.
"""

import re
from xml.sax.saxutils import unescape


def extract_tag(xml: str | None, tag: str) -> str:
    match = re.search(rf"<{re.escape(tag)}>([^<]+)</{re.escape(tag)}>", xml or "", re.IGNORECASE)
    return unescape(match.group(1), {"&quot;": '"', "&apos;": "'"}) if match else ""


def is_error_document(xml: str | None) -> bool:
    return re.search(r"<Error>", xml or "", re.IGNORECASE) is not None


def unquote_etag(etag: str) -> str:
    etag = etag.removeprefix('"')
    return etag.removesuffix('"')
