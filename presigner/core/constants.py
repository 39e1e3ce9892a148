from enum import StrEnum


class Operation(StrEnum):
    PRESIGN_PUT = "presign_put"
    PRESIGN_GET = "presign_get"
    MULTIPART_INIT = "multipart_init"
    MULTIPART_SIGN_PART = "multipart_sign_part"
    MULTIPART_COMPLETE = "multipart_complete"
    MULTIPART_ABORT = "multipart_abort"


class Outcome(StrEnum):
    OK = "ok"
    REJECTED = "rejected"
    UPSTREAM_ERROR = "upstream_error"
    FAILED = "failed"


ALGORITHM = "AWS4-HMAC-SHA256"
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"
SIGNED_HEADERS = "host"

MIN_EXPIRES_SECONDS = 60
MAX_EXPIRES_SECONDS = 86400

PUT_EXPIRES_SECONDS = 900
GET_EXPIRES_SECONDS = 86400
MULTIPART_EXPIRES_SECONDS = 3600

MIB = 1024 * 1024
MIN_PART_SIZE = 5 * MIB
DEFAULT_PART_SIZE = 64 * MIB

DEFAULT_CONTENT_TYPE = "application/octet-stream"
XML_CONTENT_TYPE = "application/xml"
