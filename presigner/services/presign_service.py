import structlog

from presigner.core.constants import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_PART_SIZE,
    GET_EXPIRES_SECONDS,
    MIN_PART_SIZE,
    MULTIPART_EXPIRES_SECONDS,
    PUT_EXPIRES_SECONDS,
    XML_CONTENT_TYPE,
    Operation,
)
from presigner.core.errors import UpstreamError, ValidationError
from presigner.integrations.storage.base import ObjectStoreClient, StoreResponse
from presigner.integrations.storage.payloads import extract_tag, is_error_document, unquote_etag
from presigner.schemas.commands import (
    Command,
    MultipartAbortCommand,
    MultipartAbortOut,
    MultipartCompleteCommand,
    MultipartCompleteOut,
    MultipartInitCommand,
    MultipartInitOut,
    MultipartSignPartCommand,
    MultipartSignPartOut,
    PresignGetCommand,
    PresignGetOut,
    PresignPutCommand,
    PresignPutOut,
)
from presigner.services.parts import build_complete_manifest, normalize_parts
from presigner.signing.signer import QuerySigner, clamp_expiry

logger = structlog.get_logger()


def public_url(base: str | None, object_key: str) -> str:
    base = (base or "").rstrip("/")
    if not base:
        return ""
    return f"{base}/{object_key.lstrip('/')}"


def effective_part_size(requested: int | None) -> int:
    return max(MIN_PART_SIZE, requested or DEFAULT_PART_SIZE)


class PresignService:
    """Stateless handlers for the six presigner operations.

    A multipart session lives only in the store; the caller threads
    ``object_key`` and ``upload_id`` through every call.
    """

    def __init__(self, signer: QuerySigner, store: ObjectStoreClient):
        self.signer = signer
        self.store = store

    async def handle(self, command: Command) -> dict:
        handlers = {
            Operation.PRESIGN_PUT: self.presign_put,
            Operation.PRESIGN_GET: self.presign_get,
            Operation.MULTIPART_INIT: self.multipart_init,
            Operation.MULTIPART_SIGN_PART: self.multipart_sign_part,
            Operation.MULTIPART_COMPLETE: self.multipart_complete,
            Operation.MULTIPART_ABORT: self.multipart_abort,
        }
        result = await handlers[command.op](command)
        return result.model_dump()

    async def presign_put(self, cmd: PresignPutCommand) -> PresignPutOut:
        url = self.signer.sign("PUT", cmd.object_key, expires=cmd.expires or PUT_EXPIRES_SECONDS)
        return PresignPutOut(
            upload_url=url,
            object_key=cmd.object_key,
            public_url=public_url(cmd.public_base_url, cmd.object_key),
        )

    async def presign_get(self, cmd: PresignGetCommand) -> PresignGetOut:
        url = self.signer.sign("GET", cmd.object_key, expires=cmd.expires or GET_EXPIRES_SECONDS)
        return PresignGetOut(download_url=url, object_key=cmd.object_key)

    async def multipart_init(self, cmd: MultipartInitCommand) -> MultipartInitOut:
        expires = cmd.expires or MULTIPART_EXPIRES_SECONDS
        url = self.signer.sign("POST", cmd.object_key, extra_query={"uploads": ""}, expires=expires)
        resp = await self.store.send(
            "POST",
            url,
            headers={"content-type": cmd.content_type or DEFAULT_CONTENT_TYPE},
        )
        self._raise_for_status("multipart_init", resp)
        upload_id = extract_tag(resp.text, "UploadId")
        if not upload_id:
            raise UpstreamError("multipart_init missing UploadId", status=resp.status_code)
        logger.info("multipart_started", object_key=cmd.object_key, upload_id=upload_id)
        return MultipartInitOut(
            upload_id=upload_id,
            object_key=cmd.object_key,
            public_url=public_url(cmd.public_base_url, cmd.object_key),
            part_size=effective_part_size(cmd.part_size),
            expires=clamp_expiry(expires),
        )

    async def multipart_sign_part(self, cmd: MultipartSignPartCommand) -> MultipartSignPartOut:
        if not cmd.object_key or not cmd.upload_id or not cmd.part_number or cmd.part_number < 1:
            raise ValidationError("Missing object_key/upload_id/part_number")
        url = self.signer.sign(
            "PUT",
            cmd.object_key,
            extra_query={"partNumber": cmd.part_number, "uploadId": cmd.upload_id},
            expires=cmd.expires or MULTIPART_EXPIRES_SECONDS,
        )
        return MultipartSignPartOut(upload_url=url, part_number=cmd.part_number)

    async def multipart_complete(self, cmd: MultipartCompleteCommand) -> MultipartCompleteOut:
        if not cmd.object_key or not cmd.upload_id or not cmd.parts:
            raise ValidationError("Missing object_key/upload_id/parts")
        parts = normalize_parts(cmd.parts)
        if not parts:
            raise ValidationError("No valid parts")

        url = self.signer.sign(
            "POST",
            cmd.object_key,
            extra_query={"uploadId": cmd.upload_id},
            expires=MULTIPART_EXPIRES_SECONDS,
        )
        resp = await self.store.send(
            "POST",
            url,
            body=build_complete_manifest(parts),
            headers={"content-type": XML_CONTENT_TYPE},
        )
        self._raise_for_status("multipart_complete", resp)
        # The store may answer 200 and still report a failure in the body.
        if is_error_document(resp.text):
            code = extract_tag(resp.text, "Code") or resp.status_code
            logger.warning("store_rejected", op="multipart_complete", code=code)
            raise UpstreamError(f"multipart_complete failed ({code})", status=code)
        logger.info("multipart_completed", object_key=cmd.object_key, parts=len(parts))
        return MultipartCompleteOut(etag=unquote_etag(extract_tag(resp.text, "ETag")))

    async def multipart_abort(self, cmd: MultipartAbortCommand) -> MultipartAbortOut:
        if not cmd.object_key or not cmd.upload_id:
            raise ValidationError("Missing object_key/upload_id")
        url = self.signer.sign(
            "DELETE",
            cmd.object_key,
            extra_query={"uploadId": cmd.upload_id},
            expires=MULTIPART_EXPIRES_SECONDS,
        )
        resp = await self.store.send("DELETE", url)
        if resp.status_code == 404:
            logger.info("multipart_already_gone", object_key=cmd.object_key)
            return MultipartAbortOut()
        self._raise_for_status("multipart_abort", resp)
        return MultipartAbortOut()

    @staticmethod
    def _raise_for_status(op: str, resp: StoreResponse) -> None:
        if resp.ok:
            return
        logger.warning("store_rejected", op=op, status=resp.status_code)
        raise UpstreamError(f"{op} failed ({resp.status_code})", status=resp.status_code)
