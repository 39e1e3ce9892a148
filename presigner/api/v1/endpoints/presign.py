from typing import Any

import pydantic
import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from prometheus_client import Counter

from presigner.api.deps import bearer, build_presign_service, require_presigner_token
from presigner.core.config import Settings, get_settings
from presigner.core.constants import Operation, Outcome
from presigner.core.errors import (
    InternalError,
    MethodError,
    PresignerError,
    UpstreamError,
    ValidationError,
)
from presigner.integrations.storage.base import ObjectStoreClient
from presigner.integrations.storage.factory import get_store_client
from presigner.schemas.commands import Command, ErrorOut, command_adapter

router = APIRouter(tags=["presign"])
logger = structlog.get_logger()

OPERATION_COUNTER = Counter(
    "presigner_operations_total",
    "Presigner operations by outcome",
    ["op", "outcome"],
)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def read_envelope(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (ValueError, RecursionError) as exc:
        raise ValidationError("Invalid JSON payload") from exc
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON payload")
    return body


def parse_command(body: dict[str, Any]) -> Command:
    op = str(body.get("op") or "")
    if op not in {item.value for item in Operation}:
        raise ValidationError("Unsupported op")
    try:
        return command_adapter.validate_python(body)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"][1:]) or "body"
        raise ValidationError(f"Invalid {field}: {first['msg']}") from exc


def _outcome(exc: Exception) -> Outcome:
    if isinstance(exc, UpstreamError):
        return Outcome.UPSTREAM_ERROR
    if isinstance(exc, PresignerError) and exc.status_code < 500:
        return Outcome.REJECTED
    return Outcome.FAILED


@router.api_route(
    "/presign",
    methods=ALL_METHODS,
    responses={
        400: {"model": ErrorOut},
        401: {"model": ErrorOut},
        405: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
async def presign(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    settings: Settings = Depends(get_settings),
    store: ObjectStoreClient = Depends(get_store_client),
):
    if request.method != "POST":
        raise MethodError("Method Not Allowed")
    require_presigner_token(credentials, settings)

    command = parse_command(await read_envelope(request))
    try:
        service = build_presign_service(settings, store)
        result = await service.handle(command)
    except PresignerError as exc:
        OPERATION_COUNTER.labels(op=command.op, outcome=_outcome(exc)).inc()
        logger.info("presign_failed", op=command.op, object_key=command.object_key, error=exc.message)
        raise
    except Exception as exc:
        OPERATION_COUNTER.labels(op=command.op, outcome=Outcome.FAILED).inc()
        logger.exception("presign_failed", op=command.op, object_key=command.object_key)
        raise InternalError(str(exc) or "Presigner error") from exc

    OPERATION_COUNTER.labels(op=command.op, outcome=Outcome.OK).inc()
    logger.info("presign_op", op=command.op, object_key=command.object_key)
    return result
