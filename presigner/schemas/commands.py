from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class CommandBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    object_key: str = ""
    expires: int | None = None

    @field_validator("object_key", mode="before")
    @classmethod
    def _strip_leading_slashes(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.lstrip("/")
        return value


class UploadCommand(CommandBase):
    upload_id: str = ""

    @field_validator("upload_id", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class PresignPutCommand(CommandBase):
    op: Literal["presign_put"]
    public_base_url: str | None = None


class PresignGetCommand(CommandBase):
    op: Literal["presign_get"]


class MultipartInitCommand(CommandBase):
    op: Literal["multipart_init"]
    public_base_url: str | None = None
    content_type: str | None = None
    part_size: int | None = None


class MultipartSignPartCommand(UploadCommand):
    op: Literal["multipart_sign_part"]
    part_number: int | None = None


class MultipartCompleteCommand(UploadCommand):
    op: Literal["multipart_complete"]
    # Kept loose: malformed entries are dropped later instead of failing the request.
    parts: list[Any] | None = None


class MultipartAbortCommand(UploadCommand):
    op: Literal["multipart_abort"]


Command = Annotated[
    PresignPutCommand
    | PresignGetCommand
    | MultipartInitCommand
    | MultipartSignPartCommand
    | MultipartCompleteCommand
    | MultipartAbortCommand,
    Field(discriminator="op"),
]

command_adapter: TypeAdapter[Command] = TypeAdapter(Command)


class PresignPutOut(BaseModel):
    upload_url: str
    object_key: str
    public_url: str


class PresignGetOut(BaseModel):
    download_url: str
    object_key: str


class MultipartInitOut(BaseModel):
    upload_id: str
    object_key: str
    public_url: str
    part_size: int
    expires: int


class MultipartSignPartOut(BaseModel):
    upload_url: str
    part_number: int


class MultipartCompleteOut(BaseModel):
    ok: bool = True
    etag: str


class MultipartAbortOut(BaseModel):
    ok: bool = True


class ErrorOut(BaseModel):
    error: str
