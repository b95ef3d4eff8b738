"""Request/response envelopes for the HTTP API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FieldError(BaseModel):
    """A single failed validation check."""

    type: Literal["field"] = "field"
    msg: str = Field(description="Human-readable validation message")
    path: str = Field(description="Name of the offending field")
    location: Literal["body"] = "body"
    value: str | None = Field(default=None, description="Offending value, when it is a string")


class ValidationErrorResponse(BaseModel):
    """400 body listing every failed check of a request."""

    errors: list[FieldError]


class ErrorResponse(BaseModel):
    """Body for every non-validation failure."""

    error: str


class TranscriptionData(BaseModel):
    text: str
    language: str = "auto-detected"


class Usage(BaseModel):
    """Token counters, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class PromptData(BaseModel):
    response: str
    model: str
    usage: Usage


class TranscribeResponse(BaseModel):
    """Success envelope for /transcribe."""

    success: Literal[True] = True
    data: TranscriptionData


class PromptResponse(BaseModel):
    """Success envelope for /prompt."""

    success: Literal[True] = True
    data: PromptData
