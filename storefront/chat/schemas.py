from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ChatRole = Literal["system", "user"]


class ChatMessage(BaseModel):
    """One role-tagged turn sent to the completion provider."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    message: str = Field(
        description="Customer message forwarded verbatim to the assistant.",
        examples=["Do you have the blue hoodie in size M?"],
    )


class ChatResult(BaseModel):
    """
    Outcome of a single chat call.

    Exactly one of `response` / `error` is populated, keyed by `success`.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    response: str | None = Field(default=None, description="Assistant reply when successful.")
    error: str | None = Field(default=None, description="Customer-safe error message.")

    @model_validator(mode="after")
    def _check_outcome(self) -> ChatResult:
        if self.success and (self.response is None or self.error is not None):
            raise ValueError("successful result must carry a response and no error")
        if not self.success and (self.error is None or self.response is not None):
            raise ValueError("failed result must carry an error and no response")
        return self

    @classmethod
    def ok(cls, response: str) -> ChatResult:
        return cls(success=True, response=response)

    @classmethod
    def failed(cls, error: str) -> ChatResult:
        return cls(success=False, error=error)
