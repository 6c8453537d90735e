from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"] = Field(..., description="'user' or 'assistant'")
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatTurn] = Field(..., description="Full transcript, oldest first")
    system: str = Field(..., description="System prompt sent on every call")
    model: str
    max_tokens: int = Field(..., gt=0)


class CacheControl(BaseModel):
    type: Literal["ephemeral"] = "ephemeral"


class CachedSystemBlock(BaseModel):
    """System prompt wrapped as a text block the upstream API may cache."""

    type: Literal["text"] = "text"
    text: str
    cache_control: CacheControl = Field(default_factory=CacheControl)


class Usage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None
    cache_creation_input_tokens: Optional[int] = None

    @property
    def cache_read(self) -> int:
        return self.cache_read_input_tokens or 0

    @property
    def cache_write(self) -> int:
        return self.cache_creation_input_tokens or 0
