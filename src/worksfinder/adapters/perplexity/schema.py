"""Perplexity chat-completion and repertoire payload schemas."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    temperature: float = 0.1
    max_tokens: int | None = None
    search_domain_filter: list[str] = Field(default_factory=list)


class ChatChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice] = Field(default_factory=list["ChatChoice"])
    citations: list[str] = Field(default_factory=list)

    @property
    def content(self) -> str | None:
        if not self.choices:
            return None
        return self.choices[0].message.content


class RepertoireAttribution(BaseModel):
    """One writer or publisher credit as the model reported it."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    share: float | None = None
    ipi: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("share", mode="before")
    @classmethod
    def _parse_share(cls, value: object) -> object:
        # Shares come back as 50, "50", "50%" or "50.0 %".
        if value is None or isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            match = _NUMBER_RE.search(value)
            return float(match.group()) if match else None
        return None

    @field_validator("ipi", mode="before")
    @classmethod
    def _stringify_ipi(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return value.strip() or None
        return value


class RepertoireWork(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    iswc: str | None = None
    writers: list[RepertoireAttribution] = Field(default_factory=list["RepertoireAttribution"])
    publishers: list[RepertoireAttribution] = Field(default_factory=list["RepertoireAttribution"])

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("iswc", mode="before")
    @classmethod
    def _blank_iswc(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("writers", "publishers", mode="before")
    @classmethod
    def _names_as_attributions(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, list):
            entries = [{"name": item} if isinstance(item, str) else item for item in value]
            return [entry for entry in entries if not _is_unnamed(entry)]
        return value


def _is_unnamed(entry: object) -> bool:
    if not isinstance(entry, dict):
        return False
    name = entry.get("name")
    return name is None or (isinstance(name, str) and not name.strip())
