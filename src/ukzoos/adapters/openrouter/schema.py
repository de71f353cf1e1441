"""Pydantic models for OpenRouter chat completions and the animal lists inside them."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class OpenRouterBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ChatMessage(OpenRouterBaseModel):
    content: str | None = None


class ChatChoice(OpenRouterBaseModel):
    message: ChatMessage


class ChatCompletionResponse(OpenRouterBaseModel):
    choices: list[ChatChoice] = Field(default_factory=list[ChatChoice])

    @property
    def content(self) -> str:
        if not self.choices:
            return ""
        return self.choices[0].message.content or ""


class AnimalPayload(OpenRouterBaseModel):
    common_name: str
    scientific_name: str | None = None
    category: str | None = None
    exhibit_area: str | None = None
    fun_facts: list[str] = Field(default_factory=list[str])

    _normalize_optional = field_validator(
        "scientific_name",
        "category",
        "exhibit_area",
        mode="before",
    )(_blank_to_none)

    @field_validator("fun_facts", mode="before")
    @classmethod
    def _facts_none_to_empty(cls, value: object) -> object:
        return [] if value is None else value
