"""Request schemas for the chat API."""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


class Message(BaseModel):
    """A message in a chat conversation.

    Accepts either plain ``content`` or the UI-message form where the text
    lives in a list of ``parts``; text parts are joined into ``content``.
    """

    role: Literal["system", "user", "assistant"]
    content: str

    @model_validator(mode="before")
    @classmethod
    def _join_text_parts(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "content" in data:
            return data
        parts = data.get("parts")
        if not isinstance(parts, list):
            return data
        text = "".join(
            part.get("text", "")
            for part in parts
            if isinstance(part, dict) and part.get("type") == "text"
        )
        return {**data, "content": text}


class ChatRequest(BaseModel):
    """Request to the chat endpoints: the conversation so far."""

    messages: list[Message] = Field(
        ...,
        min_length=1,
        description="Conversation history, oldest first",
    )


class ChatCompletionRequest(BaseModel):
    """Request to the generation engine's chat completions interface."""

    model: str = Field(..., description="Model name")
    messages: list[Message] = Field(..., description="List of messages in the conversation")
    stream: bool = Field(default=False, description="Enable streaming response")
