from typing import Any, Literal

import pydantic

from slideai.schemas.presentation import PresentationPayload
from slideai.schemas.rendered import RenderedDeck


class ChatTurn(pydantic.BaseModel):
    """One conversation turn.

    Accepts ``{"role", "content"}`` as well as the ``{"role", "parts": [{"text"}]}``
    shape used by Gemini-style chat clients.
    """

    role: Literal["user", "assistant", "model", "system"] = "user"
    content: str = ""

    @pydantic.model_validator(mode="before")
    @classmethod
    def join_parts(cls, data: Any) -> Any:
        if isinstance(data, dict) and "content" not in data and "parts" in data:
            parts = data.get("parts") or []
            text = "\n".join(
                p.get("text", "") for p in parts if isinstance(p, dict) and p.get("text")
            )
            data = {**data, "content": text}
        return data

    @property
    def text(self) -> str:
        return self.content


class GenerateDeckRequest(pydantic.BaseModel):
    history: list[ChatTurn] = pydantic.Field(min_length=1)
    format: Literal["payload", "layout", "html", "pptx"] = "layout"


class GenerateDeckResponse(pydantic.BaseModel):
    payload: PresentationPayload
    deck: RenderedDeck | None = None
    message: str | None = None


class LayoutInfo(pydantic.BaseModel):
    name: str
    max_items: int | None = None
    fields: list[str]
