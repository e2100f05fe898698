"""Slack Block Kit message document.

Only the block kinds a notification needs are modelled. Unknown block
types are rejected when a rendered template is parsed.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from src.notifier.exceptions import DocumentParseError


class _Frozen(BaseModel):
    model_config = {"frozen": True}


class TextObject(_Frozen):
    """A ``mrkdwn`` or ``plain_text`` composition object."""

    type: Literal["mrkdwn", "plain_text"]
    text: str
    emoji: bool | None = None
    verbatim: bool | None = None


class ButtonElement(_Frozen):
    type: Literal["button"] = "button"
    text: TextObject
    action_id: str | None = None
    url: str | None = None
    value: str | None = None
    style: Literal["primary", "danger"] | None = None


# ── Blocks ──────────────────────────────────────────────────────


class SectionBlock(_Frozen):
    type: Literal["section"] = "section"
    text: TextObject | None = None
    fields: tuple[TextObject, ...] | None = None
    accessory: ButtonElement | None = None
    block_id: str | None = None


class DividerBlock(_Frozen):
    type: Literal["divider"] = "divider"
    block_id: str | None = None


class ActionsBlock(_Frozen):
    type: Literal["actions"] = "actions"
    elements: tuple[ButtonElement, ...]
    block_id: str | None = None


class HeaderBlock(_Frozen):
    type: Literal["header"] = "header"
    text: TextObject
    block_id: str | None = None


class ContextBlock(_Frozen):
    type: Literal["context"] = "context"
    elements: tuple[TextObject, ...]
    block_id: str | None = None


class ImageBlock(_Frozen):
    type: Literal["image"] = "image"
    image_url: str
    alt_text: str
    title: TextObject | None = None
    block_id: str | None = None


Block = Annotated[
    Union[SectionBlock, DividerBlock, ActionsBlock, HeaderBlock, ContextBlock, ImageBlock],
    Field(discriminator="type"),
]

_BLOCKS_ADAPTER: TypeAdapter[tuple[Block, ...]] = TypeAdapter(tuple[Block, ...])


# ── Message ─────────────────────────────────────────────────────


class Attachment(_Frozen):
    """Coloured wrapper around the blocks."""

    color: str
    blocks: tuple[Block, ...]


class WebhookMessage(_Frozen):
    """Body POSTed to the incoming webhook."""

    attachments: tuple[Attachment, ...]

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self) -> bytes:
        return json.dumps(self.to_payload(), ensure_ascii=False).encode("utf-8")


def parse_blocks(data: bytes | str) -> tuple[Block, ...]:
    """Deserialize a rendered template into blocks.

    Raises:
        DocumentParseError: if *data* is not JSON or not a list of known blocks.
    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(
            f"failed to unmarshal templating JSON at line {exc.lineno} column {exc.colno}: {exc.msg}"
        ) from exc

    if not isinstance(raw, list):
        raise DocumentParseError(
            f"templating JSON must be an array of blocks, got {type(raw).__name__}"
        )

    try:
        return _BLOCKS_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise DocumentParseError(
            f"templating JSON is not valid Block Kit: {exc.error_count()} error(s), "
            f"first: {exc.errors()[0]['msg']} at {exc.errors()[0]['loc']}"
        ) from exc
