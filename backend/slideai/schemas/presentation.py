"""
Pydantic models for structured presentation content.

The content agent (``slideai.core.ai_generators``) outputs a
``PresentationPayload`` instance, which is then laid out by
``slideai.layout.deck.build_presentation``.

JSON keys are camelCase (``tableData``, ``qaItems``, ``beforeItems`` ...) so
payloads written by JavaScript front ends validate unchanged; Python
attributes are snake_case.  Every content field is optional and tolerant:
a malformed value is logged and replaced by its empty default, and list
fields keep whichever entries validate.  Only the payload's ``title`` and
``slides`` are validated strictly.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Mapping

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from slideai.core.exceptions import InvalidPayload

logger = logging.getLogger(__name__)


class _Content(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat explicit ``null`` like an absent key so defaults apply."""
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None}
        return data


# ── Tolerant field validation ─────────────────────────────────


def _fallback(default: str | None) -> WrapValidator:
    """Validate normally; a malformed value becomes *default*."""

    def validate(value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
        try:
            return handler(value)
        except ValidationError as exc:
            logger.debug("Ignoring malformed %s: %s", info.field_name, exc.errors()[0]["msg"])
            return default

    return WrapValidator(validate)


def _valid_entries(value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
    """Keep the list entries that validate; a lone object counts as one entry."""
    try:
        return handler(value)
    except ValidationError:
        pass
    if isinstance(value, Mapping):
        value = [value]
    elif not isinstance(value, list):
        logger.debug("Ignoring malformed %s: expected a list", info.field_name)
        return []
    kept: list[Any] = []
    for entry in value:
        try:
            kept.extend(handler([entry]))
        except ValidationError:
            logger.debug("Dropping malformed %s entry", info.field_name)
    return kept


def _clean_strings(value: Any) -> Any:
    """Drop ``None``, blank and non-scalar entries from a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [
            v
            for v in value
            if isinstance(v, (str, int, float)) and not isinstance(v, bool) and str(v).strip()
        ]
    return value


Text = Annotated[str, _fallback("")]
OptionalText = Annotated[str | None, _fallback(None)]
Flag = Annotated[bool | None, _fallback(None)]
TextList = Annotated[list[str], BeforeValidator(_clean_strings), WrapValidator(_valid_entries)]
Entries = WrapValidator(_valid_entries)
Lenient = _fallback(None)


# ── Structured field types ────────────────────────────────────


class StatItem(_Content):
    value: Text = ""
    label: Text = ""


class Comparison(_Content):
    before_title: OptionalText = None
    before_items: TextList = []
    after_title: OptionalText = None
    after_items: TextList = []


class Column(_Content):
    title: OptionalText = None
    bullets: TextList = []


class Step(_Content):
    """One entry of a flow, pyramid or cycle."""

    title: Text = ""
    description: OptionalText = None


class Quadrant(_Content):
    title: Text = ""
    description: OptionalText = None


class Matrix(_Content):
    x_axis_label: OptionalText = None
    y_axis_label: OptionalText = None
    top_left: Annotated[Quadrant | None, Lenient] = None
    top_right: Annotated[Quadrant | None, Lenient] = None
    bottom_left: Annotated[Quadrant | None, Lenient] = None
    bottom_right: Annotated[Quadrant | None, Lenient] = None

    def quadrants(self) -> list[Quadrant | None]:
        """Quadrants in reading order: top-left, top-right, bottom-left, bottom-right."""
        return [self.top_left, self.top_right, self.bottom_left, self.bottom_right]


class ParallelItem(_Content):
    title: Text = ""
    icon: OptionalText = None
    description: OptionalText = None
    bullets: TextList = []


class TimelineEvent(_Content):
    date: Text = ""
    title: Text = ""
    description: OptionalText = None


class FunnelStep(_Content):
    title: Text = ""
    value: OptionalText = None


class TableData(_Content):
    headers: Annotated[list[str], Entries] = []
    rows: Annotated[list[list[str]], Entries] = []

    @field_validator("headers", mode="before")
    @classmethod
    def normalize_headers(cls, v: Any) -> Any:
        if isinstance(v, list):
            return ["" if h is None else h for h in v]
        return v

    @field_validator("rows", mode="before")
    @classmethod
    def normalize_rows(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [
                ["" if cell is None else cell for cell in row]
                for row in v
                if isinstance(row, list)
            ]
        return v


class GridItem(_Content):
    icon: OptionalText = None
    title: Text = ""
    description: OptionalText = None


class VennSet(_Content):
    title: Text = ""
    items: TextList = []


class Venn(_Content):
    left: Annotated[VennSet | None, Lenient] = None
    right: Annotated[VennSet | None, Lenient] = None
    center: Annotated[VennSet | None, Lenient] = None


class TreeNode(_Content):
    title: Text = ""
    children: Annotated[list[TreeNode], Entries] = []


class QAItem(_Content):
    question: Text = ""
    answer: Text = ""


class CaseStudy(_Content):
    company: OptionalText = None
    challenge: OptionalText = None
    solution: OptionalText = None
    result: OptionalText = None


# ── Slide / presentation ──────────────────────────────────────


class ContentItem(_Content):
    layout: OptionalText = None

    title: OptionalText = None
    message: OptionalText = None
    body: OptionalText = None
    bullets: TextList = []
    highlights: TextList = []
    notes: OptionalText = None

    stats: Annotated[list[StatItem] | None, Entries] = None
    comparison: Annotated[Comparison | None, Lenient] = None
    left_column: Annotated[Column | None, Lenient] = None
    right_column: Annotated[Column | None, Lenient] = None
    quote: OptionalText = None
    source: OptionalText = None
    flow: Annotated[list[Step] | None, Entries] = None
    pyramid: Annotated[list[Step] | None, Entries] = None
    matrix: Annotated[Matrix | None, Lenient] = None
    parallel: Annotated[list[ParallelItem] | None, Entries] = None
    timeline: Annotated[list[TimelineEvent] | None, Entries] = None
    cycle: Annotated[list[Step] | None, Entries] = None
    funnel: Annotated[list[FunnelStep] | None, Entries] = None
    table_data: Annotated[TableData | None, Lenient] = None
    grid: Annotated[list[GridItem] | None, Entries] = None
    venn: Annotated[Venn | None, Lenient] = None
    tree: Annotated[TreeNode | None, Lenient] = None
    qa_items: Annotated[list[QAItem] | None, Entries] = None
    case_study: Annotated[CaseStudy | None, Lenient] = None

    is_section: Flag = None
    is_summary: Flag = None


class PresentationPayload(_Content):
    title: str
    subtitle: OptionalText = None
    slides: list[ContentItem]
    theme: OptionalText = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("slides", mode="before")
    @classmethod
    def drop_non_objects(cls, v: Any) -> Any:
        """A slide that is not a JSON object carries nothing to lay out."""
        if isinstance(v, list):
            return [s for s in v if isinstance(s, (Mapping, ContentItem))]
        return v


def parse_payload(data: PresentationPayload | Mapping[str, Any]) -> PresentationPayload:
    """Validate a raw payload mapping.

    This is the only hard validation boundary of the engine: a missing or
    blank ``title`` or a missing ``slides`` list raises ``InvalidPayload``.
    Everything inside the slides is tolerated.
    """
    if isinstance(data, PresentationPayload):
        return data
    if not isinstance(data, Mapping):
        raise InvalidPayload("Presentation payload must be a JSON object")
    try:
        return PresentationPayload.model_validate(data)
    except ValidationError as exc:
        errors = [
            {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
            for e in exc.errors()
        ]
        raise InvalidPayload("Invalid presentation payload", errors=errors) from exc
