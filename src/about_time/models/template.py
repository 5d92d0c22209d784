"""Template entities - atomic units of timed work and lanes composing them.

Fields this package does not model (author ids, resource ledgers, recipe
metadata and the like) are kept as extras and written back on save.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, TypeAdapter, field_serializer, field_validator

from about_time.models.base import TimeModel


DEFAULT_TEMPLATE_VERSION = "0.0.1"

# Older libraries call atomic templates "busy"
LEGACY_TEMPLATE_TYPES = {"busy": "atomic"}


class Segment(TimeModel):
    """A timed reference from a lane to another template.

    The reference is by id only; the lane does not own the referenced
    template and the id is not guaranteed to resolve.
    """

    model_config = {"frozen": True, "extra": "allow"}

    template_id: str = Field(..., min_length=1)
    offset: int = Field(..., ge=0, description="Milliseconds from the lane's start")


class AtomicTemplate(TimeModel):
    """A leaf template with a fixed duration and no children."""

    model_config = {"frozen": True, "extra": "allow"}

    template_type: Literal["atomic"] = "atomic"
    id: str = Field(..., min_length=1)
    intent: str = Field(..., description="Human-readable label, used for search")
    estimated_duration: int = Field(..., ge=0, description="Duration in milliseconds")
    version: str = DEFAULT_TEMPLATE_VERSION
    # templateType as read from disk, when it was a legacy name
    stored_type: Optional[str] = Field(default=None, exclude=True)

    @field_serializer("template_type")
    def serialize_template_type(self, value: str) -> str:
        return self.stored_type or value

    @property
    def is_lane(self) -> bool:
        return False


class LaneTemplate(TimeModel):
    """A composite template: a duration plus timed segments.

    Segments are kept in storage order. They may overlap, leave gaps, repeat
    the same template id, or reference the lane itself.
    """

    model_config = {"frozen": True, "extra": "allow"}

    template_type: Literal["lane"] = "lane"
    id: str = Field(..., min_length=1)
    intent: str = Field(..., description="Human-readable label, used for search")
    estimated_duration: int = Field(..., ge=0, description="Duration in milliseconds")
    version: str = DEFAULT_TEMPLATE_VERSION
    segments: tuple[Segment, ...] = Field(default_factory=tuple)

    @property
    def is_lane(self) -> bool:
        return True

    def sorted_segments(self) -> list[Segment]:
        """Segments ordered by offset; equal offsets keep storage order."""
        return sorted(self.segments, key=lambda s: s.offset)

    @property
    def child_ids(self) -> list[str]:
        """Referenced template ids in storage order (duplicates kept)."""
        return [s.template_id for s in self.segments]


Template = Annotated[
    Union[AtomicTemplate, LaneTemplate],
    Field(discriminator="template_type"),
]

_template_adapter: TypeAdapter = TypeAdapter(Template)


def normalize_template_type(data: Any) -> Any:
    """Rewrite legacy ``templateType`` values in raw template data.

    The legacy name is remembered in ``storedType`` so saving writes it back.
    """
    if not isinstance(data, dict):
        return data
    for key in ("templateType", "template_type"):
        value = data.get(key)
        if value in LEGACY_TEMPLATE_TYPES:
            data = {**data, key: LEGACY_TEMPLATE_TYPES[value], "storedType": value}
    return data


def parse_template(data: dict[str, Any]) -> Union[AtomicTemplate, LaneTemplate]:
    """Validate a raw template dict into the matching template variant.

    Raises:
        pydantic.ValidationError: If the data matches neither variant
    """
    return _template_adapter.validate_python(normalize_template_type(data))


class TemplateLibrary(TimeModel):
    """The ingestion shape of a template catalog: ``{version, templates}``."""

    model_config = {"extra": "allow"}

    version: str = DEFAULT_TEMPLATE_VERSION
    templates: list[Template] = Field(default_factory=list)
    description: Optional[str] = None

    @field_validator("templates", mode="before")
    @classmethod
    def normalize_legacy_types(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [normalize_template_type(item) for item in v]
        return v
