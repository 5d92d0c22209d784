"""Template Store - read-only id -> template catalog."""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional, Union

from about_time.models.template import (
    DEFAULT_TEMPLATE_VERSION,
    AtomicTemplate,
    LaneTemplate,
    TemplateLibrary,
)

AnyTemplate = Union[AtomicTemplate, LaneTemplate]


class TemplateStore(Mapping):
    """Immutable mapping from template id to template.

    Insertion order follows the order templates were supplied in, which is
    the order suggestion lists are presented in.
    """

    def __init__(
        self,
        templates: Iterable[AnyTemplate] = (),
        version: str = DEFAULT_TEMPLATE_VERSION,
        library_fields: Optional[Mapping[str, Any]] = None,
    ):
        """Build the store.

        Args:
            templates: Templates to index by id
            version: Library version carried through to saved files
            library_fields: Other top-level library fields, written back
                unchanged by to_library

        Raises:
            ValueError: If two templates share an id
        """
        self.version = version
        self.library_fields = dict(library_fields or {})
        self._templates: dict[str, AnyTemplate] = {}
        for template in templates:
            if template.id in self._templates:
                raise ValueError(f"Duplicate template id: {template.id}")
            self._templates[template.id] = template

    @classmethod
    def from_library(cls, library: TemplateLibrary) -> "TemplateStore":
        fields = dict(library.model_extra or {})
        if library.description is not None:
            fields["description"] = library.description
        return cls(library.templates, version=library.version, library_fields=fields)

    def to_library(self) -> TemplateLibrary:
        return TemplateLibrary(
            version=self.version,
            templates=list(self._templates.values()),
            **self.library_fields,
        )

    def __getitem__(self, template_id: str) -> AnyTemplate:
        return self._templates[template_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"TemplateStore(version={self.version!r}, templates={len(self)})"

    def with_template(self, template: AnyTemplate) -> "TemplateStore":
        """A copy of this store with ``template`` replacing the one sharing its id.

        Unknown ids are appended. Store order and library fields are kept.
        """
        templates = dict(self._templates)
        templates[template.id] = template
        return TemplateStore(templates.values(), version=self.version, library_fields=self.library_fields)

    def lane_templates(self) -> list[LaneTemplate]:
        """All lane templates, in store order."""
        return [t for t in self._templates.values() if isinstance(t, LaneTemplate)]

    def get_lane(self, template_id: str) -> Optional[LaneTemplate]:
        """Get a template by id only if it is a lane."""
        template = self._templates.get(template_id)
        return template if isinstance(template, LaneTemplate) else None

    def duration_of(self, template_id: str) -> Optional[int]:
        """Duration lookup; ``None`` for an unknown id."""
        template = self._templates.get(template_id)
        if template is None:
            return None
        return template.estimated_duration

    def durations(self) -> dict[str, int]:
        """Plain id -> duration mapping."""
        return {tid: t.estimated_duration for tid, t in self._templates.items()}
