"""Form field descriptor models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from resumefill.typing.enums import FieldKind


class FieldDescriptor(BaseModel):
    """Single form field as seen by the scraper."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    question: str
    field_kind: FieldKind = FieldKind.TEXT
    options: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def is_free_text(self) -> bool:
        """Return whether the field takes a literal answer instead of an option."""
        return not self.options

    def to_prompt_item(self) -> dict[str, str]:
        """Return the `{question, fieldType}` item sent upstream."""
        return {"question": self.question, "fieldType": self.field_kind.to_str()}
