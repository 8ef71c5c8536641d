"""Tutorial entity and its validation rules.

A tutorial has a required title, an optional description and a published
flag that defaults to False. Validation returns a typed result instead of
raising, so callers decide how to report field errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

TITLE_REQUIRED_MESSAGE = "Why no title?"

# Fields stored for a tutorial (besides the generated _id)
TUTORIAL_FIELDS = ("title", "description", "published")


class TutorialValidationError(Exception):
    """Raised when tutorial data fails validation."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__("; ".join(messages))


class TutorialFields(BaseModel):
    """Declarative schema for the writable tutorial fields."""

    # Numbers sent as title/description are stored as their text
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str | None = None
    description: str | None = None
    published: bool | None = False

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, value: str | None) -> str | None:
        if not value:
            raise ValueError(TITLE_REQUIRED_MESSAGE)
        return value

    @field_validator("published")
    @classmethod
    def published_null_is_false(cls, value: bool | None) -> bool:
        return bool(value)


@dataclass
class ValidationResult:
    """Outcome of validate_tutorial: cleaned values or field messages."""

    values: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> dict[str, Any]:
        """Return the cleaned values or raise TutorialValidationError."""
        if self.errors:
            raise TutorialValidationError(self.errors)
        return self.values


def _format_error(error: dict[str, Any]) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()))
    if loc == "title" and error.get("type") == "value_error":
        return TITLE_REQUIRED_MESSAGE
    return f"{loc}: {error.get('msg', 'invalid value')}"


def validate_tutorial(data: Mapping[str, Any] | None, partial: bool = False) -> ValidationResult:
    """Validate tutorial input.

    Args:
        data: Raw field values (e.g. a decoded JSON body).
        partial: Validate only the keys present (updates). A present title
            must still be non-empty.

    Returns:
        ValidationResult with cleaned values, or the list of field messages.
    """
    data = dict(data or {})

    # Title is required on create; run the validator even when absent
    if not partial and "title" not in data:
        data["title"] = None

    try:
        model = TutorialFields.model_validate(data)
    except ValidationError as e:
        return ValidationResult(errors=[_format_error(err) for err in e.errors()])

    if partial:
        values = model.model_dump(exclude_unset=True)
    else:
        values = model.model_dump()
    return ValidationResult(values=values)


@dataclass
class Tutorial:
    """A stored tutorial."""

    id: str
    title: str
    description: str | None = None
    published: bool = False

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> Tutorial:
        """Build from a database document (``_id`` becomes a string ``id``)."""
        return cls(
            id=str(document["_id"]),
            title=document.get("title", ""),
            description=document.get("description"),
            published=bool(document.get("published", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "published": self.published,
        }
