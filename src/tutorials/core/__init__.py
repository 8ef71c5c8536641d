"""Core domain for the tutorials API.

Modules:
- tutorial: Tutorial entity, field schema and validation
"""

from tutorials.core.tutorial import (
    TITLE_REQUIRED_MESSAGE,
    Tutorial,
    TutorialFields,
    TutorialValidationError,
    ValidationResult,
    validate_tutorial,
)

__all__ = [
    "TITLE_REQUIRED_MESSAGE",
    "Tutorial",
    "TutorialFields",
    "TutorialValidationError",
    "ValidationResult",
    "validate_tutorial",
]
