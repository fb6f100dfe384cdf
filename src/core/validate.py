"""Input validation with strong typing and Result-style helpers."""

from dataclasses import dataclass
from typing import Any
from returns.result import Result, Success, Failure

from pydantic import BaseModel, ConfigDict

from .json import JSONParseError, validate_json_depth, validate_json_size


# Validation limits
MAX_DOCUMENT_SIZE = 2 * 1024 * 1024  # 2MB
MAX_REGISTRY_SIZE = 512 * 1024  # 512KB
MAX_TREE_DEPTH = 32


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class FrozenModel(BaseModel):
    """Base model for immutable, closed records."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class DocumentValidator:
    """Validates serialized documents before they are loaded."""

    @staticmethod
    def validate(data: dict[str, Any], raw: str, max_size: int = MAX_DOCUMENT_SIZE,
                 max_depth: int = MAX_TREE_DEPTH) -> None:
        """
        Validate a decoded document.

        Args:
            data: Parsed document dictionary
            raw: JSON string representation
            max_size: Max size of the raw JSON in bytes
            max_depth: Max JSON nesting depth

        Raises:
            ValidationError: If validation fails
        """
        try:
            validate_json_size(raw, max_size, "Document")
            validate_json_depth(data, max_depth * 4)
        except JSONParseError as e:
            raise ValidationError(str(e)) from e

        if "elements" not in data:
            raise ValidationError("Document missing required 'elements' field")

        if not isinstance(data["elements"], list):
            raise ValidationError("Document 'elements' must be a list")


def validate_document(data: dict[str, Any], raw: str, max_size: int = MAX_DOCUMENT_SIZE,
                      max_depth: int = MAX_TREE_DEPTH) -> Result[None, ValidationResult]:
    """
    Validate a document (Result pattern version).

    Returns:
        Result indicating success or validation error
    """
    try:
        DocumentValidator.validate(data, raw, max_size, max_depth)
        return Success(None)
    except ValidationError as e:
        return Failure(ValidationResult(str(e), field="elements"))
