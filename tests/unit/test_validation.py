"""Validation tests."""

import pytest
from returns.result import Failure, Success

from core import FrozenModel, ValidationError, validate_document
from core.validate import DocumentValidator
from registry import PropKind, PropertySchema, SelectOption, Severity
from registry.validation import validate_property


# ============================================================================
# Document validation
# ============================================================================

@pytest.mark.unit
def test_validate_document_ok():
    assert validate_document({"elements": []}, '{"elements": []}') == Success(None)


@pytest.mark.unit
def test_validate_document_missing_elements():
    result = validate_document({"version": 1}, '{"version": 1}')
    assert isinstance(result, Failure)
    assert "elements" in result.failure().message


@pytest.mark.unit
def test_validate_document_too_large():
    raw = '{"elements": []}'
    with pytest.raises(ValidationError):
        DocumentValidator.validate({"elements": []}, raw, max_size=4)


@pytest.mark.unit
def test_frozen_model_forbids_extra_and_mutation():
    class Point(FrozenModel):
        x: int

    point = Point(x=1)
    with pytest.raises(Exception):
        point.x = 2
    with pytest.raises(Exception):
        Point(x=1, y=2)


# ============================================================================
# Property validation
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "schema,value,message",
    [
        (PropertySchema(kind=PropKind.STRING, label="Text", required=True), "", "Text is required"),
        (PropertySchema(kind=PropKind.STRING, label="Text", required=True), None, "Text is required"),
        (PropertySchema(kind=PropKind.NUMBER, label="Size"), "12", "Size must be a number"),
        (PropertySchema(kind=PropKind.NUMBER, label="Size"), True, "Size must be a number"),
        (PropertySchema(kind=PropKind.BOOLEAN, label="Disabled"), "yes", "Disabled must be a boolean"),
        (PropertySchema(kind=PropKind.ARRAY, label="Items"), "a", "Items must be a array"),
        (PropertySchema(kind=PropKind.NUMBER, label="Size", min=8), 4, "Size must be at least 8"),
        (PropertySchema(kind=PropKind.NUMBER, label="Size", max=96), 100, "Size must be at most 96"),
        (PropertySchema(kind=PropKind.STRING, label="Name", pattern=r"^[a-z]+$"), "A1", "Name format is invalid"),
    ],
)
def test_validate_property_errors(schema, value, message):
    issues = validate_property("prop", schema, value)
    assert [issue.message for issue in issues] == [message]
    assert issues[0].severity == Severity.ERROR


@pytest.mark.unit
def test_validate_property_select_option_is_warning():
    schema = PropertySchema(
        kind=PropKind.SELECT,
        label="Variant",
        options=(SelectOption(label="Primary", value="primary"),),
    )

    assert validate_property("variant", schema, "primary") == []
    issues = validate_property("variant", schema, "ghost")
    assert issues[0].severity == Severity.WARNING


@pytest.mark.unit
def test_validate_property_optional_missing_is_fine():
    schema = PropertySchema(kind=PropKind.NUMBER, label="Size", min=8)
    assert validate_property("size", schema, None) == []
