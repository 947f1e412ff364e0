from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiError(BaseModel):
    """Standard API error payload.

    error codes: schema_error, invalid_document, coercion_failed
    """

    error: str
    detail: Optional[str] = None


class DocumentIn(BaseModel):
    """A wire-form document paired with a shorthand schema.

    ``schema`` is accepted as the JSON key; it is stored as ``shorthand``
    to avoid clashing with BaseModel attributes.
    """

    model_config = ConfigDict(populate_by_name=True)

    document: Any = None
    shorthand: Any = Field(default=None, alias="schema")


class SchemaIn(BaseModel):
    """A shorthand schema to expand."""

    model_config = ConfigDict(populate_by_name=True)

    shorthand: Any = Field(default=None, alias="schema")


class ValidateOut(BaseModel):
    """Validation result. ``error`` is omitted when valid."""

    valid: bool
    error: Optional[str] = None


class CoerceOut(BaseModel):
    """Coerced document, rendered in wire form."""

    document: Any = None


class SchemaOut(BaseModel):
    """Concrete JSON Schema."""

    model_config = ConfigDict(populate_by_name=True)

    concrete: Any = Field(default=None, alias="schema")


class TypesOut(BaseModel):
    """The extended-type catalog."""

    types: List[str] = Field(default_factory=list)
    schemas: Dict[str, Any] = Field(default_factory=dict)
