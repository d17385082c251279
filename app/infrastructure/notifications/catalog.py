"""Catalog (schema) diff models.

A catalog diff describes how a source's streams and fields changed
between two discovered schemas. These models are read-only input to
`summarize_catalog_diff`.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StreamTransformType(str, Enum):
    """Stream-level change kinds."""

    ADD_STREAM = "add_stream"
    REMOVE_STREAM = "remove_stream"
    UPDATE_STREAM = "update_stream"


class FieldTransformType(str, Enum):
    """Field-level change kinds inside an updated stream."""

    ADD_FIELD = "add_field"
    REMOVE_FIELD = "remove_field"
    UPDATE_FIELD_SCHEMA = "update_field_schema"


class StreamDescriptor(BaseModel):
    """A stream is identified by its name and optional namespace."""

    name: str
    namespace: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def fully_qualified_name(self) -> str:
        """``namespace.name``, or just ``name`` when there is no namespace."""
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name


class FieldTransform(BaseModel):
    """A change to one field of an updated stream.

    Attributes:
        transform_type: Kind of change
        field_name: Path segments from the stream root to the field
        breaking: Whether the change can break downstream consumers
        schema_: JSON schema of an added or removed field
        old_schema: Previous JSON schema of an updated field
        new_schema: New JSON schema of an updated field
    """

    transform_type: FieldTransformType
    field_name: List[str] = Field(..., min_length=1)
    breaking: bool = False
    schema_: Optional[Dict[str, Any]] = Field(default=None, alias="schema")
    old_schema: Optional[Dict[str, Any]] = None
    new_schema: Optional[Dict[str, Any]] = None

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def field_path(self) -> str:
        """Dotted field path, e.g. ``address.city``."""
        return ".".join(self.field_name)


class StreamTransform(BaseModel):
    """A change to one stream.

    ``update_stream`` is only meaningful for UPDATE_STREAM transforms.
    """

    transform_type: StreamTransformType
    stream_descriptor: StreamDescriptor
    update_stream: List[FieldTransform] = Field(default_factory=list)

    model_config = {"frozen": True}


class CatalogDiff(BaseModel):
    """Ordered set of stream transforms between two catalogs."""

    transforms: List[StreamTransform] = Field(default_factory=list)

    model_config = {"frozen": True}
