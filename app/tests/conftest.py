"""Shared fixtures for job notification tests."""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

import pytest

from infrastructure.notifications.catalog import (
    CatalogDiff,
    FieldTransform,
    FieldTransformType,
    StreamDescriptor,
    StreamTransform,
    StreamTransformType,
)
from infrastructure.notifications.models import EventSummary, ResourceInfo

WORKSPACE_ID = UUID("11111111-1111-1111-1111-111111111111")
CONNECTION_ID = UUID("22222222-2222-2222-2222-222222222222")
SOURCE_ID = UUID("33333333-3333-3333-3333-333333333333")
DESTINATION_ID = UUID("44444444-4444-4444-4444-444444444444")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    from infrastructure.services import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def resource_factory():
    """Factory for ResourceInfo instances.

    Example:
        source = resource_factory("Postgres", url="https://app/source/1")
    """

    def _factory(
        name: str = "resource",
        id: Optional[UUID] = None,
        url: str = "https://app.example.com/resource",
    ) -> ResourceInfo:
        return ResourceInfo(name=name, id=id or uuid4(), url=url)

    return _factory


@pytest.fixture
def event_summary_factory(resource_factory):
    """Factory for EventSummary instances.

    Example:
        summary = event_summary_factory(is_success=False, error_message="boom")
        no_duration = event_summary_factory(started_at=None)
    """

    def _factory(**overrides) -> EventSummary:
        values = {
            "workspace": resource_factory(
                "Main workspace",
                WORKSPACE_ID,
                f"https://app.example.com/workspaces/{WORKSPACE_ID}",
            ),
            "connection": resource_factory(
                "Postgres to BigQuery",
                CONNECTION_ID,
                f"https://app.example.com/workspaces/{WORKSPACE_ID}"
                f"/connections/{CONNECTION_ID}",
            ),
            "source": resource_factory(
                "Postgres",
                SOURCE_ID,
                f"https://app.example.com/workspaces/{WORKSPACE_ID}"
                f"/source/{SOURCE_ID}",
            ),
            "destination": resource_factory(
                "BigQuery",
                DESTINATION_ID,
                f"https://app.example.com/workspaces/{WORKSPACE_ID}"
                f"/destination/{DESTINATION_ID}",
            ),
            "started_at": datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc),
            "finished_at": datetime(2024, 1, 1, 10, 3, 5, tzinfo=timezone.utc),
            "is_success": True,
            "job_id": 42,
            "error_message": None,
            "records_emitted": 150,
            "records_committed": 120,
            "bytes_emitted": 2048,
            "bytes_committed": 1024,
        }
        values.update(overrides)
        return EventSummary(**values)

    return _factory


@pytest.fixture
def stream_factory():
    """Factory for StreamTransform instances.

    Fields are given as ``(FieldTransformType, "dotted.path")`` pairs.

    Example:
        added = stream_factory(StreamTransformType.ADD_STREAM, "users", "public")
        updated = stream_factory(
            StreamTransformType.UPDATE_STREAM,
            "accounts",
            "public",
            fields=[(FieldTransformType.ADD_FIELD, "email")],
        )
    """

    def _factory(
        transform_type: StreamTransformType,
        name: str,
        namespace: Optional[str] = None,
        fields: Optional[List[tuple]] = None,
    ) -> StreamTransform:
        return StreamTransform(
            transform_type=transform_type,
            stream_descriptor=StreamDescriptor(name=name, namespace=namespace),
            update_stream=[
                FieldTransform(transform_type=kind, field_name=path.split("."))
                for kind, path in (fields or [])
            ],
        )

    return _factory


@pytest.fixture
def catalog_diff(stream_factory):
    """A diff touching streams and fields."""
    return CatalogDiff(
        transforms=[
            stream_factory(StreamTransformType.REMOVE_STREAM, "orders", "public"),
            stream_factory(
                StreamTransformType.UPDATE_STREAM,
                "accounts",
                "public",
                fields=[
                    (FieldTransformType.UPDATE_FIELD_SCHEMA, "balance"),
                    (FieldTransformType.ADD_FIELD, "email"),
                ],
            ),
            stream_factory(StreamTransformType.ADD_STREAM, "users", "public"),
        ]
    )
