"""Tests for resource kinds, the resource document model and the builder."""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from miniatlas.modules.errors import ValidationError
from miniatlas.modules.resources import (
    ALL_KINDS,
    ATLAS_API_VERSION,
    CREATED_AT_ANNOTATION,
    CREATED_BY_ANNOTATION,
    MANAGED_BY_LABEL,
    RESOURCE_TYPE_LABEL,
    AtlasResource,
    ResourceKind,
    build_resource,
    parse_api_version,
    plural_for,
)

NOW = datetime(2024, 5, 1, 12, 30, 0, 123456, tzinfo=timezone.utc)


# =============================================================================
# Kinds
# =============================================================================


def test_every_kind_has_addressing_info():
    assert [kind.plural for kind in ALL_KINDS] == [
        "workspaces",
        "webapplications",
        "infrastructures",
        "topics",
    ]


def test_only_workspace_is_cluster_scoped():
    assert [kind for kind in ALL_KINDS if kind.cluster_scoped] == [ResourceKind.WORKSPACE]


@pytest.mark.parametrize(
    "alias,kind",
    [
        ("workspace", ResourceKind.WORKSPACE),
        ("webapp", ResourceKind.WEB_APPLICATION),
        ("infrastructure", ResourceKind.INFRASTRUCTURE),
        ("topic", ResourceKind.TOPIC),
    ],
)
def test_kind_from_type_alias(alias, kind):
    assert ResourceKind.from_type(alias) is kind


def test_unknown_type_alias():
    with pytest.raises(ValueError, match="Unknown resource type: database"):
        ResourceKind.from_type("database")


@pytest.mark.parametrize(
    "kind,plural",
    [
        ("Workspace", "workspaces"),
        ("WebApplication", "webapplications"),
        ("Infrastructure", "infrastructures"),
        ("Topic", "topics"),
        ("Widget", "widgets"),
    ],
)
def test_plural_for(kind, plural):
    assert plural_for(kind) == plural


@pytest.mark.parametrize(
    "api_version,expected",
    [
        ("kro.run/v1alpha1", ("kro.run", "v1alpha1")),
        ("v1", ("", "v1")),
        ("", ("", "")),
    ],
)
def test_parse_api_version(api_version, expected):
    assert parse_api_version(api_version) == expected


# =============================================================================
# Builder
# =============================================================================


def test_build_workspace():
    resource = build_resource(ResourceKind.WORKSPACE, "team-a", None, {"name": "team-a"}, now=NOW)

    assert resource.api_version == ATLAS_API_VERSION
    assert resource.kind == "Workspace"
    assert resource.name == "team-a"
    assert resource.namespace is None
    assert resource.metadata.labels == {
        MANAGED_BY_LABEL: "mini-atlas-mcp",
        RESOURCE_TYPE_LABEL: "workspace",
    }
    assert resource.metadata.annotations == {
        CREATED_BY_ANNOTATION: "mcp-server",
        CREATED_AT_ANNOTATION: "2024-05-01T12:30:00.123Z",
    }
    assert "namespace" not in resource.to_manifest()["metadata"]


def test_build_namespaced_resource():
    resource = build_resource(
        ResourceKind.WEB_APPLICATION, "api", "team-a", {"image": "nginx:1.21"}, now=NOW
    )

    manifest = resource.to_manifest()
    assert manifest["apiVersion"] == "kro.run/v1alpha1"
    assert manifest["kind"] == "WebApplication"
    assert manifest["metadata"]["namespace"] == "team-a"
    assert manifest["metadata"]["labels"][RESOURCE_TYPE_LABEL] == "webapplication"
    assert manifest["spec"] == {"image": "nginx:1.21"}
    assert "status" not in manifest


def test_builder_only_timestamp_differs_between_calls():
    spec = {"partitions": 3}
    first = build_resource(ResourceKind.TOPIC, "events", "team-a", spec, now=NOW)
    second = build_resource(
        ResourceKind.TOPIC, "events", "team-a", spec, now=NOW + timedelta(minutes=5)
    )

    first_doc = first.to_manifest()
    second_doc = second.to_manifest()
    assert first_doc["metadata"]["annotations"].pop(CREATED_AT_ANNOTATION) != (
        second_doc["metadata"]["annotations"].pop(CREATED_AT_ANNOTATION)
    )
    assert first_doc == second_doc


def test_builder_copies_spec():
    spec = {"database": "orders"}
    resource = build_resource(ResourceKind.INFRASTRUCTURE, "db", "team-a", spec, now=NOW)
    spec["database"] = "changed"

    assert resource.spec == {"database": "orders"}


def test_builder_defaults_to_current_utc_time():
    resource = build_resource(ResourceKind.WORKSPACE, "team-a", None, {})

    annotation = resource.metadata.annotations[CREATED_AT_ANNOTATION]
    assert annotation.endswith("Z")
    created_at = datetime.fromisoformat(annotation)
    assert created_at.tzinfo is not None
    assert abs(datetime.now(timezone.utc) - created_at) < timedelta(minutes=1)


def test_builder_revalidates_name():
    with pytest.raises(ValidationError, match="Topic name 'Bad_Name'"):
        build_resource(ResourceKind.TOPIC, "Bad_Name", "team-a", {})


def test_builder_rejects_namespace_for_cluster_scoped_kind():
    with pytest.raises(ValidationError, match="cluster-scoped"):
        build_resource(ResourceKind.WORKSPACE, "team-a", "team-a", {})


def test_builder_requires_namespace_for_namespaced_kind():
    with pytest.raises(ValidationError) as exc_info:
        build_resource(ResourceKind.WEB_APPLICATION, "api", None, {})

    assert exc_info.value.field == "namespace"


def test_builder_validates_namespace():
    with pytest.raises(ValidationError) as exc_info:
        build_resource(ResourceKind.TOPIC, "events", "Team-A", {})

    assert exc_info.value.field == "namespace"


# =============================================================================
# Document model
# =============================================================================


def test_from_manifest_keeps_status_and_server_metadata():
    resource = AtlasResource.from_manifest(
        {
            "apiVersion": "kro.run/v1alpha1",
            "kind": "Topic",
            "metadata": {"name": "events", "namespace": "team-a", "uid": "abc", "resourceVersion": "7"},
            "spec": {"partitions": 3},
            "status": {"state": "ACTIVE"},
        }
    )

    assert resource.display_name == "Topic/events (team-a)"
    assert resource.status == {"state": "ACTIVE"}
    document = resource.to_dict()
    assert document["metadata"]["uid"] == "abc"
    assert document["status"] == {"state": "ACTIVE"}
    assert "status" not in resource.to_manifest()


def test_from_manifest_fills_missing_kind():
    resource = AtlasResource.from_manifest({"metadata": {"name": "team-a"}}, default_kind="Workspace")

    assert resource.kind == "Workspace"
    assert resource.display_name == "Workspace/team-a"


def test_builder_normalizes_timestamp_to_utc():
    offset = timezone(timedelta(hours=2))
    local = datetime(2024, 5, 1, 14, 30, 0, 123456, tzinfo=offset)

    resource = build_resource(ResourceKind.WORKSPACE, "team-a", None, {}, now=local)

    assert resource.metadata.annotations[CREATED_AT_ANNOTATION] == "2024-05-01T12:30:00.123Z"
