"""Tests for the tool catalogue, dispatcher and text rendering."""

import json
import os
import sys

import pytest
import yaml

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from conftest import api_exception, atlas_object
from miniatlas.modules.aggregator import AtlasResourceCounts, ClusterStatus, NodeStatus
from miniatlas.modules.errors import ResourceNotFoundError, UnknownToolError, ValidationError
from miniatlas.modules.operations import AtlasService
from miniatlas.modules.reconcile import ApplyResult
from miniatlas.modules.resources import AtlasResource, ResourceKind, build_resource
from miniatlas.modules.tools import RESOURCES, TOOLS, ToolDispatcher, format_resource, format_resource_list
from miniatlas.modules.tools.formatting import (
    format_apply_result,
    format_cluster_status,
    format_resource_status,
)

GROUP, VERSION = "kro.run", "v1alpha1"


@pytest.fixture
def dispatcher(control_plane):
    return ToolDispatcher(AtlasService(control_plane))


def resource(kind, name, namespace=None, **spec):
    return AtlasResource.from_manifest(atlas_object(kind, name, namespace, **spec))


# =============================================================================
# Catalogue
# =============================================================================


def test_tool_catalogue():
    assert [tool.name for tool in TOOLS] == [
        "create_workspace",
        "deploy_webapp",
        "create_infrastructure",
        "create_topic",
        "get_resource_status",
        "delete_resource",
        "list_resources",
        "get_cluster_status",
    ]


def test_webapp_input_schema_uses_camel_case():
    tool = next(t for t in TOOLS if t.name == "deploy_webapp")

    schema = tool.input_schema()

    assert schema["type"] == "object"
    assert set(schema["required"]) == {"name", "namespace", "image", "host"}
    assert "healthCheck" in schema["properties"]
    assert "title" not in schema


def test_cluster_status_schema_has_no_properties():
    tool = next(t for t in TOOLS if t.name == "get_cluster_status")

    assert tool.to_dict()["inputSchema"]["properties"] == {}


def test_resource_catalogue():
    assert [r.to_dict()["uri"] for r in RESOURCES] == ["atlas://workspaces", "atlas://applications"]


# =============================================================================
# Dispatch
# =============================================================================


@pytest.mark.asyncio
async def test_unknown_tool(dispatcher, control_plane):
    with pytest.raises(UnknownToolError, match="Tool drop_cluster not found"):
        await dispatcher.call_tool("drop_cluster", {})

    assert control_plane.calls == []


@pytest.mark.asyncio
async def test_create_workspace_tool(dispatcher, control_plane):
    text = await dispatcher.call_tool("create_workspace", {"name": "team-a"})

    assert text == "Workspace 'team-a' created successfully"
    (_, _, plural, _, namespace), = control_plane.calls_to("create")
    assert (plural, namespace) == ("workspaces", None)


@pytest.mark.asyncio
async def test_deploy_webapp_tool_create_then_update(dispatcher):
    arguments = {"name": "api", "namespace": "team-a", "image": "nginx:1.21", "host": "api.example.com"}

    created = await dispatcher.call_tool("deploy_webapp", arguments)
    updated = await dispatcher.call_tool("deploy_webapp", arguments)

    assert created == "Web application 'api' deployed to namespace 'team-a'"
    assert updated == "Web application 'api' updated in namespace 'team-a'"


@pytest.mark.asyncio
async def test_invalid_arguments_rejected_before_any_call(dispatcher, control_plane):
    with pytest.raises(ValidationError):
        await dispatcher.call_tool(
            "deploy_webapp",
            {"name": "api", "namespace": "team-a", "image": "nginx", "host": "api.example.com", "replicas": 101},
        )

    assert control_plane.calls == []


@pytest.mark.asyncio
async def test_list_resources_tool(dispatcher, control_plane):
    control_plane.seed(GROUP, VERSION, "workspaces", atlas_object("Workspace", "team-a"))
    control_plane.seed(GROUP, VERSION, "topics", atlas_object("Topic", "events", "team-a"))
    control_plane.fail("list", api_exception(404), plural="webapplications")

    text = await dispatcher.call_tool("list_resources", {"type": "all"})

    assert text == "Workspaces:\n  - team-a\n\nTopics:\n  - events (team-a)"


@pytest.mark.asyncio
async def test_get_resource_status_tool_renders_yaml(dispatcher, control_plane):
    control_plane.seed(GROUP, VERSION, "topics", atlas_object("Topic", "events", "team-a", partitions=3))

    text = await dispatcher.call_tool(
        "get_resource_status", {"type": "topic", "name": "events", "namespace": "team-a"}
    )

    document = yaml.safe_load(text)
    assert document["kind"] == "Topic"
    assert document["spec"] == {"partitions": 3}
    assert document["status"] == {"state": "ACTIVE"}


@pytest.mark.asyncio
async def test_delete_resource_tool(dispatcher, control_plane):
    control_plane.seed(GROUP, VERSION, "workspaces", atlas_object("Workspace", "team-a"))

    text = await dispatcher.call_tool("delete_resource", {"type": "workspace", "name": "team-a"})

    assert text == "Workspace/team-a deleted"
    assert control_plane.objects == {}


@pytest.mark.asyncio
async def test_delete_missing_resource_tool(dispatcher):
    with pytest.raises(ResourceNotFoundError):
        await dispatcher.call_tool(
            "delete_resource", {"type": "topic", "name": "events", "namespace": "team-a"}
        )


@pytest.mark.asyncio
async def test_cluster_status_tool_renders_json(dispatcher, control_plane):
    text = await dispatcher.call_tool("get_cluster_status")

    payload = json.loads(text)
    assert payload["nodes"] == 0
    assert payload["namespaces"] == 1
    assert payload["atlasResources"] == {
        "workspaces": 0,
        "applications": 0,
        "infrastructure": 0,
        "topics": 0,
    }


@pytest.mark.asyncio
async def test_read_resource(dispatcher, control_plane):
    control_plane.seed(GROUP, VERSION, "webapplications", atlas_object("WebApplication", "api", "team-a"))

    text = await dispatcher.read_resource("atlas://applications")

    items = json.loads(text)
    assert [item["metadata"]["name"] for item in items] == ["api"]
    assert [args[2] for args in control_plane.calls_to("list")] == ["webapplications"]


@pytest.mark.asyncio
async def test_read_unknown_resource(dispatcher):
    with pytest.raises(ValidationError, match="Resource atlas://secrets not found"):
        await dispatcher.read_resource("atlas://secrets")


# =============================================================================
# Formatting
# =============================================================================


def test_format_resource():
    assert format_resource(resource("Workspace", "team-a")) == "Workspace/team-a"
    assert format_resource(resource("Topic", "events", "team-a")) == "Topic/events (team-a)"


def test_format_empty_list():
    assert format_resource_list([]) == "No resources found"


def test_format_list_groups_by_kind():
    text = format_resource_list(
        [
            resource("WebApplication", "api", "team-a"),
            resource("Workspace", "team-a"),
            resource("WebApplication", "web", "team-b"),
        ]
    )

    assert text == (
        "WebApplications:\n  - api (team-a)\n  - web (team-b)\n\n"
        "Workspaces:\n  - team-a"
    )


@pytest.mark.parametrize(
    "kind,namespace,spec,action,expected",
    [
        (ResourceKind.WORKSPACE, None, {}, "replaced", "Workspace 'x' updated successfully"),
        (
            ResourceKind.INFRASTRUCTURE,
            "team-a",
            {"database": "orders"},
            "created",
            "Infrastructure 'x' created with database 'orders'",
        ),
        (ResourceKind.TOPIC, "team-a", {}, "created", "Kafka topic 'x' created in namespace 'team-a'"),
    ],
)
def test_format_apply_result(kind, namespace, spec, action, expected):
    result = ApplyResult(resource=build_resource(kind, "x", namespace, spec), action=action)

    assert format_apply_result(result) == expected


def test_format_resource_status_keeps_document_order():
    text = format_resource_status(resource("Topic", "events", "team-a"))

    assert text.splitlines()[0] == "apiVersion: kro.run/v1alpha1"


def test_format_cluster_status():
    status = ClusterStatus(
        nodes=1,
        namespaces=2,
        node_status=[NodeStatus(name="n1", ready=True, version="v1.29.2", roles=["worker"])],
        atlas_resources=AtlasResourceCounts(workspaces=1),
    )

    payload = json.loads(format_cluster_status(status))

    assert payload["nodeStatus"] == [{"name": "n1", "ready": True, "version": "v1.29.2", "roles": ["worker"]}]
    assert payload["atlasResources"]["workspaces"] == 1
