"""
Tool catalogue and dispatch.

Maps tool names to request types and service operations, and renders the
results as text. Transport layers (stdio, HTTP) only call into this class.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from ..errors import UnknownToolError, ValidationError
from ..operations import (
    AtlasService,
    ClusterStatusRequest,
    CreateInfrastructureRequest,
    CreateTopicRequest,
    CreateWorkspaceRequest,
    DeleteResourceRequest,
    DeployWebAppRequest,
    GetResourceStatusRequest,
    ListResourcesRequest,
    parse_request,
)
from ..operations.models import AtlasRequest
from ..resources import ResourceKind
from .formatting import (
    format_apply_result,
    format_cluster_status,
    format_resource,
    format_resource_list,
    format_resource_status,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    """One entry in the tool catalogue."""

    name: str
    description: str
    request_model: Type[AtlasRequest]

    def input_schema(self) -> Dict[str, Any]:
        schema = self.request_model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.pop("description", None)
        schema.setdefault("properties", {})
        return schema

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}


@dataclass(frozen=True)
class ResourceSpec:
    """A read-only MCP resource listing one kind."""

    uri: str
    name: str
    description: str
    kind: ResourceKind
    mime_type: str = "application/json"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uri": self.uri,
            "mimeType": self.mime_type,
            "name": self.name,
            "description": self.description,
        }


TOOLS: List[ToolSpec] = [
    ToolSpec(
        "create_workspace",
        "Create a new workspace (isolated tenant environment)",
        CreateWorkspaceRequest,
    ),
    ToolSpec(
        "deploy_webapp",
        "Deploy a web application with an ingress hostname",
        DeployWebAppRequest,
    ),
    ToolSpec(
        "create_infrastructure",
        "Provision PostgreSQL database and Redis cache",
        CreateInfrastructureRequest,
    ),
    ToolSpec("create_topic", "Create a Kafka topic", CreateTopicRequest),
    ToolSpec(
        "get_resource_status",
        "Get an Atlas resource with its current status",
        GetResourceStatusRequest,
    ),
    ToolSpec("delete_resource", "Delete an Atlas resource", DeleteResourceRequest),
    ToolSpec(
        "list_resources",
        "List Atlas resources (workspaces, applications, etc.)",
        ListResourcesRequest,
    ),
    ToolSpec(
        "get_cluster_status",
        "Get cluster status and health information",
        ClusterStatusRequest,
    ),
]

RESOURCES: List[ResourceSpec] = [
    ResourceSpec(
        "atlas://workspaces",
        "Atlas Workspaces",
        "List of all workspaces in the cluster",
        ResourceKind.WORKSPACE,
    ),
    ResourceSpec(
        "atlas://applications",
        "Atlas Applications",
        "List of all web applications",
        ResourceKind.WEB_APPLICATION,
    ),
]


class ToolDispatcher:
    """Routes tool calls and resource reads to AtlasService."""

    def __init__(self, service: AtlasService):
        self.service = service
        self._tools = {tool.name: tool for tool in TOOLS}
        self._resources = {resource.uri: resource for resource in RESOURCES}
        self._handlers: Dict[str, Callable[[Any], Awaitable[str]]] = {
            "create_workspace": self._create_workspace,
            "deploy_webapp": self._deploy_webapp,
            "create_infrastructure": self._create_infrastructure,
            "create_topic": self._create_topic,
            "get_resource_status": self._get_resource_status,
            "delete_resource": self._delete_resource,
            "list_resources": self._list_resources,
            "get_cluster_status": self._get_cluster_status,
        }

    def list_tools(self) -> List[ToolSpec]:
        return list(self._tools.values())

    def list_resources(self) -> List[ResourceSpec]:
        return list(self._resources.values())

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """
        Run one tool call.

        Args:
            name: Tool name from the catalogue
            arguments: Raw tool arguments

        Returns:
            Text result

        Raises:
            UnknownToolError: If the tool is not in the catalogue
            ValidationError, ResourceNotFoundError, KubernetesError: From the operation
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)

        request = parse_request(tool.request_model, arguments)
        logger.info(f"Tool call: {name}")
        return await self._handlers[name](request)

    async def read_resource(self, uri: str) -> str:
        """JSON list of every resource of the kind behind the URI."""
        resource = self._resources.get(uri)
        if resource is None:
            raise ValidationError(f"Resource {uri} not found", field="uri")

        items = await self.service.aggregator.list_resources([resource.kind])
        return json.dumps([item.to_dict() for item in items], indent=2)

    async def _create_workspace(self, request: CreateWorkspaceRequest) -> str:
        return format_apply_result(await self.service.create_workspace(request))

    async def _deploy_webapp(self, request: DeployWebAppRequest) -> str:
        return format_apply_result(await self.service.deploy_webapp(request))

    async def _create_infrastructure(self, request: CreateInfrastructureRequest) -> str:
        return format_apply_result(await self.service.create_infrastructure(request))

    async def _create_topic(self, request: CreateTopicRequest) -> str:
        return format_apply_result(await self.service.create_topic(request))

    async def _get_resource_status(self, request: GetResourceStatusRequest) -> str:
        return format_resource_status(await self.service.get_resource_status(request))

    async def _delete_resource(self, request: DeleteResourceRequest) -> str:
        deleted = await self.service.delete_resource(request)
        return f"{format_resource(deleted)} deleted"

    async def _list_resources(self, request: ListResourcesRequest) -> str:
        return format_resource_list(await self.service.list_resources(request))

    async def _get_cluster_status(self, request: ClusterStatusRequest) -> str:
        return format_cluster_status(await self.service.get_cluster_status())
