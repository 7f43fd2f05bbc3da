"""Text rendering of operation results for tool callers."""

import json
from typing import Dict, List

import yaml

from ..aggregator import ClusterStatus
from ..reconcile import ApplyResult
from ..resources import AtlasResource, ResourceKind


def format_resource(resource: AtlasResource) -> str:
    """Format a resource as ``Kind/name`` or ``Kind/name (namespace)``."""
    return resource.display_name


def format_resource_list(resources: List[AtlasResource]) -> str:
    """
    Format resources grouped by kind.

    Example output:
        Workspaces:
          - team-a

        WebApplications:
          - api (team-a)
    """
    if not resources:
        return "No resources found"

    grouped: Dict[str, List[AtlasResource]] = {}
    for resource in resources:
        grouped.setdefault(resource.kind, []).append(resource)

    sections = []
    for kind, items in grouped.items():
        lines = [
            f"  - {item.name}" + (f" ({item.namespace})" if item.namespace else "")
            for item in items
        ]
        sections.append(f"{kind}s:\n" + "\n".join(lines))
    return "\n\n".join(sections)


def format_apply_result(result: ApplyResult) -> str:
    """One-line confirmation for a create/replace."""
    resource = result.resource
    verb = "created" if result.action == "created" else "updated"
    spec = resource.spec

    if resource.kind == ResourceKind.WORKSPACE.value:
        return f"Workspace '{resource.name}' {verb} successfully"
    if resource.kind == ResourceKind.WEB_APPLICATION.value:
        action = "deployed to" if result.action == "created" else "updated in"
        return f"Web application '{resource.name}' {action} namespace '{resource.namespace}'"
    if resource.kind == ResourceKind.INFRASTRUCTURE.value:
        return f"Infrastructure '{resource.name}' {verb} with database '{spec.get('database')}'"
    if resource.kind == ResourceKind.TOPIC.value:
        return f"Kafka topic '{resource.name}' {verb} in namespace '{resource.namespace}'"
    return f"{format_resource(resource)} {verb}"


def format_resource_status(resource: AtlasResource) -> str:
    """Full document, status included, as YAML."""
    return yaml.safe_dump(resource.to_dict(), sort_keys=False, default_flow_style=False)


def format_cluster_status(status: ClusterStatus) -> str:
    return json.dumps(status.model_dump(by_alias=True), indent=2)
