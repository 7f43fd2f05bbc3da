"""
Aggregator for Atlas resources.

Reads and removals that span one or more resource kinds. Listing favours
visibility over completeness: a kind whose list call fails contributes
nothing and is logged, the rest are still returned.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..controlplane import ControlPlane, describe_failure, is_not_found
from ..errors import KubernetesError, ResourceNotFoundError, ValidationError
from ..resources import ALL_KINDS, ATLAS_API_VERSION, AtlasResource, ResourceKind, parse_api_version
from ..validation import validate_namespace, validate_resource_name
from .models import AtlasResourceCounts, ClusterStatus, NodeStatus

logger = logging.getLogger(__name__)

NODE_ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"


class ResourceAggregator:
    """List/get/delete across Atlas resource kinds."""

    def __init__(self, control_plane: ControlPlane, api_version: str = ATLAS_API_VERSION):
        self.control_plane = control_plane
        self.group, self.version = parse_api_version(api_version)

    async def list_resources(
        self, kinds: Optional[Iterable[ResourceKind]] = None, namespace: Optional[str] = None
    ) -> List[AtlasResource]:
        """
        List resources of the given kinds (all kinds by default).

        Args:
            kinds: Kinds to include
            namespace: Restrict namespaced kinds to this namespace; cluster-scoped
                kinds are always listed at cluster scope

        Returns:
            Concatenated items of every kind whose list call succeeded
        """
        if namespace:
            validate_namespace(namespace)

        results: List[AtlasResource] = []
        for kind in kinds or ALL_KINDS:
            items = await self._list_kind(kind, namespace)
            if items is not None:
                results.extend(items)
        return results

    async def count_by_kind(self, namespace: Optional[str] = None) -> Dict[ResourceKind, int]:
        """
        Count resources per kind. A kind whose list fails counts as zero.
        """
        counts: Dict[ResourceKind, int] = {}
        for kind in ALL_KINDS:
            items = await self._list_kind(kind, namespace)
            counts[kind] = len(items) if items is not None else 0
        return counts

    async def get_resource(
        self, kind: ResourceKind, name: str, namespace: Optional[str] = None
    ) -> AtlasResource:
        """
        Fetch one resource.

        Raises:
            ValidationError: If name/namespace are invalid for the kind
            ResourceNotFoundError: If the control plane has no such object
            KubernetesError: For any other failure
        """
        namespace = self._scope(kind, name, namespace)
        try:
            item = await self.control_plane.get(
                self.group, self.version, kind.plural, name, namespace=namespace
            )
        except Exception as e:
            raise self._classify(e, "get", kind, name, namespace) from e

        try:
            return AtlasResource.from_manifest(item, default_kind=kind.value)
        except Exception as e:
            raise KubernetesError(
                f"Malformed {kind.value} '{name}' returned by the API server: {e}",
                describe_failure(e),
            ) from e

    async def delete_resource(
        self, kind: ResourceKind, name: str, namespace: Optional[str] = None
    ) -> AtlasResource:
        """
        Delete one resource. Dependents are left to the cluster's garbage collector.

        Returns:
            Descriptor of the deleted resource (kind, name, namespace)

        Raises:
            ValidationError: If name/namespace are invalid for the kind
            ResourceNotFoundError: If the control plane has no such object
            KubernetesError: For any other failure
        """
        namespace = self._scope(kind, name, namespace)
        try:
            await self.control_plane.delete(
                self.group, self.version, kind.plural, name, namespace=namespace
            )
        except Exception as e:
            raise self._classify(e, "delete", kind, name, namespace) from e

        logger.info(f"Deleted {kind.value} '{name}'" + (f" in {namespace}" if namespace else ""))
        return AtlasResource(
            api_version=ATLAS_API_VERSION,
            kind=kind.value,
            metadata={"name": name, "namespace": namespace},
        )

    async def cluster_status(self) -> ClusterStatus:
        """
        Summarize nodes, namespaces and Atlas resource counts.

        Raises:
            KubernetesError: If nodes or namespaces cannot be read
        """
        try:
            nodes = await self.control_plane.list_nodes()
            namespaces = await self.control_plane.list_namespaces()
        except Exception as e:
            raise KubernetesError(
                f"Failed to get cluster status: {e}", describe_failure(e)
            ) from e

        counts = await self.count_by_kind()

        return ClusterStatus(
            nodes=len(nodes),
            namespaces=len(namespaces),
            node_status=[_node_status(node) for node in nodes],
            atlas_resources=AtlasResourceCounts(
                workspaces=counts[ResourceKind.WORKSPACE],
                applications=counts[ResourceKind.WEB_APPLICATION],
                infrastructure=counts[ResourceKind.INFRASTRUCTURE],
                topics=counts[ResourceKind.TOPIC],
            ),
        )

    async def _list_kind(
        self, kind: ResourceKind, namespace: Optional[str]
    ) -> Optional[List[AtlasResource]]:
        """List one kind; None when the call failed or returned a malformed item."""
        scope = None if kind.cluster_scoped else namespace
        try:
            items = await self.control_plane.list(
                self.group, self.version, kind.plural, namespace=scope
            )
            return [AtlasResource.from_manifest(item, default_kind=kind.value) for item in items]
        except Exception as e:
            logger.warning(f"Failed to get {kind.value} resources: {e}")
            return None

    def _scope(self, kind: ResourceKind, name: str, namespace: Optional[str]) -> Optional[str]:
        """Validate name and resolve the namespace used to address the kind."""
        validate_resource_name(name, kind.value)
        if kind.cluster_scoped:
            return None
        if not namespace:
            raise ValidationError(f"{kind.value} requires a namespace", field="namespace")
        validate_namespace(namespace)
        return namespace

    @staticmethod
    def _classify(
        e: Exception, verb: str, kind: ResourceKind, name: str, namespace: Optional[str]
    ) -> Exception:
        if is_not_found(e):
            return ResourceNotFoundError(kind.value, name, namespace)
        return KubernetesError(
            f"Failed to {verb} {kind.value} '{name}': {e}", describe_failure(e)
        )


def _node_status(node: Dict[str, Any]) -> NodeStatus:
    metadata = node.get("metadata") or {}
    status = node.get("status") or {}
    conditions = status.get("conditions") or []
    labels = metadata.get("labels") or {}

    ready = any(
        c.get("type") == "Ready" and c.get("status") == "True" for c in conditions
    )
    roles = sorted(
        label[len(NODE_ROLE_LABEL_PREFIX):]
        for label in labels
        if label.startswith(NODE_ROLE_LABEL_PREFIX) and label[len(NODE_ROLE_LABEL_PREFIX):]
    )

    return NodeStatus(
        name=metadata.get("name"),
        ready=ready,
        version=(status.get("nodeInfo") or {}).get("kubeletVersion"),
        roles=roles,
    )
