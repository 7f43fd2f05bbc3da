"""
Atlas operations.

One entry point per tool. Every entry point validates its request before
touching the control plane, then delegates to the reconcile engine (for
mutations) or the aggregator (for reads and deletes).
"""

import logging
from datetime import datetime, timezone
from typing import List

from ..aggregator import ClusterStatus, ResourceAggregator
from ..controlplane import ControlPlane
from ..reconcile import ApplyResult, ReconcileEngine
from ..resources import AtlasResource, ResourceKind, build_resource
from .models import (
    ApplyRequest,
    CreateInfrastructureRequest,
    CreateTopicRequest,
    CreateWorkspaceRequest,
    DeleteResourceRequest,
    DeployWebAppRequest,
    GetResourceStatusRequest,
    HealthResponse,
    ListResourcesRequest,
    ResourceMetrics,
)

logger = logging.getLogger(__name__)


class AtlasService:
    """Public operation contract of Mini-Atlas."""

    def __init__(self, control_plane: ControlPlane):
        """
        Initialize with a control-plane handle.

        Args:
            control_plane: Client used by the engine and the aggregator
        """
        self.control_plane = control_plane
        self.engine = ReconcileEngine(control_plane)
        self.aggregator = ResourceAggregator(control_plane)

    async def create_workspace(self, request: CreateWorkspaceRequest) -> ApplyResult:
        return await self._apply(request)

    async def deploy_webapp(self, request: DeployWebAppRequest) -> ApplyResult:
        return await self._apply(request)

    async def create_infrastructure(self, request: CreateInfrastructureRequest) -> ApplyResult:
        return await self._apply(request)

    async def create_topic(self, request: CreateTopicRequest) -> ApplyResult:
        return await self._apply(request)

    async def get_resource_status(self, request: GetResourceStatusRequest) -> AtlasResource:
        request.validate_fields()
        return await self.aggregator.get_resource(request.kind, request.name, request.namespace)

    async def delete_resource(self, request: DeleteResourceRequest) -> AtlasResource:
        request.validate_fields()
        return await self.aggregator.delete_resource(request.kind, request.name, request.namespace)

    async def list_resources(self, request: ListResourcesRequest) -> List[AtlasResource]:
        request.validate_fields()
        return await self.aggregator.list_resources(request.kinds, request.namespace)

    async def get_cluster_status(self) -> ClusterStatus:
        return await self.aggregator.cluster_status()

    async def get_metrics(self) -> ResourceMetrics:
        """Resource totals per kind; a kind that cannot be listed counts as zero."""
        counts = await self.aggregator.count_by_kind()
        return ResourceMetrics(
            workspaces_total=counts[ResourceKind.WORKSPACE],
            applications_total=counts[ResourceKind.WEB_APPLICATION],
            infrastructure_total=counts[ResourceKind.INFRASTRUCTURE],
            topics_total=counts[ResourceKind.TOPIC],
            timestamp=datetime.now(timezone.utc),
        )

    async def check_health(self) -> HealthResponse:
        """Ping the control plane once, without retry."""
        now = datetime.now(timezone.utc)
        try:
            await self.control_plane.ping()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return HealthResponse(status="unhealthy", timestamp=now, kubernetes=False, error=str(e))
        return HealthResponse(status="healthy", timestamp=now, kubernetes=True)

    async def _apply(self, request: ApplyRequest) -> ApplyResult:
        # Validation completes before the document is built or sent
        request.validate_fields()
        kind = request.KIND
        namespace = None if kind.cluster_scoped else request.namespace
        resource = build_resource(kind, request.name, namespace, request.to_spec())
        return await self.engine.apply(resource)
