"""
Operations Module - Black Box Interface

Purpose: The public operation contract (one entry point per tool)
Interface: AtlasService, AtlasFactory, request models, parse_request()
Hidden: Engine/aggregator wiring, spec construction

Every request type is validated in full before a resource is built.
"""

from .factory import AtlasFactory
from .models import (
    ClusterStatusRequest,
    CreateInfrastructureRequest,
    CreateTopicRequest,
    CreateWorkspaceRequest,
    DeleteResourceRequest,
    DeployWebAppRequest,
    Environment,
    GetResourceStatusRequest,
    HealthResponse,
    ListResourcesRequest,
    ResourceMetrics,
    parse_request,
)
from .service import AtlasService

__all__ = [
    "AtlasFactory",
    "AtlasService",
    "ClusterStatusRequest",
    "CreateInfrastructureRequest",
    "CreateTopicRequest",
    "CreateWorkspaceRequest",
    "DeleteResourceRequest",
    "DeployWebAppRequest",
    "Environment",
    "GetResourceStatusRequest",
    "HealthResponse",
    "ListResourcesRequest",
    "ResourceMetrics",
    "parse_request",
]
