"""Summary models returned by the aggregator."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NodeStatus(BaseModel):
    """Readiness and version of one cluster node."""

    name: Optional[str] = None
    ready: bool
    version: Optional[str] = Field(None, description="Kubelet version")
    roles: List[str] = Field(default_factory=list)


class AtlasResourceCounts(BaseModel):
    """Number of Atlas resources per kind."""

    workspaces: int = 0
    applications: int = 0
    infrastructure: int = 0
    topics: int = 0


class ClusterStatus(BaseModel):
    """Cluster summary: nodes, namespaces and Atlas resource counts."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: int
    namespaces: int
    node_status: List[NodeStatus] = Field(default_factory=list, alias="nodeStatus")
    atlas_resources: AtlasResourceCounts = Field(
        default_factory=AtlasResourceCounts, alias="atlasResources"
    )
