"""
Aggregator Module - Black Box Interface

Purpose: Read and remove Atlas resources across kinds and namespaces
Interface: list_resources(), get_resource(), delete_resource(), count_by_kind(), cluster_status()
Hidden: Per-kind addressing, partial-failure handling, node summarization

A failing kind never hides the others from a list.
"""

from .aggregator import ResourceAggregator
from .models import AtlasResourceCounts, ClusterStatus, NodeStatus

__all__ = ["AtlasResourceCounts", "ClusterStatus", "NodeStatus", "ResourceAggregator"]
