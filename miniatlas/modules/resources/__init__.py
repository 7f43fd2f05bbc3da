"""
Resources Module - Black Box Interface

Purpose: Describe Atlas resource kinds and build resource documents
Interface: ResourceKind, AtlasResource, build_resource(), plural_for(), parse_api_version()
Hidden: Kind addressing table, provenance labels and annotations

Adding a kind means adding a ResourceKind member and its KindInfo entry.
"""

from .builder import (
    CREATED_AT_ANNOTATION,
    CREATED_BY_ANNOTATION,
    MANAGED_BY_LABEL,
    RESOURCE_TYPE_LABEL,
    build_resource,
)
from .kinds import ALL_KINDS, ATLAS_API_VERSION, KindInfo, ResourceKind, parse_api_version, plural_for
from .models import AtlasResource, ResourceMetadata

__all__ = [
    "ALL_KINDS",
    "ATLAS_API_VERSION",
    "AtlasResource",
    "CREATED_AT_ANNOTATION",
    "CREATED_BY_ANNOTATION",
    "KindInfo",
    "MANAGED_BY_LABEL",
    "RESOURCE_TYPE_LABEL",
    "ResourceKind",
    "ResourceMetadata",
    "build_resource",
    "parse_api_version",
    "plural_for",
]
