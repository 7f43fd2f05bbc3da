"""Atlas resource kinds and how each one is addressed on the control plane."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

ATLAS_API_VERSION = "kro.run/v1alpha1"


@dataclass(frozen=True)
class KindInfo:
    """Addressing metadata for one resource kind."""

    plural: str
    cluster_scoped: bool
    type_alias: str


class ResourceKind(str, Enum):
    """Closed set of Atlas resource kinds."""

    WORKSPACE = "Workspace"
    WEB_APPLICATION = "WebApplication"
    INFRASTRUCTURE = "Infrastructure"
    TOPIC = "Topic"

    @property
    def info(self) -> KindInfo:
        return KIND_INFO[self]

    @property
    def plural(self) -> str:
        return self.info.plural

    @property
    def cluster_scoped(self) -> bool:
        return self.info.cluster_scoped

    @property
    def type_alias(self) -> str:
        return self.info.type_alias

    @classmethod
    def from_type(cls, type_alias: str) -> "ResourceKind":
        """
        Map a tool-level type string ("webapp", "topic", ...) to a kind.

        Raises:
            ValueError: If the alias is unknown
        """
        for kind in cls:
            if kind.type_alias == type_alias:
                return kind
        raise ValueError(f"Unknown resource type: {type_alias}")


# Every member must have an entry; checked at import time below.
KIND_INFO = {
    ResourceKind.WORKSPACE: KindInfo("workspaces", cluster_scoped=True, type_alias="workspace"),
    ResourceKind.WEB_APPLICATION: KindInfo("webapplications", cluster_scoped=False, type_alias="webapp"),
    ResourceKind.INFRASTRUCTURE: KindInfo("infrastructures", cluster_scoped=False, type_alias="infrastructure"),
    ResourceKind.TOPIC: KindInfo("topics", cluster_scoped=False, type_alias="topic"),
}

_missing = set(ResourceKind) - set(KIND_INFO)
if _missing:
    raise RuntimeError(f"No addressing metadata for kinds: {sorted(k.value for k in _missing)}")

ALL_KINDS: Tuple[ResourceKind, ...] = tuple(ResourceKind)


def plural_for(kind: str) -> str:
    """
    Plural collection name for a kind.

    Known kinds use the fixed table; anything else falls back to the
    lowercased kind with an "s" appended.
    """
    try:
        return ResourceKind(kind).plural
    except ValueError:
        return kind.lower() + "s"


def parse_api_version(api_version: str) -> Tuple[str, str]:
    """
    Split an apiVersion string into (group, version).

    Example:
        >>> parse_api_version("kro.run/v1alpha1")
        ('kro.run', 'v1alpha1')
        >>> parse_api_version("v1")
        ('', 'v1')
    """
    parts = api_version.split("/")
    if len(parts) == 1:
        return "", parts[0]
    return parts[0], parts[1]
