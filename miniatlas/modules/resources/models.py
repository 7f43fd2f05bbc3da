"""
Atlas resource document model.

An AtlasResource is built fresh for every request and either sent to the
control plane or rebuilt from what the control plane returned. It is never
cached or persisted locally.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceMetadata(BaseModel):
    """Object metadata. Server-populated fields (uid, resourceVersion, ...) are kept as extras."""

    model_config = ConfigDict(extra="allow")

    name: str
    namespace: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class AtlasResource(BaseModel):
    """A custom resource document (kind, metadata, spec, status)."""

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(..., alias="apiVersion")
    kind: str
    metadata: ResourceMetadata
    spec: Dict[str, Any] = Field(default_factory=dict)
    # Written only by the control plane
    status: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.namespace

    @property
    def display_name(self) -> str:
        """Short descriptor such as ``WebApplication/api (team-a)``."""
        suffix = f" ({self.namespace})" if self.namespace else ""
        return f"{self.kind}/{self.name}{suffix}"

    def to_manifest(self) -> Dict[str, Any]:
        """Request body for create/replace calls; status is never sent."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"status"})

    def to_dict(self) -> Dict[str, Any]:
        """Full document including status, for display."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_manifest(cls, data: Dict[str, Any], default_kind: Optional[str] = None) -> "AtlasResource":
        """
        Rebuild a resource from control-plane JSON.

        Args:
            data: Object as returned by the API server
            default_kind: Kind to assume when the item omits it
        """
        payload = dict(data)
        if default_kind and not payload.get("kind"):
            payload["kind"] = default_kind
        payload.setdefault("apiVersion", "")
        payload.setdefault("metadata", {})
        return cls.model_validate(payload)
