"""Construction of canonical Atlas resource documents."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..errors import ValidationError
from ..validation import validate_namespace, validate_resource_name
from .kinds import ATLAS_API_VERSION, ResourceKind
from .models import AtlasResource, ResourceMetadata

MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"
RESOURCE_TYPE_LABEL = "mini-atlas.io/resource-type"
CREATED_BY_ANNOTATION = "mini-atlas.io/created-by"
CREATED_AT_ANNOTATION = "mini-atlas.io/created-at"

MANAGED_BY = "mini-atlas-mcp"
CREATED_BY = "mcp-server"


def build_resource(
    kind: ResourceKind,
    name: str,
    namespace: Optional[str],
    spec: Dict[str, Any],
    now: Optional[datetime] = None,
) -> AtlasResource:
    """
    Build an AtlasResource with the standard provenance labels and annotations.

    Name and namespace are validated again here even though request models
    already did so. Two calls with identical input differ only in the
    created-at annotation.

    Args:
        kind: Resource kind
        name: metadata.name
        namespace: metadata.namespace; required for namespaced kinds,
            rejected for cluster-scoped ones
        spec: Kind-specific payload
        now: Creation time (defaults to the current UTC time)

    Raises:
        ValidationError: If name or namespace is invalid for the kind
    """
    validate_resource_name(name, kind.value)

    if kind.cluster_scoped:
        if namespace:
            raise ValidationError(
                f"{kind.value} is cluster-scoped and does not take a namespace",
                field="namespace",
            )
    else:
        if not namespace:
            raise ValidationError(f"{kind.value} requires a namespace", field="namespace")
        validate_namespace(namespace)

    created_at = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    created_at = created_at.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    metadata = ResourceMetadata(
        name=name,
        namespace=namespace or None,
        labels={
            MANAGED_BY_LABEL: MANAGED_BY,
            RESOURCE_TYPE_LABEL: kind.value.lower(),
        },
        annotations={
            CREATED_BY_ANNOTATION: CREATED_BY,
            CREATED_AT_ANNOTATION: created_at,
        },
    )

    return AtlasResource(
        api_version=ATLAS_API_VERSION,
        kind=kind.value,
        metadata=metadata,
        spec=dict(spec),
    )
