"""
Mini-Atlas request and response models.

Each tool call is parsed into one of these request types. Pydantic checks
shape and types; validate_fields() then applies the naming, image, hostname,
replica and environment rules. Both steps finish before any network call.
"""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..errors import ValidationError
from ..resources import ResourceKind
from ..validation import (
    validate_environment_variables,
    validate_hostname,
    validate_image_reference,
    validate_namespace,
    validate_replicas,
    validate_resource_name,
)

# Kubernetes resource quantity, e.g. "500m", "1.5", "128Mi", "10Gi"
QUANTITY_PATTERN = r"^[0-9]+(\.[0-9]+)?(m|k|M|G|T|P|E|Ki|Mi|Gi|Ti|Pi|Ei)?$"

# Enums


class Environment(str, Enum):
    """Workspace environment tier."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


# Request Models (tool input)


class AtlasRequest(BaseModel):
    """Base for tool input: camelCase or snake_case keys, unknown keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def validate_fields(self) -> None:
        """Apply validation rules. Raises ValidationError."""


class ApplyRequest(AtlasRequest):
    """A request that creates or replaces one resource."""

    KIND: ClassVar[ResourceKind]

    name: str
    namespace: Optional[str] = None

    def to_spec(self) -> Dict[str, Any]:
        """Kind-specific spec payload with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CreateWorkspaceRequest(ApplyRequest):
    """Create a workspace (isolated tenant environment)."""

    KIND: ClassVar[ResourceKind] = ResourceKind.WORKSPACE

    name: str = Field(..., description="Workspace name")
    description: Optional[str] = Field(None, description="Workspace description")
    team: Optional[str] = Field(None, description="Owning team")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Environment tier"
    )

    def validate_fields(self) -> None:
        validate_resource_name(self.name, "Workspace")
        if self.namespace:
            raise ValidationError(
                "Workspace is cluster-scoped and does not take a namespace", field="namespace"
            )

    def to_spec(self) -> Dict[str, Any]:
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=True, exclude={"namespace"}
        )


class ResourceQuantities(AtlasRequest):
    cpu: Optional[str] = Field(None, pattern=QUANTITY_PATTERN, description="CPU, e.g. 500m")
    memory: Optional[str] = Field(None, pattern=QUANTITY_PATTERN, description="Memory, e.g. 256Mi")


class ResourceRequirements(AtlasRequest):
    requests: Optional[ResourceQuantities] = None
    limits: Optional[ResourceQuantities] = None


class HealthCheck(AtlasRequest):
    path: str = Field(default="/", description="HTTP health check path")
    port: Optional[int] = Field(None, ge=1, le=65535, description="Probe port (defaults to app port)")
    initial_delay_seconds: int = Field(default=10, ge=0)
    period_seconds: int = Field(default=10, ge=1)


class DeployWebAppRequest(ApplyRequest):
    """Deploy a web application behind an ingress host."""

    KIND: ClassVar[ResourceKind] = ResourceKind.WEB_APPLICATION

    name: str = Field(..., description="Application name")
    namespace: str = Field(..., description="Target namespace")
    image: str = Field(..., description="Container image")
    tag: str = Field(default="latest", description="Image tag")
    replicas: int = Field(default=1, description="Number of replicas (0-100)")
    host: str = Field(..., description="Ingress hostname")
    port: int = Field(default=80, ge=1, le=65535, description="Container port")
    env: Optional[Dict[str, str]] = Field(None, description="Environment variables")
    resources: Optional[ResourceRequirements] = Field(None, description="CPU/memory requests and limits")
    health_check: Optional[HealthCheck] = Field(None, description="HTTP health check")

    def validate_fields(self) -> None:
        validate_resource_name(self.name, "Application")
        validate_namespace(self.namespace)
        validate_image_reference(self.image)
        validate_hostname(self.host)
        validate_replicas(self.replicas)
        validate_environment_variables(self.env)


class CreateInfrastructureRequest(ApplyRequest):
    """Provision a PostgreSQL database and optional Redis cache."""

    KIND: ClassVar[ResourceKind] = ResourceKind.INFRASTRUCTURE

    name: str = Field(..., description="Infrastructure name")
    namespace: str = Field(..., description="Target namespace")
    database: str = Field(..., description="Database name")
    database_version: str = Field(default="15", description="PostgreSQL major version")
    storage_size: str = Field(default="10Gi", pattern=QUANTITY_PATTERN, description="Volume size")
    redis_enabled: bool = Field(default=True, description="Provision a Redis cache")
    backup_enabled: bool = Field(default=False, description="Enable scheduled backups")

    def validate_fields(self) -> None:
        validate_resource_name(self.name, "Infrastructure")
        validate_namespace(self.namespace)
        validate_resource_name(self.database, "Database")


class CreateTopicRequest(ApplyRequest):
    """Create a Kafka topic."""

    KIND: ClassVar[ResourceKind] = ResourceKind.TOPIC

    name: str = Field(..., description="Topic name")
    namespace: str = Field(..., description="Target namespace")
    partitions: int = Field(default=3, ge=1, description="Partition count")
    replication_factor: int = Field(default=1, ge=1, description="Replication factor")
    retention_ms: int = Field(default=604800000, ge=1, description="Retention in milliseconds")
    config: Optional[Dict[str, str]] = Field(None, description="Extra topic configuration")

    def validate_fields(self) -> None:
        validate_resource_name(self.name, "Topic")
        validate_namespace(self.namespace)


ResourceType = Literal["workspace", "webapp", "infrastructure", "topic"]


class ResourceReference(AtlasRequest):
    """Identifies one resource by type, name and (for namespaced kinds) namespace."""

    type: ResourceType = Field(..., description="Resource type")
    name: str = Field(..., description="Resource name")
    namespace: Optional[str] = Field(None, description="Namespace (not used for workspaces)")

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.from_type(self.type)

    def validate_fields(self) -> None:
        kind = self.kind
        validate_resource_name(self.name, kind.value)
        if kind.cluster_scoped:
            return
        if not self.namespace:
            raise ValidationError(f"{kind.value} requires a namespace", field="namespace")
        validate_namespace(self.namespace)


class GetResourceStatusRequest(ResourceReference):
    """Get a resource with its current status."""


class DeleteResourceRequest(ResourceReference):
    """Delete a resource."""


class ListResourcesRequest(AtlasRequest):
    """List Atlas resources."""

    type: Literal["workspace", "webapp", "infrastructure", "topic", "all"] = Field(
        default="all", description="Type of resources to list"
    )
    namespace: Optional[str] = Field(None, description="Filter by namespace (optional)")

    @property
    def kinds(self) -> Optional[List[ResourceKind]]:
        if self.type == "all":
            return None
        return [ResourceKind.from_type(self.type)]

    def validate_fields(self) -> None:
        if self.namespace:
            validate_namespace(self.namespace)


class ClusterStatusRequest(AtlasRequest):
    """Get cluster status and health information."""


# Response Models


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., pattern="^(healthy|unhealthy)$")
    timestamp: datetime
    kubernetes: bool
    error: Optional[str] = None


class ResourceMetrics(BaseModel):
    """Atlas resource totals."""

    workspaces_total: int
    applications_total: int
    infrastructure_total: int
    topics_total: int
    timestamp: datetime


RequestT = TypeVar("RequestT", bound=AtlasRequest)


def parse_request(model: Type[RequestT], arguments: Optional[Dict[str, Any]]) -> RequestT:
    """
    Parse and fully validate tool arguments.

    Args:
        model: Request type
        arguments: Raw tool arguments

    Returns:
        Validated request

    Raises:
        ValidationError: On any shape, type or rule violation
    """
    try:
        request = model.model_validate(arguments or {})
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        message = first.get("msg", "Invalid input")
        raise ValidationError(
            f"Invalid value for '{field}': {message}" if field else message, field=field
        ) from None

    request.validate_fields()
    return request
