import logging
from dataclasses import dataclass
from typing import Literal

from ..controlplane import ControlPlane, describe_failure, is_conflict
from ..errors import KubernetesError
from ..resources import AtlasResource, parse_api_version, plural_for

logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """Outcome of one apply call."""

    resource: AtlasResource
    action: Literal["created", "replaced"]


class ReconcileEngine:
    def __init__(self, control_plane: ControlPlane):
        """
        Initialize reconcile engine.

        Args:
            control_plane: Control-plane client handle
        """
        self.control_plane = control_plane

    async def apply(self, resource: AtlasResource) -> ApplyResult:
        """
        Make the control plane hold exactly this document.

        Args:
            resource: Freshly built resource document

        Returns:
            ApplyResult with action "created" or "replaced"

        Raises:
            KubernetesError: For any failure other than the create conflict

        Logic:
        1. Create under the resource's namespace (cluster scope if none)
        2. On 409 Conflict only, replace the existing object by name with
           this document
        3. Anything else is surfaced unchanged in cause, never retried

        The replace does not read or send a resourceVersion, so concurrent
        applies to the same name are last-writer-wins.
        """
        group, version = parse_api_version(resource.api_version)
        plural = plural_for(resource.kind)
        namespace = resource.namespace
        body = resource.to_manifest()

        try:
            await self.control_plane.create(group, version, plural, body, namespace=namespace)
            logger.info(f"Created {resource.display_name}")
            return ApplyResult(resource=resource, action="created")
        except Exception as e:
            if not is_conflict(e):
                raise KubernetesError(
                    f"Failed to create {resource.display_name}: {e}", describe_failure(e)
                ) from e

        logger.info(f"{resource.display_name} already exists, replacing")
        try:
            await self.control_plane.replace(
                group, version, plural, resource.name, body, namespace=namespace
            )
        except Exception as e:
            raise KubernetesError(
                f"Failed to replace {resource.display_name}: {e}", describe_failure(e)
            ) from e

        logger.info(f"Replaced {resource.display_name}")
        return ApplyResult(resource=resource, action="replaced")
