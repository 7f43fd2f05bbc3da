"""
Field validation rules for Atlas tool input.

Each validator takes one value (plus a label where the message needs one),
returns None on success and raises ValidationError naming the violated rule.
None of them touch the network.
"""

import re
from typing import Any, Mapping, Optional

from ..errors import ValidationError

# Kubernetes DNS-1123 label
NAME_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
NAME_MAX_LENGTH = 63

IMAGE_PATTERN = re.compile(r"^[a-zA-Z0-9._/-]+(?::[a-zA-Z0-9._-]+)?$")

HOSTNAME_PATTERN = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?(\.[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?)*$"
)
HOSTNAME_MAX_LENGTH = 253

ENV_KEY_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# Safety ceiling, not a platform limit
MAX_REPLICAS = 100


def validate_resource_name(name: Any, resource_type: str) -> None:
    """
    Validate a resource name against Kubernetes naming conventions.

    Args:
        name: Candidate name
        resource_type: Label used in the error message (e.g. "Workspace")

    Raises:
        ValidationError: If the name is empty, malformed or too long
    """
    if not name or not isinstance(name, str):
        raise ValidationError(
            f"{resource_type} name is required and must be a string", field="name"
        )

    if not NAME_PATTERN.match(name):
        raise ValidationError(
            f"{resource_type} name '{name}' must consist of lower case alphanumeric "
            "characters or '-', and must start and end with an alphanumeric character",
            field="name",
        )

    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"{resource_type} name '{name}' must be no more than {NAME_MAX_LENGTH} characters",
            field="name",
        )


def validate_namespace(namespace: Any) -> None:
    """Validate a namespace name."""
    try:
        validate_resource_name(namespace, "Namespace")
    except ValidationError as e:
        raise ValidationError(e.message, field="namespace") from None


def validate_image_reference(image: Any) -> None:
    """Validate a container image reference such as ``nginx:1.21``."""
    if not image or not isinstance(image, str):
        raise ValidationError("Image reference is required and must be a string", field="image")

    if not IMAGE_PATTERN.match(image):
        raise ValidationError(f"Invalid image reference: {image}", field="image")


def validate_hostname(hostname: Any) -> None:
    """Validate an ingress hostname."""
    if not hostname or not isinstance(hostname, str):
        raise ValidationError("Hostname is required and must be a string", field="host")

    if not HOSTNAME_PATTERN.match(hostname):
        raise ValidationError(f"Invalid hostname: {hostname}", field="host")

    if len(hostname) > HOSTNAME_MAX_LENGTH:
        raise ValidationError(
            f"Hostname '{hostname}' must be no more than {HOSTNAME_MAX_LENGTH} characters",
            field="host",
        )


def validate_replicas(replicas: Any) -> None:
    """Validate a replica count (0 to MAX_REPLICAS inclusive)."""
    # bool is an int subclass
    if isinstance(replicas, bool) or not isinstance(replicas, int) or replicas < 0:
        raise ValidationError("Replicas must be a non-negative integer", field="replicas")

    if replicas > MAX_REPLICAS:
        raise ValidationError(
            f"Replicas cannot exceed {MAX_REPLICAS} for safety reasons", field="replicas"
        )


def validate_environment_variables(env: Optional[Mapping[Any, Any]]) -> None:
    """
    Validate environment variables for a container.

    A missing map is not an error. Keys must be valid shell identifiers and
    values must be strings.
    """
    if env is None:
        return

    if not isinstance(env, Mapping):
        raise ValidationError("Environment variables must be a mapping", field="env")

    for key, value in env.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValidationError(
                "Environment variables must be string key-value pairs", field="env"
            )

        if not ENV_KEY_PATTERN.match(key):
            raise ValidationError(f"Invalid environment variable name: {key}", field="env")


def sanitize_resource_name(text: str) -> str:
    """
    Turn arbitrary text into a string usable as a resource name.

    Example:
        >>> sanitize_resource_name("My App_v2!")
        'my-app-v2'
    """
    name = re.sub(r"[^a-z0-9-]", "-", text.lower())
    name = re.sub(r"-+", "-", name).strip("-")
    return name[:NAME_MAX_LENGTH].rstrip("-")
