"""
Validation Module - Black Box Interface

Purpose: Reject malformed tool input before anything reaches the cluster
Interface: validate_*() predicates, sanitize_resource_name()
Hidden: Naming patterns and limits

Every request type passes through these functions before a resource
document is built.
"""

from .validators import (
    MAX_REPLICAS,
    sanitize_resource_name,
    validate_environment_variables,
    validate_hostname,
    validate_image_reference,
    validate_namespace,
    validate_replicas,
    validate_resource_name,
)

__all__ = [
    "MAX_REPLICAS",
    "sanitize_resource_name",
    "validate_environment_variables",
    "validate_hostname",
    "validate_image_reference",
    "validate_namespace",
    "validate_replicas",
    "validate_resource_name",
]
