"""
Mini-Atlas error taxonomy.

Every failure that reaches a tool caller is one of:
- ValidationError: input rejected before any network call
- ResourceNotFoundError: get/delete target does not exist
- KubernetesError: any other control-plane failure, cause attached

BootstrapError is fatal and never returned to a caller.
"""

from typing import Any, Dict, Optional


class AtlasError(Exception):
    """Base class for all Mini-Atlas errors."""

    def __init__(self, message: str, code: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON-RPC error payloads."""
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(AtlasError):
    """Caller-supplied input failed a validation rule."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR", {"field": field})
        self.field = field


class ResourceNotFoundError(AtlasError):
    """A get/delete targeted a resource that does not exist."""

    def __init__(self, kind: str, name: str, namespace: Optional[str] = None):
        super().__init__(
            f"{kind} '{name}' not found",
            "RESOURCE_NOT_FOUND",
            {"resource": kind, "name": name, "namespace": namespace},
        )
        self.kind = kind
        self.name = name
        self.namespace = namespace


class KubernetesError(AtlasError):
    """Any other control-plane failure. The original exception is chained."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "KUBERNETES_ERROR", details)


class BootstrapError(AtlasError):
    """Connectivity to the control plane could not be established."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message, "BOOTSTRAP_FAILED", {"attempts": attempts})
        self.attempts = attempts


class UnknownToolError(AtlasError):
    """A tool name outside the catalogue was requested."""

    def __init__(self, name: str):
        super().__init__(f"Tool {name} not found", "METHOD_NOT_FOUND", {"tool": name})
        self.name = name
