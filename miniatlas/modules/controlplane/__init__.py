"""
Control Plane Module - Black Box Interface

Purpose: Talk to the Kubernetes API server
Interface: ControlPlane protocol, KubernetesControlPlane, is_conflict(), is_not_found()
Hidden: kubernetes client configuration, thread offloading, serialization

Any object satisfying ControlPlane can be handed to the other modules.
"""

from .client import (
    ControlPlane,
    KubernetesControlPlane,
    describe_failure,
    is_conflict,
    is_not_found,
)

__all__ = [
    "ControlPlane",
    "KubernetesControlPlane",
    "describe_failure",
    "is_conflict",
    "is_not_found",
]
