"""
Shared pytest fixtures for Mini-Atlas tests.

This module provides common fixtures including:
- FakeControlPlane: In-memory custom-object store that answers like the API server
- ApiException factories for scripted failures
- Sample node/namespace payloads for cluster status tests
"""

import os
import sys
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

import pytest
from kubernetes.client.exceptions import ApiException

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# =============================================================================
# ApiException factories
# =============================================================================

REASONS = {
    404: "Not Found",
    409: "Conflict",
    403: "Forbidden",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def api_exception(status: int, reason: Optional[str] = None) -> ApiException:
    """Build an ApiException as the Kubernetes client raises it."""
    return ApiException(status=status, reason=reason or REASONS.get(status, "Error"))


# =============================================================================
# Fake control plane
# =============================================================================

Key = Tuple[str, str, str, Optional[str], str]


class FakeControlPlane:
    """
    In-memory control plane.

    Objects are keyed by (group, version, plural, namespace, name). create
    raises 409 for an existing key; get/replace/delete raise 404 for a
    missing one. Any method can be scripted to fail through ``fail``.
    Every call is recorded in ``calls`` as (method, args).
    """

    def __init__(self):
        self.objects: Dict[Key, Dict[str, Any]] = {}
        self.nodes: List[Dict[str, Any]] = []
        self.namespaces: List[Dict[str, Any]] = [{"metadata": {"name": "default"}}]
        self.failures: Dict[Tuple[str, Optional[str]], BaseException] = {}
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.ping = AsyncMock(return_value=None)

    def fail(self, method: str, exc: BaseException, plural: Optional[str] = None) -> None:
        """Make ``method`` (optionally only for ``plural``) raise ``exc``."""
        self.failures[(method, plural)] = exc

    def seed(self, group: str, version: str, plural: str, body: Dict[str, Any]) -> None:
        metadata = body["metadata"]
        self.objects[(group, version, plural, metadata.get("namespace"), metadata["name"])] = body

    def calls_to(self, method: str) -> List[Tuple[Any, ...]]:
        return [args for name, args in self.calls if name == method]

    def _check(self, method: str, plural: Optional[str] = None) -> None:
        for key in ((method, plural), (method, None)):
            if key in self.failures:
                raise self.failures[key]

    async def create(self, group, version, plural, body, namespace=None):
        self.calls.append(("create", (group, version, plural, body, namespace)))
        self._check("create", plural)
        key = (group, version, plural, namespace, body["metadata"]["name"])
        if key in self.objects:
            raise api_exception(409)
        self.objects[key] = body
        return body

    async def replace(self, group, version, plural, name, body, namespace=None):
        self.calls.append(("replace", (group, version, plural, name, body, namespace)))
        self._check("replace", plural)
        key = (group, version, plural, namespace, name)
        if key not in self.objects:
            raise api_exception(404)
        self.objects[key] = body
        return body

    async def get(self, group, version, plural, name, namespace=None):
        self.calls.append(("get", (group, version, plural, name, namespace)))
        self._check("get", plural)
        key = (group, version, plural, namespace, name)
        if key not in self.objects:
            raise api_exception(404)
        return self.objects[key]

    async def delete(self, group, version, plural, name, namespace=None):
        self.calls.append(("delete", (group, version, plural, name, namespace)))
        self._check("delete", plural)
        key = (group, version, plural, namespace, name)
        if key not in self.objects:
            raise api_exception(404)
        del self.objects[key]
        return {"status": "Success"}

    async def list(self, group, version, plural, namespace=None):
        self.calls.append(("list", (group, version, plural, namespace)))
        self._check("list", plural)
        return [
            body
            for (g, v, p, ns, _), body in self.objects.items()
            if (g, v, p) == (group, version, plural) and (namespace is None or ns == namespace)
        ]

    async def list_nodes(self):
        self.calls.append(("list_nodes", ()))
        self._check("list_nodes")
        return list(self.nodes)

    async def list_namespaces(self):
        self.calls.append(("list_namespaces", ()))
        self._check("list_namespaces")
        return list(self.namespaces)


def atlas_object(kind: str, name: str, namespace: Optional[str] = None, **spec) -> Dict[str, Any]:
    """A custom object as the API server would return it."""
    metadata: Dict[str, Any] = {"name": name, "uid": f"uid-{name}", "resourceVersion": "1"}
    if namespace:
        metadata["namespace"] = namespace
    return {
        "apiVersion": "kro.run/v1alpha1",
        "kind": kind,
        "metadata": metadata,
        "spec": spec,
        "status": {"state": "ACTIVE"},
    }


def node(name: str, ready: bool = True, roles: Tuple[str, ...] = (), version: str = "v1.29.2"):
    """A serialized V1Node."""
    labels = {"kubernetes.io/hostname": name}
    labels.update({f"node-role.kubernetes.io/{role}": "" for role in roles})
    return {
        "metadata": {"name": name, "labels": labels},
        "status": {
            "conditions": [
                {"type": "MemoryPressure", "status": "False"},
                {"type": "Ready", "status": "True" if ready else "False"},
            ],
            "nodeInfo": {"kubeletVersion": version},
        },
    }


@pytest.fixture
def control_plane():
    """Empty in-memory control plane."""
    return FakeControlPlane()


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring a real cluster"
    )
