"""
Control-plane access for Atlas resources.

ControlPlane is the narrow surface the reconcile engine, the aggregator and
the bootstrap need. KubernetesControlPlane implements it over the official
client; tests substitute an AsyncMock.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from ...config.provider import KubernetesConfig

logger = logging.getLogger(__name__)


class ControlPlane(Protocol):
    """
    Protocol for control-plane clients.

    Custom objects are addressed by (group, version, plural, name?, namespace?).
    A namespace of None means cluster-scoped addressing. Payloads are plain
    JSON-compatible dicts.
    """

    async def create(
        self, group: str, version: str, plural: str, body: Dict[str, Any], namespace: Optional[str] = None
    ) -> Dict[str, Any]:
        ...

    async def replace(
        self,
        group: str,
        version: str,
        plural: str,
        name: str,
        body: Dict[str, Any],
        namespace: Optional[str] = None,
    ) -> Dict[str, Any]:
        ...

    async def get(
        self, group: str, version: str, plural: str, name: str, namespace: Optional[str] = None
    ) -> Dict[str, Any]:
        ...

    async def delete(
        self, group: str, version: str, plural: str, name: str, namespace: Optional[str] = None
    ) -> Dict[str, Any]:
        ...

    async def list(
        self, group: str, version: str, plural: str, namespace: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        ...

    async def list_nodes(self) -> List[Dict[str, Any]]:
        ...

    async def list_namespaces(self) -> List[Dict[str, Any]]:
        ...

    async def ping(self) -> None:
        """Cheap read proving the API server is reachable."""
        ...


def is_conflict(exc: BaseException) -> bool:
    """True when the API server reported that the object already exists."""
    return isinstance(exc, ApiException) and exc.status == 409


def is_not_found(exc: BaseException) -> bool:
    """True when the API server reported that the object does not exist."""
    return isinstance(exc, ApiException) and exc.status == 404


def describe_failure(exc: BaseException) -> Dict[str, Any]:
    """Status/reason details for a failed call, for KubernetesError payloads."""
    if isinstance(exc, ApiException):
        return {"status": exc.status, "reason": exc.reason}
    return {"error": type(exc).__name__}


class KubernetesControlPlane:
    """
    Thin async wrapper around the Kubernetes Python client.

    Blocking client calls run in a worker thread. Each instance owns its
    ApiClient, so nothing is configured process-wide.
    """

    def __init__(self, api_client: client.ApiClient):
        self._api_client = api_client
        self._custom = client.CustomObjectsApi(api_client)
        self._core = client.CoreV1Api(api_client)

    @classmethod
    def from_config(cls, kube_config: KubernetesConfig) -> "KubernetesControlPlane":
        """
        Build a client from in-cluster credentials or a kubeconfig file.

        Raises:
            kubernetes.config.ConfigException: If no usable configuration exists
        """
        if kube_config.in_cluster:
            configuration = client.Configuration()
            config.load_incluster_config(client_configuration=configuration)
            logger.info("Using in-cluster Kubernetes configuration")
            return cls(client.ApiClient(configuration))

        api_client = config.new_client_from_config(
            config_file=kube_config.kubeconfig, context=kube_config.context
        )
        logger.info(
            "Using local Kubernetes configuration"
            + (f" (context {kube_config.context})" if kube_config.context else "")
        )
        return cls(api_client)

    def _serialize(self, obj: Any) -> Any:
        return self._api_client.sanitize_for_serialization(obj)

    async def create(
        self, group: str, version: str, plural: str, body: Dict[str, Any], namespace: Optional[str] = None
    ) -> Dict[str, Any]:
        if namespace:
            return await asyncio.to_thread(
                self._custom.create_namespaced_custom_object, group, version, namespace, plural, body
            )
        return await asyncio.to_thread(
            self._custom.create_cluster_custom_object, group, version, plural, body
        )

    async def replace(
        self,
        group: str,
        version: str,
        plural: str,
        name: str,
        body: Dict[str, Any],
        namespace: Optional[str] = None,
    ) -> Dict[str, Any]:
        if namespace:
            return await asyncio.to_thread(
                self._custom.replace_namespaced_custom_object,
                group,
                version,
                namespace,
                plural,
                name,
                body,
            )
        return await asyncio.to_thread(
            self._custom.replace_cluster_custom_object, group, version, plural, name, body
        )

    async def get(
        self, group: str, version: str, plural: str, name: str, namespace: Optional[str] = None
    ) -> Dict[str, Any]:
        if namespace:
            return await asyncio.to_thread(
                self._custom.get_namespaced_custom_object, group, version, namespace, plural, name
            )
        return await asyncio.to_thread(
            self._custom.get_cluster_custom_object, group, version, plural, name
        )

    async def delete(
        self, group: str, version: str, plural: str, name: str, namespace: Optional[str] = None
    ) -> Dict[str, Any]:
        if namespace:
            return await asyncio.to_thread(
                self._custom.delete_namespaced_custom_object, group, version, namespace, plural, name
            )
        return await asyncio.to_thread(
            self._custom.delete_cluster_custom_object, group, version, plural, name
        )

    async def list(
        self, group: str, version: str, plural: str, namespace: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        if namespace:
            response = await asyncio.to_thread(
                self._custom.list_namespaced_custom_object, group, version, namespace, plural
            )
        else:
            response = await asyncio.to_thread(
                self._custom.list_cluster_custom_object, group, version, plural
            )
        return list(response.get("items", []))

    async def list_nodes(self) -> List[Dict[str, Any]]:
        nodes = await asyncio.to_thread(self._core.list_node)
        return [self._serialize(node) for node in nodes.items]

    async def list_namespaces(self) -> List[Dict[str, Any]]:
        namespaces = await asyncio.to_thread(self._core.list_namespace)
        return [self._serialize(ns) for ns in namespaces.items]

    async def ping(self) -> None:
        await asyncio.to_thread(self._core.list_namespace, limit=1)

    def close(self) -> None:
        self._api_client.close()
