"""
Operations Factory following Black Box Design principles.

This factory:
- Builds the control-plane client from configuration
- Wires it into the service facade
- Returns only the service (hiding implementation)
"""

import logging
from typing import Optional

from ...config.provider import ConfigProvider
from ..bootstrap import ConnectivityBootstrap
from ..controlplane import ControlPlane, KubernetesControlPlane
from .service import AtlasService

logger = logging.getLogger(__name__)


class AtlasFactory:
    """
    Composition root for the operation layer.

    The control-plane client is created once per process here and handed
    explicitly to every module that needs it.
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        control_plane: Optional[ControlPlane] = None,
    ) -> AtlasService:
        """
        Build the service.

        Args:
            config_provider: Configuration provider
            control_plane: Pre-built client (tests); built from config when omitted

        Returns:
            AtlasService facade
        """
        if control_plane is None:
            control_plane = KubernetesControlPlane.from_config(
                config_provider.get_kubernetes_config()
            )
        return AtlasService(control_plane)

    @staticmethod
    def build_bootstrap(
        config_provider: ConfigProvider, service: AtlasService
    ) -> ConnectivityBootstrap:
        """Startup connectivity check against the service's control plane."""
        return ConnectivityBootstrap(service.control_plane, config_provider.get_bootstrap_config())
