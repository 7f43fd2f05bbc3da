"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class KubernetesConfig:
    """Kubernetes client configuration."""
    in_cluster: bool
    kubeconfig: Optional[str]
    context: Optional[str]


@dataclass
class ServerConfig:
    """Transport configuration."""
    transport: str  # "stdio" or "http"
    host: str
    port: int
    log_level: str
    environment: str

    @property
    def is_http(self) -> bool:
        """Check if the HTTP transport is selected."""
        return self.transport == "http"


@dataclass
class BootstrapConfig:
    """Startup connectivity check configuration."""
    max_attempts: int = 3
    base_delay: float = 1.0  # seconds


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_kubernetes_config(self) -> KubernetesConfig:
        """Get Kubernetes client configuration."""
        ...

    def get_server_config(self) -> ServerConfig:
        """Get transport configuration."""
        ...

    def get_bootstrap_config(self) -> BootstrapConfig:
        """Get startup connectivity check configuration."""
        ...


def is_in_cluster() -> bool:
    """Check if running inside a Kubernetes pod."""
    return bool(os.getenv("KUBERNETES_SERVICE_HOST"))


def is_development() -> bool:
    """Check if running in development mode."""
    return _environment() == "development"


def _environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("NODE_ENV") or "production").lower()


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_kubernetes_config(self) -> KubernetesConfig:
        """Get Kubernetes client configuration from environment variables."""
        return KubernetesConfig(
            in_cluster=is_in_cluster(),
            kubeconfig=os.getenv("KUBECONFIG") or None,
            context=os.getenv("KUBE_CONTEXT") or None,
        )

    def get_server_config(self) -> ServerConfig:
        """
        Get transport configuration from environment variables.

        Setting MCP_HTTP_PORT selects the HTTP transport unless MCP_TRANSPORT
        says otherwise.
        """
        http_port = os.getenv("MCP_HTTP_PORT")
        transport = os.getenv("MCP_TRANSPORT", "http" if http_port else "stdio").lower()
        if transport not in ("stdio", "http"):
            raise ValueError(f"MCP_TRANSPORT must be 'stdio' or 'http', got '{transport}'")

        return ServerConfig(
            transport=transport,
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=_int_env("MCP_HTTP_PORT", "8080"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            environment=_environment(),
        )

    def get_bootstrap_config(self) -> BootstrapConfig:
        """Get startup connectivity check configuration from environment variables."""
        max_attempts = _int_env("BOOTSTRAP_MAX_ATTEMPTS", "3")
        if max_attempts < 1:
            raise ValueError("BOOTSTRAP_MAX_ATTEMPTS must be at least 1")

        return BootstrapConfig(
            max_attempts=max_attempts,
            base_delay=_int_env("BOOTSTRAP_BASE_DELAY_MS", "1000") / 1000,
        )
