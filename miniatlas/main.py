#!/usr/bin/env python3
"""
Mini-Atlas - HTTP Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Builds the service and checks Kubernetes connectivity
3. Serves MCP JSON-RPC, health and metrics over HTTP

All business logic is in the modules, following black box principles.
"""

import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional, Union

import uvicorn
from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from miniatlas import __version__
from miniatlas.config.provider import ConfigProvider, EnvConfigProvider
from miniatlas.logging_config import get_logging_config
from miniatlas.modules.errors import (
    AtlasError,
    ResourceNotFoundError,
    UnknownToolError,
    ValidationError,
)
from miniatlas.modules.operations import AtlasFactory, AtlasService
from miniatlas.modules.tools import ToolDispatcher

# Configuration provider (centralized config access)
config_provider: ConfigProvider = EnvConfigProvider()
server_config = config_provider.get_server_config()

# Configure logging with health check suppression
log_config.dictConfig(get_logging_config(server_config.log_level))
logger = logging.getLogger(__name__)

# Module instances (initialized at startup)
atlas_service: Optional[AtlasService] = None
tool_dispatcher: Optional[ToolDispatcher] = None

# JSON-RPC error codes
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
RESOURCE_NOT_FOUND = -32004
INTERNAL_ERROR = -32603


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - build the service and verify connectivity.
    """
    global atlas_service, tool_dispatcher

    # Startup
    logger.info("Starting Mini-Atlas MCP server (HTTP transport)...")

    atlas_service = AtlasFactory.build(config_provider)
    # BootstrapError propagates and aborts startup
    await AtlasFactory.build_bootstrap(config_provider, atlas_service).ensure_connected()
    tool_dispatcher = ToolDispatcher(atlas_service)

    logger.info(
        f"Mini-Atlas MCP server started ({len(tool_dispatcher.list_tools())} tools, "
        f"environment={server_config.environment})"
    )

    yield

    # Shutdown
    logger.info("Shutting down Mini-Atlas MCP server...")
    close = getattr(atlas_service.control_plane, "close", None)
    if close:
        close()
    logger.info("Mini-Atlas MCP server shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Mini-Atlas MCP Server",
    description="Mini-Atlas - Tenant workloads on Kubernetes through MCP tools",
    version=__version__,
    lifespan=lifespan,
)


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request envelope."""

    jsonrpc: str = Field(default="2.0", pattern=r"^2\.0$")
    id: Optional[Union[int, str]] = None
    method: str
    params: Dict[str, Any] = Field(default_factory=dict)


def _rpc_result(request_id: Optional[Union[int, str]], result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _rpc_error(
    request_id: Optional[Union[int, str]],
    code: int,
    message: str,
    status_code: int,
    data: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return JSONResponse(
        status_code=status_code,
        content={"jsonrpc": "2.0", "id": request_id, "error": error},
    )


async def _dispatch(dispatcher: ToolDispatcher, method: str, params: Dict[str, Any]) -> Any:
    """Run one JSON-RPC method against the dispatcher."""
    if method == "tools/list":
        return {"tools": [tool.to_dict() for tool in dispatcher.list_tools()]}

    if method == "tools/call":
        name = params.get("name")
        if not isinstance(name, str):
            raise ValidationError("Tool name is required", field="name")
        text = await dispatcher.call_tool(name, params.get("arguments") or {})
        return {"content": [{"type": "text", "text": text}]}

    if method == "resources/list":
        return {"resources": [resource.to_dict() for resource in dispatcher.list_resources()]}

    if method == "resources/read":
        uri = params.get("uri")
        if not isinstance(uri, str):
            raise ValidationError("Resource URI is required", field="uri")
        text = await dispatcher.read_resource(uri)
        return {"contents": [{"uri": uri, "mimeType": "application/json", "text": text}]}

    raise UnknownToolError(method)


# MCP Endpoint


@app.post("/mcp")
async def mcp_endpoint(payload: JsonRpcRequest):
    """
    MCP over HTTP (JSON-RPC 2.0).

    Supports tools/list, tools/call, resources/list and resources/read.

    Returns:
        200: JSON-RPC result
        400: Unknown method or invalid parameters
        404: Target resource not found
        500: Any other failure
    """
    if not tool_dispatcher:
        return _rpc_error(payload.id, INTERNAL_ERROR, "Service not initialized", 503)

    try:
        result = await _dispatch(tool_dispatcher, payload.method, payload.params)
        return _rpc_result(payload.id, result)
    except UnknownToolError as e:
        if payload.method == "tools/call":
            return _rpc_error(payload.id, METHOD_NOT_FOUND, e.message, 400, e.to_dict())
        return _rpc_error(payload.id, METHOD_NOT_FOUND, f"Method {payload.method} not found", 400)
    except ValidationError as e:
        return _rpc_error(payload.id, INVALID_PARAMS, e.message, 400, e.to_dict())
    except ResourceNotFoundError as e:
        return _rpc_error(payload.id, RESOURCE_NOT_FOUND, e.message, 404, e.to_dict())
    except AtlasError as e:
        logger.error(f"MCP request {payload.method} failed: {e.message}")
        return _rpc_error(payload.id, INTERNAL_ERROR, e.message, 500, e.to_dict())
    except Exception as e:
        logger.exception(f"Unexpected error handling {payload.method}")
        return _rpc_error(payload.id, INTERNAL_ERROR, str(e), 500)


# Health/Monitoring Endpoints


@app.get("/healthz")
async def healthz():
    """
    Minimal health check endpoint for Kubernetes readiness and liveness checks.

    Returns:
        200: Service is running
    """
    return {"status": "ok"}


@app.get("/health")
async def health_check():
    """
    Health check that pings the Kubernetes API once.

    Returns:
        200: Service healthy
        503: Service unhealthy
    """
    if not atlas_service:
        return JSONResponse(
            status_code=503, content={"status": "unhealthy", "error": "Service not initialized"}
        )

    health = await atlas_service.check_health()
    content = health.model_dump(mode="json", exclude_none=True)
    content["version"] = __version__
    content["environment"] = server_config.environment
    if health.status != "healthy":
        return JSONResponse(status_code=503, content=content)
    return content


@app.get("/metrics")
async def metrics():
    """
    Prometheus-compatible metrics endpoint.

    Returns Atlas resource totals per kind.
    """
    if not atlas_service:
        return Response(content="", status_code=503)

    totals = await atlas_service.get_metrics()

    # Format as Prometheus metrics
    metrics_text = f"""# HELP miniatlas_resources_total Number of Atlas resources by kind
# TYPE miniatlas_resources_total gauge
miniatlas_resources_total{{kind="workspace"}} {totals.workspaces_total}
miniatlas_resources_total{{kind="webapplication"}} {totals.applications_total}
miniatlas_resources_total{{kind="infrastructure"}} {totals.infrastructure_total}
miniatlas_resources_total{{kind="topic"}} {totals.topics_total}
"""

    return Response(content=metrics_text, media_type="text/plain")


if __name__ == "__main__":
    # Use dict config for logging, not file path
    uvicorn.run(
        "miniatlas.main:app",
        host=server_config.host,
        port=server_config.port,
        log_level=server_config.log_level.lower(),
        log_config=get_logging_config(server_config.log_level),
    )
