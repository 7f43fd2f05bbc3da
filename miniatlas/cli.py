"""Command-line entry point: serve Mini-Atlas over stdio or HTTP."""

import asyncio
import logging
import os
from typing import Optional

import click
import uvicorn
from dotenv import load_dotenv
from kubernetes.config import ConfigException

from miniatlas.config.provider import EnvConfigProvider
from miniatlas.logging_config import configure_logging, get_logging_config
from miniatlas.modules.errors import BootstrapError
from miniatlas.modules.mcp import run_stdio
from miniatlas.modules.operations import AtlasFactory
from miniatlas.modules.tools import ToolDispatcher

load_dotenv()

logger = logging.getLogger("miniatlas.cli")


async def serve_stdio(config_provider: EnvConfigProvider) -> None:
    """Verify connectivity, then serve MCP on stdin/stdout."""
    service = AtlasFactory.build(config_provider)
    await AtlasFactory.build_bootstrap(config_provider, service).ensure_connected()
    await run_stdio(ToolDispatcher(service))


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default=None,
    help="Transport (default: http when MCP_HTTP_PORT is set, else stdio)",
)
@click.option("--host", "host", default=None, help="HTTP bind address")
@click.option("--port", "port", type=int, default=None, help="HTTP port")
@click.option("--log-level", "log_level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
def main(transport: Optional[str], host: Optional[str], port: Optional[int], log_level: Optional[str]):
    """Mini-Atlas MCP server."""
    config_provider = EnvConfigProvider()
    server_config = config_provider.get_server_config()

    transport = transport or server_config.transport
    host = host or server_config.host
    port = port or server_config.port
    log_level = (log_level or server_config.log_level).upper()

    if transport == "http":
        # miniatlas.main reads its settings from the environment at import
        os.environ["LOG_LEVEL"] = log_level
        uvicorn.run(
            "miniatlas.main:app",
            host=host,
            port=port,
            log_level=log_level.lower(),
            log_config=get_logging_config(log_level),
        )
        return

    configure_logging(log_level)
    try:
        asyncio.run(serve_stdio(config_provider))
    except BootstrapError as e:
        logger.error(f"Failed to start server: {e.message}")
        raise SystemExit(1)
    except ConfigException as e:
        logger.error(f"Failed to load Kubernetes configuration: {e}")
        raise SystemExit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
