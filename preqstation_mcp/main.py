"""Entry point for the PREQSTATION MCP server (stdio)."""
import argparse
import asyncio
import sys
from typing import Optional, Sequence

from preqstation_mcp import __version__
from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.config import ConfigError, Settings, load_settings
from preqstation_mcp.mcp.server import MCPServer
from preqstation_mcp.mcp.tools import register_all_tools
from preqstation_mcp.mcp.transport import build_protocol_server, run_stdio
from preqstation_mcp.utils.logger import configure_logging, get_logger

logger = get_logger("preqstation-mcp")


def build_registry(api_client: PreqApiClient) -> MCPServer:
    """Create the tool registry with every PREQSTATION tool registered"""
    mcp_server = MCPServer("preqstation-mcp")
    register_all_tools(mcp_server, api_client)
    logger.info("MCP Server initialized", tools=mcp_server.list_tools())
    return mcp_server


async def serve(settings: Settings) -> None:
    """Run the stdio server until the client disconnects"""
    async with PreqApiClient(settings.api_url, settings.token) as api_client:
        registry = build_registry(api_client)
        server = build_protocol_server(registry, settings.default_engine)
        await run_stdio(server)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="preqstation-mcp",
        description="MCP stdio server for PREQSTATION task management",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Override PREQSTATION_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging(args.log_level or "INFO")
        logger.critical(str(e))
        sys.exit(1)

    configure_logging(args.log_level or settings.log_level)
    logger.info(
        "Starting PREQSTATION MCP server",
        version=__version__,
        api_url=settings.api_url,
        default_engine=settings.default_engine.value,
    )

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("PREQSTATION MCP server interrupted")
    except Exception as e:
        logger.critical("PREQSTATION MCP server failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
