"""
MCP server definition for the Dir Navigator MCP.
"""

import logging
from typing import Any, Optional

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from dir_navigator_mcp.prompts import get_all_prompts
from dir_navigator_mcp.tools.base import ToolExecResult
from dir_navigator_mcp.utils.config import ServiceConfig
from dir_navigator_mcp.utils.dependencies import (
    get_base_config,
    get_navigator_tool_provider,
    get_session_manager,
)


# Get a module-level logger
logger = logging.getLogger(__name__)


class CustomFastMCP(FastMCP):
    """Custom FastMCP server with CORS middleware."""

    def _add_cors_middleware(self, app: Starlette) -> Starlette:
        """A helper to add CORS middleware to a Starlette app."""
        app.user_middleware.insert(
            0,
            Middleware(
                CORSMiddleware,
                allow_origin_regex=".*",  # Allow any origin
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        )
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        """Overrides the default sse_app to inject CORS middleware."""
        app = super().sse_app(mount_path)
        return self._add_cors_middleware(app)

    def streamable_http_app(self) -> Starlette:
        """Overrides the default streamable_http_app to inject CORS middleware."""
        app = super().streamable_http_app()
        return self._add_cors_middleware(app)


def build_server(config: ServiceConfig) -> CustomFastMCP:
    """Build and configure the FastMCP server instance.

    Args:
        config: The server's service configuration.

    Returns:
        A configured CustomFastMCP instance.
    """
    logger.info(
        "Initializing FastMCP server",
        extra={"host": config.MCP_HOST, "port": config.MCP_PORT},
    )
    return CustomFastMCP(
        "dir-navigator-mcp",
        host=config.MCP_HOST,
        port=config.MCP_PORT,
    )


def to_response(result: ToolExecResult) -> dict[str, Any]:
    """Converts a tool result into the dictionary returned to MCP clients."""
    if result.error:
        response = {"status": "error", "error": result.error, "exit_code": result.error_code}
        if "error_kind" in result.data:
            response["error_kind"] = result.data["error_kind"]
    else:
        response = {"status": "success", "result": result.output, "exit_code": result.error_code}
    response["data"] = result.data
    return response


# Get the base configuration for server initialization.
# This is also imported by main.py to run the server.
server_config = get_base_config()
mcp_app = build_server(server_config)


# --- Prompt Handlers ---
@mcp_app.prompt(title="Agent System Prompt for the Directory Navigator")
def get_system_prompt() -> str:
    """Provides the main system prompt for the agent."""
    prompts = get_all_prompts()
    return prompts["navigator-system-prompt"]

# --- Tool Definitions ---

@mcp_app.tool(name="navigator")
async def navigator_tool(
    context: Context,
    command: str,
    target: Optional[str] = None,
    session_id: str = "default",
) -> dict[str, Any]:
    """
    Browse and modify the directory tree under the configured root, one level at a time.

    Args:
        command: One of 'ls', 'open', 'back', 'up', 'refresh', 'pwd', 'history',
            'create_file', 'create_directory', 'delete', 'delete_file', 'delete_directory'.
        target: Entry name or path relative to the current directory. Required for
            'open', the 'create_*' commands and the 'delete*' commands.
        session_id: Independent navigation session to use. Defaults to 'default'.

    Returns:
        A dictionary containing the result of the command and the current snapshot.
    """
    logger.info(f"Executing navigator command '{command}' (session '{session_id}', target {target!r})")
    try:
        tool = get_navigator_tool_provider()
        session = get_session_manager().get_session(session_id)
        args = {
            "command": command,
            "target": target,
            "_session": session,
        }
        # Filter out None values so we don't pass them to the tool
        args = {k: v for k, v in args.items() if v is not None}

        result = await tool.execute(args)
        return to_response(result)

    except Exception as e:
        logger.error(f"Error executing navigator command: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool(name="close_session")
async def close_session(
    context: Context,
    session_id: str,
) -> dict[str, Any]:
    """
    Ends a navigation session and forgets its history.

    Args:
        session_id: The session to close.

    Returns:
        A dictionary telling whether the session existed.
    """
    logger.info(f"Closing navigation session '{session_id}'")
    closed = get_session_manager().close(session_id)
    if not closed:
        return {"status": "error", "error": f"No session named '{session_id}'.", "exit_code": -1}
    return {"status": "success", "result": f"Session '{session_id}' closed.", "exit_code": 0}
