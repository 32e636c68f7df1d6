"""
Configuration and dependency management for the Dir Navigator MCP server.
"""

import logging
from functools import lru_cache

from dir_navigator_mcp.utils.config import ServiceConfig
from dir_navigator_mcp.utils.session_manager import SessionManager
from dir_navigator_mcp.tools.navigator_tool import NavigatorTool

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    This function is cached to avoid repeatedly reading and parsing environment
    variables and .env files.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


@lru_cache
def get_session_manager() -> SessionManager:
    """
    Returns the singleton SessionManager rooted at the configured directory.

    Raises:
        ConfigError: If NAVIGATOR_ROOT does not name an existing directory.
    """
    config = get_base_config()
    logger.info(f"Initializing SessionManager singleton at {config.NAVIGATOR_ROOT}.")
    return SessionManager(config.NAVIGATOR_ROOT)


@lru_cache
def get_navigator_tool_provider() -> NavigatorTool:
    """Returns a cached instance of the NavigatorTool."""
    logger.info("Initializing NavigatorTool singleton.")
    return NavigatorTool(timeout=get_base_config().FS_TIMEOUT_SECONDS)
