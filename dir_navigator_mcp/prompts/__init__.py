"""Prompt texts served by the navigator MCP server."""

from .system import get_prompts as get_system_prompts


def get_all_prompts() -> dict[str, str]:
    """
    Returns every prompt the server registers, keyed by prompt name.
    """
    prompts = {}
    prompts.update(get_system_prompts())
    return prompts


__all__ = ["get_all_prompts"]
