"""Tool registry exposed through /tools and /tools/call."""
from .pokemon_tools import POKEMON_TOOLS, TOOL_NAMES, execute_pokemon_tool

__all__ = [
    "POKEMON_TOOLS",
    "TOOL_NAMES",
    "execute_pokemon_tool",
]
