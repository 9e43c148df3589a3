"""Pokemon MCP server: PokeAPI lookups exposed as callable tools over HTTP."""

__version__ = "0.1.0"
