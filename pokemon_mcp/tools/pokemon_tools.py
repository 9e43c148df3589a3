import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, StrictStr, ValidationError

from pokemon_mcp.clients.pokeapi_client import APIClientError
from pokemon_mcp.models import SchemaProperty, ToolDescriptor, ToolInputSchema, ToolResponse
from pokemon_mcp.services.pokemon_service import PokemonService

logger = logging.getLogger(__name__)

ERROR_PREFIX = "❌ Error: "


class IdentifierArguments(BaseModel):
    identifier: StrictStr


def _identifier_schema() -> ToolInputSchema:
    return ToolInputSchema(
        properties={
            "identifier": SchemaProperty(
                type="string",
                description='Pokemon name or ID number (e.g., "pikachu", "25", "charizard")',
            )
        },
        required=["identifier"],
    )


POKEMON_TOOLS: list[ToolDescriptor] = [
    ToolDescriptor(
        name="get_pokemon",
        description=(
            "Get detailed Pokemon information including stats, abilities, "
            "types, description, and sprites"
        ),
        input_schema=_identifier_schema(),
    ),
    ToolDescriptor(
        name="get_pokemon_basic",
        description="Get basic Pokemon information (name, ID, height, weight, base experience)",
        input_schema=_identifier_schema(),
    ),
]

TOOL_NAMES: list[str] = [tool.name for tool in POKEMON_TOOLS]


class ToolArgumentsError(ValueError):
    pass


def _parse_identifier(tool_name: str, arguments: Any) -> str:
    try:
        return IdentifierArguments.model_validate(arguments).identifier
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        )
        raise ToolArgumentsError(f"Invalid arguments for {tool_name}: {problems}") from e


async def _run_get_pokemon(service: PokemonService, arguments: Any) -> str:
    return await service.get_pokemon(_parse_identifier("get_pokemon", arguments))


async def _run_get_pokemon_basic(service: PokemonService, arguments: Any) -> str:
    return await service.get_pokemon_basic(_parse_identifier("get_pokemon_basic", arguments))


TOOL_HANDLERS: dict[str, Callable[[PokemonService, Any], Awaitable[str]]] = {
    "get_pokemon": _run_get_pokemon,
    "get_pokemon_basic": _run_get_pokemon_basic,
}


def error_response(message: str) -> ToolResponse:
    return ToolResponse.from_text(f"{ERROR_PREFIX}{message}")


async def execute_pokemon_tool(
    name: str, arguments: Any, service: PokemonService
) -> ToolResponse:
    """
    Runs a registered tool and wraps its output as text content.

    Never raises: unknown tools, invalid arguments and upstream failures are
    all returned as error text so that callers always get a tool response.
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        return error_response(f"Unknown tool: {name}")

    try:
        text = await handler(service, {} if arguments is None else arguments)
    except ToolArgumentsError as e:
        logger.info(str(e))
        return error_response(str(e))
    except APIClientError as e:
        logger.warning(f"Tool {name} failed upstream: {e.detail}")
        return error_response(e.detail)
    except Exception as e:
        logger.exception(f"Tool {name} failed unexpectedly")
        return error_response(str(e) or "Unknown error occurred")

    return ToolResponse.from_text(text)
