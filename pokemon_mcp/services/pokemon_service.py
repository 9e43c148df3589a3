from pokemon_mcp.clients.pokeapi_client import PokeAPIClient
from pokemon_mcp.services.formatter import format_pokemon_basic, format_pokemon_details


class PokemonService:
    # One method per tool; the client is injected by FastAPI
    def __init__(self, poke_client: PokeAPIClient):
        self._poke_client = poke_client

    async def get_pokemon(self, identifier: str) -> str:
        """
        Tool `get_pokemon`: fetches pokemon and species data and renders the
        full description, stats, abilities and sprites.
        """
        details = await self._poke_client.get_pokemon_with_species(identifier)
        return format_pokemon_details(details)

    async def get_pokemon_basic(self, identifier: str) -> str:
        """Tool `get_pokemon_basic`: one upstream call, name/ID/size/types only."""
        pokemon = await self._poke_client.get_pokemon(identifier)
        return format_pokemon_basic(pokemon)
