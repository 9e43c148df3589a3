from fastapi import Depends

from pokemon_mcp.clients import PokeAPIClient
from pokemon_mcp.services import PokemonService

_poke_client = None

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient()
    return _poke_client

def get_pokemon_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
) -> PokemonService:
    return PokemonService(poke_client=poke_client)

async def close_clients() -> None:
    """Releases the shared client, if one was created."""
    global _poke_client
    if _poke_client is not None:
        await _poke_client.close()
        _poke_client = None
