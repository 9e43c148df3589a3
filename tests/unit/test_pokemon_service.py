import pytest
from unittest.mock import AsyncMock
from pokemon_mcp.services.pokemon_service import PokemonService
from pokemon_mcp.clients.pokeapi_client import APIClientError
from pokemon_mcp.models import (
    AbilityView,
    PokemonBasicInfo,
    PokemonDetails,
    PokemonRecord,
    SpeciesInfo,
    SpriteView,
    StatView,
)

# Sample data returned by the MOCKED client
MOCK_RECORD = PokemonRecord.model_validate({
    "id": 6,
    "name": "charizard",
    "height": 17,
    "weight": 905,
    "base_experience": 267,
    "types": [{"type": {"name": "fire"}}, {"type": {"name": "flying"}}],
})

MOCK_DETAILS = PokemonDetails(
    basic=PokemonBasicInfo(id=6, name="charizard", height=17, weight=905, base_experience=267),
    description="Spits fire that is hot enough to melt boulders.",
    types=["fire", "flying"],
    abilities=[AbilityView(name="blaze", is_hidden=False)],
    stats=[StatView(name="hp", base_stat=78)],
    sprites=SpriteView(front_default=None, front_shiny=None),
    species_info=SpeciesInfo(color="red", habitat="mountain", generation="generation-i"),
)

@pytest.fixture
def poke_client():
    # Use AsyncMock for methods that are awaited
    client = AsyncMock()
    client.get_pokemon.return_value = MOCK_RECORD
    client.get_pokemon_with_species.return_value = MOCK_DETAILS
    return client

@pytest.fixture
def pokemon_service(poke_client):
    return PokemonService(poke_client=poke_client)


@pytest.mark.asyncio
async def test_get_pokemon_basic_uses_single_fetch(pokemon_service, poke_client):
    """The basic tool only needs the pokemon resource, never the species."""
    result = await pokemon_service.get_pokemon_basic("charizard")

    poke_client.get_pokemon.assert_called_once_with("charizard")
    poke_client.get_pokemon_with_species.assert_not_called()
    assert "**CHARIZARD** (#6)" in result
    assert "• Types: fire, flying" in result

@pytest.mark.asyncio
async def test_get_pokemon_uses_combined_fetch(pokemon_service, poke_client):
    result = await pokemon_service.get_pokemon("6")

    poke_client.get_pokemon_with_species.assert_called_once_with("6")
    assert "Spits fire" in result
    assert "• Habitat: mountain" in result

@pytest.mark.asyncio
async def test_client_failure_is_propagated(pokemon_service, poke_client):
    """The service does not swallow upstream errors; the tool layer does."""
    poke_client.get_pokemon_with_species.side_effect = APIClientError(
        status_code=404,
        detail="Failed to get complete Pokemon data: not found",
    )

    with pytest.raises(APIClientError) as excinfo:
        await pokemon_service.get_pokemon("missingno")

    assert "not found" in excinfo.value.detail
