import pytest
from pokemon_mcp.services.formatter import (
    format_pokemon_basic,
    format_pokemon_details,
    to_display_unit,
)
from pokemon_mcp.models import (
    AbilityView,
    PokemonBasicInfo,
    PokemonDetails,
    PokemonRecord,
    SpeciesInfo,
    SpriteView,
    StatView,
)

PIKACHU_RECORD = PokemonRecord.model_validate({
    "id": 25,
    "name": "pikachu",
    "height": 4,
    "weight": 60,
    "base_experience": 112,
    "types": [{"slot": 1, "type": {"name": "electric"}}],
})

PIKACHU_DETAILS = PokemonDetails(
    basic=PokemonBasicInfo(id=25, name="pikachu", height=4, weight=60, base_experience=112),
    description="It stores electricity in its cheeks.",
    types=["electric"],
    abilities=[
        AbilityView(name="static", is_hidden=False),
        AbilityView(name="lightning-rod", is_hidden=True),
    ],
    stats=[StatView(name="hp", base_stat=35), StatView(name="speed", base_stat=90)],
    sprites=SpriteView(front_default="https://img.example/25.png", front_shiny=None),
    species_info=SpeciesInfo(color="yellow", habitat="forest", generation="generation-i"),
)


@pytest.mark.parametrize(
    "raw, shown",
    [
        (4, "0.4"), (60, "6"), (17, "1.7"), (905, "90.5"), (9999, "999.9"), (0, "0"),
        (1234567, "123456.7"), (9999999, "999999.9"), (10000000, "1000000"),
    ],
)
def test_display_unit_is_raw_value_divided_by_ten(raw, shown):
    assert to_display_unit(raw) == shown
    assert float(shown) == raw / 10

def test_basic_format():
    text = format_pokemon_basic(PIKACHU_RECORD)

    assert text.splitlines()[0] == "🎮 **PIKACHU** (#25)"
    assert "• Height: 0.4m" in text
    assert "• Weight: 6kg" in text
    assert "• Base Experience: 112" in text
    assert "• Types: electric" in text

def test_basic_format_with_unknown_base_experience():
    record = PIKACHU_RECORD.model_copy(update={"base_experience": None})
    assert "• Base Experience: unknown" in format_pokemon_basic(record)

def test_details_format_sections():
    text = format_pokemon_details(PIKACHU_DETAILS)

    assert text.startswith("🎮 **PIKACHU** (#25)")
    assert "📝 **Description:**\nIt stores electricity in its cheeks." in text
    assert "🏷️ **Types:** electric" in text
    assert "• static\n• lightning-rod (Hidden)" in text
    assert "• hp: 35\n• speed: 90" in text
    assert "• Color: yellow" in text
    assert "• Habitat: forest" in text
    assert "• Generation: generation-i" in text

def test_details_format_missing_sprites():
    text = format_pokemon_details(PIKACHU_DETAILS)

    assert "• Default: https://img.example/25.png" in text
    assert "• Shiny: Not available" in text

def test_formatting_is_deterministic():
    assert format_pokemon_details(PIKACHU_DETAILS) == format_pokemon_details(PIKACHU_DETAILS)
