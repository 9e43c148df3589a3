"""Renders PokeAPI records as the markdown-flavoured text returned by the tools."""
from pokemon_mcp.models import PokemonDetails, PokemonRecord

NOT_AVAILABLE = "Not available"


def to_display_unit(value: int) -> str:
    """Converts decimetres/hectograms to metres/kilograms, e.g. 60 -> '6', 4 -> '0.4'."""
    quotient = value / 10
    return str(int(quotient)) if quotient.is_integer() else str(quotient)



def _base_experience(value: int | None) -> str:
    return "unknown" if value is None else str(value)


def _title(name: str, pokemon_id: int) -> str:
    return f"🎮 **{name.upper()}** (#{pokemon_id})"


def format_pokemon_details(data: PokemonDetails) -> str:
    basic = data.basic
    abilities = "\n".join(
        f"• {a.name}{' (Hidden)' if a.is_hidden else ''}" for a in data.abilities
    )
    stats = "\n".join(f"• {s.name}: {s.base_stat}" for s in data.stats)

    lines = [
        _title(basic.name, basic.id),
        "",
        "📋 **Basic Info:**",
        f"• Height: {to_display_unit(basic.height)}m",
        f"• Weight: {to_display_unit(basic.weight)}kg",
        f"• Base Experience: {_base_experience(basic.base_experience)}",
        "",
        "📝 **Description:**",
        data.description,
        "",
        f"🏷️ **Types:** {', '.join(data.types)}",
        "",
        "⚡ **Abilities:**",
        abilities,
        "",
        "📊 **Stats:**",
        stats,
        "",
        "🎨 **Species Info:**",
        f"• Color: {data.species_info.color}",
        f"• Habitat: {data.species_info.habitat}",
        f"• Generation: {data.species_info.generation}",
        "",
        "🖼️ **Sprites:**",
        f"• Default: {data.sprites.front_default or NOT_AVAILABLE}",
        f"• Shiny: {data.sprites.front_shiny or NOT_AVAILABLE}",
    ]
    return "\n".join(lines)


def format_pokemon_basic(pokemon: PokemonRecord) -> str:
    types = ", ".join(t.type.name for t in pokemon.types)
    lines = [
        _title(pokemon.name, pokemon.id),
        "",
        "📋 **Basic Information:**",
        f"• Height: {to_display_unit(pokemon.height)}m",
        f"• Weight: {to_display_unit(pokemon.weight)}kg",
        f"• Base Experience: {_base_experience(pokemon.base_experience)}",
        f"• Types: {types}",
    ]
    return "\n".join(lines)
