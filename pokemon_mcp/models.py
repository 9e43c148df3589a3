from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Tool contract (public, served by /tools and /tools/call) ---

class SchemaProperty(BaseModel):
    type: str
    description: str


class ToolInputSchema(BaseModel):
    type: str = "object"
    properties: dict[str, SchemaProperty]
    required: list[str] = []


class ToolDescriptor(BaseModel):
    # Descriptors are defined once at import and never mutated
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: ToolInputSchema = Field(alias="inputSchema")


class ToolCallRequest(BaseModel):
    # Any non-empty value that is not a registered tool name is a 404, not a 400
    name: Any = None
    # Left untyped so that bad argument shapes surface as tool errors, not 4xx
    arguments: Any = None


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    content: list[TextContent]

    @classmethod
    def from_text(cls, text: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)])


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str


# --- Raw PokeAPI shapes (internal contract) ---

class NamedResource(BaseModel):
    name: str
    url: str | None = None


class PokemonTypeSlot(BaseModel):
    slot: int | None = None
    type: NamedResource


class PokemonAbilitySlot(BaseModel):
    ability: NamedResource
    is_hidden: bool = False
    slot: int | None = None


class PokemonStatEntry(BaseModel):
    base_stat: int
    effort: int | None = None
    stat: NamedResource


class PokemonSprites(BaseModel):
    front_default: str | None = None
    front_shiny: str | None = None
    back_default: str | None = None
    back_shiny: str | None = None


class PokemonRecord(BaseModel):
    id: int
    name: str
    height: int
    weight: int
    base_experience: int | None = None
    types: list[PokemonTypeSlot] = []
    abilities: list[PokemonAbilitySlot] = []
    stats: list[PokemonStatEntry] = []
    sprites: PokemonSprites = PokemonSprites()


class FlavorTextEntry(BaseModel):
    flavor_text: str
    language: NamedResource


class SpeciesRecord(BaseModel):
    id: int
    name: str
    color: NamedResource
    habitat: NamedResource | None = None
    generation: NamedResource
    flavor_text_entries: list[FlavorTextEntry] = []


# --- Combined display record (never persisted) ---

class PokemonBasicInfo(BaseModel):
    id: int
    name: str
    height: int
    weight: int
    base_experience: int | None


class AbilityView(BaseModel):
    name: str
    is_hidden: bool


class StatView(BaseModel):
    name: str
    base_stat: int


class SpriteView(BaseModel):
    front_default: str | None
    front_shiny: str | None


class SpeciesInfo(BaseModel):
    color: str
    habitat: str
    generation: str


class PokemonDetails(BaseModel):
    basic: PokemonBasicInfo
    description: str
    types: list[str]
    abilities: list[AbilityView]
    stats: list[StatView]
    sprites: SpriteView
    species_info: SpeciesInfo
