import asyncio
import json
import logging

import httpx
import redis.asyncio as aioredis
from redis.exceptions import RedisError
from fastapi import HTTPException
from pydantic import ValidationError

from pokemon_mcp.config import get_settings
from pokemon_mcp.models import (
    AbilityView,
    PokemonBasicInfo,
    PokemonDetails,
    PokemonRecord,
    SpeciesInfo,
    SpeciesRecord,
    SpriteView,
    StatView,
)

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description available."


class APIClientError(HTTPException):
    """Any failure talking to PokeAPI: bad status, transport error or malformed body."""

    def __init__(self, status_code: int, detail: str):
        self.reason = detail
        super().__init__(status_code=status_code, detail=f"External API Error: {detail}")


def normalize_identifier(identifier: str) -> str:
    # PokeAPI only resolves lower-case names
    return identifier.strip().lower()


def first_english_flavor_text(species: SpeciesRecord) -> str:
    return next(
        (
            entry.flavor_text.replace("\f", " ").replace("\n", " ")
            for entry in species.flavor_text_entries
            if entry.language.name == "en"
        ),
        NO_DESCRIPTION,
    )


class PokeAPIClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        redis_url: str | None = None,
        cache_ttl: int | None = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.pokeapi_base_url
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.cache_ttl
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.pokeapi_timeout,
        )
        # No Redis URL means no cache: every lookup goes to PokeAPI
        if redis_url is None:
            redis_url = settings.redis_url
        self.redis = aioredis.from_url(redis_url, decode_responses=True) if redis_url else None

    async def _fetch(self, resource: str, identifier: str) -> dict:
        """Fetches raw JSON for /{resource}/{identifier}, using the cache when enabled."""
        normalized = normalize_identifier(identifier)
        path = f"/{resource}/{normalized}"
        cache_key = f"pokeapi:{resource}:{normalized}"

        if self.redis is not None:
            try:
                cached_data = await self.redis.get(cache_key)
            except RedisError as e:
                # Cache outage falls through to PokeAPI
                logger.warning(f"Cache read failed for {path}: {e!r}")
                cached_data = None
            if cached_data:
                logger.info(f"Cache hit for {path}")
                return json.loads(cached_data)
            logger.info(f"Cache miss for {path}")

        try:
            response = await self.client.get(path)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(f"PokeAPI returned {status_code} for {path}")
            raise APIClientError(
                status_code=status_code,
                detail=f"PokeAPI request for {path} failed with status {status_code}",
            )
        except httpx.RequestError as e:
            logger.error(f"PokeAPI network error for {path}: {e!r}")
            raise APIClientError(
                status_code=503,
                detail=f"PokeAPI network error for {path}: {str(e) or type(e).__name__}",
            )
        except ValueError:
            raise APIClientError(status_code=502, detail=f"PokeAPI returned invalid JSON for {path}")

        # Only successful responses are cached
        if self.redis is not None:
            try:
                await self.redis.setex(cache_key, self.cache_ttl, json.dumps(data))
            except RedisError as e:
                logger.warning(f"Cache write failed for {path}: {e!r}")
        return data

    async def get_pokemon(self, identifier: str) -> PokemonRecord:
        data = await self._fetch("pokemon", identifier)
        try:
            return PokemonRecord.model_validate(data)
        except ValidationError:
            raise APIClientError(
                status_code=502,
                detail="PokeAPI returned an unexpected pokemon response format.",
            )

    async def get_pokemon_species(self, identifier: str) -> SpeciesRecord:
        data = await self._fetch("pokemon-species", identifier)
        try:
            return SpeciesRecord.model_validate(data)
        except ValidationError:
            raise APIClientError(
                status_code=502,
                detail="PokeAPI returned an unexpected species response format.",
            )

    async def get_pokemon_with_species(self, identifier: str) -> PokemonDetails:
        """
        Fetches the pokemon and its species concurrently and joins them into a
        display record. If either fetch fails the whole lookup fails.
        """
        try:
            pokemon, species = await asyncio.gather(
                self.get_pokemon(identifier),
                self.get_pokemon_species(identifier),
            )
        except APIClientError as e:
            raise APIClientError(
                status_code=e.status_code,
                detail=f"Failed to get complete Pokemon data: {e.reason}",
            ) from e

        return PokemonDetails(
            basic=PokemonBasicInfo(
                id=pokemon.id,
                name=pokemon.name,
                height=pokemon.height,
                weight=pokemon.weight,
                base_experience=pokemon.base_experience,
            ),
            description=first_english_flavor_text(species),
            types=[t.type.name for t in pokemon.types],
            abilities=[
                AbilityView(name=a.ability.name, is_hidden=a.is_hidden)
                for a in pokemon.abilities
            ],
            stats=[StatView(name=s.stat.name, base_stat=s.base_stat) for s in pokemon.stats],
            sprites=SpriteView(
                front_default=pokemon.sprites.front_default,
                front_shiny=pokemon.sprites.front_shiny,
            ),
            species_info=SpeciesInfo(
                color=species.color.name,
                habitat=species.habitat.name if species.habitat else "unknown",
                generation=species.generation.name,
            ),
        )

    async def clear_cache(self):
        """Clear cached PokeAPI responses. Useful for testing."""
        if self.redis is None:
            return
        keys = await self.redis.keys("pokeapi:*")
        if keys:
            await self.redis.delete(*keys)

    async def close(self):
        """Close the HTTP client and Redis connection (call on app shutdown)."""
        await self.client.aclose()
        if self.redis is not None:
            await self.redis.aclose()
