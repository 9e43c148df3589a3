import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from pokemon_mcp.config import get_settings
from pokemon_mcp.dependencies import close_clients, get_pokemon_service
from pokemon_mcp.logging_config import setup_logging
from pokemon_mcp.models import HealthResponse, ToolCallRequest, ToolDescriptor, ToolResponse
from pokemon_mcp.services.pokemon_service import PokemonService
from pokemon_mcp.tools import POKEMON_TOOLS, TOOL_NAMES, execute_pokemon_tool

SERVICE_NAME = "Pokemon MCP Server"
AVAILABLE_ENDPOINTS = ["GET /health", "GET /tools", "POST /tools/call"]

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{SERVICE_NAME} starting with {len(POKEMON_TOOLS)} tools")
    for tool in POKEMON_TOOLS:
        logger.info(f"  - {tool.name}: {tool.description}")
    yield
    await close_clients()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception:
            duration = round(time.time() - start_time, 3)
            logger.error(f"{request.method} {request.url.path} failed after {duration}s")
            raise
        duration = round(time.time() - start_time, 3)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({duration}s)"
        )
        return response


app = FastAPI(
    title=SERVICE_NAME,
    description="Exposes PokeAPI lookups as MCP-style tools over plain HTTP.",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown routes and unsupported methods both read as "no such endpoint"
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Endpoint not found", "availableEndpoints": AVAILABLE_ENDPOINTS},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "message": message},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    message = str(exc) if get_settings().is_development else "Something went wrong"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": message},
    )


@app.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health():
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return HealthResponse(
        status="healthy",
        timestamp=timestamp.replace("+00:00", "Z"),
        service=SERVICE_NAME,
    )


@app.get("/tools", response_model=list[ToolDescriptor], summary="Lists the available tools")
async def list_tools():
    logger.info(f"Returning available tools: {len(POKEMON_TOOLS)}")
    return POKEMON_TOOLS


@app.post("/tools/call", response_model=ToolResponse, summary="Invokes a tool by name")
async def call_tool(
    call: ToolCallRequest,
    service: PokemonService = Depends(get_pokemon_service),
):
    """
    Tool failures (bad arguments, PokeAPI errors) come back as 200 with error
    text; only a missing or unknown tool name maps to an HTTP error status.
    """
    if not call.name:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Tool name is required"},
        )

    if call.name not in TOOL_NAMES:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": f"Tool '{call.name}' not found", "availableTools": TOOL_NAMES},
        )

    logger.info(f"Calling tool: {call.name} with args: {call.arguments}")
    try:
        result = await execute_pokemon_tool(call.name, call.arguments, service)
    except Exception as e:
        logger.exception(f"Error calling tool {call.name}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to execute tool", "message": str(e) or "Unknown error"},
        )

    logger.info(f"Tool {call.name} executed")
    return result
