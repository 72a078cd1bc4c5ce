"""
MCP - Router.

HTTP surface of the gateway. Every route here is on the context exemption
list, so none of them depend on a resolved workspace; callers are identified
by their API key instead.
"""

import logging
from functools import lru_cache
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from docmost.auth.schemas import Principal
from docmost.config import Settings, get_settings
from docmost.deps import AdminPrincipal, OptionalPrincipal, get_request_id
from docmost.exceptions import BadRequestException
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.dispatcher import Dispatcher
from docmost.modules.mcp.errors import parse_error
from docmost.modules.mcp.exporters import build_openapi_document, build_tool_manifest
from docmost.modules.mcp.methods import get_registry
from docmost.modules.mcp.protocol import make_error
from docmost.modules.mcp.schemas import ToolManifest
from docmost.observability import get_metrics_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mcp", tags=["MCP"])


@lru_cache(maxsize=1)
def get_dispatcher() -> Dispatcher:
    return Dispatcher(get_registry(), get_metrics_store())


def _context(request: Request, principal: Principal | None) -> McpContext:
    return McpContext(
        registry=get_registry(),
        principal=principal,
        request_id=get_request_id(request),
    )


async def _run_batch(body: Any, context: McpContext, settings: Settings) -> JSONResponse:
    """
    Raises:
        BadRequestException: body is not a non-empty array within the size limit
    """
    if not isinstance(body, list):
        raise BadRequestException("Batch request body must be a JSON array")
    if not body:
        raise BadRequestException("Batch request must contain at least one request")
    if len(body) > settings.mcp.max_batch_size:
        raise BadRequestException(
            f"Batch request exceeds the limit of {settings.mcp.max_batch_size} requests",
            details={"size": len(body), "limit": settings.mcp.max_batch_size},
        )

    get_metrics_store().record_batch(len(body))
    responses = await get_dispatcher().dispatch_batch(
        body, context, concurrency=settings.mcp.batch_concurrency
    )
    return JSONResponse([response.to_dict() for response in responses])


@router.post("")
async def process_request(
    request: Request,
    principal: OptionalPrincipal,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Process one JSON-RPC 2.0 request.

    A JSON array body is handled as a batch, exactly like ``/api/mcp/batch``.
    """
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(make_error(None, parse_error()).to_dict())

    context = _context(request, principal)
    if isinstance(body, list):
        return await _run_batch(body, context, settings)

    response = await get_dispatcher().dispatch(body, context)
    return JSONResponse(response.to_dict())


@router.post("/batch")
async def process_batch_request(
    request: Request,
    principal: OptionalPrincipal,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Process a batch of JSON-RPC 2.0 requests.

    Answers an array with one envelope per element, in input order. A body
    that is not an array yields HTTP 400, since there is no single id to
    answer against.
    """
    try:
        body = await request.json()
    except ValueError:
        raise BadRequestException("Batch request body must be valid JSON")

    return await _run_batch(body, _context(request, principal), settings)


@router.get("/tools", response_model=ToolManifest)
async def get_tools(settings: Annotated[Settings, Depends(get_settings)]) -> ToolManifest:
    """Function-calling manifest of every method."""
    return build_tool_manifest(get_registry(), settings.mcp)


@router.get("/openapi.json")
async def get_openapi(settings: Annotated[Settings, Depends(get_settings)]) -> dict:
    """OpenAPI 3.0.0 document with one path per method."""
    return build_openapi_document(get_registry(), settings.mcp)


@router.get("/metrics")
def get_metrics(principal: AdminPrincipal) -> dict:
    """
    Get current gateway metrics. Requires an admin or owner API key.

    Returns per-method call counts, latency percentiles (p50, p90, p99,
    mean, max) and error counts keyed by JSON-RPC code.
    """
    return get_metrics_store().get_summary()
