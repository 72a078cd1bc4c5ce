"""
MCP - Dispatcher.

Runs one JSON-RPC envelope through validation, lookup, authorization,
params validation and the bound handler, and always answers with a response
envelope. Nothing raised below this layer reaches FastAPI.

Batches run each element through the same path concurrently, bounded by a
semaphore; the output keeps input order and length.
"""

import asyncio
import inspect
import logging
import time
from typing import Any

from docmost.exceptions import DocmostException
from docmost.core.schema_validator import ValidationError
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.errors import (
    McpError,
    from_domain_exception,
    internal_error,
    invalid_params,
    method_not_found,
    permission_denied,
)
from docmost.modules.mcp.protocol import (
    JsonRpcResponse,
    make_error,
    make_result,
    request_id_of,
    validate_request,
)
from docmost.modules.mcp.registry import MethodDescriptor, MethodRegistry
from docmost.observability import MetricsStore

logger = logging.getLogger(__name__)


class Dispatcher:
    """Dispatches validated requests to registered handlers."""

    def __init__(self, registry: MethodRegistry, metrics: MetricsStore | None = None):
        self.registry = registry
        self.metrics = metrics

    async def dispatch(self, body: Any, context: McpContext) -> JsonRpcResponse:
        """Process one envelope. Never raises."""
        request_id = request_id_of(body)
        descriptor: MethodDescriptor | None = None
        started = time.perf_counter()

        try:
            request = validate_request(body)
            descriptor = self._resolve(request.method)
            self._authorize(descriptor, context)
            params = self._validate_params(descriptor, request.params)
            logger.debug(f"[{context.request_id}] -> {descriptor.name} id={request_id!r}")
            result = await self._invoke(descriptor, params, context)
        except McpError as exc:
            logger.info(f"[{context.request_id}] {exc.code} {exc.message} (method={_name(body)})")
            return self._failure(request_id, descriptor, exc)
        except DocmostException as exc:
            logger.warning(f"[{context.request_id}] {descriptor.name if descriptor else '?'} failed: {exc.code} - {exc.message}")
            return self._failure(request_id, descriptor, from_domain_exception(exc))
        except Exception:
            logger.exception(f"[{context.request_id}] Internal error while executing {_name(body)}")
            return self._failure(request_id, descriptor, internal_error())
        finally:
            if descriptor is not None and self.metrics is not None:
                self.metrics.record_method_latency(descriptor.name, (time.perf_counter() - started) * 1000)

        return make_result(request_id, result)

    async def dispatch_batch(
        self,
        bodies: list[Any],
        context: McpContext,
        concurrency: int = 10,
    ) -> list[JsonRpcResponse]:
        """Process every element independently; one response per element, same order."""
        semaphore = asyncio.Semaphore(concurrency)

        async def run(body: Any) -> JsonRpcResponse:
            async with semaphore:
                return await self.dispatch(body, context)

        responses = list(await asyncio.gather(*(run(body) for body in bodies)))
        failed = sum(response.is_error for response in responses)
        logger.info(f"[{context.request_id}] Batch of {len(responses)} processed, {failed} failed")
        return responses

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _resolve(self, method: str) -> MethodDescriptor:
        descriptor = self.registry.get(method)
        if descriptor is None:
            raise method_not_found(method)
        return descriptor

    def _authorize(self, descriptor: MethodDescriptor, context: McpContext) -> None:
        if descriptor.public:
            return
        user = context.require_user()
        if not user.can(descriptor.permission):
            raise permission_denied(
                "Permission denied",
                {"method": descriptor.name, "required": descriptor.permission.value, "role": user.role},
            )

    def _validate_params(self, descriptor: MethodDescriptor, params: Any) -> dict[str, Any]:
        params = {} if params is None else params
        try:
            self.registry.validator_for(descriptor.name).validate(params)
        except ValidationError as exc:
            raise invalid_params(exc.errors)
        return params

    async def _invoke(self, descriptor: MethodDescriptor, params: dict[str, Any], context: McpContext) -> Any:
        handler = descriptor.handler
        if inspect.iscoroutinefunction(handler):
            return await handler(params, context)

        # Sync handler: run it in a thread
        return await asyncio.to_thread(handler, params, context)

    def _failure(self, request_id: Any, descriptor: MethodDescriptor | None, error: McpError) -> JsonRpcResponse:
        if self.metrics is not None:
            if descriptor is not None:
                self.metrics.record_method_error(descriptor.name, error.code)
            else:
                self.metrics.record_error(error.code)
        return make_error(request_id, error)


def _name(body: Any) -> str:
    method = body.get("method") if isinstance(body, dict) else None
    return method if isinstance(method, str) else "<invalid>"
