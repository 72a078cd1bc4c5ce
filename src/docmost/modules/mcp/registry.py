"""
MCP - Method Registry.

Static table of callable methods. Each method declares:
- a dot-namespaced name (``domain.action``), unique
- a human-readable description
- a JSON Schema (draft 7) for its params
- a handler ``(params, context) -> result``
- the permission level it requires, or that it is public

The registry is the single source for dispatch validation, the tool
manifest and the OpenAPI document. It is built once from an explicit list
and is read-only afterwards.
"""

import re
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from docmost.auth.schemas import PermissionLevel
from docmost.core.schema_validator import SchemaValidator

if TYPE_CHECKING:
    from docmost.modules.mcp.context import McpContext

MethodHandler = Callable[[dict[str, Any], "McpContext"], Awaitable[Any] | Any]

METHOD_NAME_PATTERN = re.compile(r"^[a-z][a-zA-Z0-9]*\.[a-z][a-zA-Z0-9]*$")


@dataclass(frozen=True)
class MethodDescriptor:
    """Complete definition of a method."""

    name: str
    description: str
    params_schema: Mapping[str, Any]
    handler: MethodHandler
    permission: PermissionLevel = PermissionLevel.READ
    public: bool = False

    @property
    def category(self) -> str:
        return self.name.split(".", 1)[0]

    @property
    def action(self) -> str:
        return self.name.split(".", 1)[1]


class MethodRegistry:
    """
    Registry of methods, keyed by name.

    Construction fails on duplicate names, malformed names and invalid params
    schemas, so a broken table never serves traffic.
    """

    def __init__(self, descriptors: Iterable[MethodDescriptor] = ()):
        self._methods: dict[str, MethodDescriptor] = {}
        self._validators: dict[str, SchemaValidator] = {}
        for descriptor in descriptors:
            self._register(descriptor)

    def _register(self, descriptor: MethodDescriptor) -> None:
        """
        Raises:
            ValueError: If the name is malformed or already registered
            jsonschema.SchemaError: If the params schema is not valid draft 7
        """
        if not METHOD_NAME_PATTERN.match(descriptor.name):
            raise ValueError(f"Invalid method name {descriptor.name!r}; expected 'domain.action'")
        if descriptor.name in self._methods:
            raise ValueError(f"Method {descriptor.name} already registered")
        if descriptor.params_schema.get("type") != "object":
            raise ValueError(f"Method {descriptor.name} params schema must be an object schema")

        self._validators[descriptor.name] = SchemaValidator(descriptor.params_schema)
        self._methods[descriptor.name] = descriptor

    def get(self, name: str) -> MethodDescriptor | None:
        return self._methods.get(name)

    def validator_for(self, name: str) -> SchemaValidator:
        """
        Raises:
            KeyError: If the method does not exist
        """
        if name not in self._validators:
            raise KeyError(f"Method {name} not found")
        return self._validators[name]

    def names(self) -> list[str]:
        """Registered method names, in registration order."""
        return list(self._methods)

    def categories(self) -> dict[str, list[str]]:
        """Method names grouped by domain."""
        grouped: dict[str, list[str]] = {}
        for descriptor in self._methods.values():
            grouped.setdefault(descriptor.category, []).append(descriptor.name)
        return grouped

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __iter__(self) -> Iterator[MethodDescriptor]:
        return iter(self._methods.values())

    def __len__(self) -> int:
        return len(self._methods)


__all__ = ["MethodDescriptor", "MethodHandler", "MethodRegistry"]
