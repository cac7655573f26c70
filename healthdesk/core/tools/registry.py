"""
Tool registry and dispatcher.

Maps tool names to ToolSpecs and dispatches calls. dispatch() always
returns a ToolResult: unknown tools, missing arguments and handler
exceptions all become success=False results.

Dependencies: healthdesk.models.tools
System role: Single tool table shared by every transport
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from healthdesk.core.exceptions import UnknownToolError
from healthdesk.models.tools import ToolResult

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any]], ToolResult]


@dataclass(frozen=True)
class ToolSpec:
    """Tool definition: name, description, JSON Schema input and handler."""

    name: str
    description: str
    handler: ToolHandler
    input_schema: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))


class ToolRegistry:
    """Named tool table with guarded dispatch."""

    def __init__(self, specs: list[ToolSpec] | None = None) -> None:
        self._specs: dict[str, ToolSpec] = {}
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._specs:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._specs[spec.name] = spec

    @property
    def names(self) -> list[str]:
        return list(self._specs)

    @property
    def specs(self) -> list[ToolSpec]:
        return list(self._specs.values())

    def get(self, name: str) -> ToolSpec:
        """
        Look up a tool.

        Raises:
            UnknownToolError: Name not registered
        """
        try:
            return self._specs[name]
        except KeyError:
            raise UnknownToolError(name, self.names) from None

    def dispatch(self, name: str | None, arguments: dict[str, Any] | None = None) -> ToolResult:
        """
        Run a tool by name.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            ToolResult: Handler result, or a failure result (never raises)
        """
        arguments = arguments or {}
        try:
            spec = self.get(name or "")
        except UnknownToolError as e:
            logger.warning("Unknown tool requested", extra={"tool": name})
            return ToolResult(success=False, error=e.message, available_tools=e.available_tools)

        missing = [arg for arg in spec.required if arguments.get(arg) in (None, "")]
        if missing:
            return ToolResult(
                success=False,
                error=f"Missing required argument: {', '.join(missing)}",
            )

        logger.info("Dispatching tool", extra={"tool": spec.name})
        try:
            return spec.handler(arguments)
        except Exception as e:
            logger.exception("Tool handler raised", extra={"tool": spec.name})
            return ToolResult(success=False, error=f"Error executing {spec.name}: {e}")
