"""
Tool dispatcher.

Exports: ToolRegistry, ToolSpec, build_tool_registry, CostLookupService,
JsonRpcToolServer
"""

from .cost_lookup import CostLookupService
from .healthcare_tools import build_tool_registry, is_healthcare_document
from .jsonrpc import JsonRpcToolServer
from .registry import ToolRegistry, ToolSpec

__all__ = [
    "CostLookupService",
    "build_tool_registry",
    "is_healthcare_document",
    "JsonRpcToolServer",
    "ToolRegistry",
    "ToolSpec",
]
