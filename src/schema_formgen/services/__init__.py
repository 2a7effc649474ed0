"""
Dispatch base classes for the form engine.

- SchemaNodeServiceABC: handler per schema node class, found by method prefix
- StrategyDispatchService: handler per strategy enum member
"""

from .schema_node_service_abc import SchemaNodeServiceABC
from .strategy_dispatch_service import StrategyDispatchService

__all__ = [
    "SchemaNodeServiceABC",
    "StrategyDispatchService",
]
