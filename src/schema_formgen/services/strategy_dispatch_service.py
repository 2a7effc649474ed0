"""
Abstract base class for enum-driven strategy dispatch.

Services that pick one of several behaviours from their input share the
same shape:
1. Define an enum of strategies
2. Register a handler per strategy
3. Implement _determine_strategy() to choose a strategy from the input
4. Call dispatch()

Used by:
- ArrayAddService (ArrayAddStrategy): how an array field grows

Example:
    class GrowStrategy(Enum):
        APPEND = "append"
        PICK = "pick"

    class GrowService(StrategyDispatchService[GrowStrategy]):
        def __init__(self):
            super().__init__()
            self._register_handlers({
                GrowStrategy.APPEND: self._append,
                GrowStrategy.PICK: self._pick,
            })

        def _determine_strategy(self, resolver, sequence, value) -> GrowStrategy:
            return GrowStrategy.PICK if resolver.is_enum else GrowStrategy.APPEND
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TypeVar, Generic, Dict, Callable, Any
import logging

logger = logging.getLogger(__name__)

StrategyEnum = TypeVar('StrategyEnum', bound=Enum)


class StrategyDispatchService(ABC, Generic[StrategyEnum]):
    """
    Base class for services using enum-driven polymorphic dispatch.

    Unlike node dispatch, the strategy is computed from the whole input, and
    handlers receive exactly the arguments given to dispatch().
    """

    def __init__(self):
        self._handlers: Dict[StrategyEnum, Callable] = {}

    def _register_handlers(self, handlers: Dict[StrategyEnum, Callable]) -> None:
        """
        Register strategy handlers.

        Raises:
            ValueError: If handlers dict is empty
        """
        if not handlers:
            raise ValueError(f"{self.__class__.__name__}: Handler registry cannot be empty")

        self._handlers = dict(handlers)
        logger.debug(f"{self.__class__.__name__}: Registered {len(handlers)} handlers")

    @abstractmethod
    def _determine_strategy(self, *args, **kwargs) -> StrategyEnum:
        """Choose the strategy for the given input."""
        pass

    def dispatch(self, *args, **kwargs) -> Any:
        """
        Determine the strategy and call its handler with the same arguments.

        Raises:
            KeyError: If the chosen strategy has no registered handler
        """
        strategy = self._determine_strategy(*args, **kwargs)

        if strategy not in self._handlers:
            raise KeyError(
                f"{self.__class__.__name__}: No handler registered for strategy {strategy}. "
                f"Available strategies: {list(self._handlers.keys())}"
            )
        handler = self._handlers[strategy]
        logger.debug(f"{self.__class__.__name__}: Dispatching to {strategy.value} handler")
        return handler(*args, **kwargs)

    def get_registered_strategies(self) -> list[StrategyEnum]:
        return list(self._handlers.keys())

    def has_strategy(self, strategy: StrategyEnum) -> bool:
        return strategy in self._handlers
