"""Function dispatcher.

Resolves a function name against the registry, invokes its handler and turns
every outcome into a FunctionResult. Nothing raised by a handler escapes
``dispatch``.
"""

import logging
from typing import Any

from .registry import Registry, build_default_registry
from .utils.types import ErrorKind, Failure, FunctionCall, FunctionResult

logger = logging.getLogger(__name__)

_dispatcher_instance: "Dispatcher | None" = None


class Dispatcher:
    """Routes calls to the handlers of a registry."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    async def dispatch(self, name: Any, parameters: Any = None) -> FunctionResult:
        """
        Invoke the function ``name`` with ``parameters``.

        Args:
            name: Function name to resolve
            parameters: Parameter mapping, passed to the handler as received

        Returns:
            Success with the handler's data, or Failure whose kind is
            UNKNOWN_FUNCTION, UPSTREAM_FAILURE or INTERNAL_ERROR
        """
        handler = self.registry.resolve(name)
        if handler is None:
            logger.warning(f"Unknown function requested: {name!r}")
            return Failure(f"Function '{name}' is not defined", ErrorKind.UNKNOWN_FUNCTION)

        logger.info(f"Dispatching {name}")
        try:
            result = await handler(parameters)
        except Exception as e:
            logger.exception(f"Unhandled error in {name}")
            return Failure(str(e) or "Internal server error", ErrorKind.INTERNAL_ERROR)

        if isinstance(result, Failure):
            logger.info(f"{name} failed: {result.message}")
        return result

    async def call(self, call: FunctionCall) -> FunctionResult:
        return await self.dispatch(call.name, call.parameters)


def get_dispatcher() -> Dispatcher:
    """Get the dispatcher bound to the default registry (singleton)."""
    global _dispatcher_instance

    if _dispatcher_instance is None:
        _dispatcher_instance = Dispatcher(build_default_registry())

    return _dispatcher_instance


def reset_dispatcher() -> None:
    """Reset dispatcher singleton (for testing)."""
    global _dispatcher_instance
    _dispatcher_instance = None
