# sitewright/core/registry.py
"""
Service registry for the pipeline components.

Holds one shared, lazily created instance per pipeline service (parser,
writer, scaffolder, builder, facade). It never holds per-application state.
"""
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
import threading

from sitewright.utils.logging import get_logger

T = TypeVar('T')

logger = get_logger(__name__)


class ServiceRegistry:
    """Named shared services, created on first request from a factory or a class."""

    def __init__(self):
        self._lock = threading.RLock()
        self._services: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._order: List[str] = []

    def _store(self, name: str, service: Any) -> Any:
        self._services[name] = service
        if name not in self._order:
            self._order.append(name)
        logger.debug(f"Service ready: {name} ({type(service).__name__})")
        return service

    def register_factory(self, name: str, factory: Callable[[], Any]) -> None:
        """Use `factory` to build `name` the first time it is requested."""
        with self._lock:
            self._factories[name] = factory

    def get(self, name: str) -> Optional[Any]:
        """Return the service, building it from its factory if needed; None if unknown."""
        with self._lock:
            if name in self._services:
                return self._services[name]
            factory = self._factories.get(name)
            if factory is None:
                return None
            return self._store(name, factory())

    def get_or_create(self, name: str, cls: Type[T], *args, **kwargs) -> T:
        """
        Return the service `name`, instantiating `cls(*args, **kwargs)` if nothing
        (and no factory) provides it yet.

        Construction errors are logged and re-raised; nothing is stored.
        """
        with self._lock:
            service = self.get(name)
            if service is None:
                try:
                    service = cls(*args, **kwargs)
                except Exception as e:
                    logger.error(f"Error creating service '{name}': {e}")
                    raise
                return self._store(name, service)

        if not isinstance(service, cls):
            logger.warning(
                f"Service '{name}' is a {type(service).__name__}, expected {cls.__name__}"
            )
        return service

    def clear(self) -> None:
        """Forget every service and factory."""
        with self._lock:
            self._services.clear()
            self._factories.clear()
            self._order.clear()

    def get_initialization_order(self) -> List[str]:
        """Names of the services in the order they were created."""
        with self._lock:
            return list(self._order)


registry = ServiceRegistry()
