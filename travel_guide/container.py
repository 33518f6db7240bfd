"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - for web server contexts
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import httpx

from .config import AppConfig, get_config
from .domain.errors import ConfigurationError


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        resolver = container.resolve(QueryResolverService)

        # Testing
        container = Container()
        container.register(AnswerSynthesizerPort, lambda: FakeSynthesizer())
        synthesizer = container.resolve(AnswerSynthesizerPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Args:
            port_type: The type to resolve.

        Returns:
            An instance of the requested type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        """Check if a type is registered."""
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        with self._lock:
            self._singletons.clear()

    async def aclose(self) -> None:
        """Close cached singletons that hold network resources.

        Drops every cached singleton; call on application shutdown.
        """
        with self._lock:
            instances = list(self._singletons.values())
            self._singletons.clear()
        for instance in instances:
            if isinstance(instance, httpx.AsyncClient):
                await instance.aclose()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The synthesis strategy is picked from ``config.synthesis.strategy``.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.

        Raises:
            ConfigurationError: If the model strategy is selected without
                an API key.
        """
        from .adapters.catalog import JsonCatalogRepository
        from .adapters.nlp import KeywordIntentClassifier, SubstringPlaceRetriever
        from .adapters.synthesis import OpenAIChatSynthesizer, TemplateAnswerSynthesizer
        from .ports.catalog import CatalogRepositoryPort
        from .ports.nlp import IntentClassifierPort, PlaceRetrieverPort
        from .ports.synthesis import AnswerSynthesizerPort
        from .services import QueryResolverService

        config = config or get_config()
        container = cls(config=config)

        strategy = config.synthesis.strategy
        if strategy == "model" and not config.llm.api_key:
            raise ConfigurationError(
                "The 'model' synthesis strategy needs an API key",
                setting_name="GUIDE_LLM_API_KEY",
                expected_type="str",
            )

        # Catalog (loaded once, shared read-only)
        container.register(
            CatalogRepositoryPort,
            lambda: JsonCatalogRepository(config.catalog),
        )

        # NLP
        container.register(PlaceRetrieverPort, lambda: SubstringPlaceRetriever())
        container.register(IntentClassifierPort, lambda: KeywordIntentClassifier())

        # One HTTP client (and connection pool) shared by all model calls
        container.register(
            httpx.AsyncClient,
            lambda: httpx.AsyncClient(timeout=config.llm.timeout_seconds),
        )

        # Synthesis strategy based on config
        def create_synthesizer() -> AnswerSynthesizerPort:
            if strategy == "model":
                return OpenAIChatSynthesizer(
                    config=config.llm,
                    retriever=container.resolve(PlaceRetrieverPort),
                    client=container.resolve(httpx.AsyncClient),
                )
            return TemplateAnswerSynthesizer()

        container.register(AnswerSynthesizerPort, create_synthesizer)

        # Main service
        def create_resolver() -> QueryResolverService:
            return QueryResolverService(
                catalog_repository=container.resolve(CatalogRepositoryPort),
                retriever=container.resolve(PlaceRetrieverPort),
                intent_classifier=container.resolve(IntentClassifierPort),
                synthesizer=container.resolve(AnswerSynthesizerPort),
            )

        container.register(QueryResolverService, create_resolver)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
