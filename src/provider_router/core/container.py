"""Dependency injection container for building fully-wired Router instances."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

import httpx

from provider_router.analytics.interfaces import IAnalyticsRepository
from provider_router.analytics.memory_repository import InMemoryRepository
from provider_router.analytics.sqlite_repository import SQLiteRepository
from provider_router.analytics.tracker import UsageTracker
from provider_router.core.config import RouterConfig
from provider_router.core.middleware import (
    IMiddleware,
    LoggingMiddleware,
    MiddlewareChain,
    ValidationMiddleware,
)
from provider_router.core.router import Router
from provider_router.domain.interfaces import IProviderClient, IUsageTracker
from provider_router.providers.base import BaseProviderClient, ProviderConfig
from provider_router.providers.gemini_client import GEMINI_BASE_URL, GeminiClient
from provider_router.providers.gemma_client import GemmaClient
from provider_router.providers.openai_client import OPENAI_BASE_URL, OpenAIClient
from provider_router.providers.registry import ProviderClientRegistry
from provider_router.routing.catalog import ProviderCatalog
from provider_router.routing.ledger import PerformanceLedger

HttpClientFactory = Callable[[ProviderConfig], httpx.Client]


class DIContainer:
    """Factory helpers that assemble a Router with default wiring."""

    @staticmethod
    def create_router(
        *,
        openai_key: Optional[str] = None,
        gemini_key: Optional[str] = None,
        gemma_key: Optional[str] = None,
        gemma_base_url: Optional[str] = None,
        config: Optional[RouterConfig] = None,
        catalog: Optional[ProviderCatalog] = None,
        http_client_factory: Optional[HttpClientFactory] = None,
    ) -> Router:
        cfg = config or RouterConfig.from_env()
        factory = http_client_factory or DIContainer._build_http_client_factory(cfg)
        clients = DIContainer._build_client_registry(
            factory,
            openai_key=openai_key,
            gemini_key=gemini_key,
            gemma_key=gemma_key,
            gemma_base_url=gemma_base_url,
        )
        if not clients.families():
            raise ValueError("At least one provider API key must be supplied")

        resolved_catalog = catalog or DIContainer._load_catalog(cfg)
        ledger = PerformanceLedger()
        tracker: Optional[IUsageTracker] = (
            UsageTracker(DIContainer._build_repository(cfg))
            if cfg.enable_analytics
            else None
        )

        return Router(
            resolved_catalog,
            ledger,
            clients,
            config=cfg,
            tracker=tracker,
            middleware=DIContainer._build_middleware_chain(cfg),
        )

    @staticmethod
    def create_custom_router(
        *,
        clients: Dict[str, IProviderClient],
        catalog: Optional[ProviderCatalog] = None,
        ledger: Optional[PerformanceLedger] = None,
        config: Optional[RouterConfig] = None,
        tracker: Optional[IUsageTracker] = None,
        middlewares: Optional[Sequence[IMiddleware]] = None,
    ) -> Router:
        cfg = config or RouterConfig()
        return Router(
            catalog or DIContainer._load_catalog(cfg),
            ledger or PerformanceLedger(),
            ProviderClientRegistry(clients),
            config=cfg,
            tracker=tracker,
            middlewares=middlewares,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _build_client_registry(
        http_client_factory: HttpClientFactory,
        *,
        openai_key: Optional[str],
        gemini_key: Optional[str],
        gemma_key: Optional[str],
        gemma_base_url: Optional[str],
    ) -> ProviderClientRegistry:
        registry = ProviderClientRegistry()

        def register(client_cls: type[BaseProviderClient], config: ProviderConfig) -> None:
            registry.register(
                client_cls.FAMILY, client_cls(http_client_factory(config), config)
            )

        if openai_key:
            register(OpenAIClient, ProviderConfig(api_key=openai_key, base_url=OPENAI_BASE_URL))
        if gemini_key:
            register(GeminiClient, ProviderConfig(api_key=gemini_key, base_url=GEMINI_BASE_URL))
        if gemma_key:
            if not gemma_base_url:
                raise ValueError("gemma_base_url is required when gemma_key is supplied")
            register(GemmaClient, ProviderConfig(api_key=gemma_key, base_url=gemma_base_url))
        return registry

    @staticmethod
    def _build_http_client_factory(config: RouterConfig) -> HttpClientFactory:
        def factory(provider_config: ProviderConfig) -> httpx.Client:
            return httpx.Client(timeout=config.timeout_seconds)

        return factory

    @staticmethod
    def _load_catalog(config: RouterConfig) -> ProviderCatalog:
        if config.catalog_path:
            return ProviderCatalog.from_file(config.catalog_path)
        return ProviderCatalog.default()

    @staticmethod
    def _build_repository(config: RouterConfig) -> IAnalyticsRepository:
        if config.analytics_db_path:
            return SQLiteRepository(config.analytics_db_path)
        return InMemoryRepository()

    @staticmethod
    def _build_middleware_chain(config: RouterConfig) -> MiddlewareChain:
        return MiddlewareChain(
            [
                ValidationMiddleware(config.max_payload_chars),
                LoggingMiddleware(),
            ]
        )
