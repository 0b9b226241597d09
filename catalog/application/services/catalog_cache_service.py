"""
Catalog cache service.

Every verification call renders the full module catalog, so the catalog
is read through the Django cache and invalidated on change.
"""
import logging
from dataclasses import asdict
from typing import List

from django.conf import settings

from catalog.domain.module_definition import ModuleDefinition
from catalog.ports.module_repository import ModuleRepository
from core.infrastructure.cache import cache_adapter

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = "catalog:modules"


class CatalogCacheService:
    """Service for caching the module catalog."""

    @staticmethod
    async def get_modules(module_repository: ModuleRepository) -> List[ModuleDefinition]:
        """
        Return the catalog, from cache when possible.

        Args:
            module_repository: Source of truth on a cache miss
        """
        cached = await cache_adapter.get(CATALOG_CACHE_KEY)
        if cached is not None:
            try:
                return [ModuleDefinition(**item) for item in cached]
            except (TypeError, ValueError) as e:
                logger.warning("Discarding malformed cached catalog: %s", e)

        modules = await module_repository.find_all()
        await cache_adapter.set(
            CATALOG_CACHE_KEY,
            [asdict(module) for module in modules],
            timeout=settings.LICENSE_CATALOG_CACHE_TTL,
        )
        return modules

    @staticmethod
    async def invalidate() -> None:
        await cache_adapter.delete(CATALOG_CACHE_KEY)
        logger.info("Invalidated module catalog cache")
