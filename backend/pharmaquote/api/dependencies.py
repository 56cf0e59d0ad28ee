"""API dependencies and injection.

Collaborators live on ``app.state`` (set up by ``main.create_app``) so each
application instance, and each test client, owns its own store and caches.
"""

from typing import Annotated
from fastapi import Depends, Request
import logging

from ..services.formulation_catalog import FormulationCatalog, get_formulation_catalog
from ..services.item_collection import ItemCollectionConfig
from ..services.render_context import TotalsAggregator
from ..services.settings_source import SettingsSource
from ..store import DraftStore


logger = logging.getLogger(__name__)


def get_store_dependency(request: Request) -> DraftStore:
    """
    Dependency to get the draft store.

    Returns:
        DraftStore instance
    """
    return request.app.state.store


def get_settings_source(request: Request) -> SettingsSource:
    """
    Dependency to get the organization settings source.

    Returns:
        SettingsSource instance
    """
    return request.app.state.settings_source


def get_totals_aggregator(request: Request) -> TotalsAggregator:
    """
    Dependency to get the totals aggregator.

    Returns:
        TotalsAggregator instance
    """
    return request.app.state.totals_aggregator


def get_collection_config(request: Request) -> ItemCollectionConfig:
    return request.app.state.collection_config


def get_catalog() -> FormulationCatalog:
    return get_formulation_catalog()


# Type aliases for common dependencies
StoreDep = Annotated[DraftStore, Depends(get_store_dependency)]
SettingsSourceDep = Annotated[SettingsSource, Depends(get_settings_source)]
TotalsAggregatorDep = Annotated[TotalsAggregator, Depends(get_totals_aggregator)]
CollectionConfigDep = Annotated[ItemCollectionConfig, Depends(get_collection_config)]
CatalogDep = Annotated[FormulationCatalog, Depends(get_catalog)]
