"""Offers page configuration resolution and product selection."""
import logging
from typing import Any, Dict, List, Optional, Sequence, Type
from pydantic import BaseModel
from pharmanature.data.database.offers_schema import (
    OffersConfig,
    DealOfTheDaySection,
    AllOffersGridSection,
)

logger = logging.getLogger(__name__)

# Grid size used when the stored limit is 0
DEFAULT_GRID_LIMIT = 12


def _lookup(document: Dict[str, Any], name: str, alias: Optional[str]) -> Any:
    """Read a key by its camelCase alias first, then by field name."""
    if alias and document.get(alias) is not None:
        return document[alias]
    return document.get(name)


def _resolve_section(model: Type[BaseModel], stored: Any) -> BaseModel:
    stored = stored if isinstance(stored, dict) else {}
    values = {}
    for name, field in model.model_fields.items():
        value = _lookup(stored, name, field.alias)
        if value is not None:
            values[name] = value
    # Fields left out fall back to their declared defaults
    return model.model_validate(values)


def resolve_config(stored: Optional[Dict[str, Any]]) -> OffersConfig:
    """
    Resolve a stored (possibly partial) offers document against the defaults.

    The merge is per field: a section that supplies only some fields keeps
    those values and every other field takes its default. Missing sections
    are fully defaulted. Unknown keys are ignored.

    Args:
        stored: The raw stored document, or None

    Returns:
        A fully populated OffersConfig
    """
    stored = stored or {}
    sections = {}
    for name, field in OffersConfig.model_fields.items():
        sections[name] = _resolve_section(field.annotation, _lookup(stored, name, field.alias))
    return OffersConfig(**sections)


def select_grid_products(grid: AllOffersGridSection, catalog: Sequence[Any]) -> List[Any]:
    """
    Pick the products shown in the "all offers" grid.

    With manual selection the configured ids are returned in their configured
    order; ids missing from the catalog are skipped. Otherwise the grid shows
    promoted or discounted products in catalog order, up to ``limit``
    (a limit of 0 means the default of 12).
    """
    if grid.use_manual_selection:
        by_id = {product.id: product for product in catalog}
        selected = []
        for product_id in grid.manual_product_ids:
            product = by_id.get(product_id)
            if product is None:
                logger.debug("Manual offers product %s not in catalog, skipped", product_id)
                continue
            selected.append(product)
        return selected

    offers = [product for product in catalog if product.promo or product.discount]
    return offers[:grid.limit or DEFAULT_GRID_LIMIT]


def select_deal_of_the_day(deal: DealOfTheDaySection, catalog: Sequence[Any]) -> Optional[Any]:
    """
    Pick the deal of the day product.

    A configured id that is not in the catalog falls back to the first product.
    Without a configured id the first discounted product is used.
    """
    if not catalog:
        return None
    if deal.product_id:
        for product in catalog:
            if product.id == deal.product_id:
                return product
        return catalog[0]
    for product in catalog:
        if product.discount:
            return product
    return catalog[0]
