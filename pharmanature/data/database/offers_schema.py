"""Offers page configuration schemas.

Every field declares its default. Stored documents use camelCase keys
(``titleColor``), so each section accepts both the alias and the field name.
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class ConfigSection(BaseModel):
    """Base for all offers config sections."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class HeaderSection(ConfigSection):
    title: str = "VOS CURES <span class='text-brand-primary italic'>PRIVILÈGES</span>"
    title_color: str = "#111827"
    subtitle: str = "L'excellence de la phytothérapie et de la dermo-cosmétique au service de votre capital santé."
    subtitle_color: str = "#6b7280"


class PerformanceSection(ConfigSection):
    """Promotional banner with image and call to action."""
    title: str = "RITUEL <span class='text-brand-primary italic'>ÉCLAT BIO</span>"
    title_color: str = "#111827"
    subtitle: str = "Une synergie d'actifs botaniques pour raviver la lumière de votre teint."
    subtitle_color: str = "#008b5e"
    button_text: str = "DÉCOUVRIR LE RITUEL"
    button_color: str = "#008b5e"
    button_text_color: str = "#FFFFFF"
    image: str = "https://images.unsplash.com/photo-1570172619383-2ef40176191a?q=80&w=800&auto=format&fit=crop"
    link: Optional[str] = None


class MuscleBuildersSection(PerformanceSection):
    """Same shape as the performance banner, different defaults."""
    title: str = "VITALITÉ <span class='text-brand-primary italic'>QUOTIDIENNE</span>"
    subtitle: str = "Renforcez vos défenses naturelles avec nos complexes de micronutrition certifiés."
    subtitle_color: str = "#6b7280"
    button_text: str = "VOIR LES CURES"
    button_color: str = "#FFFFFF"
    button_text_color: str = "#111827"
    image: str = "https://images.unsplash.com/photo-1556228720-195a672e8a03?q=80&w=1000&auto=format&fit=crop"


class DealOfTheDaySection(ConfigSection):
    product_id: int = 1  # Product id, not enforced
    title_color: str = "#008b5e"
    subtitle_color: str = "#9ca3af"


class AllOffersGridSection(ConfigSection):
    title: str = "SÉLECTION <span class='text-brand-primary'>LABORATOIRE</span>"
    title_color: str = "#111827"
    use_manual_selection: bool = False
    manual_product_ids: List[int] = Field(default_factory=list)
    limit: int = Field(12, ge=0)


class OffersConfig(ConfigSection):
    """Fully resolved offers page configuration."""
    header: HeaderSection = Field(default_factory=HeaderSection)
    performance_section: PerformanceSection = Field(default_factory=PerformanceSection)
    muscle_builders: MuscleBuildersSection = Field(default_factory=MuscleBuildersSection)
    deal_of_the_day: DealOfTheDaySection = Field(default_factory=DealOfTheDaySection)
    all_offers_grid: AllOffersGridSection = Field(default_factory=AllOffersGridSection)
