"""Shared fixtures: a small in-memory catalog and resolvers built on it."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from datetime import time
from typing import Optional, Sequence

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from travel_guide.adapters.nlp import KeywordIntentClassifier, SubstringPlaceRetriever
from travel_guide.adapters.synthesis import TemplateAnswerSynthesizer
from travel_guide.domain.models import (
    Address,
    Amenity,
    Catalog,
    OpeningHours,
    PlaceRecord,
)
from travel_guide.services import QueryResolverService


@dataclass
class StaticCatalogRepository:
    """Catalog repository serving a prebuilt catalog."""

    catalog: Catalog
    loads: int = 0

    def load(self) -> Catalog:
        self.loads += 1
        return self.catalog

    def get_place(self, name: str) -> Optional[PlaceRecord]:
        return self.catalog.get(name)

    def list_places(self) -> Sequence[PlaceRecord]:
        return list(self.catalog)


def hours(days: str, opens: str, closes: str) -> OpeningHours:
    return OpeningHours(
        days=days,
        opens=time.fromisoformat(opens),
        closes=time.fromisoformat(closes),
    )


@pytest.fixture
def red_fort() -> PlaceRecord:
    return PlaceRecord(
        place_id="red-fort",
        name="Red Fort",
        categories=("Historical Monument",),
        description="A historic fortified palace of the Mughal emperors.",
        address=Address(street="Netaji Subhash Marg", city="Delhi", country="India"),
        hours=(hours("Tue-Sun", "09:30", "16:30"),),
        amenities=(
            Amenity("parking"),
            Amenity("family_friendly"),
            Amenity("pet_friendly", available=False),
        ),
        map_link="https://maps.example/red-fort",
    )


@pytest.fixture
def taj_mahal() -> PlaceRecord:
    return PlaceRecord(
        place_id="taj-mahal",
        name="Taj Mahal",
        categories=("Mausoleum",),
        description="An ivory-white marble mausoleum on the Yamuna.",
        address=Address(city="Agra", state="Uttar Pradesh", country="India"),
        hours=(hours("Mon-Sun", "06:00", "19:00"),),
        amenities=(Amenity("guided_tours"), Amenity("cafeteria")),
    )


@pytest.fixture
def jama_masjid() -> PlaceRecord:
    return PlaceRecord(
        place_id="jama-masjid",
        name="Jama Masjid",
        categories=("Mosque",),
        description="One of the largest mosques in India.",
        address=Address(street="Meena Bazaar", city="Delhi", country="India"),
        hours=(
            hours("Daily", "07:00", "12:00"),
            hours("Daily", "13:30", "18:30"),
        ),
    )


@pytest.fixture
def marine_drive() -> PlaceRecord:
    return PlaceRecord(
        place_id="marine-drive",
        name="Marine Drive",
        categories=("Seaside Promenade",),
        description="A promenade along the Arabian Sea.",
        address=Address(city="Mumbai", country="India"),
        amenities=(Amenity("family_friendly", available=False),),
    )


@pytest.fixture
def sample_catalog(red_fort, taj_mahal, jama_masjid, marine_drive) -> Catalog:
    return Catalog(places=(red_fort, taj_mahal, jama_masjid, marine_drive))


@pytest.fixture
def catalog_repository(sample_catalog) -> StaticCatalogRepository:
    return StaticCatalogRepository(sample_catalog)


@pytest.fixture
def make_resolver(catalog_repository):
    """Build a resolver over the sample catalog with a given synthesizer."""

    def _make(synthesizer=None) -> QueryResolverService:
        return QueryResolverService(
            catalog_repository=catalog_repository,
            retriever=SubstringPlaceRetriever(),
            intent_classifier=KeywordIntentClassifier(),
            synthesizer=synthesizer or TemplateAnswerSynthesizer(),
        )

    return _make


@pytest.fixture
def template_resolver(make_resolver) -> QueryResolverService:
    return make_resolver()
