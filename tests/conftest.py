"""
Pytest configuration for thpt-ranking tests.
"""

import asyncio
import os

import pytest

from thpt_ranking.core.models import BracketRecord, CatalogOption


def pytest_configure(config):
    """Configure pytest with database URL if available."""
    # Try to load from .env file if environment variables not already set
    env_file = os.path.join(os.path.dirname(__file__), "..", ".env")
    if os.path.exists(env_file):
        with open(env_file) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")
                    if key not in os.environ:
                        os.environ[key] = value


@pytest.fixture(scope="session")
def database_url():
    """Get the database URL."""
    url = os.environ.get("DATABASE_URL")
    if not url:
        pytest.skip("DATABASE_URL not set")
    return url


def record(year, combination, score, ranking):
    return BracketRecord(
        year=year,
        combination=combination,
        score=score,
        ranking_in_combination=ranking,
    )


class FakeProvider:
    """In-memory stand-in for LookupProvider."""

    def __init__(self, brackets=None, years=(2024, 2023, 2022), combinations=("A00", "A01", "D01"), delay=0.0):
        self.brackets = brackets or {}
        self.years = [CatalogOption.from_value(y) for y in years]
        self.combinations = [CatalogOption.from_value(c) for c in combinations]
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_closest_scores(self, year, combination, score):
        self.calls.append((year, combination, score))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            return list(self.brackets.get((year, combination), []))
        finally:
            self.in_flight -= 1

    async def get_unique_years(self):
        return list(self.years)

    async def get_unique_combinations(self):
        return list(self.combinations)


@pytest.fixture
def brackets():
    """Two bracketed combinations for 2024, one single-record combination."""
    return {
        (2024, "A00"): [record(2024, "A00", 8.0, 1000), record(2024, "A00", 8.5, 800)],
        (2024, "D01"): [record(2024, "D01", 7.0, 5000), record(2024, "D01", 7.5, 4000)],
        (2023, "A00"): [record(2023, "A00", 8.0, 1200), record(2023, "A00", 8.5, 1100)],
        (2022, "A00"): [record(2022, "A00", 9.75, 10)],
    }


@pytest.fixture
def provider(brackets):
    return FakeProvider(brackets)
