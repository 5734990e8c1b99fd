"""
Shared fixtures for the price engine tests.

Every fixture that touches randomness pins an explicit seed.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from price_engine import PropertyFeatures, generate_training_data, train_model


SEED = 42


@pytest.fixture(scope="session")
def training_set():
    """Seeded synthetic training set."""
    return generate_training_data(2000, random_seed=SEED)


@pytest.fixture(scope="session")
def fitted_model():
    """Model fitted once on the seeded training set."""
    return train_model(n_samples=2000, random_seed=SEED, verbose=False)


@pytest.fixture
def pune_apartment():
    """Reference scenario: recognized city, type and furnishing."""
    return PropertyFeatures(
        area=1200,
        bedrooms=2,
        bathrooms=2,
        property_type="apartment",
        location="pune",
        age=5,
        floor=3,
        furnishing="unfurnished",
        amenities=[],
    )


@pytest.fixture
def make_features():
    """Factory fixture for property features with overridable fields."""
    def _create(**overrides) -> PropertyFeatures:
        values = dict(
            area=1200,
            bedrooms=2,
            bathrooms=2,
            property_type="apartment",
            location="pune",
            age=5,
            floor=3,
            furnishing="unfurnished",
            amenities=[],
        )
        values.update(overrides)
        return PropertyFeatures(**values)
    return _create
