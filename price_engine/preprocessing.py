"""
Data Generation and Preprocessing Module for Property Price Estimation

This module contains all data transformation logic used in both:
1. Model training (synthetic training set generation)
2. Inference (turning PropertyFeatures into a feature vector)

CRITICAL: Training and inference must build the feature vector with the
SAME transformation, in the SAME column order (FEATURE_COLUMNS).

Architecture decisions:
- No external dataset: samples are drawn uniformly from fixed ranges and
  priced with a hand-authored formula plus multiplicative noise
- Randomness comes from numpy's Generator; a fixed seed reproduces the set
- Unseen categories fall back to catalogue defaults (never raise)
"""

from typing import Optional, Tuple

import numpy as np
import pandas as pd

from .catalog import (
    CITY_BASE_PRICES,
    FURNISHING_MULTIPLIERS,
    PROPERTY_TYPE_MULTIPLIERS,
    Amenity,
    City,
    Furnishing,
    PropertyType,
)
from .schemas import PropertyFeatures


FEATURE_COLUMNS = [
    'area',
    'bedrooms',
    'bathrooms',
    'age',
    'floor',
    'city_price_index',       # city base price / 10000
    'property_multiplier',
    'furnishing_multiplier',
    'amenities_index',        # amenities value / 1000
]
TARGET_COLUMN = 'price'
N_FEATURES = len(FEATURE_COLUMNS)

DEFAULT_N_SAMPLES = 2000

# Sampling ranges (integer ranges are inclusive)
AREA_RANGE = (500.0, 3500.0)
BEDROOM_RANGE = (1, 4)
BATHROOM_RANGE = (1, 3)
AGE_RANGE = (0.0, 30.0)
FLOOR_RANGE = (1, 20)
AMENITY_COUNT_RANGE = (0, 4)
NOISE_RANGE = (0.8, 1.2)

# Pricing formula
FLAT_AMENITY_VALUE = 500
AGE_DEPRECIATION_RATE = 0.02
MIN_AGE_FACTOR = 0.7
HIGH_FLOOR_THRESHOLD = 10
HIGH_FLOOR_BONUS = 1.1

CITY_PRICE_SCALE = 10000
AMENITIES_SCALE = 1000


def age_factor(age):
    """Age depreciation factor, floored at MIN_AGE_FACTOR. Works on arrays."""
    return np.maximum(MIN_AGE_FACTOR, 1 - age * AGE_DEPRECIATION_RATE)


def floor_factor(floor):
    """Price bonus for floors above HIGH_FLOOR_THRESHOLD. Works on arrays."""
    return np.where(floor > HIGH_FLOOR_THRESHOLD, HIGH_FLOOR_BONUS, 1.0)


def generate_training_data(
    n_samples: int = DEFAULT_N_SAMPLES,
    random_seed: Optional[int] = None,
    verbose: bool = False
) -> pd.DataFrame:
    """
    Generate a synthetic training set of (features, price) rows.

    Sampling:
    - area uniform in [500, 3500), age uniform in [0, 30)
    - bedrooms 1-4, bathrooms 1-3, floor 1-20 (uniform integers)
    - city, property type and furnishing uniform over their catalogues
    - amenity count 0-4, valued at a flat 500 each

    Pricing:
        price = (area × city × type × furnishing × age_factor × floor_factor
                 + amenities_value) × noise,  noise uniform in [0.8, 1.2)

    Args:
        n_samples: Number of rows to generate
        random_seed: Seed for numpy's Generator (None = fresh entropy)
        verbose: Print generation summary

    Returns:
        DataFrame with FEATURE_COLUMNS plus TARGET_COLUMN
    """
    if n_samples < 0:
        raise ValueError('n_samples must be non-negative')

    rng = np.random.default_rng(random_seed)

    area = rng.uniform(*AREA_RANGE, size=n_samples)
    bedrooms = rng.integers(BEDROOM_RANGE[0], BEDROOM_RANGE[1] + 1, size=n_samples)
    bathrooms = rng.integers(BATHROOM_RANGE[0], BATHROOM_RANGE[1] + 1, size=n_samples)
    age = rng.uniform(*AGE_RANGE, size=n_samples)
    floor = rng.integers(FLOOR_RANGE[0], FLOOR_RANGE[1] + 1, size=n_samples)

    # Categorical draws: pick catalogue members uniformly, keep their numbers
    city_prices = np.array([CITY_BASE_PRICES[c] for c in City], dtype=float)
    type_multipliers = np.array([PROPERTY_TYPE_MULTIPLIERS[t] for t in PropertyType], dtype=float)
    furnishing_multipliers = np.array([FURNISHING_MULTIPLIERS[f] for f in Furnishing], dtype=float)

    city_price = city_prices[rng.integers(0, len(city_prices), size=n_samples)]
    property_multiplier = type_multipliers[rng.integers(0, len(type_multipliers), size=n_samples)]
    furnishing_multiplier = furnishing_multipliers[rng.integers(0, len(furnishing_multipliers), size=n_samples)]

    amenity_count = rng.integers(AMENITY_COUNT_RANGE[0], AMENITY_COUNT_RANGE[1] + 1, size=n_samples)
    amenities_value = amenity_count * FLAT_AMENITY_VALUE

    base_price = area * city_price * property_multiplier * furnishing_multiplier
    noise = rng.uniform(*NOISE_RANGE, size=n_samples)
    price = (base_price * age_factor(age) * floor_factor(floor) + amenities_value) * noise

    df = pd.DataFrame({
        'area': area,
        'bedrooms': bedrooms.astype(float),
        'bathrooms': bathrooms.astype(float),
        'age': age,
        'floor': floor.astype(float),
        'city_price_index': city_price / CITY_PRICE_SCALE,
        'property_multiplier': property_multiplier,
        'furnishing_multiplier': furnishing_multiplier,
        'amenities_index': amenities_value / AMENITIES_SCALE,
        TARGET_COLUMN: price,
    })

    if verbose:
        print(f"Generated {len(df):,} synthetic samples (seed={random_seed})")
        if len(df) > 0:
            print(f"  Price range: {df[TARGET_COLUMN].min():,.0f} - {df[TARGET_COLUMN].max():,.0f}")
            print(f"  Median price: {df[TARGET_COLUMN].median():,.0f}")

    return df


def split_features_and_target(df: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a training DataFrame into the feature matrix and target vector.

    Column order is forced to FEATURE_COLUMNS.
    """
    missing = [col for col in FEATURE_COLUMNS + [TARGET_COLUMN] if col not in df.columns]
    if missing:
        raise ValueError(f"Training data is missing columns: {missing}")

    X = df[FEATURE_COLUMNS].to_numpy(dtype=float)
    y = df[TARGET_COLUMN].to_numpy(dtype=float)
    return X, y


def amenities_value_per_sqft(features: PropertyFeatures) -> float:
    """Sum of per-sq-ft values of the selected amenities (unknown = 0)."""
    return float(sum(Amenity.lookup(name) for name in features.unique_amenities))


def normalize_features(features: PropertyFeatures) -> np.ndarray:
    """
    Build the 9-dimensional feature vector for one property.

    Uses the same transformation as generate_training_data. Unknown
    categories fall back to defaults:
    - city -> 8000 base price
    - property type / furnishing -> 1.0 multiplier
    - amenity -> 0
    """
    return np.array([
        features.area,
        features.bedrooms,
        features.bathrooms,
        features.age,
        features.floor,
        City.lookup(features.location) / CITY_PRICE_SCALE,
        PropertyType.lookup(features.property_type),
        Furnishing.lookup(features.furnishing),
        amenities_value_per_sqft(features) / AMENITIES_SCALE,
    ], dtype=float)


def preprocess_for_inference(features: PropertyFeatures) -> pd.DataFrame:
    """
    Preprocess a single property for inference.

    Returns:
        DataFrame with one row, columns in FEATURE_COLUMNS order
    """
    return pd.DataFrame([normalize_features(features)], columns=FEATURE_COLUMNS)
