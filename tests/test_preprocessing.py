"""
Tests for synthetic data generation and feature normalization.

Verifies:
- Generated samples respect their sampling ranges
- Prices follow the pricing formula within the noise band
- Same seed -> identical data, different seed -> different data
- Unknown categories fall back to catalogue defaults
"""

import numpy as np
import pandas as pd
import pytest

from price_engine.catalog import CITY_BASE_PRICES, FURNISHING_MULTIPLIERS, PROPERTY_TYPE_MULTIPLIERS
from price_engine.preprocessing import (
    FEATURE_COLUMNS,
    TARGET_COLUMN,
    age_factor,
    floor_factor,
    generate_training_data,
    normalize_features,
    preprocess_for_inference,
    split_features_and_target,
)


class TestGenerateTrainingData:
    """Tests for generate_training_data()."""

    def test_shape_and_columns(self, training_set):
        assert len(training_set) == 2000
        assert list(training_set.columns) == FEATURE_COLUMNS + [TARGET_COLUMN]

    def test_continuous_ranges(self, training_set):
        assert training_set['area'].between(500, 3500).all()
        assert training_set['age'].between(0, 30).all()

    def test_integer_ranges(self, training_set):
        assert set(training_set['bedrooms'].unique()) <= {1, 2, 3, 4}
        assert set(training_set['bathrooms'].unique()) <= {1, 2, 3}
        assert training_set['floor'].between(1, 20).all()
        assert (training_set['floor'] == training_set['floor'].round()).all()

    def test_categorical_values_come_from_catalogue(self, training_set):
        city_indices = {price / 10000 for price in CITY_BASE_PRICES.values()}

        assert set(training_set['city_price_index'].unique()) <= city_indices
        assert set(training_set['property_multiplier'].unique()) <= set(PROPERTY_TYPE_MULTIPLIERS.values())
        assert set(training_set['furnishing_multiplier'].unique()) <= set(FURNISHING_MULTIPLIERS.values())
        assert set(training_set['amenities_index'].unique()) <= {0.0, 0.5, 1.0, 1.5, 2.0}

    def test_prices_within_noise_band_of_formula(self, training_set):
        df = training_set
        noiseless = (
            df['area'] * df['city_price_index'] * 10000
            * df['property_multiplier'] * df['furnishing_multiplier']
            * age_factor(df['age']) * floor_factor(df['floor'])
            + df['amenities_index'] * 1000
        )
        ratio = df[TARGET_COLUMN] / noiseless

        assert (ratio >= 0.8 - 1e-9).all()
        assert (ratio <= 1.2 + 1e-9).all()

    def test_same_seed_reproduces_data(self):
        first = generate_training_data(100, random_seed=7)
        second = generate_training_data(100, random_seed=7)

        pd.testing.assert_frame_equal(first, second)

    def test_different_seed_changes_data(self):
        first = generate_training_data(100, random_seed=7)
        second = generate_training_data(100, random_seed=8)

        assert not first[TARGET_COLUMN].equals(second[TARGET_COLUMN])

    def test_zero_samples(self):
        df = generate_training_data(0, random_seed=1)

        assert len(df) == 0
        assert list(df.columns) == FEATURE_COLUMNS + [TARGET_COLUMN]

    def test_negative_samples_rejected(self):
        with pytest.raises(ValueError):
            generate_training_data(-1)


class TestPricingFactors:

    def test_age_factor_is_floored(self):
        assert age_factor(0) == pytest.approx(1.0)
        assert age_factor(10) == pytest.approx(0.8)
        assert age_factor(30) == pytest.approx(0.7)

    def test_floor_bonus_only_above_ten(self):
        assert floor_factor(10) == 1.0
        assert floor_factor(11) == pytest.approx(1.1)


class TestNormalizeFeatures:
    """Tests for normalize_features()."""

    def test_reference_vector(self, pune_apartment):
        vector = normalize_features(pune_apartment)

        np.testing.assert_allclose(vector, [1200, 2, 2, 5, 3, 1.0, 1.0, 1.0, 0.0])

    def test_amenities_scaled_per_thousand(self, make_features):
        vector = normalize_features(make_features(amenities=["parking", "gym"]))

        assert vector[8] == pytest.approx(1.3)

    def test_duplicate_amenities_counted_once(self, make_features):
        once = normalize_features(make_features(amenities=["gym"]))
        twice = normalize_features(make_features(amenities=["gym", "gym"]))

        np.testing.assert_array_equal(once, twice)

    def test_amenity_order_irrelevant(self, make_features):
        a = normalize_features(make_features(amenities=["gym", "parking"]))
        b = normalize_features(make_features(amenities=["parking", "gym"]))

        np.testing.assert_allclose(a, b)

    def test_unknown_categories_use_defaults(self, make_features):
        vector = normalize_features(make_features(
            location="atlantis",
            property_type="castle",
            furnishing="bare",
            amenities=["helipad"],
        ))

        assert vector[5] == pytest.approx(0.8)
        assert vector[6] == 1.0
        assert vector[7] == 1.0
        assert vector[8] == 0.0

    def test_case_variants_fall_back_to_defaults(self, make_features):
        vector = normalize_features(make_features(
            location="Mumbai", property_type="VILLA", furnishing="Semi_Furnished", amenities=["Gym"]
        ))

        assert vector[5] == pytest.approx(0.8)
        assert vector[6] == 1.0
        assert vector[7] == 1.0
        assert vector[8] == 0.0


class TestInferenceFrame:

    def test_preprocess_for_inference(self, pune_apartment):
        X = preprocess_for_inference(pune_apartment)

        assert X.shape == (1, len(FEATURE_COLUMNS))
        assert list(X.columns) == FEATURE_COLUMNS
        assert X.iloc[0]['area'] == 1200

    def test_split_features_and_target(self, training_set):
        X, y = split_features_and_target(training_set)

        assert X.shape == (2000, 9)
        assert y.shape == (2000,)

    def test_split_missing_columns_raises(self, training_set):
        with pytest.raises(ValueError, match="missing columns"):
            split_features_and_target(training_set.drop(columns=['floor']))
