"""
Model Training and Scoring Module for Property Price Estimation

This module handles:
1. Closed-form linear regression fit (normal equation)
2. Scoring a property: point estimate, confidence, price range, breakdown
3. Model evaluation metrics (R², MAE, MAPE)
4. Feature importance from the fitted weights

Key Technical Decisions:
- Model: ordinary least squares with a bias term, θ = (XᵗX)⁻¹Xᵗy
- Inversion: Gauss-Jordan with partial pivoting (see linalg.py); a singular
  system raises ModelFitError instead of yielding NaN coefficients
- Optional ridge fallback when the plain system cannot be solved
- The fitted model is an immutable value passed explicitly to predict()
- Confidence is rule-based (how in-distribution the input looks), not a
  statistical interval
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_absolute_percentage_error, r2_score

from .catalog import City, Furnishing, PropertyType
from .formatting import format_inr
from .linalg import invert, matmul, transpose
from .preprocessing import (
    AGE_DEPRECIATION_RATE,
    DEFAULT_N_SAMPLES,
    FEATURE_COLUMNS,
    HIGH_FLOOR_THRESHOLD,
    N_FEATURES,
    amenities_value_per_sqft,
    generate_training_data,
    normalize_features,
    split_features_and_target,
)
from .schemas import (
    AGE_DEPRECIATION_KEY,
    AMENITIES_VALUE_KEY,
    BASE_PRICE_KEY,
    FLOOR_PREMIUM_KEY,
    FURNISHING_PREMIUM_KEY,
    TYPE_ADJUSTMENT_KEY,
    PredictionResult,
    PriceRange,
    PropertyFeatures,
)


MIN_PRICE = 500_000

# Confidence rules
BASE_CONFIDENCE = 0.5
TYPICAL_AREA_RANGE = (500, 3000)
AREA_CONFIDENCE_BONUS = 0.2
LOCATION_CONFIDENCE_BONUS = 0.15
PROPERTY_TYPE_CONFIDENCE_BONUS = 0.10
AGE_CONFIDENCE_THRESHOLD = 15
AGE_CONFIDENCE_BONUS = 0.05
MAX_CONFIDENCE = 0.95

# Price range
BASE_MARGIN = 0.3
CONFIDENCE_MARGIN_FACTOR = 0.2
MIN_RANGE_RATIO = 0.7

FLOOR_PREMIUM_RATE = 0.1

DEFAULT_RIDGE_FALLBACK = 1e-6


class ModelFitError(RuntimeError):
    """Raised when the normal equation cannot be solved."""


@dataclass(frozen=True)
class FittedModel:
    """
    Learned state of the regression: bias plus one weight per feature.

    Immutable once created; safe to share between callers.
    """
    bias: float
    weights: Tuple[float, ...]
    n_samples: int = 0
    ridge: float = 0.0

    def __post_init__(self):
        weights = tuple(float(w) for w in self.weights)
        if len(weights) != N_FEATURES:
            raise ValueError(
                f"FittedModel needs {N_FEATURES} weights (one per feature), got {len(weights)}"
            )
        object.__setattr__(self, 'weights', weights)
        object.__setattr__(self, 'bias', float(self.bias))

    @property
    def coefficients(self) -> np.ndarray:
        """[bias, w1, ..., w9]"""
        return np.array((self.bias,) + self.weights)

    def score(self, feature_vector: np.ndarray) -> float:
        """Raw linear score for one normalized feature vector (no clamping)."""
        return self.bias + float(np.dot(self.weights, feature_vector))

    def predict_raw(self, X: np.ndarray) -> np.ndarray:
        """Raw linear scores for a feature matrix (rows in FEATURE_COLUMNS order)."""
        return self.bias + np.asarray(X, dtype=float) @ np.array(self.weights)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ==================== TRAINING ====================

def fit(training_set: pd.DataFrame, ridge: float = 0.0) -> FittedModel:
    """
    Fit the linear model on a training set via the normal equation.

    The design matrix gets a leading column of ones for the bias. With
    ``ridge > 0`` a penalty of ``ridge × max(diag(XᵗX))`` is added to the
    diagonal for the weights (never the bias).

    Args:
        training_set: DataFrame with FEATURE_COLUMNS and the target column
        ridge: Relative ridge penalty (0 = plain least squares)

    Returns:
        FittedModel

    Raises:
        ModelFitError: empty training set, singular XᵗX, non-finite result
    """
    X, y = split_features_and_target(training_set)
    n_samples = X.shape[0]
    if n_samples == 0:
        raise ModelFitError("Training set is empty")

    design = np.hstack([np.ones((n_samples, 1)), X])
    design_t = transpose(design)
    gram = matmul(design_t, design)

    if ridge > 0:
        penalty = ridge * float(np.max(np.diag(gram))) * np.eye(gram.shape[0])
        penalty[0, 0] = 0.0
        gram = gram + penalty

    inversion = invert(gram)
    if not inversion.success:
        raise ModelFitError(f"Normal equation could not be solved: {inversion.reason}")

    xty = matmul(design_t, y.reshape(-1, 1))
    theta = matmul(inversion.inverse, xty).ravel()

    if not np.all(np.isfinite(theta)):
        raise ModelFitError("Fitted coefficients are not finite")

    return FittedModel(
        bias=theta[0],
        weights=tuple(theta[1:]),
        n_samples=n_samples,
        ridge=ridge,
    )


def train_model(
    n_samples: int = DEFAULT_N_SAMPLES,
    random_seed: Optional[int] = None,
    ridge_fallback: float = DEFAULT_RIDGE_FALLBACK,
    verbose: bool = True
) -> FittedModel:
    """
    Generate a synthetic training set and fit the model once.

    If the plain normal equation is singular, retry once with
    ``ridge_fallback`` (skipped when it is 0).

    Args:
        n_samples: Number of synthetic samples
        random_seed: Seed for the generator (None = non-reproducible)
        ridge_fallback: Relative ridge penalty for the retry
        verbose: Print training progress

    Returns:
        FittedModel
    """
    if verbose:
        print("=" * 80)
        print("TRAINING LINEAR REGRESSION MODEL")
        print("=" * 80)

    training_set = generate_training_data(n_samples, random_seed=random_seed, verbose=verbose)

    try:
        model = fit(training_set)
    except ModelFitError as e:
        if ridge_fallback <= 0:
            raise
        if verbose:
            print(f"Plain fit failed ({e}), retrying with ridge={ridge_fallback}")
        model = fit(training_set, ridge=ridge_fallback)

    if verbose:
        print(f"Bias: {model.bias:,.2f}")
        for name, weight in zip(FEATURE_COLUMNS, model.weights):
            print(f"  {name:<24} {weight:>18,.4f}")
        print("=" * 80)
        print("TRAINING COMPLETE")
        print("=" * 80)

    return model


# ==================== SCORING ====================

def compute_confidence(features: PropertyFeatures) -> float:
    """
    Rule-based confidence in [0.5, 0.95].

    Rules (additive, then capped at 0.95):
    - base 0.5
    - +0.2 area within [500, 3000]
    - +0.15 recognized city
    - +0.10 recognized property type
    - +0.05 age <= 15
    """
    confidence = BASE_CONFIDENCE

    if TYPICAL_AREA_RANGE[0] <= features.area <= TYPICAL_AREA_RANGE[1]:
        confidence += AREA_CONFIDENCE_BONUS

    if City.is_known(features.location):
        confidence += LOCATION_CONFIDENCE_BONUS

    if PropertyType.is_known(features.property_type):
        confidence += PROPERTY_TYPE_CONFIDENCE_BONUS

    if features.age <= AGE_CONFIDENCE_THRESHOLD:
        confidence += AGE_CONFIDENCE_BONUS

    return min(confidence, MAX_CONFIDENCE)


def compute_price_range(predicted_price: float, confidence: float) -> PriceRange:
    """
    Price range around the estimate; narrower when confidence is higher.

    margin = price × (0.3 − 0.2 × confidence); the lower bound never falls
    below 70% of the price.
    """
    margin = predicted_price * (BASE_MARGIN - confidence * CONFIDENCE_MARGIN_FACTOR)
    lower = max(predicted_price - margin, predicted_price * MIN_RANGE_RATIO)
    upper = predicted_price + margin
    return PriceRange(min=_round_half_up(lower), max=_round_half_up(upper))


def compute_breakdown(features: PropertyFeatures) -> Dict[str, int]:
    """
    Additive per-factor contributions for display.

    Derived from the catalogue, not from the regression weights, so the
    entries do not sum to the predicted price. Zero entries are kept.
    """
    base_price = features.area * City.lookup(features.location)
    property_multiplier = PropertyType.lookup(features.property_type)
    furnishing_multiplier = Furnishing.lookup(features.furnishing)
    floor_premium = base_price * FLOOR_PREMIUM_RATE if features.floor > HIGH_FLOOR_THRESHOLD else 0.0
    amenities_value = amenities_value_per_sqft(features) * features.area

    return {
        BASE_PRICE_KEY: _round_half_up(base_price),
        TYPE_ADJUSTMENT_KEY: _round_half_up(base_price * (property_multiplier - 1)),
        FURNISHING_PREMIUM_KEY: _round_half_up(base_price * (furnishing_multiplier - 1)),
        AGE_DEPRECIATION_KEY: _round_half_up(-base_price * features.age * AGE_DEPRECIATION_RATE),
        FLOOR_PREMIUM_KEY: _round_half_up(floor_premium),
        AMENITIES_VALUE_KEY: _round_half_up(amenities_value),
    }


def predict(model: FittedModel, features: PropertyFeatures) -> PredictionResult:
    """
    Score one property against a fitted model.

    Process:
    1. Normalize features (same transformation as training)
    2. Linear score, clamped to at least MIN_PRICE
    3. Confidence from the recognition rules
    4. Price range from price and confidence
    5. Display breakdown

    Pure function: identical inputs give identical output.

    Raises:
        ValueError: the score is not finite (e.g. NaN area)
    """
    feature_vector = normalize_features(features)
    raw_price = model.score(feature_vector)
    if not math.isfinite(raw_price):
        raise ValueError(f"Prediction is not finite: {raw_price}")

    predicted_price = max(raw_price, MIN_PRICE)
    confidence = compute_confidence(features)

    return PredictionResult(
        price=_round_half_up(predicted_price),
        confidence=_round_half_up(confidence * 100) / 100,
        price_range=compute_price_range(predicted_price, confidence),
        breakdown=compute_breakdown(features),
    )


# ==================== EVALUATION ====================

def compute_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    dataset_name: str = "Dataset",
    min_target: float = 1.0,
    verbose: bool = True
) -> Dict[str, float]:
    """
    R², MAE (INR) and MAPE (%) for a set of price predictions.

    Targets at or below ``min_target`` are left out of MAPE only; the
    returned ``mape_excluded_count`` says how many. MAPE is NaN when no
    target qualifies.
    """
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)

    priced = y_true > min_target
    n_priced = int(priced.sum())
    if n_priced:
        mape = 100 * mean_absolute_percentage_error(y_true[priced], y_pred[priced])
    else:
        mape = np.nan

    metrics = {
        'r2': float(r2_score(y_true, y_pred)),
        'mae': float(mean_absolute_error(y_true, y_pred)),
        'mape': float(mape),
        'mape_excluded_count': len(y_true) - n_priced
    }

    if verbose:
        print(f"\n{'=' * 80}")
        print(f"{dataset_name.upper()} METRICS")
        print(f"{'=' * 80}")
        print(f"R²:    {metrics['r2']:.4f}")
        print(f"MAE:   {format_inr(metrics['mae'])}")
        if n_priced:
            print(f"MAPE:  {mape:.2f}% over {n_priced:,} rows")
        else:
            print(f"MAPE:  n/a (no target above {min_target:,.0f})")

    return metrics


def evaluate_model(
    model: FittedModel,
    data: pd.DataFrame,
    dataset_name: str = "Dataset",
    verbose: bool = True
) -> Dict[str, float]:
    """
    Evaluate the raw (unclamped) regression on a labelled DataFrame.

    Args:
        model: Fitted model
        data: DataFrame with FEATURE_COLUMNS and the target column
        dataset_name: Name for printing

    Returns:
        Metrics dictionary from compute_metrics
    """
    X, y = split_features_and_target(data)
    return compute_metrics(y, model.predict_raw(X), dataset_name, verbose=verbose)


def get_feature_importance(model: FittedModel, data: pd.DataFrame) -> pd.DataFrame:
    """
    Rank features by |weight × feature std| over the given data.

    Raw weights are not comparable across features (area is in sq ft,
    multipliers hover around 1), so each weight is scaled by the spread of
    its feature.

    Returns:
        DataFrame with columns feature, weight, importance (descending)
    """
    X, _ = split_features_and_target(data)
    weights = np.array(model.weights)
    importance = np.abs(weights * X.std(axis=0))

    importance_df = pd.DataFrame({
        'feature': FEATURE_COLUMNS,
        'weight': weights,
        'importance': importance
    }).sort_values('importance', ascending=False)

    return importance_df.reset_index(drop=True)
