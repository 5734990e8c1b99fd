"""
Property Price Estimation Engine

Closed-form ML system for property valuation with:
- Synthetic training data generated in-process
- Linear regression fitted via the normal equation (Gauss-Jordan inverse)
- Rule-based confidence and price ranges
- Additive feature breakdown and EMI calculator
"""

from .catalog import Amenity, City, Furnishing, PropertyType
from .config import EngineConfig
from .emi import EMIResult, calculate_emi
from .formatting import format_inr, format_inr_short
from .model import FittedModel, ModelFitError, fit, predict, train_model
from .preprocessing import generate_training_data, normalize_features
from .schemas import PredictionResult, PriceRange, PropertyFeatures
from .service import PredictionService

__all__ = [
    "Amenity",
    "City",
    "Furnishing",
    "PropertyType",
    "EngineConfig",
    "EMIResult",
    "calculate_emi",
    "format_inr",
    "format_inr_short",
    "FittedModel",
    "ModelFitError",
    "fit",
    "predict",
    "train_model",
    "generate_training_data",
    "normalize_features",
    "PredictionResult",
    "PriceRange",
    "PropertyFeatures",
    "PredictionService",
]

__version__ = "1.0.0"
