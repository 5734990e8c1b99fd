"""
Prediction service: the boundary between callers and the scoring core.

Holds the fitted model plus the state a form needs (last prediction,
loading flag, error message). A fixed artificial delay before scoring
emulates network latency; it has no effect on the result.

Any exception raised while predicting is caught here, printed, and
surfaced as one static message. No retries, no partial results.
"""

import asyncio
from typing import Optional

from .config import EngineConfig
from .model import FittedModel, predict, train_model
from .schemas import PredictionResult, PropertyFeatures


PREDICTION_ERROR_MESSAGE = "Failed to predict price. Please try again."


class PredictionService:
    """
    Stateful wrapper around predict() for interactive use.

    The model is fitted once (by the caller or by from_config) and only
    read afterwards.
    """

    def __init__(self, model: FittedModel, config: Optional[EngineConfig] = None):
        self._model = model
        self._config = config or EngineConfig.load()

        self.prediction: Optional[PredictionResult] = None
        self.is_loading: bool = False
        self.error: Optional[str] = None

    @classmethod
    def from_config(cls, config: Optional[EngineConfig] = None) -> "PredictionService":
        """Train a model per the configuration and wrap it."""
        config = config or EngineConfig.load()
        model = train_model(
            n_samples=config.n_samples,
            random_seed=config.random_seed,
            ridge_fallback=config.ridge_fallback,
            verbose=config.verbose,
        )
        return cls(model, config)

    @property
    def model(self) -> FittedModel:
        return self._model

    async def predict(self, features: PropertyFeatures) -> Optional[PredictionResult]:
        """
        Predict a price after the artificial delay.

        Returns:
            The PredictionResult, or None if prediction failed (see ``error``)
        """
        self.is_loading = True
        self.error = None

        try:
            await asyncio.sleep(self._config.prediction_delay_seconds)
            result = predict(self._model, features)
            self.prediction = result
            return result
        except Exception as e:
            self.error = PREDICTION_ERROR_MESSAGE
            print(f"Prediction error: {e}")
            return None
        finally:
            self.is_loading = False

    def clear_prediction(self) -> None:
        self.prediction = None
        self.error = None
