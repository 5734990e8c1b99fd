"""
Input and output schemas for price prediction.

Field types are enforced by pydantic; value ranges are not. The scoring
pipeline tolerates unknown categorical strings by falling back to the
catalogue defaults.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


# Breakdown keys, in display order
BASE_PRICE_KEY = "Base Price (Area × Location)"
TYPE_ADJUSTMENT_KEY = "Property Type Adjustment"
FURNISHING_PREMIUM_KEY = "Furnishing Premium"
AGE_DEPRECIATION_KEY = "Age Depreciation"
FLOOR_PREMIUM_KEY = "Floor Premium"
AMENITIES_VALUE_KEY = "Amenities Value"

BREAKDOWN_KEYS = (
    BASE_PRICE_KEY,
    TYPE_ADJUSTMENT_KEY,
    FURNISHING_PREMIUM_KEY,
    AGE_DEPRECIATION_KEY,
    FLOOR_PREMIUM_KEY,
    AMENITIES_VALUE_KEY,
)


class PropertyFeatures(BaseModel):
    """
    Property attributes submitted for a price estimate.

    Numeric defaults mirror the values the entry form starts with.
    """
    area: float = Field(1200, description="Floor area in sq ft")
    bedrooms: int = Field(2, description="Number of bedrooms")
    bathrooms: int = Field(2, description="Number of bathrooms")
    property_type: str = Field(..., description="Property type (e.g., 'apartment', 'villa')")
    location: str = Field(..., description="City (e.g., 'pune', 'mumbai')")
    age: float = Field(5, description="Age of the property in years")
    floor: int = Field(3, description="Floor number")
    furnishing: str = Field(..., description="Furnishing status (e.g., 'unfurnished')")
    amenities: List[str] = Field(default_factory=list, description="Selected amenities")

    class Config:
        json_schema_extra = {
            "example": {
                "area": 1200,
                "bedrooms": 2,
                "bathrooms": 2,
                "property_type": "apartment",
                "location": "pune",
                "age": 5,
                "floor": 3,
                "furnishing": "unfurnished",
                "amenities": ["parking", "gym"]
            }
        }

    @property
    def unique_amenities(self) -> List[str]:
        """Amenities with duplicates removed, in first-seen order."""
        return list(dict.fromkeys(self.amenities))


class PriceRange(BaseModel):
    """Price interval around the point estimate"""
    min: int = Field(..., description="Lower bound of the price range")
    max: int = Field(..., description="Upper bound of the price range")


class PredictionResult(BaseModel):
    """
    Output of scoring one property against a fitted model.

    The breakdown is a display aid: its entries are derived independently
    of the regression and are not expected to sum to ``price``.
    """
    price: int = Field(..., description="Predicted price (INR)")
    confidence: float = Field(..., description="Heuristic confidence in [0.5, 0.95]")
    price_range: PriceRange = Field(..., description="Price range derived from confidence")
    breakdown: Dict[str, int] = Field(..., description="Signed contribution per factor")

    def chart_breakdown(self) -> Dict[str, int]:
        """Breakdown entries worth charting (zero values dropped)."""
        return {name: value for name, value in self.breakdown.items() if value != 0}

    @property
    def investment_recommendation(self) -> str:
        if self.confidence >= 0.8:
            return "Excellent investment opportunity"
        if self.confidence >= 0.6:
            return "Good investment with moderate risk"
        return "High risk investment - proceed with caution"

    def price_per_sqft(self, area: float) -> int:
        """Point estimate divided by floor area, rounded to whole INR."""
        if area <= 0:
            raise ValueError("area must be greater than 0")
        return int(round(self.price / area))
