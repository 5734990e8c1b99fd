"""
Lookup catalogue for categorical property attributes.

Every categorical input (city, property type, furnishing, amenity) is a
closed enumeration with an explicit numeric value and a designated default
for strings that do not match any member. The defaults keep the scoring
pipeline total: unknown values never raise, they just fall back.

Values (INR):
- City: base price per sq ft
- PropertyType / Furnishing: price multiplier
- Amenity: additional value per sq ft
"""

from enum import Enum
from typing import Dict, Optional


class _Catalogue(Enum):
    """Shared string lookup for the catalogue enums."""

    @classmethod
    def from_string(cls, value: Optional[str]):
        """
        Convert string to member. None if unknown.

        Exact match only: "Pune" or "builder_floor" are unknown and take
        the default.
        """
        if not isinstance(value, str):
            return None
        for member in cls:
            if member.value == value:
                return member
        return None

    @classmethod
    def is_known(cls, value: Optional[str]) -> bool:
        return cls.from_string(value) is not None

    @classmethod
    def lookup(cls, value: Optional[str]) -> float:
        """Numeric value for a raw string, or the catalogue default."""
        member = cls.from_string(value)
        if member is None:
            return cls.default_value()
        return member.numeric

    @classmethod
    def default_value(cls) -> float:
        raise NotImplementedError

    @property
    def numeric(self) -> float:
        raise NotImplementedError

    @property
    def label(self) -> str:
        return _LABELS.get(self, self.value.replace("-", " ").title())


class City(_Catalogue):
    MUMBAI = "mumbai"
    DELHI = "delhi"
    BANGALORE = "bangalore"
    PUNE = "pune"
    HYDERABAD = "hyderabad"
    CHENNAI = "chennai"
    GURGAON = "gurgaon"
    NOIDA = "noida"
    KOLKATA = "kolkata"
    AHMEDABAD = "ahmedabad"

    @classmethod
    def default_value(cls) -> float:
        return DEFAULT_CITY_BASE_PRICE

    @property
    def numeric(self) -> float:
        return CITY_BASE_PRICES[self]


class PropertyType(_Catalogue):
    APARTMENT = "apartment"
    VILLA = "villa"
    DUPLEX = "duplex"
    PENTHOUSE = "penthouse"
    STUDIO = "studio"
    BUILDER_FLOOR = "builder-floor"

    @classmethod
    def default_value(cls) -> float:
        return DEFAULT_MULTIPLIER

    @property
    def numeric(self) -> float:
        return PROPERTY_TYPE_MULTIPLIERS[self]


class Furnishing(_Catalogue):
    UNFURNISHED = "unfurnished"
    SEMI_FURNISHED = "semi-furnished"
    FULLY_FURNISHED = "fully-furnished"

    @classmethod
    def default_value(cls) -> float:
        return DEFAULT_MULTIPLIER

    @property
    def numeric(self) -> float:
        return FURNISHING_MULTIPLIERS[self]


class Amenity(_Catalogue):
    PARKING = "parking"
    GYM = "gym"
    SWIMMING_POOL = "swimming-pool"
    SECURITY = "security"
    POWER_BACKUP = "power-backup"
    ELEVATOR = "elevator"
    GARDEN = "garden"
    CLUB_HOUSE = "club-house"
    CHILDREN_PLAY_AREA = "children-play-area"
    SHOPPING_CENTER = "shopping-center"

    @classmethod
    def default_value(cls) -> float:
        return DEFAULT_AMENITY_VALUE

    @property
    def numeric(self) -> float:
        return AMENITY_VALUES[self]


# ==================== NUMERIC TABLES ====================

CITY_BASE_PRICES: Dict[City, float] = {
    City.MUMBAI: 25000,
    City.DELHI: 18000,
    City.BANGALORE: 12000,
    City.PUNE: 10000,
    City.HYDERABAD: 9000,
    City.CHENNAI: 11000,
    City.GURGAON: 15000,
    City.NOIDA: 8000,
    City.KOLKATA: 7000,
    City.AHMEDABAD: 6000,
}
DEFAULT_CITY_BASE_PRICE = 8000

PROPERTY_TYPE_MULTIPLIERS: Dict[PropertyType, float] = {
    PropertyType.APARTMENT: 1.0,
    PropertyType.VILLA: 1.5,
    PropertyType.DUPLEX: 1.3,
    PropertyType.PENTHOUSE: 2.0,
    PropertyType.STUDIO: 0.7,
    PropertyType.BUILDER_FLOOR: 1.1,
}

FURNISHING_MULTIPLIERS: Dict[Furnishing, float] = {
    Furnishing.UNFURNISHED: 1.0,
    Furnishing.SEMI_FURNISHED: 1.1,
    Furnishing.FULLY_FURNISHED: 1.25,
}
DEFAULT_MULTIPLIER = 1.0

AMENITY_VALUES: Dict[Amenity, float] = {
    Amenity.PARKING: 500,
    Amenity.GYM: 800,
    Amenity.SWIMMING_POOL: 1200,
    Amenity.SECURITY: 300,
    Amenity.POWER_BACKUP: 400,
    Amenity.ELEVATOR: 600,
    Amenity.GARDEN: 700,
    Amenity.CLUB_HOUSE: 900,
    Amenity.CHILDREN_PLAY_AREA: 400,
    Amenity.SHOPPING_CENTER: 600,
}
DEFAULT_AMENITY_VALUE = 0

_LABELS = {
    PropertyType.BUILDER_FLOOR: "Builder Floor",
    Furnishing.SEMI_FURNISHED: "Semi-Furnished",
    Amenity.SECURITY: "24/7 Security",
}
