"""
EMI (equated monthly instalment) calculator for a predicted price.

EMI = P × r × (1 + r)^n / ((1 + r)^n − 1)
    P: loan amount (price − down payment)
    r: monthly interest rate (annual % / 1200)
    n: tenure in months
"""

from dataclasses import dataclass
from typing import Optional


DEFAULT_DOWN_PAYMENT_RATIO = 0.2
DEFAULT_ANNUAL_RATE = 8.5
DEFAULT_TENURE_YEARS = 20


@dataclass
class EMIResult:
    """Loan figures for one price / down payment / rate / tenure choice."""
    property_price: float
    down_payment: float
    loan_amount: float
    annual_rate: float
    tenure_years: int
    emi: float
    total_payment: float
    total_interest: float

    @property
    def down_payment_percentage(self) -> float:
        if self.property_price == 0:
            return 0.0
        return self.down_payment / self.property_price * 100

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / (12 * 100)

    @property
    def first_month_interest(self) -> float:
        """Interest part of the first instalment."""
        return self.loan_amount * self.monthly_rate

    @property
    def first_month_principal(self) -> float:
        """Principal part of the first instalment."""
        return self.emi - self.first_month_interest

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "property_price": self.property_price,
            "down_payment": self.down_payment,
            "down_payment_percentage": round(self.down_payment_percentage, 1),
            "loan_amount": self.loan_amount,
            "annual_rate": self.annual_rate,
            "tenure_years": self.tenure_years,
            "emi": self.emi,
            "total_payment": self.total_payment,
            "total_interest": self.total_interest,
        }


def monthly_instalment(loan_amount: float, annual_rate: float, tenure_months: int) -> float:
    """Annuity payment; a zero rate degenerates to straight-line repayment."""
    if tenure_months <= 0:
        raise ValueError("tenure must be at least one month")
    monthly_rate = annual_rate / (12 * 100)
    if monthly_rate == 0:
        return loan_amount / tenure_months
    growth = (1 + monthly_rate) ** tenure_months
    return loan_amount * monthly_rate * growth / (growth - 1)


def calculate_emi(
    property_price: float,
    down_payment: Optional[float] = None,
    annual_rate: float = DEFAULT_ANNUAL_RATE,
    tenure_years: int = DEFAULT_TENURE_YEARS
) -> EMIResult:
    """
    Calculate the monthly EMI for a property purchase.

    Args:
        property_price: Price of the property (INR)
        down_payment: Upfront payment; defaults to 20% of the price
        annual_rate: Interest rate in percent per year
        tenure_years: Loan tenure in years

    Returns:
        EMIResult

    Raises:
        ValueError: negative price/rate, down payment above price,
            non-positive tenure
    """
    if property_price < 0:
        raise ValueError("property_price must be non-negative")
    if annual_rate < 0:
        raise ValueError("annual_rate must be non-negative")
    if tenure_years <= 0:
        raise ValueError("tenure_years must be greater than 0")

    if down_payment is None:
        down_payment = property_price * DEFAULT_DOWN_PAYMENT_RATIO
    if down_payment < 0 or down_payment > property_price:
        raise ValueError("down_payment must be between 0 and the property price")

    loan_amount = property_price - down_payment
    total_months = tenure_years * 12
    emi = monthly_instalment(loan_amount, annual_rate, total_months)
    total_payment = emi * total_months

    return EMIResult(
        property_price=property_price,
        down_payment=down_payment,
        loan_amount=loan_amount,
        annual_rate=annual_rate,
        tenure_years=tenure_years,
        emi=emi,
        total_payment=total_payment,
        total_interest=total_payment - loan_amount,
    )
