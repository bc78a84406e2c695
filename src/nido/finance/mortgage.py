"""
Cálculo de cuota hipotecaria (sistema francés, tasa fija).
"""

from typing import Optional

from pydantic import BaseModel, Field

from nido.config import get_settings


class MortgageQuote(BaseModel):
    """Resultado del cálculo de un préstamo hipotecario."""

    price: float = Field(..., description="Precio de la propiedad")
    down_payment: float = Field(..., description="Anticipo")
    loan_amount: float = Field(..., description="Monto financiado")
    annual_rate: float = Field(..., description="Tasa anual (%)")
    number_of_payments: int = Field(..., description="Cantidad de cuotas mensuales")
    monthly_payment: float = Field(..., description="Cuota mensual")

    @property
    def total_paid(self) -> float:
        return self.monthly_payment * self.number_of_payments

    @property
    def total_interest(self) -> float:
        return self.total_paid - self.loan_amount


def calculate_mortgage(
    price: float,
    down_payment_percent: float = 20,
    years: int = 20,
    annual_rate: float = 3.5,
) -> MortgageQuote:
    """
    Calcula la cuota mensual: M = P * r * (1+r)^n / ((1+r)^n - 1).

    Args:
        price: Precio de la propiedad
        down_payment_percent: Anticipo como porcentaje del precio (0-100)
        years: Plazo en años
        annual_rate: Tasa anual en porcentaje

    Raises:
        ValueError: Si algún parámetro está fuera de rango
    """
    if price < 0:
        raise ValueError("El precio no puede ser negativo")
    if not 0 <= down_payment_percent <= 100:
        raise ValueError("El anticipo debe estar entre 0 y 100%")
    if years <= 0:
        raise ValueError("El plazo debe ser positivo")
    if annual_rate < 0:
        raise ValueError("La tasa no puede ser negativa")

    down_payment = price * down_payment_percent / 100
    loan_amount = price - down_payment
    monthly_rate = annual_rate / 100 / 12
    payments = years * 12

    if monthly_rate == 0:
        monthly_payment = loan_amount / payments
    else:
        growth = (1 + monthly_rate) ** payments
        monthly_payment = loan_amount * monthly_rate * growth / (growth - 1)

    return MortgageQuote(
        price=price,
        down_payment=down_payment,
        loan_amount=loan_amount,
        annual_rate=annual_rate,
        number_of_payments=payments,
        monthly_payment=monthly_payment,
    )


def quote_for_listing(
    listing,
    down_payment_percent: float = 20,
    years: int = 20,
    settings=None,
) -> Optional[MortgageQuote]:
    """
    Cuota para la ficha de una propiedad con la tasa configurada.

    Returns:
        MortgageQuote, o None si la propiedad no publica precio
    """
    if listing.price is None:
        return None
    settings = settings or get_settings()
    return calculate_mortgage(
        listing.price,
        down_payment_percent=down_payment_percent,
        years=years,
        annual_rate=settings.mortgage_interest_rate,
    )
