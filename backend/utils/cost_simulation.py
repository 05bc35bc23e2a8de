# utils/cost_simulation.py
"""Landed-cost estimate for a quote.

Turns the quote's unit price plus shipment parameters into total and unit
costs in USD and BRL. Pure arithmetic on floats; persisting the result is done
by the caller.
"""
from dataclasses import dataclass


class SimulationInputError(ValueError):
    """Raised when simulation parameters cannot produce a meaningful estimate."""


@dataclass(frozen=True)
class CostEstimate:
    subtotal_usd: float
    total_before_tax_usd: float
    estimated_total_cost_usd: float
    estimated_total_cost_brl: float
    estimated_unit_cost_usd: float
    estimated_unit_cost_brl: float


def validate_inputs(price_per_unit_usd, quantity, freight_usd, insurance_usd,
                    other_costs_usd, tax_rate_percent, exchange_rate):
    if quantity is None or int(quantity) != quantity or quantity <= 0:
        raise SimulationInputError("Quantity must be a whole number greater than zero")
    if price_per_unit_usd <= 0:
        raise SimulationInputError("Quote price per unit must be greater than zero")
    for label, value in (("Freight", freight_usd), ("Insurance", insurance_usd), ("Other costs", other_costs_usd)):
        if value < 0:
            raise SimulationInputError(f"{label} cannot be negative")
    if tax_rate_percent < 0:
        raise SimulationInputError("Tax rate cannot be negative")
    if exchange_rate <= 0:
        raise SimulationInputError("Exchange rate must be greater than zero")


def simulate_landed_cost(
    price_per_unit_usd: float,
    quantity: int,
    freight_usd: float = 0.0,
    insurance_usd: float = 0.0,
    other_costs_usd: float = 0.0,
    tax_rate_percent: float = 0.0,
    exchange_rate: float = 5.0,
) -> CostEstimate:
    validate_inputs(price_per_unit_usd, quantity, freight_usd, insurance_usd,
                    other_costs_usd, tax_rate_percent, exchange_rate)

    subtotal = price_per_unit_usd * quantity
    total_before_tax = subtotal + freight_usd + insurance_usd + other_costs_usd
    total_usd = total_before_tax * (1 + tax_rate_percent / 100)
    total_brl = total_usd * exchange_rate

    return CostEstimate(
        subtotal_usd=subtotal,
        total_before_tax_usd=total_before_tax,
        estimated_total_cost_usd=total_usd,
        estimated_total_cost_brl=total_brl,
        estimated_unit_cost_usd=total_usd / quantity,
        estimated_unit_cost_brl=total_brl / quantity,
    )


def is_below_moq(quantity: int, moq: int) -> bool:
    return moq is not None and quantity < moq
