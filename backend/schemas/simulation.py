# backend/schemas/simulation.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime
from config import settings
from models.quote import Incoterm


# Parameters typed into the simulation form
class SimulationCreate(BaseModel):
    quantity: int = Field(gt=0, description="Units to import, must be greater than zero")
    freight_usd: float = Field(default=0, ge=0)
    insurance_usd: float = Field(default=0, ge=0)
    other_costs_usd: float = Field(default=0, ge=0)
    tax_rate_percent: float = Field(default=0, ge=0, description="II, IPI, ICMS, PIS and COFINS combined")
    exchange_rate: float = Field(default=settings.DEFAULT_EXCHANGE_RATE, gt=0, description="USD -> BRL")


class SimulationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quote_id: int
    quantity: int
    freight_usd: float
    insurance_usd: float
    other_costs_usd: float
    tax_rate_percent: float
    exchange_rate: float
    estimated_total_cost_usd: float
    estimated_total_cost_brl: float
    estimated_unit_cost_usd: float
    estimated_unit_cost_brl: float
    created_at: Optional[datetime] = None


class SimulationResult(SimulationOut):
    below_moq: bool = False


class SimulationQuoteSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    factory_name: str
    factory_location: Optional[str] = None
    price_per_unit_usd: float
    moq: int
    incoterm: Optional[Incoterm] = None
    lead_time_days: Optional[int] = None


# Simulation page: quote summary, prefilled form and history (newest first)
class SimulationView(BaseModel):
    quote: SimulationQuoteSummary
    defaults: SimulationCreate
    history: List[SimulationOut]
