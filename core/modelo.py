# core/modelo.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

# ==========================================================
# Meses (ordem do calendário)
# ==========================================================
MONTH_KEYS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")

MONTH_NAMES = (
    ("jan", "Janeiro"),
    ("feb", "Fevereiro"),
    ("mar", "Março"),
    ("apr", "Abril"),
    ("may", "Maio"),
    ("jun", "Junho"),
    ("jul", "Julho"),
    ("aug", "Agosto"),
    ("sep", "Setembro"),
    ("oct", "Outubro"),
    ("nov", "Novembro"),
    ("dec", "Dezembro"),
)

# kWh (consumo/geração) ou kWh/m²/dia (irradiação), sempre 12 chaves
MonthlyData = Dict[str, float]

CONNECTION_TYPES = ("monofasico", "bifasico", "trifasico")
LABOR_TYPES = ("fixed", "percent")
DISCOUNT_TYPES = ("fixed", "percent")
PAYMENT_METHODS = ("", "pix", "boleto", "credit_card", "debit_card", "financing")
PROJECT_STATUSES = ("lead", "proposal_sent", "proposal_accepted", "approval", "installation", "completed")


def initial_monthly_data() -> MonthlyData:
    return {k: 0.0 for k in MONTH_KEYS}


def _as_number(x: Any) -> float:
    if isinstance(x, bool):
        return 0.0
    try:
        return float(x)
    except (TypeError, ValueError):
        return 0.0


def normalize_monthly(raw: Optional[Mapping[str, Any]]) -> MonthlyData:
    """
    Garante as 12 chaves na ordem do calendário.
    Mês ausente ou não numérico vira 0.0 (entra na média como zero).
    """
    src = raw if isinstance(raw, Mapping) else {}
    return {k: _as_number(src.get(k, 0.0)) for k in MONTH_KEYS}


# ==========================================================
# Cliente
# ==========================================================
@dataclass
class Address:
    street: str = ""
    number: str = ""
    neighborhood: str = ""
    zip: str = ""
    state: str = ""
    city: str = ""


@dataclass
class MaterialItem:
    id: str
    quantity: float = 1
    unit: str = "unid"
    model: str = ""
    brand: str = ""


@dataclass
class Client:
    id: str = ""
    name: str = ""
    cpf: str = ""
    email: str = ""
    phone: str = ""
    address: Address = field(default_factory=Address)

    consumption: MonthlyData = field(default_factory=initial_monthly_data)   # kWh
    irradiation: MonthlyData = field(default_factory=initial_monthly_data)   # kWh/m²/dia
    panel_power_wp: float = 550.0
    system_efficiency: float = 0.75          # 0.75–0.85 típico

    # investimento
    kwh_price: float = 0.95                  # R$/kWh
    kit_price: float = 0.0
    labor_type: str = "fixed"
    labor_price: float = 0.0                 # usado se labor_type == "fixed"
    labor_percent: float = 20.0              # % sobre o kit se labor_type == "percent"
    extra_materials: float = 0.0
    connection_type: str = "monofasico"

    # negociação
    proposal_value: float = 0.0
    discount_type: str = "fixed"
    discount: float = 0.0
    discount_percent: float = 0.0
    final_value: float = 0.0
    payment_method: str = ""
    installments: int = 1

    materials: List[MaterialItem] = field(default_factory=list)

    status: str = "lead"
    status_updated_at: str = ""
    notes: str = ""

    created_at: str = ""
    updated_at: str = ""
    schema_version: int = 1


@dataclass
class CompanySettings:
    logo: Optional[str] = None               # base64 da imagem
    company_name: str = "SolarCalc Pro"


# ==========================================================
# Resultado do motor (somente leitura)
# ==========================================================
@dataclass(frozen=True)
class Financials:
    calculated_labor_cost: float
    total_investment: float
    monthly_bill_without_solar: float        # média anual / 12
    monthly_bill_with_solar: float           # média anual / 12
    monthly_savings: float
    payback_months: float
    payback_years: float
    total_savings_25_years: float
    minimum_bill_cost: float                 # custo de disponibilidade mensal


@dataclass(frozen=True)
class SolarCalculationResult:
    avg_monthly_consumption: float
    avg_daily_consumption: float
    avg_irradiation: float
    required_system_power_kwp: float
    panel_count_raw: float
    panel_count_rounded: int
    total_system_power_kwp: float
    monthly_generation: MonthlyData
    avg_monthly_generation: float
    financials: Financials

    @property
    def total_generation(self) -> float:
        return float(sum(self.monthly_generation.values()))
