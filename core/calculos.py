# core/calculos.py
from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from .modelo import MONTH_KEYS, Client, Financials, MonthlyData, SolarCalculationResult

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30                 # mês fixo de 30 dias (consumo e geração)
DEFAULT_PANEL_POWER_KW = 0.550
IRRADIATION_FLOOR = 1.0
PROJECTION_YEARS = 25

# kWh mínimos faturáveis por mês (custo de disponibilidade)
MINIMUM_KWH_BY_CONNECTION = {
    "monofasico": 30,
    "bifasico": 50,
    "trifasico": 100,
}


# ==========================================================
# Helpers
# ==========================================================
def _num(x: Any) -> float:
    """Campo numérico ausente/falso conta como 0."""
    return float(x or 0.0)


def _div(a: float, b: float) -> float:
    """Divisão com semântica IEEE: nunca levanta ZeroDivisionError."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _ceil(x: float):
    return int(math.ceil(x)) if math.isfinite(x) else x


def _total(data: Mapping[str, Any]) -> float:
    return sum(_num(data.get(k)) for k in MONTH_KEYS)


def minimum_kwh_for_connection(connection_type: str) -> int:
    return MINIMUM_KWH_BY_CONNECTION.get(connection_type, 30)


def calculate_labor_cost(client: Client) -> float:
    kit_price = _num(client.kit_price)
    if client.labor_type == "percent":
        return kit_price * (_num(client.labor_percent) / 100.0)
    return _num(client.labor_price)


# ==========================================================
# Motor de dimensionamento e projeção financeira
# ==========================================================
def calculate_solar_system(client: Client) -> SolarCalculationResult:
    efficiency = _num(client.system_efficiency)

    # 1) consumo
    total_consumption = _total(client.consumption)
    avg_monthly_consumption = total_consumption / 12.0
    avg_daily_consumption = avg_monthly_consumption / DAYS_PER_MONTH

    # 2) irradiação (piso 1.0 só para o divisor do passo 3)
    avg_irradiation = _total(client.irradiation) / 12.0
    safe_irradiation = avg_irradiation or IRRADIATION_FLOOR

    # 3) potência necessária
    required_kwp = _div(avg_daily_consumption, safe_irradiation * efficiency)

    # 4) painéis (sempre arredonda para cima)
    panel_power_kw = (_num(client.panel_power_wp) / 1000.0) or DEFAULT_PANEL_POWER_KW
    panel_count_raw = _div(required_kwp, panel_power_kw)
    panel_count_rounded = _ceil(panel_count_raw)
    total_system_power_kwp = panel_count_rounded * panel_power_kw

    # 5) geração mensal
    monthly_generation: MonthlyData = {}
    for k in MONTH_KEYS:
        irrad = _num(client.irradiation.get(k))
        monthly_generation[k] = total_system_power_kwp * irrad * DAYS_PER_MONTH * efficiency
    total_generation = sum(monthly_generation.values())
    avg_monthly_generation = total_generation / 12.0

    # 6) investimento
    kwh_price = _num(client.kwh_price)
    kit_price = _num(client.kit_price)
    labor_cost = calculate_labor_cost(client)
    total_investment = kit_price + labor_cost + _num(client.extra_materials)

    # 7) custo de disponibilidade
    min_kwh = minimum_kwh_for_connection(client.connection_type)
    monthly_minimum_cost = min_kwh * kwh_price
    annual_minimum_cost = monthly_minimum_cost * 12.0

    # 8) conta anual sem solar
    annual_bill_without_solar = total_consumption * kwh_price

    # 9) compensação: o mínimo mensal nunca é compensado por créditos
    annual_offsettable = max(0.0, total_consumption - 12.0 * min_kwh)
    effective_saved_kwh = min(total_generation, annual_offsettable)
    annual_savings = effective_saved_kwh * kwh_price

    # 10) conta anual com solar, nunca abaixo do mínimo
    annual_bill_with_solar = annual_bill_without_solar - annual_savings
    if annual_bill_with_solar < annual_minimum_cost:
        annual_bill_with_solar = annual_minimum_cost

    # 11) médias mensais
    monthly_bill_without_solar = annual_bill_without_solar / 12.0
    monthly_bill_with_solar = annual_bill_with_solar / 12.0
    monthly_savings = annual_savings / 12.0

    # 12) payback
    if total_investment > 0 and monthly_savings > 0:
        payback_months = total_investment / monthly_savings
    else:
        payback_months = 0.0
    payback_years = payback_months / 12.0

    # 13) projeção linear, sem desconto nem degradação
    total_savings_25_years = (monthly_savings * 12.0 * PROJECTION_YEARS) - total_investment

    logger.debug(
        "Dimensionamento cliente=%s kwp_req=%.3f paineis=%s kwp_total=%.3f",
        client.id, required_kwp, panel_count_rounded, total_system_power_kwp,
    )

    return SolarCalculationResult(
        avg_monthly_consumption=avg_monthly_consumption,
        avg_daily_consumption=avg_daily_consumption,
        avg_irradiation=avg_irradiation,
        required_system_power_kwp=required_kwp,
        panel_count_raw=panel_count_raw,
        panel_count_rounded=panel_count_rounded,
        total_system_power_kwp=total_system_power_kwp,
        monthly_generation=monthly_generation,
        avg_monthly_generation=avg_monthly_generation,
        financials=Financials(
            calculated_labor_cost=labor_cost,
            total_investment=total_investment,
            monthly_bill_without_solar=monthly_bill_without_solar,
            monthly_bill_with_solar=monthly_bill_with_solar,
            monthly_savings=monthly_savings,
            payback_months=payback_months,
            payback_years=payback_years,
            total_savings_25_years=total_savings_25_years,
            minimum_bill_cost=monthly_minimum_cost,
        ),
    )
