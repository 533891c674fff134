# servicos/irradiacao.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from core.modelo import MONTH_KEYS, MonthlyData, initial_monthly_data

logger = logging.getLogger(__name__)

# NASA POWER (climatologia). ALLSKY_SFC_SW_DWN = GHI em kWh/m²/dia
NASA_API_URL = "https://power.larc.nasa.gov/api/temporal/climatology/point"
NASA_PARAM = "ALLSKY_SFC_SW_DWN"
NASA_COMMUNITY = "RE"

# JAN..DEC -> jan..dec
_NASA_MONTHS = {k.upper(): k for k in MONTH_KEYS}


def _parameter_block(data: Any, param: str) -> Optional[Dict[str, Any]]:
    props = data.get("properties") if isinstance(data, dict) else None
    params = (props or {}).get("parameter") if isinstance(props, dict) else None
    block = (params or {}).get(param) if isinstance(params, dict) else None
    return block if isinstance(block, dict) else None


def fetch_solar_irradiation(
    lat: float,
    lon: float,
    *,
    session: Optional[requests.Session] = None,
    url: str = NASA_API_URL,
    param: str = NASA_PARAM,
    community: str = NASA_COMMUNITY,
    timeout: float = 15,
) -> Optional[MonthlyData]:
    """
    Irradiação média mensal para (lat, lon).
    Devolve None se a API falhar ou não trouxer o parâmetro.
    """
    http = session or requests
    params = {
        "parameters": param,
        "community": community,
        "longitude": lon,
        "latitude": lat,
        "format": "JSON",
    }

    try:
        resp = http.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError):
        logger.exception("Erro ao buscar dados de irradiação lat=%s lon=%s", lat, lon)
        return None

    block = _parameter_block(data, param)
    if block is None:
        logger.warning("Resposta sem %s para lat=%s lon=%s", param, lat, lon)
        return None

    out = initial_monthly_data()
    for nasa_key, key in _NASA_MONTHS.items():
        val = block.get(nasa_key)
        if isinstance(val, (int, float)) and not isinstance(val, bool):
            out[key] = float(val)
    return out
