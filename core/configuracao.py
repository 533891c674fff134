# core/configuracao.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

BASE_DIR = Path(__file__).resolve().parents[1]
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = "padroes.yaml"

_NUMERICOS_CLIENTE = ("panel_power_wp", "system_efficiency", "kwh_price", "labor_percent", "installments")


def _ler_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuração inexistente: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuração inválida (deve ser um mapa): {path}")
    return data


def _req(d: Dict[str, Any], k: str, ctx: str) -> Any:
    if k not in d or d[k] is None:
        raise ValueError(f"Falta '{k}' em {ctx}")
    return d[k]


def _req_num(d: Dict[str, Any], k: str, ctx: str) -> float:
    v = _req(d, k, ctx)
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{k}' deve ser numérico em {ctx}. Valor={v!r}") from e


def _secao(data: Dict[str, Any], nome: str) -> Dict[str, Any]:
    s = data.get(nome) or {}
    if not isinstance(s, dict):
        raise ValueError(f"Seção '{nome}' deve ser um mapa")
    return dict(s)


@dataclass(frozen=True)
class AppConfig:
    cliente: Dict[str, Any]
    empresa: Dict[str, Any]
    irradiacao: Dict[str, Any]


def _validar(cfg: AppConfig) -> AppConfig:
    cliente = dict(cfg.cliente)
    for k in _NUMERICOS_CLIENTE:
        cliente[k] = _req_num(cliente, k, "cliente")
    cliente["installments"] = int(cliente["installments"])

    irr = dict(cfg.irradiacao)
    _req(irr, "url", "irradiacao")
    irr["timeout_s"] = _req_num(irr, "timeout_s", "irradiacao")

    return AppConfig(cliente=cliente, empresa=dict(cfg.empresa), irradiacao=irr)


def load_config(path: Optional[Path] = None) -> AppConfig:
    data = _ler_yaml(Path(path) if path else CONFIG_DIR / CONFIG_FILE)
    cfg = AppConfig(
        cliente=_secao(data, "cliente"),
        empresa=_secao(data, "empresa"),
        irradiacao=_secao(data, "irradiacao"),
    )
    return _validar(cfg)

