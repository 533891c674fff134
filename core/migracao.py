# core/migracao.py
from __future__ import annotations

import copy
import logging
import re
import uuid
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Mapping

from .modelo import Address, Client, MaterialItem, normalize_monthly

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


# ==========================================================
# Normalização de chaves (registros antigos vinham em camelCase)
# ==========================================================
def _snake(k: str) -> str:
    return _CAMEL.sub("_", str(k)).lower()


def _snake_keys(d: Mapping[str, Any]) -> Dict[str, Any]:
    return {_snake(k): v for k, v in d.items()}


def _f(d: Mapping[str, Any], k: str, default: float) -> float:
    v = d.get(k)
    if v is None:
        return float(default)
    try:
        return float(v)
    except (TypeError, ValueError):
        return float(default)


def _s(d: Mapping[str, Any], k: str, default: str = "") -> str:
    v = d.get(k)
    return default if v is None else str(v)


# ==========================================================
# Passos de upgrade (um por versão)
# ==========================================================
def _v0_para_v1(rec: Dict[str, Any]) -> Dict[str, Any]:
    if not rec.get("status"):
        rec["status"] = "lead"
        rec["status_updated_at"] = rec.get("updated_at", "")

    if not rec.get("labor_type"):
        rec["labor_type"] = "fixed"
    rec.setdefault("labor_percent", 20)
    rec.setdefault("extra_materials", 0)
    if not rec.get("discount_type"):
        rec["discount_type"] = "fixed"
    rec.setdefault("discount_percent", 0)
    if not rec.get("notes"):
        rec["notes"] = ""
    if not rec.get("cpf"):
        rec["cpf"] = ""

    if not rec.get("materials"):
        rec["materials"] = []

    # kit antigo em texto livre vira um único item
    kit_items = rec.pop("kit_items", None)
    if kit_items and not rec["materials"]:
        rec["materials"].append({
            "id": str(uuid.uuid4()),
            "quantity": 1,
            "unit": "kit",
            "model": str(kit_items),
            "brand": "-",
        })
    return rec


_UPGRADES: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    0: _v0_para_v1,
}


def _materials(raw: Any) -> List[MaterialItem]:
    out: List[MaterialItem] = []
    for m in raw or []:
        if not isinstance(m, Mapping):
            continue
        m = _snake_keys(m)
        out.append(MaterialItem(
            id=_s(m, "id") or str(uuid.uuid4()),
            quantity=_f(m, "quantity", 1),
            unit=_s(m, "unit", "unid"),
            model=_s(m, "model"),
            brand=_s(m, "brand"),
        ))
    return out


def _address(raw: Any) -> Address:
    a = _snake_keys(raw) if isinstance(raw, Mapping) else {}
    return Address(
        street=_s(a, "street"),
        number=_s(a, "number"),
        neighborhood=_s(a, "neighborhood"),
        zip=_s(a, "zip"),
        state=_s(a, "state"),
        city=_s(a, "city"),
    )


def _client_from_record(rec: Mapping[str, Any]) -> Client:
    base = Client()
    return Client(
        id=_s(rec, "id"),
        name=_s(rec, "name"),
        cpf=_s(rec, "cpf"),
        email=_s(rec, "email"),
        phone=_s(rec, "phone"),
        address=_address(rec.get("address")),
        consumption=normalize_monthly(rec.get("consumption")),
        irradiation=normalize_monthly(rec.get("irradiation")),
        panel_power_wp=_f(rec, "panel_power_wp", base.panel_power_wp),
        system_efficiency=_f(rec, "system_efficiency", base.system_efficiency),
        kwh_price=_f(rec, "kwh_price", base.kwh_price),
        kit_price=_f(rec, "kit_price", 0.0),
        labor_type=_s(rec, "labor_type", base.labor_type),
        labor_price=_f(rec, "labor_price", 0.0),
        labor_percent=_f(rec, "labor_percent", base.labor_percent),
        extra_materials=_f(rec, "extra_materials", 0.0),
        connection_type=_s(rec, "connection_type", base.connection_type),
        proposal_value=_f(rec, "proposal_value", 0.0),
        discount_type=_s(rec, "discount_type", base.discount_type),
        discount=_f(rec, "discount", 0.0),
        discount_percent=_f(rec, "discount_percent", 0.0),
        final_value=_f(rec, "final_value", 0.0),
        payment_method=_s(rec, "payment_method"),
        installments=int(_f(rec, "installments", 1)),
        materials=_materials(rec.get("materials")),
        status=_s(rec, "status", "lead"),
        status_updated_at=_s(rec, "status_updated_at"),
        notes=_s(rec, "notes"),
        created_at=_s(rec, "created_at"),
        updated_at=_s(rec, "updated_at"),
        schema_version=CURRENT_SCHEMA_VERSION,
    )


# ==========================================================
# API de fronteira (armazenamento <-> motor)
# ==========================================================
def upgrade_client_record(raw: Mapping[str, Any]) -> Client:
    """
    Converte um registro armazenado (qualquer versão, camelCase ou snake_case)
    em um Client completo na versão atual. Não muta `raw`.
    """
    rec = _snake_keys(copy.deepcopy(dict(raw)))
    version = int(_f(rec, "schema_version", 0))

    while version < CURRENT_SCHEMA_VERSION:
        logger.debug("Upgrade registro id=%s v%s -> v%s", rec.get("id"), version, version + 1)
        rec = _UPGRADES[version](rec)
        version += 1

    return _client_from_record(rec)


def client_to_record(client: Client) -> Dict[str, Any]:
    rec = asdict(client)
    rec["schema_version"] = CURRENT_SCHEMA_VERSION
    return rec
