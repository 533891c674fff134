# core/repositorio.py
from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .migracao import client_to_record, upgrade_client_record
from .modelo import CompanySettings, Client

logger = logging.getLogger(__name__)

_DEFAULT_FIELDS = (
    "panel_power_wp",
    "system_efficiency",
    "kwh_price",
    "labor_type",
    "labor_percent",
    "connection_type",
    "installments",
)


def _now_iso(now: Optional[datetime] = None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def create_empty_client(defaults: Optional[Mapping[str, Any]] = None, now: Optional[datetime] = None) -> Client:
    ts = _now_iso(now)
    c = Client(id=str(uuid.uuid4()), status_updated_at=ts, created_at=ts, updated_at=ts)
    for k in _DEFAULT_FIELDS:
        if defaults and defaults.get(k) is not None:
            setattr(c, k, defaults[k])
    return c


# ==========================================================
# Clientes
# ==========================================================
class InMemoryClientRepository:
    """
    Guarda os registros na forma serializada (dict), como o armazenamento
    local guardaria. Toda leitura passa por `upgrade_client_record`.
    """

    def __init__(self, records: Iterable[Mapping[str, Any]] = ()):
        self._records: Dict[str, Dict[str, Any]] = {}
        for r in records:
            rid = str(r.get("id") or "")
            if rid:
                self._records[rid] = copy.deepcopy(dict(r))

    def list(self) -> List[Client]:
        clients = [upgrade_client_record(r) for r in self._records.values()]
        return sorted(clients, key=lambda c: c.updated_at or "", reverse=True)

    def get_by_id(self, client_id: str) -> Optional[Client]:
        rec = self._records.get(client_id)
        return upgrade_client_record(rec) if rec is not None else None

    def upsert(self, client: Client, now: Optional[datetime] = None) -> Client:
        rec = client_to_record(client)
        rec["updated_at"] = _now_iso(now)
        self._records[client.id] = rec
        logger.debug("Cliente salvo id=%s", client.id)
        return upgrade_client_record(rec)

    def delete(self, client_id: str) -> None:
        if self._records.pop(client_id, None) is not None:
            logger.debug("Cliente removido id=%s", client_id)

    def search(self, term: str) -> List[Client]:
        t = (term or "").strip().lower()
        if not t:
            return self.list()
        return [c for c in self.list() if t in c.name.lower() or t in c.email.lower()]


# ==========================================================
# Configurações da empresa
# ==========================================================
class InMemorySettingsRepository:
    def __init__(self, defaults: Optional[Mapping[str, Any]] = None):
        self._defaults = dict(defaults or {})
        self._saved: Optional[Dict[str, Any]] = None

    def get(self) -> CompanySettings:
        data = self._saved if self._saved is not None else self._defaults
        base = CompanySettings()
        return CompanySettings(
            logo=data.get("logo", base.logo),
            company_name=data.get("company_name") or base.company_name,
        )

    def save(self, settings: CompanySettings) -> None:
        self._saved = asdict(settings)
