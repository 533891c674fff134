# ui/state_helpers.py
from __future__ import annotations

import hashlib
import json
from typing import Any, Dict

from core.migracao import client_to_record
from core.modelo import Client

# Campos carimbados pelo repositório: não contam como edição.
_IGNORED_KEYS = ("updated_at",)


def _norm_value(x: Any) -> Any:
    if isinstance(x, dict):
        return {str(k): _norm_value(v) for k, v in sorted(x.items(), key=lambda kv: str(kv[0]))}
    if isinstance(x, list):
        return [_norm_value(v) for v in x]
    if isinstance(x, tuple):
        return [_norm_value(v) for v in x]
    if isinstance(x, (str, int, float, bool)) or x is None:
        return x
    return str(x)


def client_fingerprint(client: Client) -> str:
    payload: Dict[str, Any] = client_to_record(client)
    for k in _IGNORED_KEYS:
        payload.pop(k, None)

    raw = json.dumps(_norm_value(payload), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def mark_saved(ctx: Any, client: Client) -> str:
    fp = client_fingerprint(client)
    ctx.fingerprints[client.id] = fp
    return fp


def is_dirty(ctx: Any, client: Client) -> bool:
    saved = ctx.fingerprints.get(client.id)
    if not saved:
        return True
    return str(saved) != client_fingerprint(client)
