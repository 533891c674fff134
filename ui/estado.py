# ui/estado.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.configuracao import AppConfig, load_config
from core.repositorio import InMemoryClientRepository, InMemorySettingsRepository


# ==========================================================
# Contexto global da aplicação
# ==========================================================
@dataclass
class AppCtx:
    config: AppConfig
    clientes: InMemoryClientRepository
    ajustes: InMemorySettingsRepository

    # ------------------------------------------------------
    # Navegação
    # ------------------------------------------------------
    pagina: str = "dashboard"            # dashboard | editor | ajustes
    cliente_id: Optional[str] = None
    aba_atual: str = "info"
    mensagens: List[Dict[str, str]] = field(default_factory=list)

    # fingerprint do último registro salvo (evita regravar sem mudança)
    fingerprints: Dict[str, str] = field(default_factory=dict)

    # última chave (investimento, desconto) usada para sincronizar a proposta
    derivados: Dict[str, Tuple[Any, ...]] = field(default_factory=dict)


def _novo_ctx() -> AppCtx:
    cfg = load_config()
    return AppCtx(
        config=cfg,
        clientes=InMemoryClientRepository(),
        ajustes=InMemorySettingsRepository(cfg.empresa),
    )


def ctx_get(st) -> AppCtx:
    """
    Obtém o contexto de session_state.
    Se não existir, cria automaticamente.
    """
    if "app_ctx" not in st.session_state:
        st.session_state["app_ctx"] = _novo_ctx()
    return st.session_state["app_ctx"]


def ctx_abrir_cliente(ctx: AppCtx, cliente_id: str) -> None:
    ctx.pagina = "editor"
    ctx.cliente_id = cliente_id
    ctx.aba_atual = "info"


def ctx_voltar(ctx: AppCtx) -> None:
    ctx.pagina = "dashboard"
    ctx.cliente_id = None


def ctx_avisar(ctx: AppCtx, texto: str, tipo: str = "success") -> None:
    ctx.mensagens.append({"texto": texto, "tipo": tipo})


def ctx_consumir_mensagens(ctx: AppCtx) -> List[Dict[str, Any]]:
    out, ctx.mensagens = list(ctx.mensagens), []
    return out
