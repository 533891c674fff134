# ui/router.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

import streamlit as st

from core.calculos import calculate_solar_system
from core.modelo import Client
from core.negociacao import derived_inputs_key, recompute_derived_financials, should_sync_proposal
from core.status import validate_client_fields
from ui.estado import ctx_consumir_mensagens, ctx_voltar
from ui.state_helpers import is_dirty, mark_saved

logger = logging.getLogger(__name__)


# ====== Contrato de uma aba ======
RenderFn = Callable[[Any, Client], None]
ValidarFn = Callable[[Client], Tuple[bool, List[str]]]


@dataclass(frozen=True)
class AbaEditor:
    id: str
    titulo: str
    render: RenderFn
    validar: ValidarFn


def mostrar_mensagens(ctx) -> None:
    for m in ctx_consumir_mensagens(ctx):
        tipo = m.get("tipo", "success")
        if tipo == "error":
            st.error(m["texto"])
        elif tipo == "warning":
            st.warning(m["texto"])
        else:
            st.success(m["texto"])


def _cliente_atual(ctx) -> Optional[Client]:
    if not ctx.cliente_id:
        return None
    cliente = ctx.clientes.get_by_id(ctx.cliente_id)
    if cliente is not None and cliente.id not in ctx.fingerprints:
        mark_saved(ctx, cliente)
    return cliente


def _pode_sair_de(ctx, aba_id: str, cliente: Client) -> Tuple[bool, Optional[str]]:
    # a aba de cadastro só libera as demais com os dados obrigatórios
    if aba_id != "info":
        return True, None
    erro = validate_client_fields(cliente)
    return (erro is None), erro


def _seletor_abas(ctx, abas: List[AbaEditor]) -> Tuple[AbaEditor, Optional[str]]:
    """Desenha as abas; devolve a aba atual e a aba pedida pelo clique (se houver)."""
    ids = [a.id for a in abas]
    if ctx.aba_atual not in ids:
        ctx.aba_atual = ids[0]

    pedido: Optional[str] = None
    cols = st.columns(len(abas))
    for col, aba in zip(cols, abas):
        with col:
            tipo = "primary" if aba.id == ctx.aba_atual else "secondary"
            if st.button(aba.titulo, key=f"aba_{aba.id}", type=tipo, use_container_width=True):
                pedido = aba.id

    return next(a for a in abas if a.id == ctx.aba_atual), pedido


def sincronizar_derivados(ctx, cliente: Client) -> Client:
    """
    Motor -> proposta/valor final. A proposta só volta ao investimento
    calculado quando investimento ou desconto mudaram desde a última vez.
    """
    res = calculate_solar_system(cliente)
    chave = derived_inputs_key(cliente, res)
    sync = should_sync_proposal(cliente, ctx.derivados.get(cliente.id), chave)
    ctx.derivados[cliente.id] = chave
    return recompute_derived_financials(cliente, res, sync_proposal=sync)


def salvar_se_mudou(ctx, cliente: Client) -> Client:
    """
    Recalcula os campos derivados e grava no repositório apenas se o
    fingerprint mudou.
    """
    atualizado = sincronizar_derivados(ctx, cliente)
    if atualizado.proposal_value != cliente.proposal_value:
        # input da proposta guarda o valor antigo no session_state
        st.session_state.pop(f"{cliente.id}_proposal", None)

    if not is_dirty(ctx, atualizado):
        return atualizado

    salvo = ctx.clientes.upsert(atualizado)
    mark_saved(ctx, salvo)
    logger.debug("Editor salvou cliente id=%s aba=%s", salvo.id, ctx.aba_atual)
    return salvo


def render_editor(ctx, abas: List[AbaEditor]) -> None:
    cliente = _cliente_atual(ctx)
    if cliente is None:
        ctx_voltar(ctx)
        st.rerun()
        return

    c1, c2 = st.columns([1, 5])
    with c1:
        if st.button("⬅️ Voltar"):
            ctx_voltar(ctx)
            st.rerun()
    with c2:
        st.subheader(cliente.name or "Novo cliente")

    aba, pedido = _seletor_abas(ctx, abas)
    aba.render(ctx, cliente)

    _, erros = aba.validar(cliente)
    for e in erros:
        st.error(e)

    # rascunho incompleto também é gravado; a validação só trava a troca de aba
    salvo = salvar_se_mudou(ctx, cliente)

    # a trava olha os valores desta execução (já aplicados pela aba)
    if pedido and pedido != aba.id:
        ok, erro = _pode_sair_de(ctx, aba.id, cliente)
        if ok:
            ctx.aba_atual = pedido
            st.rerun()
        st.error(erro)
    elif salvo.proposal_value != cliente.proposal_value:
        st.rerun()

    mostrar_mensagens(ctx)
