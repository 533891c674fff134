# ui/status_projeto.py
from __future__ import annotations

from typing import List, Tuple

import streamlit as st

from core.compartilhamento import email_url, whatsapp_url
from core.modelo import Client
from core.status import (
    STATUS_TIMELINE,
    IncompleteClientError,
    follow_up_date,
    proposal_valid_until,
    status_changed_at,
    status_index,
    update_status,
)
from ui.estado import ctx_avisar
from ui.router import salvar_se_mudou


def _mudar_status(ctx, cliente: Client, novo: str) -> None:
    try:
        atualizado = update_status(cliente, novo)
    except IncompleteClientError as e:
        ctx_avisar(ctx, str(e), "error")
        return

    # o editor segura a mesma instância: copia só o que mudou
    cliente.status = atualizado.status
    cliente.status_updated_at = atualizado.status_updated_at
    ctx_avisar(ctx, "Status atualizado com sucesso!")


def _data(cliente: Client, fn) -> str:
    if not (cliente.status_updated_at or cliente.updated_at):
        return "-"
    return fn(cliente).strftime("%d/%m/%Y")


def _compartilhar(ctx, cliente: Client) -> None:
    st.markdown("#### Compartilhar proposta")
    empresa = ctx.ajustes.get().company_name

    c1, c2 = st.columns(2)
    with c1:
        url = whatsapp_url(cliente)
        if url:
            st.link_button("WhatsApp", url, use_container_width=True)
        else:
            st.caption("Telefone do cliente não cadastrado.")
    with c2:
        url = email_url(cliente, empresa)
        if url:
            st.link_button("E-mail", url, use_container_width=True)
        else:
            st.caption("E-mail do cliente não cadastrado.")


def render(ctx, cliente: Client) -> None:
    st.markdown("### Status do projeto")

    atual = status_index(cliente.status)
    for i, passo in enumerate(STATUS_TIMELINE):
        marca = "✅" if i < atual else ("🔵" if i == atual else "▫️")
        c1, c2 = st.columns([4, 1])
        with c1:
            texto = f"{marca} **{passo.label}**  \n{passo.description}"
            if i == atual:
                texto += f"  \nAtualizado em: {_data(cliente, status_changed_at)}"
            st.markdown(texto)
        with c2:
            if st.button("Definir", key=f"{cliente.id}_status_{passo.id}", disabled=(i == atual)):
                _mudar_status(ctx, cliente, passo.id)
                salvar_se_mudou(ctx, cliente)
                st.rerun()

    if cliente.status == "proposal_sent":
        st.info(
            f"Retornar o contato até {_data(cliente, follow_up_date)}. "
            f"Proposta válida até {_data(cliente, proposal_valid_until)}."
        )
        _compartilhar(ctx, cliente)
    elif cliente.status == "proposal_accepted":
        st.success("Proposta aceita! Próximo passo: homologação na concessionária.")


def validar(cliente: Client) -> Tuple[bool, List[str]]:
    return True, []
