# ui/dashboard.py
from __future__ import annotations

from typing import List

import streamlit as st

from core.calculos import calculate_solar_system
from core.formatacao import format_currency, format_number
from core.modelo import Client
from core.repositorio import create_empty_client
from core.status import status_label
from ui.estado import ctx_abrir_cliente, ctx_avisar


def resumo_cliente(cliente: Client) -> str:
    """Linha curta exibida no card do cliente."""
    res = calculate_solar_system(cliente)
    cidade = cliente.address.city or "-"
    return (
        f"{cidade} • {format_number(res.total_system_power_kwp)} kWp • "
        f"{format_currency(cliente.final_value)} • {status_label(cliente.status)}"
    )


def _card(ctx, cliente: Client) -> None:
    k = cliente.id
    confirmar = f"{k}_confirm_delete"
    with st.container(border=True):
        c1, c2, c3 = st.columns([5, 1, 1])
        with c1:
            st.markdown(f"**{cliente.name or 'Sem nome'}**")
            st.caption(resumo_cliente(cliente))
        with c2:
            if st.button("Abrir", key=f"{k}_open"):
                ctx_abrir_cliente(ctx, k)
                st.rerun()
        with c3:
            if st.button("Excluir", key=f"{k}_delete"):
                st.session_state[confirmar] = True

        if st.session_state.get(confirmar):
            st.warning("Tem certeza que deseja excluir este cliente?")
            a, b = st.columns(2)
            if a.button("Sim, excluir", key=f"{k}_delete_yes"):
                ctx.clientes.delete(k)
                ctx.fingerprints.pop(k, None)
                st.session_state.pop(confirmar, None)
                ctx_avisar(ctx, "Cliente excluído.")
                st.rerun()
            if b.button("Cancelar", key=f"{k}_delete_no"):
                st.session_state.pop(confirmar, None)
                st.rerun()


def render(ctx) -> None:
    st.title("Clientes")

    c1, c2 = st.columns([4, 1])
    with c1:
        termo = st.text_input("Buscar por nome ou e-mail", key="dashboard_busca")
    with c2:
        st.write("")
        if st.button("Novo cliente", type="primary"):
            novo = ctx.clientes.upsert(create_empty_client(ctx.config.cliente))
            ctx_abrir_cliente(ctx, novo.id)
            st.rerun()

    clientes: List[Client] = ctx.clientes.search(termo)
    if not clientes:
        st.info("Nenhum cliente encontrado.")
        return

    for cliente in clientes:
        _card(ctx, cliente)
