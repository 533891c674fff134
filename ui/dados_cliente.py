# ui/dados_cliente.py
from __future__ import annotations

from typing import List, Tuple

import streamlit as st

from core.modelo import CONNECTION_TYPES, Client
from core.status import validate_client_fields


def render(ctx, cliente: Client) -> None:
    st.markdown("### Dados do cliente")
    k = cliente.id

    col1, col2 = st.columns(2)
    with col1:
        cliente.name = st.text_input("Nome completo", value=cliente.name, key=f"{k}_name")
        cliente.email = st.text_input("E-mail", value=cliente.email, key=f"{k}_email")
    with col2:
        cliente.cpf = st.text_input("CPF", value=cliente.cpf, key=f"{k}_cpf")
        cliente.phone = st.text_input("Telefone", value=cliente.phone, key=f"{k}_phone")

    st.markdown("#### Endereço")
    a = cliente.address
    c1, c2, c3 = st.columns([1, 2, 1])
    with c1:
        a.zip = st.text_input("CEP", value=a.zip, key=f"{k}_zip")
    with c2:
        a.street = st.text_input("Rua", value=a.street, key=f"{k}_street")
    with c3:
        a.number = st.text_input("Número", value=a.number, key=f"{k}_number")

    c4, c5, c6 = st.columns([2, 2, 1])
    with c4:
        a.neighborhood = st.text_input("Bairro", value=a.neighborhood, key=f"{k}_neighborhood")
    with c5:
        a.city = st.text_input("Cidade", value=a.city, key=f"{k}_city")
    with c6:
        a.state = st.text_input("UF", value=a.state, key=f"{k}_state")

    st.markdown("#### Padrão de conexão")
    atual = cliente.connection_type if cliente.connection_type in CONNECTION_TYPES else "monofasico"
    cliente.connection_type = st.radio(
        "Tipo de ligação",
        options=list(CONNECTION_TYPES),
        index=CONNECTION_TYPES.index(atual),
        format_func=lambda s: s.capitalize(),
        horizontal=True,
        key=f"{k}_connection",
    )

    cliente.notes = st.text_area("Observações", value=cliente.notes, key=f"{k}_notes")


def validar(cliente: Client) -> Tuple[bool, List[str]]:
    erro = validate_client_fields(cliente)
    return (erro is None), ([erro] if erro else [])
