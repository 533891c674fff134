# ui/configuracoes.py
from __future__ import annotations

import base64

import streamlit as st

from core.modelo import CompanySettings
from ui.estado import ctx_avisar, ctx_voltar


def render(ctx) -> None:
    st.title("Configurações da empresa")

    atual = ctx.ajustes.get()
    nome = st.text_input("Nome da empresa", value=atual.company_name, key="ajustes_nome")
    arquivo = st.file_uploader("Logo", type=["png", "jpg", "jpeg"], key="ajustes_logo")

    logo = atual.logo
    if arquivo is not None:
        logo = base64.b64encode(arquivo.getvalue()).decode("ascii")
    if logo:
        st.image(base64.b64decode(logo), width=160)

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Salvar", type="primary"):
            ctx.ajustes.save(CompanySettings(logo=logo, company_name=nome.strip() or atual.company_name))
            ctx_avisar(ctx, "Configurações salvas.")
            st.rerun()
    with c2:
        if st.button("Voltar"):
            ctx_voltar(ctx)
            st.rerun()
