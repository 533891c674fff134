# app.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

# === garantir imports do repo ===
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ui import configuracoes, consumo, dados_cliente, dashboard, irradiacao, resultados, status_projeto
from ui.estado import ctx_get
from ui.router import AbaEditor, mostrar_mensagens, render_editor

ABAS = [
    AbaEditor("info", "Cliente", dados_cliente.render, dados_cliente.validar),
    AbaEditor("consumption", "Consumo", consumo.render, consumo.validar),
    AbaEditor("irradiation", "Irradiação", irradiacao.render, irradiacao.validar),
    AbaEditor("results", "Resultados", resultados.render, resultados.validar),
    AbaEditor("status", "Status", status_projeto.render, status_projeto.validar),
]


def _sidebar(ctx) -> None:
    ajustes = ctx.ajustes.get()
    with st.sidebar:
        st.title(ajustes.company_name)
        if st.button("Clientes", use_container_width=True):
            ctx.pagina = "dashboard"
            ctx.cliente_id = None
            st.rerun()
        if st.button("Configurações", use_container_width=True):
            ctx.pagina = "ajustes"
            st.rerun()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title="SolarCalc Pro", layout="wide")

    ctx = ctx_get(st)
    _sidebar(ctx)

    if ctx.pagina == "editor":
        render_editor(ctx, ABAS)
    elif ctx.pagina == "ajustes":
        configuracoes.render(ctx)
        mostrar_mensagens(ctx)
    else:
        dashboard.render(ctx)
        mostrar_mensagens(ctx)


main()
