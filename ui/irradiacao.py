# ui/irradiacao.py
from __future__ import annotations

from typing import List, Tuple

import streamlit as st

from core.formatacao import format_number
from core.modelo import Client
from servicos.irradiacao import fetch_solar_irradiation
from ui.consumo import grade_mensal
from ui.estado import ctx_avisar


def _buscar_nasa(ctx, cliente: Client, lat: float, lon: float) -> None:
    irr_cfg = ctx.config.irradiacao
    with st.spinner("Consultando NASA POWER..."):
        data = fetch_solar_irradiation(
            lat,
            lon,
            url=irr_cfg["url"],
            param=irr_cfg.get("parametro", "ALLSKY_SFC_SW_DWN"),
            community=irr_cfg.get("comunidade", "RE"),
            timeout=irr_cfg["timeout_s"],
        )

    if data is None:
        ctx_avisar(ctx, "Não foi possível obter os dados de irradiação para esta localização.", "error")
        return

    cliente.irradiation = data
    # inputs da grade guardam o valor antigo no session_state
    for key in data:
        st.session_state.pop(f"{cliente.id}_irradiation_{key}", None)
    ctx_avisar(ctx, "Dados de irradiação atualizados com sucesso (Base NASA POWER).")


def render(ctx, cliente: Client) -> None:
    st.markdown("### Irradiação solar (kWh/m²/dia)")

    with st.expander("Buscar automaticamente (NASA POWER)", expanded=False):
        c1, c2, c3 = st.columns([2, 2, 1])
        with c1:
            lat = st.number_input("Latitude", min_value=-90.0, max_value=90.0, value=-23.55, format="%.4f")
        with c2:
            lon = st.number_input("Longitude", min_value=-180.0, max_value=180.0, value=-46.63, format="%.4f")
        with c3:
            if st.button("Buscar", key=f"{cliente.id}_nasa"):
                _buscar_nasa(ctx, cliente, lat, lon)

    grade_mensal(cliente, "irradiation", "kWh/m²", 0.1)

    media = sum(cliente.irradiation.values()) / 12.0
    st.metric("Média anual", f"{format_number(media)} kWh/m²/dia")
    if media == 0:
        st.warning("Sem dados de irradiação: o dimensionamento não é confiável até preenchê-los.")

    c1, c2 = st.columns(2)
    with c1:
        cliente.panel_power_wp = st.number_input(
            "Potência do painel (Wp)",
            min_value=0.0,
            step=5.0,
            value=float(cliente.panel_power_wp or 0.0),
            key=f"{cliente.id}_panel_wp",
        )
    with c2:
        cliente.system_efficiency = st.slider(
            "Eficiência do sistema",
            min_value=0.50,
            max_value=1.00,
            step=0.01,
            value=min(1.0, max(0.5, float(cliente.system_efficiency or 0.75))),
            key=f"{cliente.id}_efficiency",
        )


def validar(cliente: Client) -> Tuple[bool, List[str]]:
    erros: List[str] = []
    if any(v < 0 for v in cliente.irradiation.values()):
        erros.append("Irradiação inválida: não são permitidos valores negativos.")
    if not (0 < float(cliente.system_efficiency or 0.0) <= 1):
        erros.append("Eficiência do sistema deve estar em (0, 1].")
    return (len(erros) == 0), erros
