# ui/consumo.py
from __future__ import annotations

from typing import List, Tuple

import streamlit as st

from core.formatacao import format_number
from core.modelo import MONTH_NAMES, Client


def grade_mensal(cliente: Client, campo: str, unidade: str, passo: float) -> None:
    """Grade 4x3 de inputs mensais; grava direto em cliente.<campo>."""
    dados = getattr(cliente, campo)
    for fila in range(3):
        cols = st.columns(4)
        for j in range(4):
            key, label = MONTH_NAMES[fila * 4 + j]
            with cols[j]:
                dados[key] = st.number_input(
                    f"{label} ({unidade})",
                    min_value=0.0,
                    step=passo,
                    value=float(dados.get(key, 0.0) or 0.0),
                    key=f"{cliente.id}_{campo}_{key}",
                )


def render(ctx, cliente: Client) -> None:
    st.markdown("### Consumo de energia (últimos 12 meses)")

    grade_mensal(cliente, "consumption", "kWh", 10.0)

    total = float(sum(cliente.consumption.values()))
    a, b = st.columns(2)
    with a:
        st.metric("Consumo anual (kWh)", format_number(total, 0))
    with b:
        st.metric("Média mensal (kWh)", format_number(total / 12.0, 0))


def validar(cliente: Client) -> Tuple[bool, List[str]]:
    # zeros são aceitos (leituras ausentes), só negativos bloqueiam
    if any(v < 0 for v in cliente.consumption.values()):
        return False, ["Consumo inválido: não são permitidos valores negativos."]
    return True, []
