# ui/resultados.py
from __future__ import annotations

import uuid
from typing import List, Tuple

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from core.calculos import calculate_solar_system, minimum_kwh_for_connection
from core.formatacao import format_currency, format_number, format_percent
from core.modelo import DISCOUNT_TYPES, LABOR_TYPES, MONTH_NAMES, PAYMENT_METHODS, Client, MaterialItem, SolarCalculationResult
from core.negociacao import discount_amount, recompute_derived_financials
from ui.grafico import grafico_consumo_vs_geracao
from ui.router import salvar_se_mudou

_PAGAMENTOS = {
    "": "Selecione...",
    "pix": "PIX",
    "boleto": "Boleto",
    "credit_card": "Cartão de crédito",
    "debit_card": "Cartão de débito",
    "financing": "Financiamento",
}


# ==========================================================
# Tabelas (sem streamlit, testáveis)
# ==========================================================
def tabela_mensal(cliente: Client, res: SolarCalculationResult) -> pd.DataFrame:
    rows = []
    for key, label in MONTH_NAMES:
        rows.append({
            "Mês": label,
            "Consumo": f"{format_number(cliente.consumption.get(key, 0.0))} kWh",
            "Irradiação": f"{format_number(cliente.irradiation.get(key, 0.0))} kWh/m²",
            "Geração Est.": f"{format_number(res.monthly_generation[key])} kWh",
        })
    return pd.DataFrame(rows, columns=["Mês", "Consumo", "Irradiação", "Geração Est."])


def linhas_financeiras(cliente: Client, res: SolarCalculationResult) -> List[Tuple[str, str]]:
    fin = res.financials
    rows = [("Valor da Proposta (Investimento)", format_currency(cliente.proposal_value))]

    desconto = discount_amount(cliente)
    if desconto > 0:
        if cliente.discount_type == "percent":
            rows.append((f"Desconto Aplicado ({format_percent(cliente.discount_percent)})", f"- {format_currency(desconto)}"))
        else:
            rows.append(("Desconto Aplicado", f"- {format_currency(desconto)}"))

    rows += [
        ("Valor Final", format_currency(cliente.final_value)),
        ("Economia Média Mensal", format_currency(fin.monthly_savings)),
        ("Custo Médio Mensal (Sem Solar)", format_currency(fin.monthly_bill_without_solar)),
        ("Custo Médio Mensal (Com Solar)", format_currency(fin.monthly_bill_with_solar)),
        ("Custo de Disponibilidade", f"{format_currency(fin.minimum_bill_cost)}/mês"),
        (
            "Payback Estimado",
            f"{format_number(fin.payback_years, 1)} anos ({format_number(fin.payback_months, 0)} meses)",
        ),
        ("Economia em 25 Anos", format_currency(fin.total_savings_25_years)),
    ]
    return rows


# ==========================================================
# Blocos de UI
# ==========================================================
def _render_investimento(cliente: Client) -> None:
    k = cliente.id
    st.markdown("#### Investimento")
    c1, c2, c3 = st.columns(3)
    with c1:
        cliente.kwh_price = st.number_input(
            "Tarifa (R$/kWh)", min_value=0.0, step=0.01, value=float(cliente.kwh_price or 0.0), key=f"{k}_kwh_price"
        )
        cliente.kit_price = st.number_input(
            "Preço do kit (R$)", min_value=0.0, step=100.0, value=float(cliente.kit_price or 0.0), key=f"{k}_kit"
        )
    with c2:
        atual = cliente.labor_type if cliente.labor_type in LABOR_TYPES else "fixed"
        cliente.labor_type = st.radio(
            "Mão de obra",
            options=list(LABOR_TYPES),
            index=LABOR_TYPES.index(atual),
            format_func=lambda s: "Valor fixo" if s == "fixed" else "% do kit",
            horizontal=True,
            key=f"{k}_labor_type",
        )
        if cliente.labor_type == "percent":
            cliente.labor_percent = st.number_input(
                "Mão de obra (%)", min_value=0.0, step=1.0, value=float(cliente.labor_percent or 0.0), key=f"{k}_labor_pct"
            )
        else:
            cliente.labor_price = st.number_input(
                "Mão de obra (R$)", min_value=0.0, step=100.0, value=float(cliente.labor_price or 0.0), key=f"{k}_labor"
            )
    with c3:
        cliente.extra_materials = st.number_input(
            "Materiais extras (R$)",
            min_value=0.0,
            step=50.0,
            value=float(cliente.extra_materials or 0.0),
            key=f"{k}_extra",
        )
        st.caption(
            f"Mínimo faturável ({cliente.connection_type}): "
            f"{minimum_kwh_for_connection(cliente.connection_type)} kWh/mês"
        )


def _render_negociacao(cliente: Client, res: SolarCalculationResult) -> None:
    k = cliente.id
    st.markdown("#### Negociação")

    cliente.proposal_value = st.number_input(
        "Valor da Proposta (R$)",
        min_value=0.0,
        step=100.0,
        value=float(cliente.proposal_value or 0.0),
        key=f"{k}_proposal",
    )
    st.caption(f"Calculado: {format_currency(res.financials.total_investment)}")

    c1, c2, c3 = st.columns(3)
    with c1:
        atual = cliente.discount_type if cliente.discount_type in DISCOUNT_TYPES else "fixed"
        cliente.discount_type = st.radio(
            "Desconto",
            options=list(DISCOUNT_TYPES),
            index=DISCOUNT_TYPES.index(atual),
            format_func=lambda s: "R$" if s == "fixed" else "%",
            horizontal=True,
            key=f"{k}_discount_type",
        )
        if cliente.discount_type == "percent":
            cliente.discount_percent = st.number_input(
                "Desconto (%)", min_value=0.0, max_value=100.0, step=1.0,
                value=float(cliente.discount_percent or 0.0), key=f"{k}_discount_pct",
            )
        else:
            cliente.discount = st.number_input(
                "Desconto (R$)", min_value=0.0, step=50.0, value=float(cliente.discount or 0.0), key=f"{k}_discount"
            )
    with c2:
        atual_pg = cliente.payment_method if cliente.payment_method in PAYMENT_METHODS else ""
        cliente.payment_method = st.selectbox(
            "Forma de pagamento",
            options=list(PAYMENT_METHODS),
            index=PAYMENT_METHODS.index(atual_pg),
            format_func=lambda s: _PAGAMENTOS.get(s, s),
            key=f"{k}_payment",
        )
    with c3:
        cliente.installments = int(st.number_input(
            "Parcelas", min_value=1, step=1, value=int(cliente.installments or 1), key=f"{k}_installments"
        ))


def _render_materiais(ctx, cliente: Client) -> None:
    k = cliente.id
    st.markdown("#### Lista de equipamentos / materiais")

    for item in list(cliente.materials):
        c1, c2, c3, c4, c5 = st.columns([1, 1, 3, 2, 1])
        with c1:
            item.quantity = st.number_input("Qtd", min_value=0.0, value=float(item.quantity), key=f"{k}_{item.id}_qtd")
        with c2:
            item.unit = st.text_input("Unid", value=item.unit, key=f"{k}_{item.id}_unit")
        with c3:
            item.model = st.text_input("Modelo / Descrição", value=item.model, key=f"{k}_{item.id}_model")
        with c4:
            item.brand = st.text_input("Marca", value=item.brand, key=f"{k}_{item.id}_brand")
        with c5:
            if st.button("Remover", key=f"{k}_{item.id}_del"):
                cliente.materials = [m for m in cliente.materials if m.id != item.id]
                salvar_se_mudou(ctx, cliente)
                st.rerun()

    if not cliente.materials:
        st.caption("Nenhum material listado.")

    if st.button("Adicionar item", key=f"{k}_add_material"):
        cliente.materials.append(MaterialItem(id=str(uuid.uuid4())))
        salvar_se_mudou(ctx, cliente)
        st.rerun()


def render(ctx, cliente: Client) -> None:
    st.markdown("### Resultados do dimensionamento")

    _render_investimento(cliente)

    res = calculate_solar_system(cliente)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Potência do sistema", f"{format_number(res.total_system_power_kwp)} kWp")
    c2.metric("Nº de painéis", f"{res.panel_count_rounded} ({format_number(cliente.panel_power_wp, 0)} W)")
    c3.metric("Geração média mensal", f"{format_number(res.avg_monthly_generation)} kWh")
    c4.metric("Potência necessária", f"{format_number(res.required_system_power_kwp, 3)} kWp")

    st.dataframe(tabela_mensal(cliente, res), hide_index=True, use_container_width=True)

    fig = grafico_consumo_vs_geracao(cliente.consumption, res.monthly_generation)
    st.pyplot(fig)
    plt.close(fig)

    _render_negociacao(cliente, res)
    # a sincronização da proposta com o investimento fica no salvamento do editor
    vista = recompute_derived_financials(cliente, res, sync_proposal=False)

    st.markdown("#### Análise financeira e payback")
    for label, valor in linhas_financeiras(vista, res):
        a, b = st.columns([3, 2])
        a.write(label)
        b.write(f"**{valor}**")

    _render_materiais(ctx, cliente)


def validar(cliente: Client) -> Tuple[bool, List[str]]:
    return True, []
