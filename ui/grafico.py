# ui/grafico.py
from __future__ import annotations

from typing import Mapping, Optional

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from core.modelo import MONTH_NAMES

COR_CONSUMO = "#EF4444"
COR_GERACAO = "#22C55E"


def grafico_consumo_vs_geracao(
    consumo: Mapping[str, float],
    geracao: Mapping[str, float],
    titulo: Optional[str] = "Comparativo: Consumo vs. Geração",
) -> Figure:
    """
    Barras agrupadas por mês (consumo x geração estimada).
    Quem chama é responsável por fechar a figura (plt.close).
    """
    meses = [label[:3] for _, label in MONTH_NAMES]
    cons = [float(consumo.get(k, 0.0) or 0.0) for k, _ in MONTH_NAMES]
    gen = [float(geracao.get(k, 0.0) or 0.0) for k, _ in MONTH_NAMES]

    largura = 0.4
    xs = list(range(len(meses)))

    fig, ax = plt.subplots(figsize=(9, 3.5))
    ax.bar([x - largura / 2 for x in xs], cons, width=largura, color=COR_CONSUMO, label="Consumo")
    ax.bar([x + largura / 2 for x in xs], gen, width=largura, color=COR_GERACAO, label="Geração")

    ax.set_xticks(xs)
    ax.set_xticklabels(meses)
    ax.set_ylabel("kWh")
    if titulo:
        ax.set_title(titulo)
    ax.legend()
    fig.tight_layout()
    return fig
