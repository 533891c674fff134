# core/negociacao.py
from __future__ import annotations

import copy
from typing import Optional, Tuple

from .modelo import Client, SolarCalculationResult

# investimento calculado + entradas do desconto
SyncKey = Tuple[float, str, float, float]


def discount_amount(client: Client) -> float:
    if client.discount_type == "percent":
        return float(client.proposal_value or 0.0) * (float(client.discount_percent or 0.0) / 100.0)
    return float(client.discount or 0.0)


def derived_inputs_key(client: Client, results: SolarCalculationResult) -> SyncKey:
    return (
        float(results.financials.total_investment),
        str(client.discount_type or ""),
        float(client.discount or 0.0),
        float(client.discount_percent or 0.0),
    )


def should_sync_proposal(client: Client, previous: Optional[SyncKey], current: SyncKey) -> bool:
    """
    A proposta volta ao investimento calculado quando o investimento ou o
    desconto mudam. Na primeira vez que o cliente é aberto, só sincroniza
    se ainda não houver valor negociado.
    """
    if previous is None:
        return not client.proposal_value
    return previous != current


def recompute_derived_financials(
    client: Client,
    results: SolarCalculationResult,
    sync_proposal: bool = True,
) -> Client:
    """
    Recalcula o valor final a partir da proposta e do desconto; com
    `sync_proposal`, a proposta antes passa a ser o investimento calculado.

    Não muta `client`: devolve uma cópia atualizada. Deve ser chamado
    explicitamente pela UI depois de cada edição.
    """
    out = copy.deepcopy(client)
    if sync_proposal:
        out.proposal_value = float(results.financials.total_investment)
    out.final_value = max(0.0, float(out.proposal_value or 0.0) - discount_amount(out))
    return out
