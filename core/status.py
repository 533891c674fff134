# core/status.py
from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .modelo import PROJECT_STATUSES, Client

FOLLOW_UP_DAYS = 45
PROPOSAL_VALIDITY_DAYS = 30


class IncompleteClientError(ValueError):
    """Cadastro sem os dados de contato/endereço obrigatórios."""


class InvalidStatusError(ValueError):
    pass


@dataclass(frozen=True)
class StatusStep:
    id: str
    label: str
    description: str


STATUS_TIMELINE: List[StatusStep] = [
    StatusStep("lead", "Novo / Análise", "Cliente cadastrado, coletando dados."),
    StatusStep("proposal_sent", "Proposta Enviada", "Proposta apresentada ao cliente."),
    StatusStep("proposal_accepted", "Proposta Aceita", "Cliente aceitou, contrato assinado."),
    StatusStep("approval", "Homologação", "Solicitação de acesso na concessionária."),
    StatusStep("installation", "Instalação", "Equipe em campo instalando o sistema."),
    StatusStep("completed", "Concluído", "Sistema ativo e gerando economia."),
]


def status_index(status: Optional[str]) -> int:
    s = status or "lead"
    return PROJECT_STATUSES.index(s) if s in PROJECT_STATUSES else 0


def status_label(status: Optional[str]) -> str:
    return STATUS_TIMELINE[status_index(status)].label


# ==========================================================
# Validação de cadastro (bloqueia avanço de status / PDF)
# ==========================================================
def validate_client_fields(client: Client) -> Optional[str]:
    """Devolve a primeira pendência do cadastro, ou None se estiver completo."""
    a = client.address
    checks = [
        (client.name, "O Nome Completo é obrigatório."),
        (client.cpf, "O CPF é obrigatório."),
        (client.phone, "O Telefone é obrigatório."),
        (client.email, "O E-mail é obrigatório."),
        (a.zip, "O CEP é obrigatório."),
        (a.street, "A Rua é obrigatória."),
        (a.number, "O Número é obrigatório."),
        (a.neighborhood, "O Bairro é obrigatório."),
        (a.city, "A Cidade é obrigatória."),
        (a.state, "O Estado é obrigatório."),
    ]
    for valor, msg in checks:
        if not str(valor or "").strip():
            return msg
    return None


def _now_iso(now: Optional[datetime] = None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def update_status(client: Client, new_status: str, now: Optional[datetime] = None) -> Client:
    if new_status not in PROJECT_STATUSES:
        raise InvalidStatusError(f"Status desconhecido: {new_status!r}")

    error = validate_client_fields(client)
    if error:
        raise IncompleteClientError(f"Complete o cadastro: {error}")

    out = copy.deepcopy(client)
    out.status = new_status
    out.status_updated_at = _now_iso(now)
    return out


# ==========================================================
# Datas de acompanhamento
# ==========================================================
def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(str(s).replace("Z", "+00:00"))


def status_changed_at(client: Client) -> datetime:
    return _parse_iso(client.status_updated_at or client.updated_at)


def follow_up_date(client: Client) -> datetime:
    return status_changed_at(client) + timedelta(days=FOLLOW_UP_DAYS)


def proposal_expiration(created: datetime) -> datetime:
    return created + timedelta(days=PROPOSAL_VALIDITY_DAYS)


def proposal_valid_until(client: Client) -> datetime:
    """Validade contada a partir do envio da proposta (última mudança de status)."""
    return proposal_expiration(status_changed_at(client))
