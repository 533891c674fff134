# core/compartilhamento.py
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

from .modelo import Client

BRAZIL_DDI = "55"

_NAO_DIGITO = re.compile(r"\D")
# mesmos caracteres que encodeURIComponent mantém
_URI_SAFE = "!'()*"


def whatsapp_phone(phone: str) -> str:
    """Só dígitos; DDD + número (10 ou 11 dígitos) recebe o DDI 55."""
    digits = _NAO_DIGITO.sub("", phone or "")
    if 10 <= len(digits) <= 11:
        digits = BRAZIL_DDI + digits
    return digits


def whatsapp_message(client: Client) -> str:
    return (
        f"Olá {client.name}, tudo bem? \n\n"
        "Segue a proposta de energia solar que preparamos para você. \n\n"
        "Qualquer dúvida estou à disposição!"
    )


def email_subject(client: Client) -> str:
    return f"Proposta de Energia Solar - {client.name}"


def email_body(client: Client, company_name: str = "SolarCalc Pro") -> str:
    return (
        f"Olá {client.name},\n\n"
        "Conforme conversamos, segue em anexo a proposta de dimensionamento fotovoltaico para sua análise.\n\n"
        "Fico à disposição para esclarecer qualquer dúvida.\n\n"
        f"Atenciosamente,\n{company_name}"
    )


def whatsapp_url(client: Client) -> Optional[str]:
    """None quando o cliente não tem telefone."""
    if not (client.phone or "").strip():
        return None
    return f"https://wa.me/{whatsapp_phone(client.phone)}?text={quote(whatsapp_message(client), safe=_URI_SAFE)}"


def email_url(client: Client, company_name: str = "SolarCalc Pro") -> Optional[str]:
    if not (client.email or "").strip():
        return None
    subject = quote(email_subject(client), safe=_URI_SAFE)
    body = quote(email_body(client, company_name), safe=_URI_SAFE)
    return f"mailto:{client.email.strip()}?subject={subject}&body={body}"
