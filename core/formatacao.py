# core/formatacao.py
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# troca separadores do padrão en-US ("1,234.56") para pt-BR ("1.234,56")
_PT_BR = str.maketrans({",": ".", ".": ","})

CURRENCY_SYMBOL = "R$"

# float finito cabe em ~310 dígitos inteiros
_CTX = Context(prec=400)


def format_number(x: float, decimals: int = 2) -> str:
    """Empate (.5) arredonda para longe do zero, sobre o valor binário exato."""
    d = int(decimals)
    if not math.isfinite(x):
        return f"{x:,.{d}f}".translate(_PT_BR)
    q = Decimal(x).quantize(Decimal(1).scaleb(-d), rounding=ROUND_HALF_UP, context=_CTX)
    return f"{q:,.{d}f}".translate(_PT_BR)


def format_currency(x: float) -> str:
    if x < 0:
        return f"-{CURRENCY_SYMBOL} {format_number(-x, 2)}"
    return f"{CURRENCY_SYMBOL} {format_number(x, 2)}"


def format_percent(x: float, max_decimals: int = 2) -> str:
    """12.5 -> "12,5%"; sem zeros à direita."""
    s = format_number(x, max_decimals)
    if "," in s:
        s = s.rstrip("0").rstrip(",")
    return f"{s}%"
