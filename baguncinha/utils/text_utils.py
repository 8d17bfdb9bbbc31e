# baguncinha/utils/text_utils.py
import math
import re
from typing import Any

MONTH_NAMES = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def format_brl(value: float) -> str:
    """Formata um valor como moeda brasileira.
    Ex: 1234.5 -> "R$ 1.234,50"
    Ex: -20 -> "-R$ 20,00"
    """
    sign = "-" if value < 0 else ""
    formatted = f"{abs(value):,.2f}"
    # Troca os separadores do padrão americano para o brasileiro
    formatted = formatted.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {formatted}"


def format_decimal_comma(value: float) -> str:
    """Valor com duas casas e vírgula decimal, sem separador de milhar. Ex: 1234.5 -> "1234,50" """
    return f"{value:.2f}".replace(".", ",")


def month_label(year: int, month: int) -> str:
    """Ex: (2025, 2) -> "Fevereiro de 2025" """
    return f"{MONTH_NAMES[month - 1].capitalize()} de {year}"


def parse_decimal(text: str) -> float:
    """Lê um número escrito no padrão brasileiro ou americano.
    Levanta ValueError se o texto não for um número finito.
    Ex: "R$ 1.234,56" -> 1234.56
    Ex: "99.9" -> 99.9
    """
    text = text.strip().replace("R$", "").strip()
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Número inválido: {text!r}")
    return value


def parse_amount(raw: Any) -> float:
    """Converte a entrada de um formulário em número, aceitando vírgula decimal.
    Entradas inválidas viram 0.0.
    Ex: "1234,50" -> 1234.5
    Ex: "abc" -> 0.0
    """
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw)
    if not isinstance(raw, str):
        return 0.0
    try:
        return parse_decimal(raw)
    except ValueError:
        return 0.0


def leading_int(raw: Any) -> int:
    """Inteiro no início do texto, ou 0 se não houver.
    Ex: "12abc" -> 12
    Ex: "" -> 0
    """
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw)
    match = _LEADING_INT_RE.match(str(raw)) if raw is not None else None
    return int(match.group(1)) if match else 0
