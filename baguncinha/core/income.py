# baguncinha/core/income.py
import datetime
import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Tuple, Union

from baguncinha.core.models import (
    Income,
    ParsedInput,
    TransactionType,
    is_iso_date,
    month_key,
)
from baguncinha.utils.text_utils import parse_amount

logger = logging.getLogger(__name__)

INCOME_FIELDS = ("salary", "advance", "extras")


def income_month_key(parsed_date: Optional[str], now: Union[datetime.date, datetime.datetime]) -> str:
    if parsed_date and is_iso_date(parsed_date):
        return parsed_date[:7]
    if parsed_date:
        logger.warning("Data inválida no ganho: %r; usando o mês atual.", parsed_date)
    return month_key(now)


def accrue_income(
    parsed: ParsedInput,
    existing: Mapping[str, Income],
    now: Optional[Union[datetime.date, datetime.datetime]] = None,
) -> Tuple[str, Income]:
    """Soma um ganho interpretado ao campo "extras" do mês correspondente.

    Salário e vale nunca são alterados por aqui. O mês vem da data do ganho
    ou, sem ela, de `now`. Meses sem registro começam zerados.
    """
    if parsed.type != TransactionType.INCOME:
        raise ValueError("accrue_income só aceita entradas do tipo INCOME.")
    now = now or datetime.date.today()
    key = income_month_key(parsed.date, now)
    current = existing.get(key) or Income()
    return key, current.with_extras(parsed.amount)


def update_income_field(income: Income, field: str, raw: Any) -> Income:
    """Edição direta de um campo da renda a partir do formulário."""
    if field not in INCOME_FIELDS:
        raise ValueError(f"Campo de renda desconhecido: {field!r}")
    return replace(income, **{field: parse_amount(raw)})
