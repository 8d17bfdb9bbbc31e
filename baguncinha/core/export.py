# baguncinha/core/export.py
from typing import Iterable, List, Optional

import pandas as pd

from baguncinha.core.aggregator import filter_month
from baguncinha.core.categories import CATEGORY_INFO
from baguncinha.core.models import Category, Transaction
from baguncinha.utils.text_utils import format_decimal_comma

EXPORT_COLUMNS = ["Data", "Descrição", "Categoria", "Valor"]


def select_transactions(
    transactions: Iterable[Transaction],
    month_key: Optional[str] = None,
    category: Optional[Category] = None,
) -> List[Transaction]:
    """Filtra por mês e categoria e ordena da data mais recente para a mais antiga."""
    selected = filter_month(transactions, month_key) if month_key else list(transactions)
    if category is not None:
        selected = [t for t in selected if t.category == category]
    return sorted(selected, key=lambda t: t.date, reverse=True)


def export_transactions(
    transactions: Iterable[Transaction],
    month_key: Optional[str] = None,
    category: Optional[Category] = None,
) -> str:
    """Gera a tabela (separada por ";") dos lançamentos filtrados, no padrão brasileiro."""
    rows = [
        {
            "Data": t.date,
            "Descrição": t.description,
            "Categoria": CATEGORY_INFO[t.category].label,
            "Valor": format_decimal_comma(t.amount),
        }
        for t in select_transactions(transactions, month_key, category)
    ]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    return df.to_csv(sep=";", index=False, lineterminator="\n")
