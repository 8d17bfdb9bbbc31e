# baguncinha/core/aggregator.py
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from baguncinha.core.categories import CATEGORY_INFO
from baguncinha.core.models import Category, Income, Transaction, parse_month_key

REMAINING_LABEL = "Saldo Restante"
REMAINING_COLOR = "#e2e8f0"

WEEK_NAMES = (
    ("Sem 1", "Semana 1 (1-7)"),
    ("Sem 2", "Semana 2 (8-14)"),
    ("Sem 3", "Semana 3 (15-21)"),
    ("Sem 4+", "Semana 4+ (22-Fim)"),
)


@dataclass(frozen=True)
class CategoryStat:
    category: Category
    label: str
    color: str
    limit_percentage: int
    limit_amount: float
    spent: float
    percent_used: float

    @property
    def over_limit(self) -> bool:
        return self.percent_used > 100


@dataclass(frozen=True)
class WeekBucket:
    index: int
    name: str
    full_label: str
    total: float
    by_category: Mapping[Category, float]


@dataclass(frozen=True)
class MonthlyReport:
    month_key: str
    transactions: Tuple[Transaction, ...]
    total_income: float
    total_expenses: float
    remaining: float
    categories: Tuple[CategoryStat, ...]
    weeks: Tuple[WeekBucket, ...]
    average_weekly: float
    highest_week: WeekBucket

    def stat(self, category: Category) -> CategoryStat:
        return next(s for s in self.categories if s.category == category)

    def distribution(self) -> List[Tuple[str, float, str]]:
        """Fatias do gráfico de pizza: (rótulo, valor, cor).

        Categorias com gasto e, se positivo, o saldo restante da renda.
        """
        slices = [(s.label, s.spent, s.color) for s in self.categories if s.spent > 0]
        if self.remaining > 0:
            slices.append((REMAINING_LABEL, self.remaining, REMAINING_COLOR))
        return slices


def _date_parts(date: str) -> Optional[Tuple[int, int, int]]:
    try:
        year, month, day = (int(part) for part in date.split("-"))
    except (AttributeError, ValueError):
        return None
    return year, month, day


def week_index(day: int) -> int:
    """Semana do mês pelo dia: 1-7, 8-14, 15-21 e 22 até o fim (sempre a última)."""
    if day <= 7:
        return 0
    if day <= 14:
        return 1
    if day <= 21:
        return 2
    return 3


def filter_month(transactions: Iterable[Transaction], month_key: str) -> List[Transaction]:
    year, month = parse_month_key(month_key)
    selected = []
    for t in transactions:
        parts = _date_parts(t.date)
        if parts and parts[0] == year and parts[1] == month:
            selected.append(t)
    return selected


def aggregate(
    transactions: Iterable[Transaction],
    income: Income,
    settings: Mapping[Category, int],
    month_key: str,
) -> MonthlyReport:
    """Monta o relatório do mês: totais, uso de cada pote e semanas.

    Função pura: não altera as entradas e sempre devolve o mesmo relatório
    para as mesmas entradas.
    """
    monthly = filter_month(transactions, month_key)

    total_income = income.salary + income.advance + income.extras
    total_expenses = sum(t.amount for t in monthly)
    remaining = total_income - total_expenses

    stats = []
    for category in Category:
        info = CATEGORY_INFO[category]
        limit_percentage = settings.get(category, 0)
        limit_amount = total_income * limit_percentage / 100
        spent = sum(t.amount for t in monthly if t.category == category)
        percent_used = (spent / limit_amount) * 100 if limit_amount > 0 else 0
        stats.append(
            CategoryStat(
                category=category,
                label=info.label,
                color=info.color,
                limit_percentage=limit_percentage,
                limit_amount=limit_amount,
                spent=spent,
                percent_used=percent_used,
            )
        )

    totals = [0.0] * len(WEEK_NAMES)
    per_category: List[Dict[Category, float]] = [
        {category: 0.0 for category in Category} for _ in WEEK_NAMES
    ]
    for t in monthly:
        index = week_index(_date_parts(t.date)[2])
        totals[index] += t.amount
        per_category[index][t.category] += t.amount

    weeks = tuple(
        WeekBucket(index=i, name=name, full_label=full_label, total=totals[i], by_category=per_category[i])
        for i, (name, full_label) in enumerate(WEEK_NAMES)
    )

    # Média fixa em 4 semanas, mesmo que alguma semana não tenha gastos.
    average_weekly = total_expenses / 4
    # max() devolve a primeira semana em caso de empate.
    highest_week = max(weeks, key=lambda w: w.total)

    return MonthlyReport(
        month_key=month_key,
        transactions=tuple(monthly),
        total_income=total_income,
        total_expenses=total_expenses,
        remaining=remaining,
        categories=tuple(stats),
        weeks=weeks,
        average_weekly=average_weekly,
        highest_week=highest_week,
    )
