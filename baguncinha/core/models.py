# baguncinha/core/models.py
import datetime
import re
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from baguncinha.core.errors import UnknownCategory

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


class Category(str, Enum):
    """Os seis "potes" fixos do orçamento. Não existem categorias dinâmicas."""

    FIXED = "FIXED"
    COMFORT = "COMFORT"
    GOALS = "GOALS"
    PLEASURES = "PLEASURES"
    FREEDOM = "FREEDOM"
    KNOWLEDGE = "KNOWLEDGE"


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


def parse_category(value: Union[str, Category]) -> Category:
    """Converte um texto (sem diferenciar maiúsculas) em Category.

    Falha com UnknownCategory para qualquer valor fora do conjunto fechado,
    em vez de cair silenciosamente em uma categoria padrão.
    """
    if isinstance(value, Category):
        return value
    if isinstance(value, str):
        try:
            return Category[value.strip().upper()]
        except KeyError:
            pass
    raise UnknownCategory(value)


def is_iso_date(value: Any) -> bool:
    """True apenas para datas reais no formato AAAA-MM-DD."""
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        return False
    try:
        datetime.date.fromisoformat(value)
    except ValueError:
        return False
    return True


def month_key(date: Union[datetime.date, datetime.datetime]) -> str:
    """Chave do mês no formato AAAA-MM."""
    return f"{date.year:04d}-{date.month:02d}"


def parse_month_key(key: str) -> Tuple[int, int]:
    """Retorna (ano, mês) de uma chave AAAA-MM."""
    match = MONTH_KEY_RE.match(key or "")
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise ValueError(f"Mês inválido: {key!r} (use AAAA-MM)")
    return int(match.group(1)), int(match.group(2))


@dataclass(frozen=True)
class ParsedInput:
    type: TransactionType
    description: str
    amount: float
    category: Optional[Category] = None
    date: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    id: str
    description: str
    amount: float
    category: Category
    date: str  # AAAA-MM-DD
    created_at: int  # epoch em milissegundos

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        return cls(
            id=str(data["id"]),
            description=data.get("description") or "",
            amount=float(data["amount"]),
            category=parse_category(data["category"]),
            date=str(data["date"]),
            created_at=int(data.get("created_at") or 0),
        )

    def to_parsed_input(self) -> ParsedInput:
        """Reconstrói a entrada de gasto usada ao iniciar uma edição."""
        return ParsedInput(
            type=TransactionType.EXPENSE,
            description=self.description,
            amount=self.amount,
            category=self.category,
            date=self.date,
        )


@dataclass(frozen=True)
class Income:
    salary: float = 0.0
    advance: float = 0.0  # vale
    extras: float = 0.0

    @property
    def total(self) -> float:
        return self.salary + self.advance + self.extras

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Income":
        return cls(
            salary=float(data.get("salary") or 0),
            advance=float(data.get("advance") or 0),
            extras=float(data.get("extras") or 0),
        )

    def with_extras(self, amount: float) -> "Income":
        return replace(self, extras=self.extras + amount)
