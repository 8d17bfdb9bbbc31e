# baguncinha/core/normalizer.py
import datetime
import logging
import uuid
from typing import Callable, Optional

from baguncinha.core.errors import MissingCategoryOnExpense
from baguncinha.core.models import (
    Category,
    ParsedInput,
    Transaction,
    TransactionType,
    is_iso_date,
)

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def resolve_date(parsed_date: Optional[str], fallback: Optional[str], today: datetime.date) -> str:
    """Data do lançamento: a informada (se válida), senão a original da edição, senão hoje."""
    if parsed_date and is_iso_date(parsed_date):
        return parsed_date
    if parsed_date:
        logger.warning("Data inválida recebida do parser: %r", parsed_date)
    if fallback:
        return fallback
    return today.isoformat()


def normalize(
    parsed: ParsedInput,
    editing_original: Optional[Transaction] = None,
    now: Optional[datetime.datetime] = None,
    id_factory: Callable[[], str] = _new_id,
    strict: bool = False,
) -> Transaction:
    """Converte o resultado do parser em uma Transaction pronta para salvar.

    Gasto sem categoria vira FIXED (ou MissingCategoryOnExpense com strict=True).
    Na edição, id e created_at da transação original são mantidos e a data
    original é usada se o parser não trouxer uma data válida. O valor é
    repassado como veio, sem validar sinal ou grandeza.
    """
    if parsed.type != TransactionType.EXPENSE:
        raise ValueError("Ganhos não viram transações; use accrue_income.")

    now = now or datetime.datetime.now()

    category = parsed.category
    if category is None:
        if strict:
            raise MissingCategoryOnExpense(parsed.description)
        logger.warning("Gasto '%s' veio sem categoria; usando FIXED.", parsed.description)
        category = Category.FIXED

    if editing_original is not None:
        return Transaction(
            id=editing_original.id,
            description=parsed.description,
            amount=parsed.amount,
            category=category,
            date=resolve_date(parsed.date, editing_original.date, now.date()),
            created_at=editing_original.created_at,
        )

    return Transaction(
        id=id_factory(),
        description=parsed.description,
        amount=parsed.amount,
        category=category,
        date=resolve_date(parsed.date, None, now.date()),
        created_at=int(now.timestamp() * 1000),
    )
