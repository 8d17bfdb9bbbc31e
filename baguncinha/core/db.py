# baguncinha/core/db.py
import datetime
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from supabase import Client, create_client

from baguncinha.config import SUPABASE_KEY, SUPABASE_URL
from baguncinha.core.allocation import (
    AllocationSettings,
    settings_from_dict,
    settings_to_dict,
    validate_allocation,
)
from baguncinha.core.categories import DEFAULT_SETTINGS
from baguncinha.core.errors import StorageUnavailable
from baguncinha.core.models import Category, Income, Transaction, month_key

logger = logging.getLogger(__name__)

TRANSACTIONS_TABLE = "transactions"
INCOMES_TABLE = "monthly_incomes"
SETTINGS_TABLE = "category_settings"


def get_supabase_client() -> Client:
    """Retorna uma instância do cliente Supabase."""
    return create_client(SUPABASE_URL, SUPABASE_KEY)


@dataclass(frozen=True)
class Snapshot:
    """Estado completo de um usuário, sempre substituído por inteiro."""

    transactions: List[Transaction]
    incomes: Dict[str, Income]
    settings: Optional[AllocationSettings]


def _storage_error(operation: str, error: Exception) -> StorageUnavailable:
    logger.exception("Erro no Supabase durante '%s'", operation)
    return StorageUnavailable(operation, str(error))


# --- Funções para Transações ---
def get_transactions(supabase_client: Client, user_id: str) -> List[Transaction]:
    """Obtém todas as transações do usuário."""
    try:
        response = (
            supabase_client.table(TRANSACTIONS_TABLE)
            .select("id,description,amount,category,date,created_at")
            .eq("user_id", user_id)
            .execute()
        )
    except Exception as e:
        raise _storage_error("get_transactions", e) from e
    return [Transaction.from_dict(row) for row in response.data or []]


def save_transaction(supabase_client: Client, user_id: str, transaction: Transaction) -> None:
    """Cria ou sobrescreve uma transação pelo id."""
    row = transaction.to_dict()
    row["user_id"] = user_id
    try:
        supabase_client.table(TRANSACTIONS_TABLE).upsert(row).execute()
    except Exception as e:
        raise _storage_error("save_transaction", e) from e
    logger.info("Transação %s salva para o usuário %s", transaction.id, user_id)


def delete_transaction(supabase_client: Client, user_id: str, transaction_id: str) -> None:
    try:
        (
            supabase_client.table(TRANSACTIONS_TABLE)
            .delete()
            .eq("user_id", user_id)
            .eq("id", transaction_id)
            .execute()
        )
    except Exception as e:
        raise _storage_error("delete_transaction", e) from e
    logger.info("Transação %s excluída do usuário %s", transaction_id, user_id)


# --- Funções para Renda Mensal ---
def get_incomes(supabase_client: Client, user_id: str) -> Dict[str, Income]:
    """Obtém a renda de todos os meses, indexada por AAAA-MM."""
    try:
        response = (
            supabase_client.table(INCOMES_TABLE)
            .select("month_key,salary,advance,extras")
            .eq("user_id", user_id)
            .execute()
        )
    except Exception as e:
        raise _storage_error("get_incomes", e) from e
    return {row["month_key"]: Income.from_dict(row) for row in response.data or []}


def save_income(supabase_client: Client, user_id: str, key: str, income: Income) -> None:
    """Sobrescreve a renda de um mês."""
    row = {"user_id": user_id, "month_key": key, **income.to_dict()}
    try:
        supabase_client.table(INCOMES_TABLE).upsert(row, on_conflict="user_id,month_key").execute()
    except Exception as e:
        raise _storage_error("save_income", e) from e


# --- Funções para Configuração dos Percentuais ---
def get_settings(supabase_client: Client, user_id: str) -> Optional[AllocationSettings]:
    """Obtém os percentuais salvos, ou None se o usuário ainda não tiver."""
    try:
        response = (
            supabase_client.table(SETTINGS_TABLE)
            .select("percentages")
            .eq("user_id", user_id)
            .execute()
        )
    except Exception as e:
        raise _storage_error("get_settings", e) from e
    if not response.data:
        return None
    return settings_from_dict(response.data[0].get("percentages") or {})


def save_settings(supabase_client: Client, user_id: str, settings: Mapping[Category, int]) -> None:
    """Salva os percentuais. Configurações que não somam 100 nunca são gravadas."""
    valid = validate_allocation(settings)
    row = {"user_id": user_id, "percentages": settings_to_dict(valid)}
    try:
        supabase_client.table(SETTINGS_TABLE).upsert(row, on_conflict="user_id").execute()
    except Exception as e:
        raise _storage_error("save_settings", e) from e


def initialize_user_data(
    supabase_client: Client,
    user_id: str,
    today: Optional[datetime.date] = None,
) -> None:
    """Cria os percentuais padrão e a renda zerada do mês atual para usuários novos."""
    today = today or datetime.date.today()
    if get_settings(supabase_client, user_id) is None:
        save_settings(supabase_client, user_id, DEFAULT_SETTINGS)
        logger.info("Percentuais padrão criados para o usuário %s", user_id)

    key = month_key(today)
    if key not in get_incomes(supabase_client, user_id):
        save_income(supabase_client, user_id, key, Income())


def load_snapshot(supabase_client: Client, user_id: str) -> Snapshot:
    return Snapshot(
        transactions=get_transactions(supabase_client, user_id),
        incomes=get_incomes(supabase_client, user_id),
        settings=get_settings(supabase_client, user_id),
    )
