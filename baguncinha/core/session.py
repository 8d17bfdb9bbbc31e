# baguncinha/core/session.py
import datetime
import logging
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

from supabase import Client

from baguncinha.core import db
from baguncinha.core.aggregator import MonthlyReport, aggregate
from baguncinha.core.ai import parse_transaction_input
from baguncinha.core.allocation import AllocationSettings, validate_allocation
from baguncinha.core.categories import DEFAULT_SETTINGS
from baguncinha.core.export import export_transactions, select_transactions
from baguncinha.core.income import accrue_income
from baguncinha.core.models import (
    Category,
    Income,
    ParsedInput,
    Transaction,
    TransactionType,
)
from baguncinha.core.normalizer import normalize

logger = logging.getLogger(__name__)

ConfirmResult = Union[Transaction, Tuple[str, Income], None]


class BudgetSession:
    """Estado de um usuário e as ações disponíveis sobre ele.

    Guarda a última foto completa do banco (transações, rendas e percentuais)
    e a transação pendente de confirmação. Toda leitura do banco substitui o
    estado inteiro; escritas vão direto ao Supabase, sem novas tentativas.
    """

    def __init__(
        self,
        supabase_client: Client,
        user_id: str,
        parser: Optional[Callable[..., ParsedInput]] = None,
    ):
        self.supabase_client = supabase_client
        self.user_id = user_id
        self.parser = parser or parse_transaction_input

        self.transactions: List[Transaction] = []
        self.incomes: Dict[str, Income] = {}
        self.settings: AllocationSettings = dict(DEFAULT_SETTINGS)

        self.pending: Optional[ParsedInput] = None
        self.editing_id: Optional[str] = None

    # --- Sincronização ---
    def refresh(self) -> None:
        snapshot = db.load_snapshot(self.supabase_client, self.user_id)
        self.transactions = snapshot.transactions
        self.incomes = snapshot.incomes
        if snapshot.settings is not None:
            self.settings = snapshot.settings

    def income_for(self, month_key: str) -> Income:
        return self.incomes.get(month_key) or Income()

    def find(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    # --- Entrada de transações ---
    def parse(
        self,
        text: Optional[str] = None,
        audio: Optional[bytes] = None,
        mime_type: Optional[str] = None,
        keep_editing: bool = False,
    ) -> ParsedInput:
        parsed = self.parser(text=text, audio=audio, mime_type=mime_type)
        self.pending = parsed
        if not keep_editing:
            self.editing_id = None
        return parsed

    def start_editing(self, transaction_id: str) -> ParsedInput:
        original = self.find(transaction_id)
        if original is None:
            raise KeyError(transaction_id)
        self.pending = original.to_parsed_input()
        self.editing_id = original.id
        return self.pending

    def cancel(self) -> None:
        self.pending = None
        self.editing_id = None

    def confirm(
        self,
        parsed: Optional[ParsedInput] = None,
        now: Optional[datetime.datetime] = None,
    ) -> ConfirmResult:
        """Grava a transação pendente (ou `parsed`).

        Ganhos somam no "extras" do mês; gastos são normalizados e salvos,
        em modo de edição quando há uma transação sendo editada. A foto do
        banco é recarregada antes, para que a renda do mês (salário e vale)
        e a transação em edição venham do estado salvo.
        """
        parsed = parsed or self.pending
        if parsed is None:
            raise ValueError("Não há transação pendente para confirmar.")
        now = now or datetime.datetime.now()

        self.refresh()

        if parsed.type == TransactionType.INCOME:
            key, income = accrue_income(parsed, self.incomes, now)
            db.save_income(self.supabase_client, self.user_id, key, income)
            self.incomes[key] = income
            self.cancel()
            return key, income

        if self.editing_id is not None:
            original = self.find(self.editing_id)
            if original is None:
                logger.warning("Transação %s em edição não existe mais; edição descartada.", self.editing_id)
                self.cancel()
                return None
            transaction = normalize(parsed, editing_original=original, now=now)
        else:
            transaction = normalize(parsed, now=now)

        db.save_transaction(self.supabase_client, self.user_id, transaction)
        self.transactions = [t for t in self.transactions if t.id != transaction.id] + [transaction]
        self.cancel()
        return transaction

    def delete(self, transaction_id: str) -> None:
        db.delete_transaction(self.supabase_client, self.user_id, transaction_id)
        self.transactions = [t for t in self.transactions if t.id != transaction_id]

    # --- Renda e percentuais ---
    def update_income(self, month_key: str, income: Income) -> None:
        # Atualização otimista: o estado local muda antes da confirmação do banco.
        self.incomes[month_key] = income
        db.save_income(self.supabase_client, self.user_id, month_key, income)

    def update_settings(self, settings: Mapping[Category, int]) -> AllocationSettings:
        valid = validate_allocation(settings)
        self.settings = valid
        db.save_settings(self.supabase_client, self.user_id, valid)
        return valid

    # --- Leitura ---
    def report(self, month_key: str) -> MonthlyReport:
        return aggregate(self.transactions, self.income_for(month_key), self.settings, month_key)

    def history(self, month_key: str, category: Optional[Category] = None) -> List[Transaction]:
        return select_transactions(self.transactions, month_key, category)

    def export(self, month_key: str, category: Optional[Category] = None) -> str:
        return export_transactions(self.transactions, month_key, category)
