import datetime
import unittest

from baguncinha.core.errors import MissingCategoryOnExpense
from baguncinha.core.models import Category, ParsedInput, Transaction, TransactionType
from baguncinha.core.normalizer import normalize, resolve_date


class TestNormalizer(unittest.TestCase):
    def setUp(self):
        self.now = datetime.datetime(2025, 7, 10, 12, 30, 0)
        self.now_ms = int(self.now.timestamp() * 1000)
        self.original = Transaction(
            id="tx-1",
            description="Aluguel",
            amount=1500.0,
            category=Category.FIXED,
            date="2025-07-05",
            created_at=1751700000000,
        )

    def expense(self, **kwargs):
        data = {"type": TransactionType.EXPENSE, "description": "Cinema", "amount": 40.0}
        data.update(kwargs)
        return ParsedInput(**data)

    def test_create_mints_id_and_created_at(self):
        tx = normalize(
            self.expense(category=Category.PLEASURES, date="2025-07-08"),
            now=self.now,
            id_factory=lambda: "novo-id",
        )
        self.assertEqual(tx.id, "novo-id")
        self.assertEqual(tx.created_at, self.now_ms)
        self.assertEqual(tx.category, Category.PLEASURES)
        self.assertEqual(tx.date, "2025-07-08")
        self.assertEqual(tx.description, "Cinema")
        self.assertEqual(tx.amount, 40.0)

    def test_default_ids_are_unique(self):
        a = normalize(self.expense(category=Category.FIXED), now=self.now)
        b = normalize(self.expense(category=Category.FIXED), now=self.now)
        self.assertNotEqual(a.id, b.id)

    def test_missing_category_defaults_to_fixed(self):
        with self.assertLogs("baguncinha.core.normalizer", level="WARNING"):
            tx = normalize(self.expense(category=None), now=self.now)
        self.assertEqual(tx.category, Category.FIXED)

    def test_missing_category_strict_mode(self):
        with self.assertRaises(MissingCategoryOnExpense):
            normalize(self.expense(category=None), now=self.now, strict=True)

    def test_missing_date_uses_today(self):
        tx = normalize(self.expense(category=Category.FIXED), now=self.now)
        self.assertEqual(tx.date, "2025-07-10")

    def test_malformed_date_uses_today(self):
        tx = normalize(self.expense(category=Category.FIXED, date="10/07/2025"), now=self.now)
        self.assertEqual(tx.date, "2025-07-10")
        tx = normalize(self.expense(category=Category.FIXED, date="2025-02-30"), now=self.now)
        self.assertEqual(tx.date, "2025-07-10")

    def test_edit_preserves_id_and_created_at(self):
        parsed = self.expense(description="Outra coisa", amount=99.9, category=Category.GOALS, date="2025-06-01")
        tx = normalize(parsed, editing_original=self.original, now=self.now)
        self.assertEqual(tx.id, "tx-1")
        self.assertEqual(tx.created_at, 1751700000000)
        self.assertEqual(tx.description, "Outra coisa")
        self.assertEqual(tx.amount, 99.9)
        self.assertEqual(tx.category, Category.GOALS)
        self.assertEqual(tx.date, "2025-06-01")

    def test_edit_without_date_keeps_original_date(self):
        tx = normalize(self.expense(category=Category.FIXED), editing_original=self.original, now=self.now)
        self.assertEqual(tx.date, "2025-07-05")

    def test_amount_passed_through(self):
        tx = normalize(self.expense(category=Category.FIXED, amount=-10.0), now=self.now)
        self.assertEqual(tx.amount, -10.0)
        tx = normalize(self.expense(category=Category.FIXED, amount=0.0), now=self.now)
        self.assertEqual(tx.amount, 0.0)

    def test_income_is_rejected(self):
        parsed = ParsedInput(type=TransactionType.INCOME, description="Freela", amount=300.0)
        with self.assertRaises(ValueError):
            normalize(parsed, now=self.now)

    def test_round_trip_through_edit(self):
        created = normalize(self.expense(category=Category.KNOWLEDGE, date="2025-07-03"), now=self.now)
        later = self.now + datetime.timedelta(days=3)
        edited = normalize(created.to_parsed_input(), editing_original=created, now=later)
        self.assertEqual(edited, created)

    def test_resolve_date(self):
        today = datetime.date(2025, 7, 10)
        self.assertEqual(resolve_date("2025-07-01", "2025-06-01", today), "2025-07-01")
        self.assertEqual(resolve_date(None, "2025-06-01", today), "2025-06-01")
        self.assertEqual(resolve_date(None, None, today), "2025-07-10")
