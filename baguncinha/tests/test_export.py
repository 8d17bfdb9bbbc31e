import unittest

from baguncinha.core.export import export_transactions, select_transactions
from baguncinha.core.models import Category, Transaction


def tx(tx_id, amount, category, date, description="Item"):
    return Transaction(id=tx_id, description=description, amount=amount, category=category, date=date, created_at=0)


class TestExport(unittest.TestCase):
    def setUp(self):
        self.transactions = [
            tx("a", 1234.5, Category.FIXED, "2025-07-05", "Aluguel"),
            tx("b", 40, Category.PLEASURES, "2025-07-20", "Cinema"),
            tx("c", 18.1, Category.COMFORT, "2025-06-30", "Uber"),
        ]

    def test_month_export_sorted_desc(self):
        content = export_transactions(self.transactions, "2025-07")
        self.assertEqual(
            content,
            "Data;Descrição;Categoria;Valor\n"
            "2025-07-20;Cinema;Prazeres;40,00\n"
            "2025-07-05;Aluguel;Custos Fixos;1234,50\n",
        )

    def test_category_filter(self):
        content = export_transactions(self.transactions, "2025-07", Category.FIXED)
        lines = content.strip().split("\n")
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[1].startswith("2025-07-05;Aluguel"))

    def test_no_matches_only_header(self):
        content = export_transactions(self.transactions, "2025-01")
        self.assertEqual(content, "Data;Descrição;Categoria;Valor\n")

    def test_select_without_month(self):
        selected = select_transactions(self.transactions)
        self.assertEqual([t.id for t in selected], ["b", "a", "c"])
