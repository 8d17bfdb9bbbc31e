import unittest

from baguncinha.core import charts
from baguncinha.core.aggregator import aggregate
from baguncinha.core.categories import DEFAULT_SETTINGS
from baguncinha.core.models import Category, Income, Transaction

PNG_SIGNATURE = b"\x89PNG"


class TestCharts(unittest.TestCase):
    def test_no_data_returns_none(self):
        report = aggregate([], Income(), DEFAULT_SETTINGS, "2025-07")
        self.assertIsNone(charts.generate_distribution_chart(report))
        self.assertIsNone(charts.generate_weekly_chart(report))

    def test_charts_are_png(self):
        transactions = [
            Transaction("a", "Aluguel", 1200.0, Category.FIXED, "2025-07-05", 0),
            Transaction("b", "Cinema", 40.0, Category.PLEASURES, "2025-07-20", 0),
        ]
        report = aggregate(transactions, Income(3000, 1000, 0), DEFAULT_SETTINGS, "2025-07")

        distribution = charts.generate_distribution_chart(report)
        weekly = charts.generate_weekly_chart(report)
        self.assertEqual(distribution.read()[:4], PNG_SIGNATURE)
        self.assertEqual(weekly.read()[:4], PNG_SIGNATURE)


if __name__ == '__main__':
    unittest.main()
