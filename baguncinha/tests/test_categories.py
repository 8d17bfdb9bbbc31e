import unittest

from baguncinha.core.categories import (
    CATEGORY_INFO,
    DEFAULT_SETTINGS,
    Category,
    category_info,
    parse_category,
)
from baguncinha.core.errors import UnknownCategory


class TestCategories(unittest.TestCase):
    def test_every_category_has_metadata(self):
        self.assertEqual(set(CATEGORY_INFO), set(Category))
        self.assertEqual(len(Category), 6)

    def test_default_settings_sum_to_100(self):
        self.assertEqual(sum(DEFAULT_SETTINGS.values()), 100)
        self.assertEqual(DEFAULT_SETTINGS[Category.FIXED], 40)
        self.assertEqual(DEFAULT_SETTINGS[Category.FREEDOM], 25)
        self.assertEqual(DEFAULT_SETTINGS[Category.KNOWLEDGE], 5)

    def test_category_info_lookup(self):
        info = category_info(Category.PLEASURES)
        self.assertEqual(info.label, "Prazeres")
        self.assertEqual(info.color, "#ec4899")
        self.assertEqual(info.icon, "smile")
        self.assertEqual(info.default_percentage, 10)

    def test_category_info_accepts_name(self):
        self.assertEqual(category_info("freedom").label, "Liberdade Financeira")

    def test_parse_category_case_insensitive(self):
        self.assertIs(parse_category("comfort"), Category.COMFORT)
        self.assertIs(parse_category(" GOALS "), Category.GOALS)
        self.assertIs(parse_category(Category.FIXED), Category.FIXED)

    def test_parse_category_unknown_fails(self):
        with self.assertRaises(UnknownCategory) as ctx:
            parse_category("OTHER")
        self.assertEqual(ctx.exception.value, "OTHER")

    def test_parse_category_non_string_fails(self):
        with self.assertRaises(UnknownCategory):
            parse_category(None)
        with self.assertRaises(UnknownCategory):
            parse_category(3)

    def test_unknown_category_is_value_error(self):
        # Quem trata ValueError na fronteira também captura categorias inválidas
        with self.assertRaises(ValueError):
            category_info("Lazer")
