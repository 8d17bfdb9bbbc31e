import unittest

from baguncinha.core.allocation import (
    allocation_total,
    coerce_percentage,
    is_valid_allocation,
    settings_from_dict,
    settings_to_dict,
    validate_allocation,
)
from baguncinha.core.categories import DEFAULT_SETTINGS, Category
from baguncinha.core.errors import InvalidAllocationSum, UnknownCategory


def make_settings(**overrides):
    settings = dict(DEFAULT_SETTINGS)
    for name, value in overrides.items():
        settings[Category[name]] = value
    return settings


class TestAllocationValidator(unittest.TestCase):
    def test_defaults_are_valid(self):
        result = validate_allocation(DEFAULT_SETTINGS)
        self.assertEqual(result, DEFAULT_SETTINGS)
        self.assertIsNot(result, DEFAULT_SETTINGS)

    def test_sum_99_rejected(self):
        with self.assertRaises(InvalidAllocationSum) as ctx:
            validate_allocation(make_settings(KNOWLEDGE=4))
        self.assertEqual(ctx.exception.total, 99)
        self.assertIn("99", str(ctx.exception))

    def test_sum_101_rejected(self):
        with self.assertRaises(InvalidAllocationSum) as ctx:
            validate_allocation(make_settings(FIXED=41))
        self.assertEqual(ctx.exception.total, 101)

    def test_other_valid_split(self):
        settings = make_settings(FIXED=50, FREEDOM=15)
        self.assertTrue(is_valid_allocation(settings))
        self.assertEqual(allocation_total(settings), 100)

    def test_missing_category_counts_as_zero(self):
        settings = {Category.FIXED: 100}
        result = validate_allocation(settings)
        self.assertEqual(result[Category.COMFORT], 0)
        self.assertEqual(len(result), 6)

    def test_validator_does_not_clamp(self):
        # Negativos só são corrigidos na fronteira (coerce_percentage)
        settings = make_settings(FIXED=50, KNOWLEDGE=-5)
        self.assertTrue(is_valid_allocation(settings))


class TestBoundaryCoercion(unittest.TestCase):
    def test_coerce_percentage(self):
        self.assertEqual(coerce_percentage("40"), 40)
        self.assertEqual(coerce_percentage("12abc"), 12)
        self.assertEqual(coerce_percentage(""), 0)
        self.assertEqual(coerce_percentage("abc"), 0)
        self.assertEqual(coerce_percentage("-5"), 0)
        self.assertEqual(coerce_percentage(None), 0)
        self.assertEqual(coerce_percentage(25), 25)

    def test_settings_from_dict(self):
        raw = {"FIXED": 40, "COMFORT": "10", "GOALS": 10, "PLEASURES": 10, "FREEDOM": 25}
        settings = settings_from_dict(raw)
        self.assertEqual(settings[Category.COMFORT], 10)
        self.assertEqual(settings[Category.KNOWLEDGE], 0)

    def test_settings_from_dict_unknown_key(self):
        with self.assertRaises(UnknownCategory):
            settings_from_dict({"FIXED": 90, "OUTROS": 10})

    def test_settings_to_dict(self):
        data = settings_to_dict(DEFAULT_SETTINGS)
        self.assertEqual(data["FIXED"], 40)
        self.assertEqual(list(data), [c.value for c in Category])
