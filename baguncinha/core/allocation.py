# baguncinha/core/allocation.py
from typing import Any, Dict, Mapping

from baguncinha.core.errors import InvalidAllocationSum
from baguncinha.core.models import Category, parse_category
from baguncinha.utils.text_utils import leading_int

AllocationSettings = Dict[Category, int]


def allocation_total(settings: Mapping[Category, int]) -> int:
    return sum(settings.get(category, 0) for category in Category)


def validate_allocation(settings: Mapping[Category, int]) -> AllocationSettings:
    """Garante que os seis percentuais somam exatamente 100.

    Não há tolerância nem ajuste dos valores: qualquer soma diferente de 100
    gera InvalidAllocationSum com o total atual, para que a interface possa
    mostrar "precisa somar 100, está em N". Retorna uma cópia completa das
    configurações, pronta para substituir as anteriores de uma só vez.
    """
    total = allocation_total(settings)
    if total != 100:
        raise InvalidAllocationSum(total)
    return {category: settings.get(category, 0) for category in Category}


def is_valid_allocation(settings: Mapping[Category, int]) -> bool:
    return allocation_total(settings) == 100


def coerce_percentage(raw: Any) -> int:
    """Lê um percentual digitado pelo usuário: inteiro não negativo, ou 0."""
    return max(leading_int(raw), 0)


def settings_from_dict(raw: Mapping[str, Any]) -> AllocationSettings:
    """Desserializa as configurações salvas no banco.

    Chaves fora do conjunto fechado falham com UnknownCategory; categorias
    ausentes valem 0.
    """
    settings: AllocationSettings = {category: 0 for category in Category}
    for key, value in raw.items():
        settings[parse_category(key)] = coerce_percentage(value)
    return settings


def settings_to_dict(settings: Mapping[Category, int]) -> Dict[str, int]:
    return {category.value: int(settings.get(category, 0)) for category in Category}
