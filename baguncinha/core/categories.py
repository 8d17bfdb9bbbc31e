# baguncinha/core/categories.py
from dataclasses import dataclass
from typing import Dict

from baguncinha.core.models import Category, parse_category

__all__ = [
    "Category",
    "CategoryInfo",
    "CATEGORY_INFO",
    "DEFAULT_SETTINGS",
    "category_info",
    "parse_category",
]


@dataclass(frozen=True)
class CategoryInfo:
    label: str
    description: str
    color: str
    default_percentage: int
    icon: str
    emoji: str


CATEGORY_INFO: Dict[Category, CategoryInfo] = {
    Category.FIXED: CategoryInfo(
        label="Custos Fixos",
        description="Contas essenciais: aluguel, luz, mercado, saúde.",
        color="#3b82f6",
        default_percentage=40,
        icon="home",
        emoji="🏠",
    ),
    Category.COMFORT: CategoryInfo(
        label="Conforto",
        description="Qualidade de vida: Uber, serviços extras.",
        color="#a855f7",
        default_percentage=10,
        icon="coffee",
        emoji="☕",
    ),
    Category.GOALS: CategoryInfo(
        label="Metas",
        description="Presentes, viagens, reservas de curto prazo.",
        color="#f59e0b",
        default_percentage=10,
        icon="target",
        emoji="🎯",
    ),
    Category.PLEASURES: CategoryInfo(
        label="Prazeres",
        description="Lazer: iFood, cinema, streaming.",
        color="#ec4899",
        default_percentage=10,
        icon="smile",
        emoji="😄",
    ),
    Category.FREEDOM: CategoryInfo(
        label="Liberdade Financeira",
        description="Investimentos, aposentadoria, emergência.",
        color="#10b981",
        default_percentage=25,
        icon="trending-up",
        emoji="📈",
    ),
    Category.KNOWLEDGE: CategoryInfo(
        label="Conhecimento",
        description="Cursos, livros, educação.",
        color="#06b6d4",
        default_percentage=5,
        icon="book-open",
        emoji="📚",
    ),
}

# Toda categoria precisa de metadados; falha no import se alguma ficar de fora.
_missing = set(Category) - set(CATEGORY_INFO)
if _missing:
    raise RuntimeError(f"Categorias sem metadados: {sorted(c.value for c in _missing)}")

DEFAULT_SETTINGS: Dict[Category, int] = {
    category: info.default_percentage for category, info in CATEGORY_INFO.items()
}


def category_info(category) -> CategoryInfo:
    """Rótulo, descrição, cor, percentual padrão e ícone de uma categoria."""
    return CATEGORY_INFO[parse_category(category)]
