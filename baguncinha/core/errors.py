# baguncinha/core/errors.py
from typing import Optional


class BudgetError(Exception):
    """Erro base do domínio de orçamento."""


class InvalidAllocationSum(BudgetError):
    """Os percentuais das categorias não somam exatamente 100."""

    def __init__(self, total: int):
        self.total = total
        super().__init__(f"O total deve ser exatamente 100% (atual: {total}%).")


class ParseFailure(BudgetError):
    """O serviço de linguagem natural não devolveu uma transação utilizável."""


class MissingCategoryOnExpense(BudgetError):
    """Gasto sem categoria quando a normalização está em modo estrito."""

    def __init__(self, description: str = ""):
        self.description = description
        super().__init__(f"O gasto '{description}' veio sem categoria e precisa de revisão.")


class StorageUnavailable(BudgetError):
    """Falha de conexão ou permissão no banco de dados."""

    def __init__(self, operation: str, detail: Optional[str] = None):
        self.operation = operation
        message = f"Banco de dados indisponível durante '{operation}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class UnknownCategory(BudgetError, ValueError):
    """Categoria fora do conjunto fechado de categorias."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Categoria desconhecida: {value!r}")
