import datetime
from typing import Dict, List, Mapping

from telegram import Update
from telegram.ext import ContextTypes

from baguncinha.bot.handlers.aux import STORAGE_ERROR_MESSAGE, category_names, get_session
from baguncinha.core.allocation import coerce_percentage
from baguncinha.core.categories import CATEGORY_INFO
from baguncinha.core.errors import InvalidAllocationSum, StorageUnavailable, UnknownCategory
from baguncinha.core.income import update_income_field
from baguncinha.core.models import Category, month_key, parse_category, parse_month_key
from baguncinha.utils.text_utils import format_brl


def parse_percentage_args(args: List[str], current: Mapping[Category, int]) -> Dict[Category, int]:
    """Lê `/percentuais 40 10 10 10 25 5` ou `/percentuais FIXED=35 FREEDOM=30`.

    Pares CATEGORIA=N alteram só as categorias citadas; a lista posicional
    precisa das seis categorias, na ordem do enum.
    """
    if args and all("=" in arg for arg in args):
        settings = dict(current)
        for arg in args:
            name, _, value = arg.partition("=")
            settings[parse_category(name)] = coerce_percentage(value)
        return settings

    categories = list(Category)
    if len(args) != len(categories):
        raise ValueError(f"Informe {len(categories)} percentuais ({category_names()}).")
    return {category: coerce_percentage(value) for category, value in zip(categories, args)}


async def income_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Define salário e vale do mês. Os extras continuam vindo dos ganhos registrados."""
    args = context.args or []
    if len(args) < 2:
        await update.message.reply_text(
            "Uso: `/renda <salário> <vale> [AAAA-MM]`\nExemplo: `/renda 3500 1200 2025-07`",
            parse_mode="Markdown",
        )
        return

    try:
        key = args[2] if len(args) > 2 else month_key(datetime.date.today())
        parse_month_key(key)
    except ValueError:
        await update.message.reply_text("Mês inválido. Use AAAA-MM, por exemplo `2025-07`.", parse_mode="Markdown")
        return

    try:
        session = get_session(update, context)
        session.refresh()
        income = update_income_field(session.income_for(key), "salary", args[0])
        income = update_income_field(income, "advance", args[1])
        session.update_income(key, income)
    except StorageUnavailable:
        await update.message.reply_text(STORAGE_ERROR_MESSAGE)
        return

    await update.message.reply_text(
        f"💵 Renda de {key} atualizada!\n"
        f"Salário: {format_brl(income.salary)}\n"
        f"Vale: {format_brl(income.advance)}\n"
        f"Extras: {format_brl(income.extras)}\n"
        f"Total: *{format_brl(income.total)}*",
        parse_mode="Markdown",
    )


async def percentages_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra ou altera os percentuais de cada pote."""
    try:
        session = get_session(update, context)
        session.refresh()
    except StorageUnavailable:
        await update.message.reply_text(STORAGE_ERROR_MESSAGE)
        return

    args = context.args or []
    if not args:
        lines = [f"{CATEGORY_INFO[c].emoji} {c.value} - {CATEGORY_INFO[c].label}: {session.settings[c]}%" for c in Category]
        await update.message.reply_text("⚙️ Percentuais atuais:\n" + "\n".join(lines))
        return

    try:
        settings = parse_percentage_args(args, session.settings)
        session.update_settings(settings)
    except UnknownCategory:
        await update.message.reply_text(f"⚠️ Categoria desconhecida. Use: {category_names()}.")
        return
    except ValueError as e:
        await update.message.reply_text(f"⚠️ {e}")
        return
    except InvalidAllocationSum as e:
        await update.message.reply_text(f"⚠️ {e} Os percentuais anteriores continuam valendo.")
        return
    except StorageUnavailable:
        await update.message.reply_text(STORAGE_ERROR_MESSAGE)
        return

    await update.message.reply_text("✅ Percentuais atualizados! Use /resumo para ver os novos limites.")
