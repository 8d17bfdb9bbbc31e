import io

from telegram import ReplyKeyboardMarkup, Update
from telegram.ext import ContextTypes, ConversationHandler

from baguncinha.bot.handlers.aux import (
    STORAGE_ERROR_MESSAGE,
    category_names,
    get_session,
    parse_period_args,
    send_confirmation_message,
)
from baguncinha.bot.handlers.states import ASKING_CONFIRMATION, ASKING_DELETE_CONFIRMATION
from baguncinha.core.categories import CATEGORY_INFO
from baguncinha.core.errors import StorageUnavailable, UnknownCategory
from baguncinha.utils.text_utils import format_brl

USAGE_PERIOD = "Use `AAAA-MM` para o mês e uma destas categorias: {names}."


async def _session_and_period(update: Update, context: ContextTypes.DEFAULT_TYPE):
    try:
        key, category = parse_period_args(context.args or [])
    except (ValueError, UnknownCategory):
        await update.message.reply_text(USAGE_PERIOD.format(names=category_names()), parse_mode="Markdown")
        return None
    try:
        session = get_session(update, context)
        session.refresh()
    except StorageUnavailable:
        await update.message.reply_text(STORAGE_ERROR_MESSAGE)
        return None
    return session, key, category


async def history_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lista os lançamentos de um mês, opcionalmente de um único pote."""
    loaded = await _session_and_period(update, context)
    if loaded is None:
        return
    session, key, category = loaded

    transactions = session.history(key, category)
    filtro = f" em {CATEGORY_INFO[category].label}" if category else ""
    if not transactions:
        await update.message.reply_text(f"Nenhum lançamento em {key}{filtro}. 🤷‍♀️")
        return

    lines = [f"🗓️ Lançamentos de {key}{filtro}:", ""]
    for t in transactions:
        info = CATEGORY_INFO[t.category]
        lines.append(f"{info.emoji} {t.date} {t.description}: {format_brl(t.amount)}")
        lines.append(f"   id: {t.id}")
    lines.append("")
    lines.append(f"Total: {format_brl(sum(t.amount for t in transactions))}")
    lines.append("Use /editar <id> ou /excluir <id>.")
    await update.message.reply_text("\n".join(lines))


async def export_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia os lançamentos filtrados como planilha CSV (separada por ponto e vírgula)."""
    loaded = await _session_and_period(update, context)
    if loaded is None:
        return
    session, key, category = loaded

    content = session.export(key, category)
    suffix = f"_{category.value.lower()}" if category else ""
    document = io.BytesIO(content.encode("utf-8-sig"))
    document.name = f"lancamentos_{key}{suffix}.csv"
    await update.message.reply_document(document=document, caption=f"📄 Lançamentos de {key}")


async def edit_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Inicia a edição de um lançamento pelo id."""
    if not context.args:
        await update.message.reply_text("Uso: `/editar <id>` (veja os ids em /historico)", parse_mode="Markdown")
        return ConversationHandler.END
    try:
        session = get_session(update, context)
        session.refresh()
    except StorageUnavailable:
        await update.message.reply_text(STORAGE_ERROR_MESSAGE)
        return ConversationHandler.END

    try:
        parsed = session.start_editing(context.args[0])
    except KeyError:
        await update.message.reply_text("🤔 Não encontrei um lançamento com esse id.")
        return ConversationHandler.END

    await send_confirmation_message(update, parsed, is_editing=True)
    await update.message.reply_text("Responda 'Não ❌' para enviar a versão corrigida.")
    return ASKING_CONFIRMATION


async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Pede a confirmação antes de excluir um lançamento."""
    if not context.args:
        await update.message.reply_text("Uso: `/excluir <id>` (veja os ids em /historico)", parse_mode="Markdown")
        return ConversationHandler.END
    try:
        session = get_session(update, context)
        session.refresh()
    except StorageUnavailable:
        await update.message.reply_text(STORAGE_ERROR_MESSAGE)
        return ConversationHandler.END

    transaction = session.find(context.args[0])
    if transaction is None:
        await update.message.reply_text("🤔 Não encontrei um lançamento com esse id.")
        return ConversationHandler.END

    context.user_data["pending_delete"] = transaction.id
    keyboard = [["Sim ✅", "Não ❌"]]
    await update.message.reply_text(
        f"Tem certeza que deseja excluir este lançamento?\n"
        f"{transaction.date} {transaction.description}: {format_brl(transaction.amount)}",
        reply_markup=ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True),
    )
    return ASKING_DELETE_CONFIRMATION
