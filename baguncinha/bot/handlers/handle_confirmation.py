from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.ext import ContextTypes, ConversationHandler

from baguncinha.bot.handlers.aux import STORAGE_ERROR_MESSAGE, get_session
from baguncinha.bot.handlers.states import (
    ASKING_CONFIRMATION,
    ASKING_CORRECTION,
    NO_ANSWERS,
    YES_ANSWERS,
)
from baguncinha.core.categories import CATEGORY_INFO
from baguncinha.core.errors import StorageUnavailable
from baguncinha.core.models import Transaction
from baguncinha.utils.text_utils import format_brl


async def handle_confirmation(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Lida com a confirmação (Sim/Não) da transação."""
    user_response = (update.message.text or "").strip().lower()
    session = get_session(update, context)

    if session.pending is None:
        await update.message.reply_text(
            "Ops! 😬 Não encontrei uma transação pendente para confirmar. 🔄",
            reply_markup=ReplyKeyboardRemove(),
        )
        return ConversationHandler.END

    if user_response in YES_ANSWERS:
        try:
            result = session.confirm()
        except StorageUnavailable:
            # A transação continua pendente; o usuário pode responder "Sim" de novo.
            await update.message.reply_text(STORAGE_ERROR_MESSAGE)
            return ASKING_CONFIRMATION

        if result is None:
            message = "⚠️ A transação que você estava editando não existe mais. Nada foi alterado."
        elif isinstance(result, Transaction):
            info = CATEGORY_INFO[result.category]
            message = (
                f"✅ Gasto de {format_brl(result.amount)} ({result.description}) "
                f"em '{info.label}' registrado com sucesso! 🎉"
            )
        else:
            key, income = result
            message = (
                f"✅ Ganho registrado! Extras de {key}: {format_brl(income.extras)} "
                f"(renda total {format_brl(income.total)}). 🥳"
            )
        await update.message.reply_text(message, reply_markup=ReplyKeyboardRemove())
        return ConversationHandler.END

    if user_response in NO_ANSWERS:
        await update.message.reply_text(
            "Entendido! 🤔 Me envie a transação corrigida, por texto ou áudio.\n"
            "Exemplo: 'gastei 60,50 no cinema ontem'. Use /cancel para desistir.",
            reply_markup=ReplyKeyboardRemove(),
        )
        return ASKING_CORRECTION

    keyboard = [["Sim ✅", "Não ❌"]]
    reply_markup = ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True)
    await update.message.reply_text(
        "Por favor, responda apenas 'Sim ✅' ou 'Não ❌'.",
        reply_markup=reply_markup,
    )
    return ASKING_CONFIRMATION
