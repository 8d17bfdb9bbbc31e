from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.ext import ContextTypes, ConversationHandler

from baguncinha.bot.handlers.aux import STORAGE_ERROR_MESSAGE, get_session
from baguncinha.bot.handlers.states import ASKING_DELETE_CONFIRMATION, NO_ANSWERS, YES_ANSWERS
from baguncinha.core.errors import StorageUnavailable


async def handle_delete_confirmation(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Exclui o lançamento somente depois de um "Sim" explícito."""
    user_response = (update.message.text or "").strip().lower()
    transaction_id = context.user_data.get("pending_delete")

    if not transaction_id:
        await update.message.reply_text(
            "Ops! 😬 Não há lançamento aguardando exclusão.", reply_markup=ReplyKeyboardRemove()
        )
        return ConversationHandler.END

    if user_response in YES_ANSWERS:
        session = get_session(update, context)
        try:
            session.delete(transaction_id)
        except StorageUnavailable:
            await update.message.reply_text(STORAGE_ERROR_MESSAGE, reply_markup=ReplyKeyboardRemove())
            return ConversationHandler.END
        finally:
            context.user_data.pop("pending_delete", None)
        await update.message.reply_text("🗑️ Lançamento excluído.", reply_markup=ReplyKeyboardRemove())
        return ConversationHandler.END

    if user_response in NO_ANSWERS:
        context.user_data.pop("pending_delete", None)
        await update.message.reply_text("👍 Nada foi excluído.", reply_markup=ReplyKeyboardRemove())
        return ConversationHandler.END

    keyboard = [["Sim ✅", "Não ❌"]]
    await update.message.reply_text(
        "Por favor, responda apenas 'Sim ✅' ou 'Não ❌'.",
        reply_markup=ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True),
    )
    return ASKING_DELETE_CONFIRMATION
