import logging

from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler

from baguncinha.bot.handlers.aux import (
    PARSE_ERROR_MESSAGE,
    STORAGE_ERROR_MESSAGE,
    get_session,
    read_voice,
    send_confirmation_message,
)
from baguncinha.bot.handlers.states import ASKING_CONFIRMATION
from baguncinha.core.errors import ParseFailure, StorageUnavailable, UnknownCategory

logger = logging.getLogger(__name__)


async def handle_initial_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Interpreta uma mensagem de texto ou de voz e pede a confirmação da transação."""
    try:
        session = get_session(update, context)
        session.refresh()
    except StorageUnavailable:
        await update.message.reply_text(STORAGE_ERROR_MESSAGE)
        return ConversationHandler.END

    logger.info("Mensagem recebida de %s", session.user_id)

    try:
        voice = await read_voice(update)
        if voice is not None:
            audio, mime_type = voice
            parsed = session.parse(audio=audio, mime_type=mime_type)
        else:
            parsed = session.parse(text=update.message.text)
    except (ParseFailure, UnknownCategory) as e:
        logger.warning("Falha ao interpretar mensagem: %s", e)
        await update.message.reply_text(PARSE_ERROR_MESSAGE)
        return ConversationHandler.END

    await send_confirmation_message(update, parsed)
    return ASKING_CONFIRMATION
