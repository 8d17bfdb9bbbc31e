import logging

from telegram import Update
from telegram.ext import ContextTypes

from baguncinha.bot.handlers.aux import (
    PARSE_ERROR_MESSAGE,
    get_session,
    read_voice,
    send_confirmation_message,
)
from baguncinha.bot.handlers.states import ASKING_CONFIRMATION, ASKING_CORRECTION
from baguncinha.core.errors import ParseFailure, UnknownCategory

logger = logging.getLogger(__name__)


async def handle_correction(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Reinterpreta a transação corrigida, mantendo a edição em andamento (se houver)."""
    session = get_session(update, context)
    try:
        voice = await read_voice(update)
        if voice is not None:
            audio, mime_type = voice
            parsed = session.parse(audio=audio, mime_type=mime_type, keep_editing=True)
        else:
            parsed = session.parse(text=update.message.text, keep_editing=True)
    except (ParseFailure, UnknownCategory) as e:
        logger.warning("Falha ao interpretar correção: %s", e)
        await update.message.reply_text(PARSE_ERROR_MESSAGE)
        return ASKING_CORRECTION

    await send_confirmation_message(update, parsed, is_editing=session.editing_id is not None)
    return ASKING_CONFIRMATION
