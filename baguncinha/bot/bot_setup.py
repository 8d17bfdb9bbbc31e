# baguncinha/bot/bot_setup.py
import logging

from telegram.ext import Application, CommandHandler, ConversationHandler, MessageHandler, filters

from baguncinha.bot.commands import (
    cancel_command,
    charts_command,
    delete_command,
    edit_command,
    export_command,
    help_command,
    history_command,
    income_command,
    percentages_command,
    start_command,
    summary_command,
)
from baguncinha.bot.handlers import (
    ASKING_CONFIRMATION,
    ASKING_CORRECTION,
    ASKING_DELETE_CONFIRMATION,
    handle_confirmation,
    handle_correction,
    handle_delete_confirmation,
    handle_initial_message,
)

logger = logging.getLogger(__name__)

TEXT_MESSAGE = filters.TEXT & ~filters.COMMAND
VOICE_MESSAGE = filters.VOICE | filters.AUDIO


def setup_and_run_bot(config: dict) -> Application:
    """
    Configura a aplicação do bot do Telegram (Handlers, Comandos, Conversas).
    Retorna o objeto Application configurado, pronto para ser usado por um servidor WSGI.
    """
    application = Application.builder().token(config["TELEGRAM_BOT_TOKEN"]).build()

    # Handlers e comandos acessam o Supabase pelo bot_data
    application.bot_data['supabase_client'] = config["SUPABASE_CLIENT"]

    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("resumo", summary_command))
    application.add_handler(CommandHandler("graficos", charts_command))
    application.add_handler(CommandHandler("renda", income_command))
    application.add_handler(CommandHandler("percentuais", percentages_command))
    application.add_handler(CommandHandler("historico", history_command))
    application.add_handler(CommandHandler("exportar", export_command))

    # Fluxo de várias etapas: interpretar -> confirmar (ou corrigir) -> salvar.
    conv_handler = ConversationHandler(
        entry_points=[
            MessageHandler(TEXT_MESSAGE | VOICE_MESSAGE, handle_initial_message),
            CommandHandler("editar", edit_command),
            CommandHandler("excluir", delete_command),
        ],
        states={
            ASKING_CONFIRMATION: [MessageHandler(TEXT_MESSAGE, handle_confirmation)],
            ASKING_CORRECTION: [MessageHandler(TEXT_MESSAGE | VOICE_MESSAGE, handle_correction)],
            ASKING_DELETE_CONFIRMATION: [MessageHandler(TEXT_MESSAGE, handle_delete_confirmation)],
        },
        fallbacks=[CommandHandler("cancel", cancel_command)],
    )
    application.add_handler(conv_handler)

    logger.info("Bot Telegram configurado para Webhooks. Pronto para ser rodado pelo WSGI.")
    # A aplicação é rodada pelo servidor WSGI; não chamamos run_polling() aqui.
    return application
