# baguncinha/main.py
import asyncio
import logging

from flask import Flask, jsonify, request
from telegram import Update

from baguncinha.bot.bot_setup import setup_and_run_bot
from baguncinha.config import LOG_LEVEL, TELEGRAM_BOT_TOKEN, missing_settings
from baguncinha.core.db import get_supabase_client

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

WEBHOOK_PATH_SUFFIX = "/webhook"

# --- Setup da Aplicação no Escopo Global (executado uma vez ao carregar o módulo) ---
try:
    missing = missing_settings()
    if missing:
        raise RuntimeError(f"Variáveis de ambiente ausentes: {', '.join(missing)}")

    supabase_client = get_supabase_client()
    logger.info("Cliente Supabase inicializado.")

    config = {
        "TELEGRAM_BOT_TOKEN": TELEGRAM_BOT_TOKEN,
        "SUPABASE_CLIENT": supabase_client,
    }
    ptb_application = setup_and_run_bot(config)

    # Inicializa a aplicação PTB uma única vez no startup (o Gunicorn importa este módulo uma vez).
    try:
        asyncio.run(ptb_application.initialize())
        logger.info("python-telegram-bot Application inicializada.")
    except RuntimeError as e:
        if "cannot be called from a running event loop" not in str(e):
            raise
        logger.warning("Event loop já em execução; initialize() será adiado.")

    flask_app = Flask(__name__)

    @flask_app.route(WEBHOOK_PATH_SUFFIX, methods=['POST'])
    async def telegram_webhook():
        if not request.is_json:
            logger.error("Webhook recebeu requisição sem JSON.")
            return jsonify({"status": "error", "message": "Request must be JSON"}), 400

        update_json = request.get_json()
        try:
            update = Update.de_json(update_json, ptb_application.bot)
            await ptb_application.process_update(update)
            return jsonify({"status": "ok"}), 200
        except Exception:
            logger.exception("Falha ao processar update do Telegram")
            return jsonify({"status": "error", "message": "Failed to process update"}), 500

    wsgi_app = flask_app
    logger.info("Aplicação WSGI pronta em %s.", WEBHOOK_PATH_SUFFIX)

except Exception:
    logger.exception("Erro crítico durante a inicialização de baguncinha.main")
    raise
