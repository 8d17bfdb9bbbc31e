# baguncinha/config.py
"""Configuração da Baguncinha, lida do ambiente (ou de um .env) uma única vez."""
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")

# Banco com as tabelas transactions, monthly_incomes e category_settings
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Interpretação de texto e áudio
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

REQUIRED_SETTINGS = ("TELEGRAM_BOT_TOKEN", "SUPABASE_URL", "SUPABASE_KEY", "GOOGLE_API_KEY")


def missing_settings() -> List[str]:
    """Nomes das variáveis obrigatórias que não foram definidas."""
    return [name for name in REQUIRED_SETTINGS if not globals().get(name)]
