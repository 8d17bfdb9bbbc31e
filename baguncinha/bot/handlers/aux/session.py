import datetime
from typing import List, Optional, Tuple

from telegram import Update
from telegram.ext import ContextTypes

from baguncinha.core import db
from baguncinha.core.models import Category, month_key, parse_category, parse_month_key
from baguncinha.core.session import BudgetSession

STORAGE_ERROR_MESSAGE = (
    "☁️❌ Não consegui falar com o banco de dados agora. "
    "Se você acabou de configurar, aguarde uns minutos e tente novamente. 🔄"
)
PARSE_ERROR_MESSAGE = "😕 Desculpe, não consegui entender. Tente novamente."


def get_session(update: Update, context: ContextTypes.DEFAULT_TYPE) -> BudgetSession:
    """Sessão do usuário do Telegram, criada (com os dados padrão) no primeiro uso."""
    session = context.user_data.get("session")
    if session is None:
        user_id = str(update.effective_user.id)
        supabase_client = context.bot_data["supabase_client"]
        db.initialize_user_data(supabase_client, user_id)
        session = BudgetSession(supabase_client, user_id)
        context.user_data["session"] = session
    return session


def parse_period_args(args: List[str], today: Optional[datetime.date] = None) -> Tuple[str, Optional[Category]]:
    """Lê os argumentos opcionais [AAAA-MM] [CATEGORIA] de um comando.

    Levanta ValueError para mês inválido e UnknownCategory para categoria inválida.
    """
    key = month_key(today or datetime.date.today())
    category = None
    for arg in args:
        if arg[:1].isdigit():
            parse_month_key(arg)
            key = arg
        else:
            category = parse_category(arg)
    return key, category


def category_names() -> str:
    return ", ".join(c.value for c in Category)
