from telegram import ReplyKeyboardMarkup, Update

from baguncinha.core.categories import CATEGORY_INFO
from baguncinha.core.models import Category, ParsedInput, TransactionType
from baguncinha.utils.text_utils import format_brl


def confirmation_text(parsed: ParsedInput, is_editing: bool = False) -> str:
    valor_fmt = format_brl(parsed.amount)
    data_fmt = parsed.date or "hoje"

    if parsed.type == TransactionType.INCOME:
        return (
            "Confirma o *ganho*? 💰\n"
            f"💰 Valor: *{valor_fmt}*\n"
            f"📝 Descrição: *{parsed.description}*\n"
            f"📅 Data: *{data_fmt}*\n"
            "_Será somado aos extras do mês._"
        )

    # Sem categoria o gasto cai em Custos Fixos; o usuário vê isso antes de confirmar.
    info = CATEGORY_INFO[parsed.category or Category.FIXED]
    categoria_fmt = f"{info.emoji} {info.label}"
    if parsed.category is None:
        categoria_fmt += " (não identificada)"

    titulo = "Confirma a *edição* do gasto?" if is_editing else "Confirma o *gasto*?"
    return (
        f"{titulo} 💸\n"
        f"💰 Valor: *{valor_fmt}* ({parsed.description})\n"
        f"🏷️ Categoria: *{categoria_fmt}*\n"
        f"📅 Data: *{data_fmt}*"
    )


async def send_confirmation_message(update: Update, parsed: ParsedInput, is_editing: bool = False) -> None:
    """Envia a mensagem de confirmação da transação ao usuário com emojis e formatação."""
    keyboard = [["Sim ✅", "Não ❌"]]
    reply_markup = ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True)
    await update.message.reply_text(
        f"{confirmation_text(parsed, is_editing)}\n\n*Tudo certo?* 🤔",
        reply_markup=reply_markup,
        parse_mode="Markdown",
    )
