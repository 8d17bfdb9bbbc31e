from telegram import ReplyKeyboardRemove, Update
from telegram.ext import ContextTypes, ConversationHandler


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /start é emitido."""
    await update.message.reply_text(
        "Olá! Sou a Baguncinha Salarial 💸, seu bot de orçamento por potes.\n"
        "Envie seus *gastos* (ex: 'gastei 50 no mercado') ou *ganhos* "
        "(ex: 'recebi 300 de freela'), por texto ou áudio.\n\n"
        "Sua renda é dividida em seis potes: Custos Fixos, Conforto, Metas, "
        "Prazeres, Liberdade Financeira e Conhecimento.\n"
        "Use `/help` para ver todos os comandos.",
        parse_mode="Markdown",
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /help é emitido."""
    await update.message.reply_text(
        "*Como usar:*\n"
        "Para registrar um gasto, use frases como:\n"
        "- `gastei 30 no almoço`\n"
        "- `uber 18,10 ontem`\n"
        "Para registrar um ganho (vai para os extras do mês):\n"
        "- `recebi 200 de freela`\n\n"
        "*Comandos:*\n"
        "- `/resumo [AAAA-MM]`: resumo do mês, uso de cada pote e semanas.\n"
        "- `/graficos [AAAA-MM]`: gráficos de distribuição e por semana.\n"
        "- `/renda <salário> <vale> [AAAA-MM]`: define a renda do mês.\n"
        "- `/percentuais <6 números>` ou `FIXED=40 COMFORT=10 ...`: define os potes (total 100).\n"
        "- `/historico [AAAA-MM] [CATEGORIA]`: lista os lançamentos.\n"
        "- `/exportar [AAAA-MM] [CATEGORIA]`: envia a planilha (CSV) dos lançamentos.\n"
        "- `/editar <id>`: corrige um lançamento.\n"
        "- `/excluir <id>`: exclui um lançamento.\n"
        "- `/cancel`: cancela a operação em andamento.",
        parse_mode="Markdown",
    )


async def cancel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Descarta a transação pendente, a edição e a exclusão em andamento."""
    session = context.user_data.get("session")
    if session is not None:
        session.cancel()
    context.user_data.pop("pending_delete", None)
    await update.message.reply_text("❎ Operação cancelada.", reply_markup=ReplyKeyboardRemove())
    return ConversationHandler.END
