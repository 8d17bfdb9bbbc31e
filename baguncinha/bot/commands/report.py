from telegram import Update
from telegram.ext import ContextTypes

from baguncinha.bot.handlers.aux import STORAGE_ERROR_MESSAGE, get_session, parse_period_args
from baguncinha.core import charts
from baguncinha.core.aggregator import MonthlyReport
from baguncinha.core.categories import CATEGORY_INFO
from baguncinha.core.errors import StorageUnavailable, UnknownCategory
from baguncinha.core.models import parse_month_key
from baguncinha.utils.text_utils import format_brl, month_label


def format_report(report: MonthlyReport) -> str:
    """Texto do painel mensal: renda, gastos, saldo, potes e semanas."""
    year, month = parse_month_key(report.month_key)
    lines = [
        f"📅 {month_label(year, month)}",
        f"💵 Renda: {format_brl(report.total_income)}",
        f"💸 Gastos: {format_brl(report.total_expenses)}",
        f"{'🟢' if report.remaining >= 0 else '🔴'} Saldo: {format_brl(report.remaining)}",
        "",
        "Potes:",
    ]
    for stat in report.categories:
        emoji = CATEGORY_INFO[stat.category].emoji
        alert = " ⚠️ acima do limite" if stat.over_limit else ""
        lines.append(
            f"{emoji} {stat.label} ({stat.limit_percentage}%): "
            f"{format_brl(stat.spent)} de {format_brl(stat.limit_amount)} "
            f"({stat.percent_used:.0f}%){alert}"
        )
    lines.append("")
    lines.append("Semanas:")
    for week in report.weeks:
        lines.append(f"• {week.full_label}: {format_brl(week.total)}")
    lines.append(f"Média semanal: {format_brl(report.average_weekly)}")
    if report.total_expenses > 0:
        lines.append(
            f"Semana mais cara: {report.highest_week.full_label} ({format_brl(report.highest_week.total)})"
        )
    return "\n".join(lines)


async def _load_report(update: Update, context: ContextTypes.DEFAULT_TYPE):
    try:
        key, _ = parse_period_args(context.args or [])
    except (ValueError, UnknownCategory):
        await update.message.reply_text("Uso: informe o mês como AAAA-MM. Ex: `2025-07`", parse_mode="Markdown")
        return None
    try:
        session = get_session(update, context)
        session.refresh()
    except StorageUnavailable:
        await update.message.reply_text(STORAGE_ERROR_MESSAGE)
        return None
    return session.report(key)


async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia o resumo do mês (painel)."""
    report = await _load_report(update, context)
    if report is not None:
        await update.message.reply_text(format_report(report))


async def charts_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Gera e envia os gráficos de distribuição e de gastos por semana."""
    report = await _load_report(update, context)
    if report is None:
        return

    await update.message.reply_text("Gerando seus gráficos, por favor aguarde...")
    distribution = charts.generate_distribution_chart(report)
    weekly = charts.generate_weekly_chart(report)
    if not distribution and not weekly:
        await update.message.reply_text(
            "📉 Ainda não tenho dados suficientes para este mês. Cadastre sua renda e registre alguns gastos! 📝"
        )
        return
    if distribution:
        distribution.name = "distribuicao.png"
        await update.message.reply_photo(photo=distribution, caption="🥧 Distribuição da renda")
    if weekly:
        weekly.name = "semanas.png"
        await update.message.reply_photo(photo=weekly, caption="📊 Gastos por semana")
