# baguncinha/core/charts.py
import io
from typing import Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import pandas as pd

from baguncinha.core.aggregator import MonthlyReport
from baguncinha.core.categories import CATEGORY_INFO
from baguncinha.core.models import Category, parse_month_key
from baguncinha.utils.text_utils import month_label

# Configurações globais para os gráficos (cores, fontes, etc.)
plt.style.use('seaborn-v0_8-darkgrid')
plt.rcParams['font.family'] = 'sans-serif'
plt.rcParams['font.size'] = 10
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 14
plt.rcParams['legend.fontsize'] = 10


def _to_png(fig) -> io.BytesIO:
    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=150)
    buf.seek(0)
    plt.close(fig)
    return buf


def _title(report: MonthlyReport, prefix: str) -> str:
    year, month = parse_month_key(report.month_key)
    return f"{prefix} - {month_label(year, month)}"


def generate_distribution_chart(report: MonthlyReport) -> Union[io.BytesIO, None]:
    """Gera o gráfico de pizza com os gastos de cada pote e o saldo restante da renda."""
    slices = report.distribution()
    if not slices:
        return None

    labels = [label for label, _, _ in slices]
    values = [value for _, value, _ in slices]
    colors = [color for _, _, color in slices]

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.pie(
        values,
        labels=labels,
        colors=colors,
        autopct='%1.1f%%',
        startangle=90,
        wedgeprops={'width': 0.45, 'edgecolor': 'white'},
    )
    ax.set_title(_title(report, 'Distribuição da Renda'), fontweight='bold')
    ax.axis('equal')
    fig.tight_layout()
    return _to_png(fig)


def generate_weekly_chart(report: MonthlyReport) -> Union[io.BytesIO, None]:
    """Gera o gráfico de barras empilhadas dos gastos por semana do mês."""
    if report.total_expenses <= 0:
        return None

    df = pd.DataFrame(
        [{CATEGORY_INFO[c].label: week.by_category[c] for c in Category} for week in report.weeks],
        index=[week.name for week in report.weeks],
    )
    colors = [CATEGORY_INFO[c].color for c in Category]

    fig, ax = plt.subplots(figsize=(10, 6))
    df.plot(kind='bar', stacked=True, color=colors, ax=ax)

    ax.axhline(report.average_weekly, color='#475569', linestyle='--', linewidth=1, label='Média semanal')
    ax.set_title(_title(report, 'Gastos por Semana'), fontweight='bold')
    ax.set_ylabel('Valor (R$)')
    ax.set_xlabel('')
    ax.yaxis.set_major_formatter(mticker.FormatStrFormatter('R$%.0f'))
    plt.setp(ax.get_xticklabels(), rotation=0)
    ax.legend(title='Categoria', fontsize=8, title_fontsize=9)
    fig.tight_layout()
    return _to_png(fig)
