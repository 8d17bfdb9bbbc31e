# baguncinha/bot/commands/__init__.py

from .history import delete_command, edit_command, export_command, history_command
from .report import charts_command, summary_command
from .settings import income_command, percentages_command
from .utils import cancel_command, help_command, start_command
