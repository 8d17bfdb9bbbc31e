import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from supabase import Client
from telegram.ext import ConversationHandler

from baguncinha.bot.commands.history import delete_command, edit_command
from baguncinha.bot.handlers import (
    ASKING_CONFIRMATION,
    ASKING_CORRECTION,
    ASKING_DELETE_CONFIRMATION,
    handle_confirmation,
    handle_correction,
    handle_delete_confirmation,
    handle_initial_message,
)
from baguncinha.bot.handlers.aux import PARSE_ERROR_MESSAGE, STORAGE_ERROR_MESSAGE
from baguncinha.core.db import Snapshot
from baguncinha.core.errors import ParseFailure, StorageUnavailable
from baguncinha.core.models import Category, Income, ParsedInput, Transaction, TransactionType


class TestConversationHandlers(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        # Banco e Gemini simulados; a sessão e os handlers são reais
        session_db = patch('baguncinha.core.session.db')
        self.mock_db = session_db.start()
        self.addCleanup(session_db.stop)
        aux_db = patch('baguncinha.bot.handlers.aux.session.db')
        self.mock_aux_db = aux_db.start()
        self.addCleanup(aux_db.stop)
        parser = patch('baguncinha.core.session.parse_transaction_input')
        self.mock_parse = parser.start()
        self.addCleanup(parser.stop)

        self.rent = Transaction(
            id="t1", description="Aluguel", amount=1200.0, category=Category.FIXED,
            date="2025-07-05", created_at=1000,
        )
        self.stored_transactions = [self.rent]
        self.stored_incomes = {"2025-07": Income(3000, 1000, 0)}
        self.mock_db.load_snapshot.side_effect = lambda client, user_id: Snapshot(
            transactions=list(self.stored_transactions),
            incomes=dict(self.stored_incomes),
            settings=None,
        )

        self.supabase_client = MagicMock(spec=Client)
        self.context = MagicMock()
        self.context.user_data = {}
        self.context.bot_data = {"supabase_client": self.supabase_client}
        self.context.args = []

    def _update(self, text):
        update = MagicMock()
        update.effective_user.id = 42
        update.message.text = text
        update.message.voice = None
        update.message.audio = None
        update.message.reply_text = AsyncMock()
        return update

    def _last_reply(self, update):
        args, _ = update.message.reply_text.call_args
        return args[0]

    async def test_income_after_restart_keeps_stored_salary(self):
        self.mock_parse.return_value = ParsedInput(TransactionType.INCOME, "Freela", 50.0, None, "2025-07-10")

        state = await handle_initial_message(self._update("recebi 50 de freela"), self.context)
        self.assertEqual(state, ASKING_CONFIRMATION)

        state = await handle_confirmation(self._update("Sim ✅"), self.context)
        self.assertEqual(state, ConversationHandler.END)
        self.mock_db.save_income.assert_called_once_with(
            self.supabase_client, "42", "2025-07", Income(3000, 1000, 50)
        )
        self.mock_aux_db.initialize_user_data.assert_called_once_with(self.supabase_client, "42")

    async def test_text_expense_confirmed(self):
        self.mock_parse.return_value = ParsedInput(TransactionType.EXPENSE, "Uber", 20.0, Category.COMFORT, "2025-07-09")

        await handle_initial_message(self._update("uber 20"), self.context)
        session = self.context.user_data["session"]
        self.assertIsNotNone(session.pending)
        self.mock_parse.assert_called_once_with(text="uber 20", audio=None, mime_type=None)

        await handle_confirmation(self._update("sim"), self.context)
        args, _ = self.mock_db.save_transaction.call_args
        saved = args[2]
        self.assertEqual(saved.description, "Uber")
        self.assertEqual(saved.category, Category.COMFORT)
        self.assertIsNone(session.pending)

    async def test_unparseable_message(self):
        self.mock_parse.side_effect = ParseFailure("bloqueado")
        update = self._update("???")

        state = await handle_initial_message(update, self.context)

        self.assertEqual(state, ConversationHandler.END)
        self.assertEqual(self._last_reply(update), PARSE_ERROR_MESSAGE)

    async def test_storage_down_on_first_message(self):
        self.mock_db.load_snapshot.side_effect = StorageUnavailable("get_transactions")
        update = self._update("uber 20")

        state = await handle_initial_message(update, self.context)

        self.assertEqual(state, ConversationHandler.END)
        self.assertEqual(self._last_reply(update), STORAGE_ERROR_MESSAGE)
        self.mock_parse.assert_not_called()

    async def test_storage_down_on_confirm_keeps_pending(self):
        pending = ParsedInput(TransactionType.EXPENSE, "Uber", 20.0, Category.COMFORT, "2025-07-09")
        self.mock_parse.return_value = pending
        await handle_initial_message(self._update("uber 20"), self.context)
        self.mock_db.save_transaction.side_effect = StorageUnavailable("save_transaction")
        update = self._update("Sim ✅")

        state = await handle_confirmation(update, self.context)

        self.assertEqual(state, ASKING_CONFIRMATION)
        self.assertEqual(self._last_reply(update), STORAGE_ERROR_MESSAGE)
        self.assertEqual(self.context.user_data["session"].pending, pending)

    async def test_edit_correction_keeps_target(self):
        self.context.args = ["t1"]
        state = await edit_command(self._update("/editar t1"), self.context)
        self.assertEqual(state, ASKING_CONFIRMATION)
        session = self.context.user_data["session"]
        self.assertEqual(session.editing_id, "t1")

        state = await handle_confirmation(self._update("Não ❌"), self.context)
        self.assertEqual(state, ASKING_CORRECTION)

        self.mock_parse.return_value = ParsedInput(TransactionType.EXPENSE, "Aluguel", 1250.0, Category.FIXED, None)
        state = await handle_correction(self._update("aluguel foi 1250"), self.context)
        self.assertEqual(state, ASKING_CONFIRMATION)
        self.assertEqual(session.editing_id, "t1")

        await handle_confirmation(self._update("sim"), self.context)
        args, _ = self.mock_db.save_transaction.call_args
        saved = args[2]
        self.assertEqual(saved.id, "t1")
        self.assertEqual(saved.created_at, 1000)
        self.assertEqual(saved.date, "2025-07-05")
        self.assertEqual(saved.amount, 1250.0)

    async def test_delete_only_after_explicit_yes(self):
        self.context.args = ["t1"]
        state = await delete_command(self._update("/excluir t1"), self.context)
        self.assertEqual(state, ASKING_DELETE_CONFIRMATION)
        self.mock_db.delete_transaction.assert_not_called()

        state = await handle_delete_confirmation(self._update("talvez"), self.context)
        self.assertEqual(state, ASKING_DELETE_CONFIRMATION)
        self.mock_db.delete_transaction.assert_not_called()

        state = await handle_delete_confirmation(self._update("Sim ✅"), self.context)
        self.assertEqual(state, ConversationHandler.END)
        self.mock_db.delete_transaction.assert_called_once_with(self.supabase_client, "42", "t1")
        self.assertNotIn("pending_delete", self.context.user_data)

    async def test_delete_declined(self):
        self.context.args = ["t1"]
        await delete_command(self._update("/excluir t1"), self.context)

        state = await handle_delete_confirmation(self._update("não"), self.context)

        self.assertEqual(state, ConversationHandler.END)
        self.mock_db.delete_transaction.assert_not_called()


if __name__ == '__main__':
    unittest.main()
