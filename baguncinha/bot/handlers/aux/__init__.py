from .send_confirmation_message import confirmation_text, send_confirmation_message
from .session import (
    PARSE_ERROR_MESSAGE,
    STORAGE_ERROR_MESSAGE,
    category_names,
    get_session,
    parse_period_args,
)
from .voice import read_voice
