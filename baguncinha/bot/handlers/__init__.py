from .handle_confirmation import handle_confirmation
from .handle_correction import handle_correction
from .handle_delete_confirmation import handle_delete_confirmation
from .handle_initial_message import handle_initial_message
from .states import (
    ASKING_CONFIRMATION,
    ASKING_CORRECTION,
    ASKING_DELETE_CONFIRMATION,
)
