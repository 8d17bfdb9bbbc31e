# --- Estados da Conversa ---
ASKING_CONFIRMATION = 1
ASKING_CORRECTION = 2
ASKING_DELETE_CONFIRMATION = 3

YES_ANSWERS = {"sim ✅", "sim", "s"}
NO_ANSWERS = {"não ❌", "não", "nao", "n"}
