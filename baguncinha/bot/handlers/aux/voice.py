from typing import Optional, Tuple

from telegram import Update


async def read_voice(update: Update) -> Optional[Tuple[bytes, str]]:
    """Baixa a nota de voz (ou áudio) da mensagem. Retorna (bytes, mime_type) ou None."""
    voice = update.message.voice or update.message.audio
    if not voice:
        return None
    file = await voice.get_file()
    audio = bytes(await file.download_as_bytearray())
    return audio, voice.mime_type or "audio/ogg"
