# baguncinha/core/ai.py
import datetime
import json
import logging
from typing import Any, Dict, List, Optional, Union

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from baguncinha.config import GEMINI_MODEL, GOOGLE_API_KEY
from baguncinha.core.errors import ParseFailure
from baguncinha.core.models import ParsedInput, TransactionType, parse_category
from baguncinha.utils.text_utils import MONTH_NAMES, parse_decimal

logger = logging.getLogger(__name__)

genai.configure(api_key=GOOGLE_API_KEY)

# Ajustes de segurança para o Gemini (recomendado para bots)
safety_settings = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
}

AUDIO_PROMPT = "Analise este áudio e extraia a transação."

WEEKDAYS = ["segunda-feira", "terça-feira", "quarta-feira", "quinta-feira", "sexta-feira", "sábado", "domingo"]


def build_system_instruction(today: datetime.date) -> str:
    """Instrução de sistema com o contexto de data do dia."""
    date_context = f"{WEEKDAYS[today.weekday()]}, {today.day} de {MONTH_NAMES[today.month - 1]} de {today.year}"
    iso_date = today.isoformat()

    return f"""
You are a smart financial assistant for a Brazilian user.
Your goal is to extract transaction details from natural language input.
Return ONLY a JSON object: {{"type": "INCOME" | "EXPENSE", "description": string, "amount": number, "category": string | null, "date": "YYYY-MM-DD"}}

First, determine if the input is an **EXPENSE** (spending money) or **INCOME** (receiving money).

If **INCOME** (e.g., "Received salary", "Sold bike", "Extra money"):
- Type: 'INCOME'
- Category: null (ignore category)

If **EXPENSE** (e.g., "Paid rent", "Uber", "Burger"):
- Type: 'EXPENSE'
- Classify into one of these STRICT categories (No "Other" allowed. You must choose the best fit):
  - FIXED: Essential bills (rent, water, light, grocery, health, pets).
  - COMFORT: Quality of life upgrades (Uber, cleaning service, non-essential comfort).
  - GOALS: Saving for trips, buying gifts, short-term goals.
  - PLEASURES: Fun, iFood/delivery, cinema, streaming services, parties.
  - FREEDOM: Investments, stocks, emergency fund.
  - KNOWLEDGE: Courses, books, school, education.

Context:
- Current Date: {date_context}
- ISO Date Reference: {iso_date}

Rules:
1. If the user mentions a specific date (e.g., "ontem", "dia 15"), parse it to ISO format YYYY-MM-DD.
2. If no date is mentioned, use the ISO Date Reference ({iso_date}).
3. If the currency is not specified, assume BRL (R$). Return only the number.
4. Translate the description to a clean, short title in Portuguese.
"""


def build_parts(
    text: Optional[str] = None,
    audio: Optional[bytes] = None,
    mime_type: Optional[str] = None,
) -> List[Any]:
    """Monta o conteúdo da requisição, priorizando o áudio sobre o texto."""
    if audio and mime_type:
        return [{"mime_type": mime_type, "data": bytes(audio)}, AUDIO_PROMPT]
    if text and text.strip():
        return [text.strip()]
    raise ParseFailure("Nenhuma entrada válida (texto vazio ou áudio ausente).")


def ask_gemini(parts: List[Any], system_instruction: str, model: str = GEMINI_MODEL) -> str:
    """Envia o conteúdo para o Gemini e devolve o texto da resposta."""
    try:
        model_instance = genai.GenerativeModel(
            model_name=model,
            safety_settings=safety_settings,
            system_instruction=system_instruction,
        )
        response = model_instance.generate_content(
            parts,
            generation_config={"response_mime_type": "application/json"},
        )
    except Exception as e:
        logger.exception("Erro ao conectar com Gemini")
        raise ParseFailure(f"Falha ao consultar o modelo de IA: {e}") from e

    # Prompt bloqueado: nenhum candidato, e os atalhos .parts/.text levantam ValueError
    if not response.candidates:
        logger.warning("Prompt bloqueado pelo Gemini: %s", response.prompt_feedback)
        raise ParseFailure("Modelo de IA bloqueou a mensagem.")

    try:
        text = response.text.strip()
    except ValueError as e:
        # Candidato sem partes (ex.: finish_reason SAFETY)
        logger.warning("Resposta vazia do Gemini: %s", e)
        raise ParseFailure("Modelo de IA retornou uma resposta vazia ou bloqueada.") from e
    if not text:
        raise ParseFailure("Modelo de IA retornou uma resposta vazia.")
    return text


def extract_json(response_text: str) -> Dict[str, Any]:
    """Recorta o objeto JSON da resposta, ignorando texto ao redor e linhas de comentário."""
    json_start = response_text.find("{")
    json_end = response_text.rfind("}")
    if json_start == -1 or json_end == -1:
        raise ParseFailure(f"Resposta sem JSON: {response_text!r}")

    json_str = response_text[json_start : json_end + 1]
    json_str = "\n".join(
        line for line in json_str.split("\n") if not line.strip().startswith("//")
    )
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParseFailure(f"JSON inválido do modelo: {e}") from e
    if not isinstance(data, dict):
        raise ParseFailure("O modelo não retornou um objeto JSON.")
    return data


def _to_amount(value: Any) -> float:
    if isinstance(value, bool):
        raise ParseFailure(f"Valor inválido: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return parse_decimal(value)
        except ValueError:
            pass
    raise ParseFailure(f"Valor inválido: {value!r}")


def to_parsed_input(data: Dict[str, Any]) -> ParsedInput:
    """Valida o JSON do modelo e o converte em ParsedInput.

    Tipo, descrição e valor são obrigatórios. Uma categoria fora das seis
    conhecidas falha com UnknownCategory; datas seguem como vieram, os
    padrões são aplicados depois, na normalização.
    """
    raw_type = str(data.get("type") or "").strip().upper()
    try:
        kind = TransactionType(raw_type)
    except ValueError:
        raise ParseFailure(f"Tipo de transação inválido: {data.get('type')!r}") from None

    if data.get("amount") is None:
        raise ParseFailure("O modelo não informou o valor.")
    amount = _to_amount(data["amount"])

    description = data.get("description")
    if not isinstance(description, str) or not description.strip():
        raise ParseFailure("O modelo não informou a descrição.")

    category = None
    raw_category = data.get("category")
    if kind == TransactionType.EXPENSE and raw_category not in (None, ""):
        category = parse_category(raw_category)

    raw_date = data.get("date")
    date = raw_date.strip() if isinstance(raw_date, str) and raw_date.strip() else None

    return ParsedInput(
        type=kind,
        description=description.strip(),
        amount=amount,
        category=category,
        date=date,
    )


def parse_transaction_input(
    text: Optional[str] = None,
    audio: Optional[Union[bytes, bytearray]] = None,
    mime_type: Optional[str] = None,
    today: Optional[datetime.date] = None,
) -> ParsedInput:
    """Interpreta uma frase ou um áudio e devolve a transação estruturada."""
    parts = build_parts(text, audio, mime_type)
    today = today or datetime.date.today()

    response_text = ask_gemini(parts, build_system_instruction(today))
    logger.debug("Gemini response raw: %s", response_text)

    return to_parsed_input(extract_json(response_text))
