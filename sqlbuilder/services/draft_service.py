import json
import logging
import re
from typing import Optional

import httpx

from sqlbuilder.core.config import Settings
from sqlbuilder.core.exceptions import (
    DraftInFlightError,
    DraftRequestError,
    MissingCredentialError,
    MissingPromptError,
)
from sqlbuilder.db.schema import describe_for_prompt

log = logging.getLogger(__name__)

DEFAULT_ERROR = "Failed to generate query"

PROMPT_TEMPLATE = """You are a SQL query generator for a marketing database. Generate a SQL query based on this request: "{request}"

Available tables and their columns:
{schema}

Important:
- Return ONLY the SQL query, no explanations or markdown formatting
- Use proper SQLite syntax
- Include appropriate JOINs if multiple tables are needed
- Add LIMIT clause if not specified (default to 10)

Generate the SQL query now:"""

_FENCE_RE = re.compile(r"```(?:sql)?\n?")


def build_prompt(request: str) -> str:
    return PROMPT_TEMPLATE.format(request=request, schema=describe_for_prompt())


def clean_sql(raw: str) -> str:
    """Убирает ```sql / ``` ограждения markdown и крайние пробелы."""
    return _FENCE_RE.sub("", raw.strip()).strip()


def _error_message(response: httpx.Response) -> str:
    """
    Текст ошибки из неуспешного ответа:
    error.message из JSON -> сырой текст тела -> дефолт.
    """
    body = response.text
    try:
        data = json.loads(body)
    except ValueError:
        return body or DEFAULT_ERROR
    # JSON null: как и невалидный JSON, показываем сырое тело
    if data is None:
        return body or DEFAULT_ERROR
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"].get("message") or DEFAULT_ERROR
    return DEFAULT_ERROR


class DraftService:
    """
    Черновик SQL по текстовому запросу через Claude Messages API.
    Одновременно допускается только один запрос.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport
        self.in_flight = False

    async def request_draft(self, prompt: str, credential: Optional[str]) -> str:
        if not credential:
            raise MissingCredentialError()
        if not prompt or not prompt.strip():
            raise MissingPromptError()
        if self.in_flight:
            raise DraftInFlightError()

        self.in_flight = True
        try:
            raw = await self._complete(build_prompt(prompt), credential)
        finally:
            self.in_flight = False
        return clean_sql(raw)

    async def _complete(self, content: str, credential: str) -> str:
        payload = {
            "model": self.settings.model,
            "max_tokens": self.settings.max_tokens,
            "messages": [{"role": "user", "content": content}],
        }
        headers = {
            "content-type": "application/json",
            "x-api-key": credential,
            "anthropic-version": self.settings.anthropic_version,
        }
        log.info("requesting draft from %s (model=%s)", self.settings.api_url, self.settings.model)
        try:
            # таймаут не ставим: запрос висит, пока API не ответит
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(self.settings.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            log.error("draft request failed: %s", e)
            raise DraftRequestError(str(e) or DEFAULT_ERROR)

        if not response.is_success:
            message = _error_message(response)
            log.error("draft request returned %s: %s", response.status_code, message)
            raise DraftRequestError(message, status_code=response.status_code)

        try:
            return response.json()["content"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError):
            raise DraftRequestError("Unexpected response from the AI service", status_code=response.status_code)
