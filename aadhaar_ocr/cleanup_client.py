import logging
from typing import Any, Dict, Optional

import httpx

from . import config
from .errors import CleanupServiceError
from .text_cleaner import clean_locally

logger = logging.getLogger(__name__)

CLEANUP_INSTRUCTION = (
    "You are a helpful assistant that cleans OCR text from Aadhaar cards. "
    "Fix OCR errors, normalize Aadhaar numbers into '1234 5678 9012' format (do not mask), "
    "standardize dates into DD/MM/YYYY, and remove any garbage text."
)


class MistralCleanupClient:
    """Normalizes raw OCR text with the Mistral chat completions API.

    `clean` never raises: when the service is unreachable, answers with an
    error status, returns a body we cannot read or an empty reply, the raw
    text is cleaned locally instead.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key: Optional[str] = api_key or config.MISTRAL_API_KEY
        self.model: str = model or config.MISTRAL_MODEL
        self.endpoint: str = endpoint or config.MISTRAL_API_URL
        self.timeout: float = config.CLEANUP_TIMEOUT_SECONDS if timeout is None else timeout
        self._transport = transport

    def _build_request_payload(self, raw_text: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": CLEANUP_INSTRUCTION},
                {"role": "user", "content": raw_text},
            ],
            "temperature": 0.2,
            "max_tokens": 512,
        }

    @staticmethod
    def _extract_content(resp_json: Any) -> str:
        try:
            content = resp_json["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise CleanupServiceError(f"Malformed cleanup response: {e!r}") from e
        if not isinstance(content, str) or not content.strip():
            raise CleanupServiceError("Cleanup service returned empty content")
        return content.strip()

    async def _request_cleanup(self, raw_text: str) -> str:
        if not self.api_key:
            raise CleanupServiceError("MISTRAL_API_KEY not configured")
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            res = await client.post(self.endpoint, headers=headers, json=self._build_request_payload(raw_text))
        if not res.is_success:
            raise CleanupServiceError(f"Mistral cleanup failed: {res.status_code} {res.reason_phrase} - {res.text}")
        try:
            data = res.json()
        except ValueError as e:
            raise CleanupServiceError(f"Cleanup response is not JSON: {e}") from e
        return self._extract_content(data)

    async def clean(self, raw_text: str) -> str:
        if not (raw_text or "").strip():
            return clean_locally(raw_text)
        try:
            cleaned = await self._request_cleanup(raw_text)
            logger.info(f"🤖 CLEANUP: Mistral returned {len(cleaned)} chars")
            return cleaned
        except CleanupServiceError as e:
            logger.warning(f"⚠️ CLEANUP: {e}; using local cleaner")
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ CLEANUP: Mistral request error {e!r}; using local cleaner")
        return clean_locally(raw_text)
