import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Protocol

from . import config
from .aadhaar_rule_parser import AadhaarRuleParser
from .cleanup_client import MistralCleanupClient
from .errors import InvalidInputError
from .schemas import AadhaarRecord
from .tesseract_adapter import TesseractOCRAdapter

logger = logging.getLogger(__name__)


class OCRAdapter(Protocol):
    async def recognize(self, image_bytes: bytes, langs: str) -> str:
        """Recognize text in an image using Tesseract language code(s) such as "eng" or "eng+hin"."""
        ...


@dataclass(frozen=True)
class ExtractTextResult:
    text: str


class TextExtractor:
    def __init__(self, ocr: OCRAdapter, default_langs: Optional[str] = None) -> None:
        self.ocr = ocr
        self.default_langs = default_langs or config.OCR_DEFAULT_LANGS

    async def execute(self, image: Optional[bytes], langs: Optional[str] = None) -> ExtractTextResult:
        if not image:
            raise InvalidInputError("Image buffer is required")
        langs = (langs or "").strip() or self.default_langs
        text = await self.ocr.recognize(image, langs)
        return ExtractTextResult(text=text)


class AadhaarOCRProcessor:
    """OCR both sides of a card, clean the text, then run the rule parser."""

    def __init__(
        self,
        extractor: Optional[TextExtractor] = None,
        cleanup_client: Optional[MistralCleanupClient] = None,
        rule_parser: Optional[AadhaarRuleParser] = None,
    ) -> None:
        self.extractor = extractor or TextExtractor(TesseractOCRAdapter())
        self.cleanup_client = cleanup_client or MistralCleanupClient()
        self.rule_parser = rule_parser or AadhaarRuleParser()

    async def _ocr_back(self, back: Optional[bytes], langs: Optional[str]) -> ExtractTextResult:
        # A missing back side is skipped rather than validated
        if back is None:
            return ExtractTextResult(text="")
        return await self.extractor.execute(back, langs)

    async def _clean_back(self, raw_text: str, has_back: bool) -> str:
        if not has_back:
            return ""
        return await self.cleanup_client.clean(raw_text)

    async def process_card(
        self, front: bytes, back: Optional[bytes] = None, langs: Optional[str] = None
    ) -> AadhaarRecord:
        start = time.perf_counter()
        front_result, back_result = await asyncio.gather(
            self.extractor.execute(front, langs),
            self._ocr_back(back, langs),
        )
        ocr_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"🔍 OCR done in {ocr_ms} ms: front={len(front_result.text)} chars, back={len(back_result.text)} chars"
        )
        logger.debug(f"📝 RAW FRONT:\n{front_result.text}\n📝 RAW BACK:\n{back_result.text}")

        cleaned_front, cleaned_back = await asyncio.gather(
            self.cleanup_client.clean(front_result.text),
            self._clean_back(back_result.text, back is not None),
        )
        logger.debug(f"🧹 CLEANED FRONT:\n{cleaned_front}\n🧹 CLEANED BACK:\n{cleaned_back}")

        return self.rule_parser.parse(cleaned_front, cleaned_back)
