import asyncio
import io
import logging
from typing import Optional

import pytesseract
from PIL import Image

from . import config
from .errors import OcrEngineError

logger = logging.getLogger(__name__)


class TesseractOCRAdapter:
    """Runs Tesseract on raw image bytes.

    The engine call is blocking, so it is pushed to a worker thread. Anything
    that goes wrong inside (undecodable image, missing binary, unknown
    language pack, timeout) is re-raised as OcrEngineError.
    """

    def __init__(
        self,
        tesseract_cmd: Optional[str] = None,
        timeout: Optional[float] = None,
        config_flags: str = "--oem 3 --psm 3",
    ) -> None:
        # If Tesseract is not in PATH, point TESSERACT_CMD at the executable
        cmd = tesseract_cmd or config.TESSERACT_CMD
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd
        self.timeout: float = config.OCR_TIMEOUT_SECONDS if timeout is None else timeout
        self.config_flags = config_flags

    def _recognize_sync(self, image_bytes: bytes, langs: str) -> str:
        with Image.open(io.BytesIO(image_bytes)) as image:
            image.load()
            text = pytesseract.image_to_string(
                image, lang=langs, config=self.config_flags, timeout=self.timeout
            )
        return text or ""

    async def recognize(self, image_bytes: bytes, langs: str) -> str:
        try:
            return await asyncio.to_thread(self._recognize_sync, image_bytes, langs)
        except Exception as e:
            logger.error(f"❌ Tesseract failed (langs={langs}, {len(image_bytes)} bytes): {e}")
            raise OcrEngineError(f"OCR engine failed: {e}") from e


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m aadhaar_ocr.tesseract_adapter <image_path> [langs]")
        sys.exit(1)

    image_path = sys.argv[1]
    langs = sys.argv[2] if len(sys.argv) > 2 else config.OCR_DEFAULT_LANGS

    async def _main() -> None:
        with open(image_path, "rb") as f:
            image_bytes = f.read()
        text = await TesseractOCRAdapter().recognize(image_bytes, langs)
        print("\n=== Extracted Text ===\n")
        print(text)

    asyncio.run(_main())
