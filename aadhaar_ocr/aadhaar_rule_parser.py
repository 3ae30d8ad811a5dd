"""Rule-based parser for Aadhaar card text.

The parser works on cleaned OCR text from the front and back of the card and
uses independent regex rules to extract: id_number, name, dob, yob, gender
and address. Each rule looks at the combined text except address (back side
only) and name (front side only). A rule that finds nothing yields None.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .schemas import AadhaarRecord

logger = logging.getLogger(__name__)

# Latin letters plus the Devanagari block
NAME_CHARS = "A-Za-z\u0900-\u097F"
# A gender token must not touch another letter or digit on either side
_WORD_EDGE_BEFORE = rf"(?<![0-9_{NAME_CHARS}])"
_WORD_EDGE_AFTER = rf"(?![0-9_{NAME_CHARS}])"


class AadhaarRuleParser:
    def __init__(self) -> None:
        self.id_number_pattern = re.compile(r"\b\d{4}\s?\d{4}\s?\d{4}\b", re.ASCII)
        self.dob_pattern = re.compile(r"\b\d{2}/\d{2}/\d{4}\b", re.ASCII)
        self.yob_pattern = re.compile(r"\b(?:19|20)\d{2}\b", re.ASCII)

        # Hindi variants map to the canonical Latin value
        self.gender_map = {
            "पुरुष": "MALE",
            "महिला": "FEMALE",
            "ट्रांसजेंडर": "TRANSGENDER",
        }
        self.gender_pattern = re.compile(
            _WORD_EDGE_BEFORE
            + r"(MALE|FEMALE|TRANSGENDER|OTHERS|पुरुष|महिला|ट्रांसजेंडर)"
            + _WORD_EDGE_AFTER,
            re.IGNORECASE,
        )

        # Lines that are card furniture rather than the holder's name
        self.name_noise_pattern = re.compile(
            r"cleaned and normalized|gender|date of birth|address|aadhaar|uidai|government|authority",
            re.IGNORECASE,
        )
        self.name_gender_pattern = re.compile(
            _WORD_EDGE_BEFORE + r"(?:male|female|transgender)" + _WORD_EDGE_AFTER,
            re.IGNORECASE,
        )
        # Unanchored: any line carrying a 12-digit run (Aadhaar number, 16-digit VID) is skipped
        self.name_id_pattern = re.compile(r"\d{4}\s?\d{4}\s?\d{4}", re.ASCII)
        self.name_date_pattern = re.compile(r"\d{2}/\d{2}/\d{4}", re.ASCII)
        self.name_letter_pattern = re.compile(rf"[{NAME_CHARS}]")

        self.address_pattern = re.compile(r"Address[:\s]*(.*?)(\d{6})\b", re.IGNORECASE | re.DOTALL | re.ASCII)
        self.address_tail_pattern = re.compile(r"Address[:\s]*(.*)", re.IGNORECASE | re.DOTALL | re.ASCII)

    # Public API
    def parse(self, front_text: str, back_text: str) -> AadhaarRecord:
        front_text = front_text or ""
        back_text = back_text or ""
        combined = f"{front_text}\n{back_text}"

        dob = self._extract_dob(combined)
        record = AadhaarRecord(
            id_number=self._extract_id_number(combined),
            name=self._extract_name(front_text),
            dob=dob,
            yob=self._extract_yob(combined, dob),
            gender=self._extract_gender(combined),
            address=self._extract_address(back_text),
        )
        found = [k for k, v in record.model_dump().items() if v]
        logger.info(f"📋 RULES: Extracted fields: {found or 'none'}")
        return record

    # Aadhaar number
    def _extract_id_number(self, text: str) -> Optional[str]:
        m = self.id_number_pattern.search(text)
        if not m:
            return None
        digits = re.sub(r"\s+", "", m.group(0))
        return f"{digits[:4]} {digits[4:8]} {digits[8:]}"

    # Dates
    def _extract_dob(self, text: str) -> Optional[str]:
        m = self.dob_pattern.search(text)
        return m.group(0) if m else None

    def _extract_yob(self, text: str, dob: Optional[str]) -> Optional[str]:
        if dob:
            return dob[-4:]
        m = self.yob_pattern.search(text)
        return m.group(0) if m else None

    # Gender
    def _extract_gender(self, text: str) -> Optional[str]:
        m = self.gender_pattern.search(text)
        if not m:
            return None
        return self._normalize_gender(m.group(1))

    def _normalize_gender(self, token: str) -> str:
        if token in self.gender_map:
            return self.gender_map[token]
        return token.upper()

    # Name
    def _extract_name(self, front_text: str) -> Optional[str]:
        lines: List[str] = [ln.strip() for ln in re.split(r"\r?\n|\r", front_text)]
        for line in lines:
            if not line or self._is_name_noise(line):
                continue
            if len(self.name_letter_pattern.findall(line)) < 2:
                continue
            if len(line.split()) >= 2:
                return self._clean_name(line)
        return None

    def _is_name_noise(self, line: str) -> bool:
        return bool(
            self.name_noise_pattern.search(line)
            or self.name_id_pattern.search(line)
            or self.name_date_pattern.search(line)
            or self.name_gender_pattern.search(line)
        )

    def _clean_name(self, raw_name: str) -> str:
        name = re.sub(rf"[^{NAME_CHARS}\s]", " ", raw_name)
        return re.sub(r"\s+", " ", name).strip()

    # Address (back side only)
    def _extract_address(self, back_text: str) -> Optional[str]:
        address: Optional[str] = None
        m = self.address_pattern.search(back_text)
        if m:
            address = f"{m.group(1)} {m.group(2)}"
        else:
            tail = self.address_tail_pattern.search(back_text)
            if tail:
                address = tail.group(1)
        if address is None:
            return None

        address = re.sub(r"[^A-Za-z0-9,\-\s]", " ", address)
        # Drop one- and two-letter OCR crumbs but keep house numbers like "12"
        tokens = [w for w in address.split() if len(w) >= 3 or w.isdigit()]
        address = " ".join(tokens)
        address = re.sub(r"\s*(?:,\s*)+", ", ", address)
        address = re.sub(r"\s+", " ", address).strip()
        return address or None
