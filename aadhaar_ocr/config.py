import os

from dotenv import load_dotenv

load_dotenv()

APP_ENV = os.getenv("APP_ENV", "development")
PORT = int(os.getenv("PORT", 3000))
FRONTEND_URL = os.getenv("FRONTEND_URL")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Tesseract language code used when the caller sends no hint (e.g. "eng", "eng+hin")
OCR_DEFAULT_LANGS = os.getenv("OCR_DEFAULT_LANGS", "eng")
OCR_TIMEOUT_SECONDS = float(os.getenv("OCR_TIMEOUT_SECONDS", 60))
TESSERACT_CMD = os.getenv("TESSERACT_CMD")

MISTRAL_API_KEY = os.getenv("MISTRAL_API_KEY")
MISTRAL_API_URL = os.getenv("MISTRAL_API_URL", "https://api.mistral.ai/v1/chat/completions")
MISTRAL_MODEL = os.getenv("MISTRAL_MODEL", "mistral-small-latest")
CLEANUP_TIMEOUT_SECONDS = float(os.getenv("CLEANUP_TIMEOUT_SECONDS", 30))
