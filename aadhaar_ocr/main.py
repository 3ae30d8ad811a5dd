from fastapi import FastAPI, HTTPException, Depends, UploadFile, File, Form, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import logging
import time
import uvicorn

from . import config
from .ocr_service import AadhaarOCRProcessor
from .schemas import AadhaarRecord, ErrorResponse, HealthResponse

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Aadhaar OCR Extraction Service", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL] if config.FRONTEND_URL else ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_processor: Optional[AadhaarOCRProcessor] = None


def get_processor() -> AadhaarOCRProcessor:
    global _processor
    if _processor is None:
        _processor = AadhaarOCRProcessor()
    return _processor


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms")
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # A "front" field that is not a file counts as no front image at all
    if any("front" in err.get("loc", ()) for err in errors):
        return JSONResponse(status_code=400, content={"error": "Front image is required"})
    message = "; ".join(f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in errors)
    return JSONResponse(status_code=400, content={"error": message or "Invalid request"})


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(ok=True, message="Server is good in health")


@app.post(
    "/ocr/extract",
    response_model=AadhaarRecord,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def extract_aadhaar(
    front: Optional[UploadFile] = File(None),
    back: Optional[UploadFile] = File(None),
    langs: Optional[str] = Form(None),
    processor: AadhaarOCRProcessor = Depends(get_processor),
):
    if front is None:
        raise HTTPException(status_code=400, detail="Front image is required")
    logger.info(f"🔥 EXTRACT START: front={front.filename}, back={back.filename if back else None}, langs={langs}")
    try:
        front_bytes = await front.read()
        back_bytes = await back.read() if back is not None else None
        record = await processor.process_card(front_bytes, back_bytes, langs)
        logger.info("🎉 EXTRACT SUCCESS")
        return record
    except Exception as e:
        logger.exception("❌ EXTRACT FAILED")
        raise HTTPException(status_code=500, detail=str(e) or "Internal Server Error")


if __name__ == '__main__':
    uvicorn.run('aadhaar_ocr.main:app', host='0.0.0.0', port=config.PORT, reload=config.APP_ENV == "development")
