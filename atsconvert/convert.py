"""
Upload -> plain text conversion.

validate_upload() gates what the UI accepts, convert_upload() runs the
extractor then the bullet normalizer, download_payload() encodes the result
for the "Download Text" button. Failures come back as error dicts from
contracts.error(); nothing here raises on bad input.
"""
import logging
import time
from typing import Dict, Optional, Union

from .bullet_normalizer import normalize_with_audit
from .contracts import ConversionResult, error
from .doc_text import MAX_PAGES, SUPPORTED_MIMES, TooManyPagesError, extract_text

logger = logging.getLogger(__name__)

MAX_MB = 15
DOWNLOAD_FILENAME = "converted_resume.txt"
DOWNLOAD_MIME = "text/plain;charset=utf-8"


def validate_upload(name: Optional[str], mime: Optional[str], size: int) -> Optional[Dict[str, str]]:
    if not name:
        return error("NO_FILE")
    if mime not in SUPPORTED_MIMES:
        logger.info("rejected upload name=%s mime=%s", name, mime)
        return error("BAD_MIME")
    if size > MAX_MB * 1024 * 1024:
        return error("FILE_TOO_LARGE")
    return None


def convert_upload(b: bytes, mime: str) -> Union[ConversionResult, Dict[str, str]]:
    if mime not in SUPPORTED_MIMES:
        return error("BAD_MIME")
    t0 = time.time()
    try:
        raw = extract_text(b, mime)
    except TooManyPagesError:
        logger.info("rejected pdf over %d pages", MAX_PAGES)
        return error("TOO_MANY_PAGES", f"limit is {MAX_PAGES}")
    except Exception as e:
        logger.warning("extraction failed mime=%s: %s: %s", mime, type(e).__name__, e)
        return error("EXTRACTION_FAILED", str(e) or type(e).__name__)
    t_extract_ms = int((time.time() - t0) * 1000)

    t1 = time.time()
    text, audit = normalize_with_audit(raw)
    t_normalize_ms = int((time.time() - t1) * 1000)
    logger.info(
        "converted mime=%s bytes=%d chars=%d t_extract_ms=%d t_normalize_ms=%d",
        mime, len(b), len(text), t_extract_ms, t_normalize_ms,
    )
    meta = {
        "mime": mime,
        "bytes": len(b),
        "t_extract_ms": t_extract_ms,
        "t_normalize_ms": t_normalize_ms,
    }
    return ConversionResult(text=text, audit=audit, meta=meta)


def download_payload(text: Optional[str]) -> Union[bytes, Dict[str, str]]:
    if not text:
        return error("NO_TEXT")
    return text.encode("utf-8")
