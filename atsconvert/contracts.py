from dataclasses import dataclass, field
from typing import Any, Dict, Literal

ErrorCode = Literal[
    "NO_FILE",
    "BAD_MIME",
    "FILE_TOO_LARGE",
    "TOO_MANY_PAGES",
    "EXTRACTION_FAILED",
    "NO_TEXT",
    "UNKNOWN",
]

ERROR_MESSAGES: Dict[str, str] = {
    "NO_FILE": "Please select a file to convert.",
    "BAD_MIME": "Please upload a PDF or Word (.doc, .docx) file.",
    "FILE_TOO_LARGE": "File is too large to convert.",
    "TOO_MANY_PAGES": "Resume has too many pages to convert.",
    "EXTRACTION_FAILED": "File conversion failed",
    "NO_TEXT": "No text has been extracted yet.",
    "UNKNOWN": "Something went wrong.",
}


def error(code: ErrorCode, detail: str = "") -> Dict[str, str]:
    out = {"error": code, "message": ERROR_MESSAGES.get(code, ERROR_MESSAGES["UNKNOWN"])}
    if detail:
        out["message"] = f"{out['message']}: {detail}"
    return out


def is_error(obj: Any) -> bool:
    return isinstance(obj, dict) and "error" in obj


@dataclass
class ConversionResult:
    text: str
    audit: Dict[str, Any]
    # Extraction/normalization timings and input facts
    meta: Dict[str, Any] = field(default_factory=dict)
