from io import BytesIO

import docx

from atsconvert import convert
from atsconvert.contracts import ConversionResult, is_error
from atsconvert.doc_text import DOCX_MIME, PDF_MIME
from tests.pdf_fixture import pdf_bytes


def test_validate_upload_codes():
    assert convert.validate_upload(None, None, 0)["error"] == "NO_FILE"
    bad = convert.validate_upload("resume.txt", "text/plain", 10)
    assert bad["error"] == "BAD_MIME"
    assert bad["message"] == "Please upload a PDF or Word (.doc, .docx) file."
    big = convert.validate_upload("r.pdf", PDF_MIME, convert.MAX_MB * 1024 * 1024 + 1)
    assert big["error"] == "FILE_TOO_LARGE"
    assert convert.validate_upload("r.docx", DOCX_MIME, 2048) is None


def test_convert_runs_normalizer(monkeypatch):
    monkeypatch.setattr(convert, "extract_text", lambda b, mime: "Experience\n● Built pipelines\n")
    res = convert.convert_upload(b"%PDF-stub", PDF_MIME)
    assert isinstance(res, ConversionResult)
    assert res.text == "Experience\n\n* Built pipelines\n"
    assert res.audit["edits"]["glyphs_replaced"] == 1
    assert res.meta["mime"] == PDF_MIME
    assert res.meta["bytes"] == len(b"%PDF-stub")
    assert {"t_extract_ms", "t_normalize_ms"} <= set(res.meta)


def test_convert_rejects_unknown_mime():
    res = convert.convert_upload(b"x", "image/png")
    assert is_error(res) and res["error"] == "BAD_MIME"


def test_convert_extraction_failure_is_reported(monkeypatch):
    def boom(b, mime):
        raise RuntimeError("corrupt xref")

    monkeypatch.setattr(convert, "extract_text", boom)
    res = convert.convert_upload(b"x", PDF_MIME)
    assert is_error(res)
    assert res["error"] == "EXTRACTION_FAILED"
    assert res["message"] == "File conversion failed: corrupt xref"


def test_convert_garbage_docx():
    res = convert.convert_upload(b"definitely not a zip", DOCX_MIME)
    assert is_error(res) and res["error"] == "EXTRACTION_FAILED"


def test_convert_real_docx_end_to_end():
    document = docx.Document()
    for p in ["Skills", "Strategic Planning, Finance Acumen", "Experience", "• Led team"]:
        document.add_paragraph(p)
    buf = BytesIO()
    document.save(buf)
    res = convert.convert_upload(buf.getvalue(), DOCX_MIME)
    assert "Skills\n\n\n* Strategic Planning\n* Finance Acumen\nExperience\n\n\n* Led team" in res.text


def test_download_payload():
    assert convert.download_payload("Résumé\n* Sales") == "Résumé\n* Sales".encode("utf-8")
    empty = convert.download_payload("")
    assert empty["error"] == "NO_TEXT"
    assert empty["message"] == "No text has been extracted yet."
    assert convert.DOWNLOAD_FILENAME == "converted_resume.txt"


def test_convert_rejects_pdf_over_page_limit():
    b = pdf_bytes([[f"Page marker {i}"] for i in range(1, convert.MAX_PAGES + 3)])
    res = convert.convert_upload(b, PDF_MIME)
    assert is_error(res)
    assert res["error"] == "TOO_MANY_PAGES"


def test_convert_pdf_at_page_limit_keeps_every_page():
    b = pdf_bytes([[f"Page marker {i}"] for i in range(1, convert.MAX_PAGES + 1)])
    res = convert.convert_upload(b, PDF_MIME)
    assert isinstance(res, ConversionResult)
    assert f"Page marker {convert.MAX_PAGES}" in res.text
