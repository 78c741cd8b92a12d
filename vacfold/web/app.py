from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pypdf import PdfReader
from pypdf.errors import PdfReadError
from starlette.concurrency import run_in_threadpool

from vacfold.constants import DEFAULT_MODE, DEFAULT_PAPER_SIZE, MAX_UPLOAD_BYTES, PDF_MEDIA_TYPE
from vacfold.imposition.core import Mode, resolve_mode
from vacfold.imposition.pdf_writer import ImposedDocument, impose_reader, output_filename

_LOGGER = logging.getLogger("vacfold.web")


def _log_event(level: int, event_name: str, **event_fields: Any) -> None:
    _LOGGER.log(
        level,
        event_name,
        extra={"event_name": event_name, "event_fields": event_fields},
    )


def _validate_upload_metadata(file: UploadFile | None) -> tuple[str | None, str | None]:
    if file is None or not file.filename:
        return None, "Upload a PDF file to continue."

    source_name = Path(file.filename).name
    if Path(source_name).suffix.lower() != ".pdf":
        return None, "Only .pdf uploads are supported."

    return source_name, None


def _impose_payload(
    *,
    payload: bytes,
    source_name: str,
    mode: Mode,
    paper_size: str = DEFAULT_PAPER_SIZE,
    job_id: str | None = None,
) -> tuple[ImposedDocument | None, str | None]:
    if not payload:
        _log_event(logging.WARNING, "impose.job.empty_upload", job_id=job_id, source_name=source_name)
        return None, "The uploaded file is empty."

    try:
        reader = PdfReader(io.BytesIO(payload))
    except PdfReadError:
        _log_event(
            logging.WARNING,
            "impose.job.invalid_pdf",
            job_id=job_id,
            source_name=source_name,
            payload_bytes=len(payload),
        )
        return None, "The upload could not be parsed as a PDF. Verify the file is a valid, non-corrupted PDF and retry."

    if reader.is_encrypted:
        _log_event(logging.WARNING, "impose.job.encrypted_pdf", job_id=job_id, source_name=source_name)
        return None, "Encrypted PDFs are not supported. Remove encryption and retry."

    try:
        document = impose_reader(reader, mode=mode, paper_size=paper_size)
    except PdfReadError:
        _log_event(logging.WARNING, "impose.job.invalid_pdf", job_id=job_id, source_name=source_name)
        return None, "The upload could not be parsed as a PDF. Verify the file is a valid, non-corrupted PDF and retry."

    _log_event(
        logging.INFO,
        "impose.job.completed",
        job_id=job_id,
        source_name=source_name,
        mode=mode,
        source_pages=document.plan.page_count,
        output_pages=document.page_count,
        output_bytes=len(document.payload),
    )
    return document, None


def create_app(
    max_upload_bytes: int = MAX_UPLOAD_BYTES,
    paper_size: str = DEFAULT_PAPER_SIZE,
) -> FastAPI:
    app = FastAPI(title="vacfold", version="0.1.0")
    app.state.max_upload_bytes = max_upload_bytes
    app.state.paper_size = paper_size

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/impose")
    async def impose(
        file: UploadFile | None = File(default=None),
        mode: str = Form(DEFAULT_MODE),
    ) -> Response:
        job_id = uuid4().hex
        _log_event(
            logging.INFO,
            "impose.request.received",
            job_id=job_id,
            mode=mode,
            has_upload=file is not None and bool(file.filename),
        )

        try:
            resolved_mode = resolve_mode(mode)
        except ValueError as exc:
            _log_event(logging.WARNING, "impose.request.invalid_mode", job_id=job_id, mode=mode)
            raise HTTPException(status_code=400, detail=f"Invalid mode: {exc}.") from exc

        source_name, upload_error = _validate_upload_metadata(file)
        if upload_error is not None or file is None or source_name is None:
            _log_event(logging.WARNING, "impose.request.upload_validation_failed", job_id=job_id, error=upload_error)
            raise HTTPException(status_code=400, detail=upload_error or "Upload a PDF file to continue.")

        payload = await file.read()
        if len(payload) > app.state.max_upload_bytes:
            _log_event(
                logging.WARNING,
                "impose.request.upload_too_large",
                job_id=job_id,
                source_name=source_name,
                payload_bytes=len(payload),
            )
            raise HTTPException(status_code=413, detail="The uploaded file is too large.")

        try:
            document, impose_error = await run_in_threadpool(
                _impose_payload,
                payload=payload,
                source_name=source_name,
                mode=resolved_mode,
                paper_size=app.state.paper_size,
                job_id=job_id,
            )
        except Exception as exc:
            _LOGGER.exception(
                "impose.job.unexpected_failure",
                extra={
                    "event_name": "impose.job.unexpected_failure",
                    "event_fields": {"job_id": job_id, "source_name": source_name},
                },
            )
            raise HTTPException(
                status_code=500,
                detail="Imposition failed unexpectedly. Retry and check server logs for the associated job.",
            ) from exc

        if impose_error is not None or document is None:
            raise HTTPException(status_code=400, detail=impose_error or "Imposition failed.")

        filename = output_filename(source_name, resolved_mode)
        return Response(
            content=document.payload,
            media_type=PDF_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


app = create_app()
