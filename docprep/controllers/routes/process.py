"""POST /process/text, /process/file, /clean: run the cleaning and chunking pipeline."""

from fastapi import APIRouter, Depends, HTTPException

from docprep.config.processing.models import CleaningConfig, ProcessingConfig
from docprep.config.settings import Settings, get_settings
from docprep.controllers.dependencies import apply_request_overrides, get_processing_config, http_error_from
from docprep.controllers.schema.process import (
    CleanRequest,
    CleanResponse,
    ProcessFileRequest,
    ProcessFileResponse,
    ProcessResponse,
    ProcessTextRequest,
)
from docprep.services.chunking.chunker import build_chunk_records
from docprep.services.cleaning.cleaner import Cleaner
from docprep.services.errors import DocprepError
from docprep.services.processing.document import resolve_document_path
from docprep.services.processing.processor import ProcessingResult, Processor, log_observer
from docprep.utils.ids import generate_document_id
from docprep.utils.text import is_blank
from docprep.utils.time import utc_now

router = APIRouter(tags=["processing"])


def _build_response(
    processor: Processor,
    result: ProcessingResult,
    document_id: str,
) -> dict:
    """Common response fields for text and file processing."""
    records = build_chunk_records(result.chunks, document_id, processor.config)
    return {
        "document_id": document_id,
        "chunk_count": len(records),
        "chunks": records,
        "cleaning_stats": result.cleaning_stats,
        "estimated_tokens": processor.estimate_tokens(result.content),
        "invalid_patterns": [p.source for p in processor.invalid_patterns],
        "processed_at": utc_now(),
    }


@router.post("/process/text", response_model=ProcessResponse)
def process_text(
    body: ProcessTextRequest,
    base: ProcessingConfig = Depends(get_processing_config),
) -> ProcessResponse:
    """
    Preprocess and chunk literal text. Request chunk_size and cleaning options
    override the active profile. Returns 422 when nothing survives preprocessing.
    """
    try:
        config = apply_request_overrides(base, body.chunk_size, body.cleaning)
        processor = Processor(config, observer=log_observer)
        result = processor.process_text(body.text)
    except DocprepError as e:
        raise http_error_from(e) from e
    if is_blank(result.content):
        raise HTTPException(status_code=422, detail="Content is empty after preprocessing")
    document_id = generate_document_id(body.name, body.text)
    return ProcessResponse(**_build_response(processor, result, document_id))


@router.post("/process/file", response_model=ProcessFileResponse)
def process_file(
    body: ProcessFileRequest,
    base: ProcessingConfig = Depends(get_processing_config),
    settings: Settings = Depends(get_settings),
) -> ProcessFileResponse:
    """
    Load, validate, preprocess, and chunk a file under the documents root.
    Paths resolving outside the root are rejected with 403.
    """
    try:
        path = resolve_document_path(body.file_path, settings.documents_root)
        config = apply_request_overrides(base, body.chunk_size)
        processor = Processor(config, observer=log_observer)
        document = processor.load_document(path)
        processor.validate_document(document)
        result = processor.process_document(document)
    except DocprepError as e:
        raise http_error_from(e) from e
    if is_blank(result.content):
        raise HTTPException(status_code=422, detail="Content is empty after preprocessing")
    document_id = generate_document_id(str(document.path), document.content)
    return ProcessFileResponse(
        **_build_response(processor, result, document_id),
        title=document.metadata.title,
        document_stats=processor.get_document_stats(document),
    )


@router.post("/clean", response_model=CleanResponse)
def clean_text(
    body: CleanRequest,
    base: ProcessingConfig = Depends(get_processing_config),
) -> CleanResponse:
    """Run only the cleaner. Without a cleaning section in profile or request, the text is returned as-is."""
    try:
        config = apply_request_overrides(base, cleaning=body.cleaning)
    except DocprepError as e:
        raise http_error_from(e) from e
    cleaner = Cleaner(config.cleaning or CleaningConfig(enable_cleaning=False))
    cleaned = cleaner.clean(body.text)
    return CleanResponse(
        cleaned_text=cleaned,
        stats=cleaner.stats(body.text, cleaned),
        invalid_patterns=[p.source for p in cleaner.invalid_patterns],
    )
