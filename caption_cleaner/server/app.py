"""FastAPI application exposing the caption cleaner over HTTP.

WHY: The summarization service and ad-hoc clients (curl, n8n) need to
clean caption tracks without shelling out to the CLI, and to pick up
transcripts that were cleaned earlier. FastAPI provides request
validation and automatic OpenAPI documentation.

HOW: POST /clean accepts either an uploaded caption file or a ``text``
form field, plus optional dedup overrides, and returns the cleaned text
with its statistics; with ``save`` set it also files the result in the
output directory. POST /clean/file does the same but returns one
formatter's output as a download. GET /transcripts lists the output
directory and GET /transcripts/{identifier} returns one saved text.
Cleaning is CPU-bound and fast, so it runs inline; there is no job store.

RULES:
- Exactly one of ``file`` or ``text`` must be given (400 otherwise)
- Uploaded files must have a supported caption extension and be UTF-8
- Invalid dedup overrides return 422 with the validation message
- Invalid transcript identifiers return 400, unknown ones 404
- Download file names are reduced to a single printable path component
- Error responses use a consistent ErrorResponse schema
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, List, Optional, Tuple
from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from caption_cleaner import __version__
from caption_cleaner.config import (
    DEFAULT_OUTPUT_DIR,
    SUPPORTED_CAPTION_FORMATS,
    DedupConfig,
    load_config,
)
from caption_cleaner.core.ir import CleanedTranscript
from caption_cleaner.core.pipeline import clean_transcript
from caption_cleaner.formatters import DEFAULT_FORMATS, FORMATTERS
from caption_cleaner.server.models import (
    CleanResponse,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    StatsModel,
    TranscriptInfo,
    TranscriptText,
)
from caption_cleaner.sink import DirectorySink, validate_identifier

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Caption Cleaner API",
    description=(
        "Removes sliding-window repetition from auto-generated caption "
        "tracks (WebVTT, SRT, or plain text) and returns the cleaned text "
        "with before/after statistics."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

transcript_sink = DirectorySink(DEFAULT_OUTPUT_DIR)

_CLEAN_ERRORS = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input document"},
    422: {"model": ErrorResponse, "description": "Invalid dedup settings"},
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _read_document(
    file: Optional[UploadFile],
    text: Optional[str],
    source_name: Optional[str],
) -> Tuple[str, str]:
    """Return (source name, raw document) from an upload or a text field."""
    if (file is None) == (text is None):
        raise HTTPException(
            status_code=400,
            detail="Provide exactly one of 'file' or 'text'.",
        )

    if file is None:
        return source_name or "text", text or ""

    # Sanitize filename to prevent path traversal
    filename = Path(file.filename or "upload.txt").name
    ext = Path(filename).suffix.lower()
    if ext not in SUPPORTED_CAPTION_FORMATS:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(SUPPORTED_CAPTION_FORMATS))
            ),
        )
    content = await file.read()
    try:
        raw = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Caption file must be UTF-8 text")
    return source_name or Path(filename).stem, raw


def _build_config(**overrides: Optional[float]) -> DedupConfig:
    try:
        return load_config(**overrides)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


async def _clean(
    file: Optional[UploadFile],
    text: Optional[str],
    source_name: Optional[str],
    config: DedupConfig,
) -> CleanedTranscript:
    name, raw = await _read_document(file, text, source_name)
    return clean_transcript(raw, config, source_name=name)


def _checked_identifier(identifier: str) -> str:
    try:
        return validate_identifier(identifier)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _save(result: CleanedTranscript) -> List[str]:
    """File the result in the output directory in the default formats."""
    identifier = _checked_identifier(result.source_name)
    outputs = []
    for key in DEFAULT_FORMATS:
        outputs.extend(FORMATTERS[key]().format(result))
    try:
        paths = transcript_sink.write(identifier, outputs)
    except OSError as exc:
        logger.error("Saving %s failed: %s", identifier, exc)
        raise HTTPException(status_code=500, detail="Could not save transcript")
    return [path.name for path in paths]


def _content_disposition(source_name: str, suffix: str) -> str:
    """Build an attachment header from a caller-supplied name.

    RULES:
    - Only the last path component is used; quotes, backslashes and
      non-printable characters are dropped
    - Names that need escaping use the RFC 5987 ``filename*`` form
    """
    name = "".join(
        ch for ch in Path(source_name).name
        if ch.isprintable() and ch not in '"\\'
    )
    filename = "{}{}".format(name or "transcript", suffix)
    quoted = quote(filename)
    if quoted != filename:
        return "attachment; filename*=utf-8''{}".format(quoted)
    return 'attachment; filename="{}"'.format(filename)


# ---------------------------------------------------------------------------
# Endpoints: Cleaning
# ---------------------------------------------------------------------------

FileField = Annotated[
    Optional[UploadFile],
    File(description="Caption file (.vtt, .srt, .txt) to clean."),
]
TextField = Annotated[
    Optional[str],
    Form(description="Caption document or plain transcript text, instead of a file."),
]
NameField = Annotated[
    Optional[str],
    Form(description="Name recorded on the result. Defaults to the file stem."),
]
PatternThresholdField = Annotated[
    Optional[float],
    Form(description="Block match ratio counted as a repeated pattern (0-1]."),
]
SentenceThresholdField = Annotated[
    Optional[float],
    Form(description="Fingerprint overlap counted as a duplicate sentence (0-1]."),
]


SaveField = Annotated[
    bool,
    Form(description="Also save the result in the output directory (default formats)."),
]


@app.post(
    "/clean",
    response_model=CleanResponse,
    tags=["clean"],
    summary="Clean a caption document",
    description=(
        "Upload a caption file or send its text. Returns the deduplicated "
        "transcript, before/after statistics, and the settings used. With "
        "save=true the result is also filed under its source name."
    ),
    responses={
        **_CLEAN_ERRORS,
        500: {"model": ErrorResponse, "description": "Saving the result failed"},
    },
)
async def clean(
    file: FileField = None,
    text: TextField = None,
    source_name: NameField = None,
    pattern_threshold: PatternThresholdField = None,
    sentence_threshold: SentenceThresholdField = None,
    save: SaveField = False,
) -> CleanResponse:
    config = _build_config(
        pattern_threshold=pattern_threshold,
        sentence_threshold=sentence_threshold,
    )
    result = await _clean(file, text, source_name, config)
    saved_files = _save(result) if save else []
    return CleanResponse(
        source_name=result.source_name,
        text=result.text,
        stats=StatsModel(**result.to_dict()["stats"]),
        config=config.to_dict(),
        saved_files=saved_files,
    )


@app.post(
    "/clean/file",
    tags=["clean"],
    summary="Clean a caption document and download one output format",
    description=(
        "Same input as POST /clean. Returns the output of one formatter "
        "(default: plain_text) as a file attachment."
    ),
    responses=_CLEAN_ERRORS,
)
async def clean_file(
    file: FileField = None,
    text: TextField = None,
    source_name: NameField = None,
    output_format: Annotated[
        str,
        Form(description="Formatter key, e.g. 'plain_text' or 'json_report'."),
    ] = "plain_text",
    pattern_threshold: PatternThresholdField = None,
    sentence_threshold: SentenceThresholdField = None,
) -> Response:
    if output_format not in FORMATTERS:
        raise HTTPException(
            status_code=400,
            detail="Unknown output format '{}'. Available: {}".format(
                output_format, ", ".join(sorted(FORMATTERS))
            ),
        )
    config = _build_config(
        pattern_threshold=pattern_threshold,
        sentence_threshold=sentence_threshold,
    )
    result = await _clean(file, text, source_name, config)
    output = FORMATTERS[output_format]().format(result)[0]
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": _content_disposition(result.source_name, output.suffix)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Saved transcripts
# ---------------------------------------------------------------------------


@app.get(
    "/transcripts",
    response_model=List[TranscriptInfo],
    tags=["transcripts"],
    summary="List saved transcripts",
    description="Transcripts in the output directory, newest first.",
)
async def list_transcripts() -> List[TranscriptInfo]:
    return [
        TranscriptInfo(
            identifier=entry.identifier,
            size=entry.size,
            text_length=entry.text_length,
            modified_at=entry.modified_at,
        )
        for entry in transcript_sink.list_entries()
    ]


@app.get(
    "/transcripts/{identifier}",
    response_model=TranscriptText,
    tags=["transcripts"],
    summary="Get a saved transcript",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid identifier"},
        404: {"model": ErrorResponse, "description": "Transcript not found"},
    },
)
async def get_transcript(identifier: str) -> TranscriptText:
    text = transcript_sink.read_text(_checked_identifier(identifier))
    if text is None:
        raise HTTPException(
            status_code=404,
            detail="Transcript not found: {}".format(identifier),
        )
    return TranscriptText(identifier=identifier, text=text)


# ---------------------------------------------------------------------------
# Endpoints: Formats and health
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    empty = CleanedTranscript(text="")
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        outputs = formatter.format(empty)
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            suffix=outputs[0].suffix if outputs else "",
        ))
    return result


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the caption-cleaner-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
