import logging

from fastapi import APIRouter

from doctools.casing import case_edits, transform_selection
from doctools.classifier import classify_link, trim_link_spaces
from doctools.core import check_document_links, fix_document_formatting
from doctools.parser import parse_document
from doctools.styles import highlight_color
from .cache import cached_is_broken, is_cache_healthy
from .schemas import (
    CaseRequest,
    CaseResponse,
    DocumentRequest,
    FormattingResponse,
    HealthResponse,
    LinkReportResponse,
    LinkRequest,
    LinkResponse,
    TrimRequest,
    TrimResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/case", response_model=CaseResponse, summary="Change the case of text or a selection of it")
async def change_text_case(request: CaseRequest) -> CaseResponse:
    """
    Applies one of the case styles to `text[start:end]`.

    The result always has the same length as the input; `changed_positions`
    lists the character offsets whose case changed.
    """
    transformed = transform_selection(request.text, request.style, request.start, request.end)
    changed = [pos for pos, _ in case_edits(request.text, transformed)]
    return CaseResponse(text=transformed, style=request.style, changed_positions=changed)


@router.post("/links/classify", response_model=LinkResponse, summary="Classify a single link")
def classify_single_link(request: LinkRequest) -> LinkResponse:
    """
    Classifies a URL. http(s) links get a liveness check (404 or unreachable
    means broken); known non-HTTP protocols are never fetched.

    Declared sync so FastAPI runs the blocking fetch in its threadpool.
    """
    result = classify_link(request.url, cached_is_broken)
    return LinkResponse(**result.to_dict(), highlight_color=highlight_color(result.category))


@router.post("/links/trim", response_model=TrimResponse, summary="Trim spaces from linked text")
async def trim_link_text(request: TrimRequest) -> TrimResponse:
    return TrimResponse(**trim_link_spaces(request.text).to_dict())


@router.post("/documents/check-links", response_model=LinkReportResponse, summary="Check every link in an HTML document")
async def check_links(request: DocumentRequest) -> LinkReportResponse:
    """
    Parses the HTML into styled runs, trims link spaces, fixes link styling,
    classifies every link and flags underlined text that has no link.
    """
    document = parse_document(request.html)
    report = await check_document_links(document, is_broken=cached_is_broken, scope=request.scope)
    return LinkReportResponse(**report.to_dict(), document=document.to_dict())


@router.post("/documents/format", response_model=FormattingResponse, summary="Fix heading and body typography")
async def format_document(request: DocumentRequest) -> FormattingResponse:
    document = parse_document(request.html)
    report = fix_document_formatting(document)
    return FormattingResponse(**report.to_dict(), document=document.to_dict())


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    cache_status = "connected" if is_cache_healthy() else "unavailable"
    return HealthResponse(status="ok", cache=cache_status)
