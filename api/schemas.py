from typing import Optional
from pydantic import BaseModel, field_validator, model_validator

from doctools.casing import CASE_STYLES


class CaseRequest(BaseModel):
    text: str
    style: str                      # lower | upper | initial_caps | sentence | title
    start: int = 0                  # optional selection within text
    end: Optional[int] = None

    @field_validator("style")
    @classmethod
    def style_must_be_known(cls, v: str) -> str:
        if v not in CASE_STYLES:
            raise ValueError(f"style must be one of {sorted(CASE_STYLES)}")
        return v

    @model_validator(mode="after")
    def selection_must_be_ordered(self):
        if self.start < 0 or (self.end is not None and self.end < self.start):
            raise ValueError("selection must satisfy 0 <= start <= end")
        return self


class CaseResponse(BaseModel):
    text: str
    style: str
    changed_positions: list[int] = []


class LinkRequest(BaseModel):
    url: str


class LinkResponse(BaseModel):
    url: str
    category: str                   # skipped_non_http | invalid_protocol | apple | broken | valid
    matched_known_protocol: bool = False
    escalated_from_apple: bool = False
    highlight_color: Optional[str] = None


class TrimRequest(BaseModel):
    text: str


class TrimResponse(BaseModel):
    trimmed_text: str
    leading_trimmed: int
    trailing_trimmed: int
    start: int
    end: int
    changed: bool


class DocumentRequest(BaseModel):
    html: str
    scope: str = "document"         # only affects the summary wording


class LinkResultSchema(BaseModel):
    url: str
    text: str
    category: str
    paragraph_index: int
    highlight_color: Optional[str] = None
    escalated_from_apple: bool = False


class LinkReportResponse(BaseModel):
    scope: str
    counts: dict[str, int]
    links: list[LinkResultSchema] = []
    message: str
    document: dict                  # the checked document, runs restyled in place


class FormattingResponse(BaseModel):
    counts: dict[str, int]
    changed_paragraphs: list[int] = []
    total_changes: int = 0
    message: str
    document: dict


class HealthResponse(BaseModel):
    status: str
    cache: str  # "connected" or "unavailable"


class ErrorResponse(BaseModel):
    detail: str
    code: str
