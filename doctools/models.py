from dataclasses import dataclass, field
from typing import Optional


# Link classification labels used throughout the system
LINK_CATEGORIES = ("skipped_non_http", "invalid_protocol", "apple", "broken", "valid")


@dataclass(frozen=True)
class TextRun:
    content: str


@dataclass(frozen=True)
class Token:
    kind: str                   # word | whitespace | dash | colon | other
    text: str
    index: int

    # populated only for word tokens
    leading: str = ""
    core: str = ""
    trailing: str = ""

    @property
    def is_separator(self) -> bool:
        return self.kind in ("whitespace", "dash", "colon")


@dataclass(frozen=True)
class LinkClassification:
    url: str
    category: str
    matched_known_protocol: bool = False
    escalated_from_apple: bool = False

    def to_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items()}


@dataclass(frozen=True)
class TrimResult:
    trimmed_text: str
    leading_trimmed: int
    trailing_trimmed: int
    start: int                  # bounds of the trimmed span in the caller's offsets
    end: int

    @property
    def changed(self) -> bool:
        return self.leading_trimmed > 0 or self.trailing_trimmed > 0

    def to_dict(self) -> dict:
        data = {k: v for k, v in self.__dict__.items()}
        data["changed"] = self.changed
        return data


@dataclass
class LinkResult:
    url: str
    text: str
    category: str
    paragraph_index: int
    highlight_color: Optional[str] = None
    escalated_from_apple: bool = False

    def to_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items()}


@dataclass
class LinkReport:
    scope: str = "document"
    counts: dict[str, int] = field(default_factory=lambda: {
        "broken": 0,
        "apple": 0,
        "skipped_non_http": 0,
        "invalid_protocol": 0,
        "valid": 0,
        "formatted": 0,
        "missing_link": 0,
        "spaces_trimmed": 0,
    })
    links: list[LinkResult] = field(default_factory=list)
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "scope": self.scope,
            "counts": dict(self.counts),
            "links": [link.to_dict() for link in self.links],
            "message": self.message,
        }


@dataclass
class FormattingReport:
    counts: dict[str, int] = field(default_factory=lambda: {
        "h1": 0,
        "h2": 0,
        "normal": 0,
        "list_items": 0,
    })
    changed_paragraphs: list[int] = field(default_factory=list)
    message: str = ""

    @property
    def total_changes(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> dict:
        return {
            "counts": dict(self.counts),
            "changed_paragraphs": list(self.changed_paragraphs),
            "total_changes": self.total_changes,
            "message": self.message,
        }
