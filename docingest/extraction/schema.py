"""Typed, partially-optional view of an analysis operation payload.

Every field has exactly one rule for "absent or wrong type": it falls back to
its default. Building never raises, so callers read attributes instead of
probing nested dicts.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AnalyzeLine:
    content: str = ""


@dataclass(frozen=True)
class AnalyzePage:
    lines: tuple[AnalyzeLine, ...] = ()


@dataclass(frozen=True)
class AnalyzeResult:
    # None means "no pages list in the payload", distinct from an empty list.
    pages: tuple[AnalyzePage, ...] | None = None
    doc_type: str | None = None
    created_date_time: str | None = None


@dataclass(frozen=True)
class AnalyzeOperation:
    status: str | None = None
    analyze_result: AnalyzeResult | None = field(default=None)


def build_operation(data: Any) -> AnalyzeOperation:
    if not isinstance(data, Mapping):
        return AnalyzeOperation()
    return AnalyzeOperation(
        status=_optional_text(data.get("status")),
        analyze_result=_build_result(data.get("analyzeResult")),
    )


def _build_result(raw: Any) -> AnalyzeResult | None:
    if not isinstance(raw, Mapping):
        return None
    return AnalyzeResult(
        pages=_build_pages(raw.get("pages")),
        doc_type=_optional_text(raw.get("docType")),
        created_date_time=_optional_text(raw.get("createdDateTime")),
    )


def _build_pages(raw: Any) -> tuple[AnalyzePage, ...] | None:
    if not isinstance(raw, list):
        return None
    return tuple(_build_page(item) for item in raw)


def _build_page(raw: Any) -> AnalyzePage:
    if not isinstance(raw, Mapping):
        return AnalyzePage()
    lines = raw.get("lines")
    if not isinstance(lines, list):
        return AnalyzePage()
    return AnalyzePage(lines=tuple(_build_line(item) for item in lines))


def _build_line(raw: Any) -> AnalyzeLine:
    if not isinstance(raw, Mapping):
        return AnalyzeLine()
    return AnalyzeLine(content=_optional_text(raw.get("content")) or "")


def _optional_text(raw: Any) -> str | None:
    """Render scalars as text; None and containers count as absent."""
    if raw is None or isinstance(raw, (Mapping, list)):
        return None
    if isinstance(raw, bool):
        return "true" if raw else "false"
    return str(raw)
