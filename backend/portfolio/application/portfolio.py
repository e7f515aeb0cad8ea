# portfolio/application/portfolio.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from portfolio.domain.exceptions import NotFound, QueryError
from portfolio.domain.sections import HOME_PAGE, parse_section
from portfolio.store import (
    METHODOLOGY_TABLE,
    PROFILE_TABLE,
    PROJECTS_TABLE,
    SECTIONS_TABLE,
    SKILLS_TABLE,
)

logger = logging.getLogger(__name__)


class PortfolioData(BaseModel):
    """Everything the home page shows."""

    profile: Optional[Dict[str, Any]] = None
    projects: List[Dict[str, Any]] = Field(default_factory=list)
    skills: List[Dict[str, Any]] = Field(default_factory=list)
    methodology: List[Dict[str, Any]] = Field(default_factory=list)
    sections: List[Any] = Field(default_factory=list)
    error: Optional[str] = None


class ProjectPage(BaseModel):
    project: Dict[str, Any]
    sections: List[Any] = Field(default_factory=list)
    paragraphs: List[str] = Field(default_factory=list)


def load_sections(store, parent: str) -> list:
    rows = (
        store.table(SECTIONS_TABLE)
        .select("*")
        .eq("parent", parent)
        .order("display_order")
        .execute()
    )
    return [parse_section(row) for row in rows]


def load_portfolio(store) -> PortfolioData:
    """
    Fetch the home page content. Any failed read yields an empty page
    carrying the error message instead of partial content.
    """
    try:
        return PortfolioData(
            profile=store.table(PROFILE_TABLE).select("*").maybe_single(),
            projects=store.table(PROJECTS_TABLE).select("*").order("display_order").execute(),
            skills=store.table(SKILLS_TABLE).select("*").order("display_order").execute(),
            methodology=store.table(METHODOLOGY_TABLE).select("*").order("display_order").execute(),
            sections=load_sections(store, HOME_PAGE),
        )
    except QueryError as e:
        logger.error("Failed to load portfolio: %s", e.message)
        return PortfolioData(error=e.message or "Failed to load data")


def split_paragraphs(text: str, sentences_per_paragraph: int = 3) -> List[str]:
    """Group a long description into paragraphs of a few sentences each."""
    if not text:
        return []

    sentences = text.split(". ")
    paragraphs = []
    for start in range(0, len(sentences), sentences_per_paragraph):
        chunk = ". ".join(sentences[start:start + sentences_per_paragraph]).strip()
        if chunk and not chunk.endswith("."):
            chunk += "."
        if chunk:
            paragraphs.append(chunk)
    return paragraphs


def load_project_page(store, slug: str) -> ProjectPage:
    project = store.table(PROJECTS_TABLE).select("*").eq("slug", slug).maybe_single()
    if project is None:
        raise NotFound(f"Project not found: {slug}")

    return ProjectPage(
        project=project,
        sections=load_sections(store, slug),
        paragraphs=split_paragraphs(project.get("long_description") or ""),
    )
