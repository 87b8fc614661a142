"""
ATS compatibility scorer.

Scores a resume against a job description with four independent stages:

- keywords (0-40): share of job-description words found in the resume
- formatting (0-30): penalties for images, tables and overlong text
- structure (0-20): presence of the standard resume sections
- content (0-10): penalties for very short text and missing numbers

The scorer is a pure function: no I/O, no shared state, identical inputs
always give an identical report.
"""
import math
import re
from typing import List, Tuple
from pydantic import BaseModel, Field


# Keyword stage
KEYWORD_MAX_SCORE = 40
MIN_KEYWORD_LENGTH = 3  # keywords must be strictly longer than this
MAX_MISSING_KEYWORDS = 5

# Formatting stage
FORMATTING_MAX_SCORE = 30
FORMATTING_PENALTY = 10
IMAGE_MARKERS = ("image", "[img]")
TABLE_MARKERS = ("table", "[table]")
MAX_RESUME_LENGTH = 2000

# Structure stage
SECTION_POINTS = 5
SECTION_MARKERS = {
    "has_experience": "experience",
    "has_education": "education",
    "has_skills": "skill",
    "has_summary": "summary",
}

# Content stage
CONTENT_MAX_SCORE = 10
MIN_RESUME_LENGTH = 200
SHORT_RESUME_PENALTY = 5
NO_METRICS_PENALTY = 2
_DIGIT_RE = re.compile(r"[0-9]")


class InvalidInputError(ValueError):
    """Raised when the resume or job description is missing, blank or not text."""


# ============================================
# Report Models
# ============================================

class KeywordReport(BaseModel):
    score: int = Field(..., ge=0, le=KEYWORD_MAX_SCORE)
    matches: int = Field(..., ge=0, description="Job keywords found in the resume")
    total: int = Field(..., ge=0, description="Job keywords extracted (duplicates counted)")
    missing_keywords: List[str] = Field(default_factory=list, alias="missingKeywords")
    analysis: str = ""

    class Config:
        frozen = True
        populate_by_name = True


class FormattingReport(BaseModel):
    score: int = Field(..., ge=0, le=FORMATTING_MAX_SCORE)
    issues: List[str] = Field(default_factory=list)
    analysis: str = ""

    class Config:
        frozen = True


class StructureSections(BaseModel):
    has_experience: bool = Field(False, alias="hasExperience")
    has_education: bool = Field(False, alias="hasEducation")
    has_skills: bool = Field(False, alias="hasSkills")
    has_summary: bool = Field(False, alias="hasSummary")

    class Config:
        frozen = True
        populate_by_name = True


class StructureReport(BaseModel):
    score: int = Field(..., ge=0, le=len(SECTION_MARKERS) * SECTION_POINTS)
    sections: StructureSections

    class Config:
        frozen = True


class ContentReport(BaseModel):
    score: int = Field(..., ge=0, le=CONTENT_MAX_SCORE)
    word_count: int = Field(..., ge=0, alias="wordCount")
    has_metrics: bool = Field(..., alias="hasMetrics")

    class Config:
        frozen = True
        populate_by_name = True


class ScoreReport(BaseModel):
    """Combined ATS report. Serialize with ``by_alias=True`` for the wire format."""
    ats_score: int = Field(..., ge=0, le=100, alias="atsScore")
    keyword: KeywordReport
    formatting: FormattingReport
    structure: StructureReport
    content: ContentReport
    recommendations: List[str] = Field(default_factory=list)

    class Config:
        frozen = True
        populate_by_name = True


# ============================================
# Scoring Stages
# ============================================

def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def extract_keywords(jd_text: str) -> List[str]:
    """Lower-cased whitespace tokens longer than MIN_KEYWORD_LENGTH, duplicates kept, in order."""
    return [token for token in jd_text.lower().split() if len(token) > MIN_KEYWORD_LENGTH]


def score_keywords(resume_lower: str, keywords: List[str]) -> Tuple[float, KeywordReport]:
    """
    Match keywords against the lower-cased resume by substring containment.

    Returns:
        (raw score, report). The raw score is unrounded and feeds the aggregate.
    """
    total = len(keywords)
    found = [keyword in resume_lower for keyword in keywords]
    matches = sum(found)

    if total == 0:
        raw = 0.0
        analysis = f"No job description words longer than {MIN_KEYWORD_LENGTH} characters to match"
    else:
        raw = min(float(KEYWORD_MAX_SCORE), matches / total * KEYWORD_MAX_SCORE)
        analysis = f"Matched {matches} of {total} job description keywords"

    missing: List[str] = []
    for keyword, hit in zip(keywords, found):
        if hit or keyword in missing:
            continue
        missing.append(keyword)
        if len(missing) == MAX_MISSING_KEYWORDS:
            break

    return raw, KeywordReport(
        score=round_half_up(raw),
        matches=matches,
        total=total,
        missing_keywords=missing,
        analysis=analysis,
    )


def score_formatting(resume_text: str) -> FormattingReport:
    # Markers are matched on the raw text, case-sensitively
    score = FORMATTING_MAX_SCORE
    issues = []

    if any(marker in resume_text for marker in IMAGE_MARKERS):
        score -= FORMATTING_PENALTY
        issues.append("Remove images")
    if any(marker in resume_text for marker in TABLE_MARKERS):
        score -= FORMATTING_PENALTY
        issues.append("Avoid tables")
    if len(resume_text) > MAX_RESUME_LENGTH:
        score -= FORMATTING_PENALTY
        issues.append(f"Shorten the resume to under {MAX_RESUME_LENGTH} characters")

    return FormattingReport(
        score=max(0, score),
        issues=issues,
        analysis="Good formatting" if not issues else "; ".join(issues),
    )


def score_structure(resume_lower: str) -> StructureReport:
    sections = {
        flag: marker in resume_lower
        for flag, marker in SECTION_MARKERS.items()
    }
    score = SECTION_POINTS * sum(sections.values())
    return StructureReport(score=score, sections=StructureSections(**sections))


def score_content(resume_text: str) -> ContentReport:
    score = CONTENT_MAX_SCORE
    has_metrics = _DIGIT_RE.search(resume_text) is not None

    if len(resume_text) < MIN_RESUME_LENGTH:
        score -= SHORT_RESUME_PENALTY
    if not has_metrics:
        score -= NO_METRICS_PENALTY

    return ContentReport(
        score=score,
        word_count=len(resume_text.split()),
        has_metrics=has_metrics,
    )


def build_recommendations(
    resume_text: str,
    keyword: KeywordReport,
    formatting: FormattingReport,
    structure: StructureReport,
    content: ContentReport,
) -> List[str]:
    recommendations = []

    if keyword.missing_keywords:
        recommendations.append(
            "Add missing job keywords: " + ", ".join(keyword.missing_keywords)
        )
    recommendations.extend(formatting.issues)

    for flag, marker in SECTION_MARKERS.items():
        if not getattr(structure.sections, flag):
            recommendations.append(f"Add a {marker} section")

    if len(resume_text) < MIN_RESUME_LENGTH:
        recommendations.append(f"Expand the resume to at least {MIN_RESUME_LENGTH} characters")
    if not content.has_metrics:
        recommendations.append("Quantify achievements with numbers and metrics")

    return recommendations


def calculate_ats_score(resume_text: str, jd_text: str) -> ScoreReport:
    """
    Score a resume against a job description.

    Args:
        resume_text: Resume as plain text
        jd_text: Job description as plain text

    Returns:
        ScoreReport with the aggregate 0-100 score and per-stage details

    Raises:
        InvalidInputError: if either argument is not a string or is blank
    """
    for name, value in (("resume_text", resume_text), ("jd_text", jd_text)):
        if not isinstance(value, str):
            raise InvalidInputError(f"{name} must be a string, got {type(value).__name__}")
        if not value.strip():
            raise InvalidInputError(f"{name} must not be empty")

    resume_lower = resume_text.lower()

    _, keyword = score_keywords(resume_lower, extract_keywords(jd_text))
    formatting = score_formatting(resume_text)
    structure = score_structure(resume_lower)
    content = score_content(resume_text)

    # Equal to round_half_up(raw keyword score + the integer stages), without float drift at .5
    total = keyword.score + formatting.score + structure.score + content.score

    return ScoreReport(
        ats_score=total,
        keyword=keyword,
        formatting=formatting,
        structure=structure,
        content=content,
        recommendations=build_recommendations(resume_text, keyword, formatting, structure, content),
    )
