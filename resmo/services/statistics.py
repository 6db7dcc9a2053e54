"""Dashboard statistics over the candidate list. Pure functions; inputs are never mutated."""

from collections import Counter
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel

from resmo.schemas.candidate import Candidate, CandidateStatus

FIT_SCORE_BINS: List[Tuple[str, int, int]] = [
    ("1-3", 1, 3),
    ("4-6", 4, 6),
    ("7-8", 7, 8),
    ("9-10", 9, 10),
]

EXPERIENCE_BINS: List[Tuple[str, int, Optional[int]]] = [
    ("0-2 yrs", 0, 2),
    ("3-5 yrs", 3, 5),
    ("6-8 yrs", 6, 8),
    ("9+ yrs", 9, None),
]


class StatusCount(BaseModel):
    status: CandidateStatus
    count: int
    percentage: float


class RoleCount(BaseModel):
    role: str
    count: int
    percentage: float


class HistogramBin(BaseModel):
    label: str
    count: int
    percentage: float  # relative to the fullest bin, for bar widths


def pipeline_breakdown(candidates: Sequence[Candidate]) -> List[StatusCount]:
    """Candidates per status with share of total, largest first."""
    total = len(candidates)
    if total == 0:
        return []
    counts = Counter(c.status for c in candidates)
    rows = [StatusCount(status=s, count=n, percentage=n / total * 100) for s, n in counts.items()]
    return sorted(rows, key=lambda r: -r.count)


def role_distribution(candidates: Sequence[Candidate]) -> List[RoleCount]:
    total = len(candidates)
    if total == 0:
        return []
    counts = Counter(c.role or "N/A" for c in candidates)
    rows = [RoleCount(role=r, count=n, percentage=n / total * 100) for r, n in counts.items()]
    return sorted(rows, key=lambda r: -r.count)


def _histogram(values: Sequence[int], bins: Sequence[Tuple[str, int, Optional[int]]]) -> List[HistogramBin]:
    counts = [0] * len(bins)
    for value in values:
        for i, (_, low, high) in enumerate(bins):
            if value >= low and (high is None or value <= high):
                counts[i] += 1
                break
    biggest = max(max(counts, default=0), 1)
    return [
        HistogramBin(label=label, count=n, percentage=n / biggest * 100)
        for (label, _, _), n in zip(bins, counts)
    ]


def fit_score_histogram(candidates: Sequence[Candidate]) -> List[HistogramBin]:
    """Analyzed candidates bucketed by fit score; out-of-range scores fall in no bin."""
    scores = [c.analysis.fit_score for c in candidates if c.analysis is not None]
    return _histogram(scores, FIT_SCORE_BINS)


def experience_histogram(candidates: Sequence[Candidate]) -> List[HistogramBin]:
    years = [c.analysis.experience_years for c in candidates if c.analysis is not None]
    return _histogram(years, EXPERIENCE_BINS)


def top_skills(candidates: Sequence[Candidate], top_n: int = 5) -> List[Tuple[str, int]]:
    """Top N skills by frequency across analyzed candidates."""
    skills = []
    for c in candidates:
        if c.analysis and c.analysis.skills:
            skills.extend(s.strip() for s in c.analysis.skills if s and s.strip())
    return Counter(skills).most_common(top_n)


def filter_by_status(candidates: Sequence[Candidate], statuses: Sequence[CandidateStatus]) -> List[Candidate]:
    """
    Filter candidates by status. Does not mutate the input list.
    If statuses is empty, return all candidates.
    """
    if not statuses:
        return list(candidates)
    wanted = set(statuses)
    return [c for c in candidates if c.status in wanted]
