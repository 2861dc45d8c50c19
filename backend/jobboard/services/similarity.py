"""
Similar-jobs ranking.

Plain bag-of-words overlap: each job becomes the set of lower-cased word
tokens of its title, description and requirements, and a candidate scores

    |reference & candidate| / max(|reference|, |candidate|)

The denominator is the larger of the two sets, not their union.
"""

import re
from typing import Iterable, NamedTuple

from jobboard.models import Job

SIMILAR_JOBS_LIMIT = 5

_NON_WORD = re.compile(r"\W+")


class ScoredJob(NamedTuple):
    job: Job
    score: float


def tokenize(text: str) -> set[str]:
    """Lower-case ``text`` and split it on runs of non-word characters."""
    return {token for token in _NON_WORD.split(text.lower()) if token}


def job_text(job: Job) -> str:
    return " ".join(part or "" for part in (job.title, job.description, job.requirements))


def overlap_score(reference: set[str], candidate: set[str]) -> float:
    denominator = max(len(reference), len(candidate))
    if denominator == 0:
        return 0.0
    return len(reference & candidate) / denominator


def rank(reference: Job, candidates: Iterable[Job], limit: int = SIMILAR_JOBS_LIMIT) -> list[ScoredJob]:
    """
    Score ``candidates`` against ``reference`` and return the best ``limit``.

    The reference job itself is skipped by id. Equal scores keep the order
    the candidates arrived in.
    """
    reference_tokens = tokenize(job_text(reference))

    scored = [
        ScoredJob(job, overlap_score(reference_tokens, tokenize(job_text(job))))
        for job in candidates
        if str(job.id) != str(reference.id)
    ]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:limit]
