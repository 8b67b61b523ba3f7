"""Keyword-overlap ranking of résumés against a vacancy description."""

import re

from candidate_matcher.models.domain import Resume
from candidate_matcher.services.resume_loader import ResumeLoader

_NON_WORD = re.compile(r"\W+")


def extract_keywords(vacancy_description: str) -> list[str]:
    """Split the lowercased description on runs of non-word characters.

    Repeated words are kept so they weigh more in the score. Empty tokens
    from leading or trailing punctuation are dropped.
    """
    return [token for token in _NON_WORD.split(vacancy_description.lower()) if token]


def match_score(resume: Resume, keywords: list[str]) -> int:
    content = resume.content.lower()
    return sum(1 for keyword in keywords if keyword in content)


def rank(resumes: list[Resume], vacancy_description: str, limit: int) -> list[Resume]:
    if limit <= 0:
        return []
    keywords = extract_keywords(vacancy_description)
    # sorted() is stable, so equal scores keep load order
    ranked = sorted(resumes, key=lambda r: match_score(r, keywords), reverse=True)
    return ranked[:limit]


class CandidateRanker:
    def __init__(self, loader: ResumeLoader):
        self.loader = loader

    def find_top_candidates(self, vacancy_description: str, limit: int) -> list[Resume]:
        """Return at most `limit` résumés, best keyword overlap first."""
        return rank(self.loader.load_all(), vacancy_description, limit)
