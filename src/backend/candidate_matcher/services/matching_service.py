"""Orchestrator: ranks résumés by keyword overlap, then asks the LLM about the best ones."""

import logging
from dataclasses import dataclass, field

from candidate_matcher.core.config import RatingConfig
from candidate_matcher.core.errors import InvalidVacancyError, LLMServiceError
from candidate_matcher.models.domain import SkippedCandidate
from candidate_matcher.models.schemas import (
    VACANCY_MAX_LENGTH,
    VACANCY_MIN_LENGTH,
    CandidateSummary,
)
from candidate_matcher.services.llm_service import LLMGateway
from candidate_matcher.services.ranker import CandidateRanker

logger = logging.getLogger(__name__)


@dataclass
class MatchReport:
    candidates: list[CandidateSummary] = field(default_factory=list)
    skipped: list[SkippedCandidate] = field(default_factory=list)


def validate_vacancy(vacancy_description: str | None) -> str:
    if vacancy_description is None or not vacancy_description.strip():
        raise InvalidVacancyError("Vacancy description cannot be blank")
    if not VACANCY_MIN_LENGTH <= len(vacancy_description) <= VACANCY_MAX_LENGTH:
        raise InvalidVacancyError(
            f"Vacancy description must be between {VACANCY_MIN_LENGTH} "
            f"and {VACANCY_MAX_LENGTH} characters"
        )
    return vacancy_description


class MatchingService:
    def __init__(
        self,
        ranker: CandidateRanker,
        gateway: LLMGateway,
        rating: RatingConfig,
        top_k: int = 5,
    ):
        self.ranker = ranker
        self.gateway = gateway
        self.rating = rating
        self.top_k = top_k

    async def match(self, vacancy_description: str) -> MatchReport:
        """Summarize and rate the top candidates for a vacancy.

        1. Rank résumés by keyword overlap and keep the top_k
        2. For each, one summary call and one rating call, in sequence
        3. An LLM failure aborts the request; any other per-candidate failure
           skips that candidate and is reported in `skipped`
        """
        vacancy_description = validate_vacancy(vacancy_description)
        logger.info("Processing candidate match request for vacancy: %s", vacancy_description[:100])

        top = self.ranker.find_top_candidates(vacancy_description, self.top_k)
        report = MatchReport()

        for resume in top:
            logger.debug("Processing CV: %s", resume.filename)
            try:
                summary = await self.gateway.generate_summary(vacancy_description, resume.content)
                rating = await self.gateway.generate_rating(vacancy_description, resume.content)
                report.candidates.append(
                    CandidateSummary(
                        name=resume.name,
                        filename=resume.filename,
                        summary=summary,
                        rating=self.rating.clamp(rating),
                        min_rating=self.rating.min,
                        max_rating=self.rating.max,
                    )
                )
            except LLMServiceError:
                logger.error("AI service error processing CV: %s", resume.filename)
                raise
            except Exception as exc:
                logger.exception("Failed to process CV: %s", resume.filename)
                report.skipped.append(SkippedCandidate(filename=resume.filename, reason=str(exc)))

        logger.info(
            "Successfully processed %d candidates (%d skipped)",
            len(report.candidates), len(report.skipped),
        )
        return report
