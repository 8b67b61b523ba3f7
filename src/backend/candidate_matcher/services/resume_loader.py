"""Loads candidate résumés (.txt and .pdf) from the résumé directory."""

import logging
from pathlib import Path

from candidate_matcher.core.errors import ResumeParsingError
from candidate_matcher.models.domain import Resume, ResumeLoadFailure, ResumeLoadReport
from candidate_matcher.services.pdf_service import extract_text_from_pdf

logger = logging.getLogger(__name__)


class ResumeLoader:
    def __init__(self, resumes_dir: Path, strict: bool = True):
        self.resumes_dir = Path(resumes_dir)
        self.strict = strict

    def load_report(self) -> ResumeLoadReport:
        """Parse every résumé file, collecting failures instead of raising.

        Text files come first, then PDFs, each group sorted by filename.
        """
        report = ResumeLoadReport()
        if not self.resumes_dir.is_dir():
            logger.warning("Resume directory %s does not exist", self.resumes_dir)
            return report

        for pattern, parse in (("*.txt", self._parse_text), ("*.pdf", self._parse_pdf)):
            for path in sorted(self.resumes_dir.glob(pattern)):
                try:
                    report.resumes.append(parse(path))
                except Exception as exc:
                    logger.error("Failed to parse CV %s: %s", path.name, exc)
                    report.failures.append(ResumeLoadFailure(filename=path.name, reason=str(exc)))
        return report

    def load_all(self) -> list[Resume]:
        report = self.load_report()
        if report.failures:
            if self.strict:
                first = report.failures[0]
                raise ResumeParsingError(
                    f"Failed to parse CV {first.filename}: {first.reason}",
                    filename=first.filename,
                )
            logger.warning(
                "Skipped %d unreadable CV(s): %s",
                len(report.failures),
                ", ".join(f.filename for f in report.failures),
            )
        return report.resumes

    @staticmethod
    def _parse_text(path: Path) -> Resume:
        with path.open(encoding="utf-8") as fh:
            content = "\n".join(line.rstrip("\r\n") for line in fh)
        return Resume(name=path.stem, content=content, filename=path.name)

    @staticmethod
    def _parse_pdf(path: Path) -> Resume:
        content = extract_text_from_pdf(path)
        return Resume(name=path.stem, content=content, filename=path.name)
