"""Submission flow: validate, show loading, analyze, persist.

Order per submission:
  1. Reject blank JD text; flag short text
  2. Mark pending (a second submit now fails)
  3. Wait the configured loading delay
  4. Run the orchestrator synchronously
  5. Save through the store
  6. Clear pending
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field

from src.core.config import Settings
from src.core.schemas import Analysis
from src.core.store import AnalysisStore
from src.pipeline.orchestrator import analyze_jd

logger = logging.getLogger(__name__)


class EmptyJobDescriptionError(ValueError):
    """Raised when a submission carries no JD text."""


class SubmissionInProgressError(RuntimeError):
    """Raised when a creation is already pending for this session."""


@dataclass
class SubmissionResult:
    analysis: Analysis
    saved: bool
    warnings: list[str] = field(default_factory=list)


class PrepSession:
    """One user's submission handler.

    Usage::

        session = PrepSession(store, settings)
        result = await session.submit(jd_text, role="SDE-1", company="Google")
        if result.saved:
            show(result.analysis.id)
    """

    def __init__(
        self,
        store: AnalysisStore,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or Settings()
        self._rng = rng
        self._pending = False

    @property
    def pending(self) -> bool:
        """True while a creation is in flight; the submit control is disabled."""
        return self._pending

    async def submit(
        self,
        text: str | None,
        role: str | None = None,
        company: str | None = None,
    ) -> SubmissionResult:
        """Create and persist an analysis for one JD.

        Raises:
            EmptyJobDescriptionError: If text is blank.
            SubmissionInProgressError: If another submit has not finished.
        """
        if self._pending:
            msg = "an analysis is already being created"
            raise SubmissionInProgressError(msg)
        if not text or not text.strip():
            msg = "job description text is required"
            raise EmptyJobDescriptionError(msg)

        warnings: list[str] = []
        threshold = self._settings.session.short_jd_chars
        if len(text) < threshold:
            warning = (
                f"Job description is short ({len(text)} < {threshold} chars); "
                "results may be less accurate"
            )
            logger.warning(warning)
            warnings.append(warning)

        self._pending = True
        try:
            delay = self._settings.session.analysis_delay_ms / 1000
            logger.debug("Analyzing in %.2fs", delay)
            await asyncio.sleep(delay)
            analysis = analyze_jd(text, role, company, self._settings, rng=self._rng)
            saved = self._store.save(analysis)
            if not saved:
                logger.warning("Analysis %s was created but not saved", analysis.id)
        finally:
            self._pending = False

        return SubmissionResult(analysis=analysis, saved=saved, warnings=warnings)
