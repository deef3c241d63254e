# recall_ai/engine/self_check.py
"""
Advisory self-check of a synthesized response.

Reports which required file and function names the response never
mentions. Never raises and never changes the response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from recall_ai.core.prompt import PromptAnalysis
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import SELF_CHECK

logger = get_logger(__name__)


@dataclass(frozen=True)
class SelfCheckReport:
    """Names required by the request but absent from the response."""

    missing_files: List[str] = field(default_factory=list)
    missing_functions: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.missing_files and not self.missing_functions


def _missing(names: Sequence[str], response: str) -> List[str]:
    lowered = response.lower()
    return [name for name in names if name.lower() not in lowered]


def run_self_check(response: str, analysis: PromptAnalysis) -> SelfCheckReport:
    """Compare the response against the names the request asked for."""
    report = SelfCheckReport(
        missing_files=_missing(analysis.file_names, response),
        missing_functions=_missing(analysis.function_names, response),
    )

    if report.passed:
        logger.debug(f"{SELF_CHECK} Passed")
    else:
        logger.warning(
            f"{SELF_CHECK} Response is missing names: files={report.missing_files}, "
            f"functions={report.missing_functions}"
        )
    return report


__all__ = ["SelfCheckReport", "run_self_check"]
