"""Data models for og-check."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Severity(str, Enum):
    """How badly an issue affects a link preview."""
    ERROR = "error"  # Breaks the preview
    WARNING = "warning"  # Suboptimal preview
    INFO = "info"  # Best-practice suggestion


@dataclass(frozen=True)
class Issue:
    """A single validation finding."""

    tag: str
    problem: str
    fix: str
    severity: Severity

    def to_dict(self) -> Dict[str, str]:
        return {
            "tag": self.tag,
            "problem": self.problem,
            "fix": self.fix,
            "severity": self.severity.value,
        }


@dataclass
class FetchResponse:
    """Outcome of a successful fetch, after redirects."""

    final_url: str
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)  # lower-cased names
    body: str = ""
    redirect_chain: List[str] = field(default_factory=list)  # every URL requested

    @property
    def redirect_count(self) -> int:
        return max(len(self.redirect_chain) - 1, 0)


@dataclass
class CheckResult:
    """Complete output of one validation run."""

    final_url: str
    tags: Dict[str, str] = field(default_factory=dict)
    issues: List[Issue] = field(default_factory=list)

    def _count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    @property
    def errors(self) -> int:
        return self._count(Severity.ERROR)

    @property
    def warnings(self) -> int:
        return self._count(Severity.WARNING)

    @property
    def info(self) -> int:
        return self._count(Severity.INFO)

    @property
    def valid(self) -> bool:
        """True when no issue has error severity."""
        return self.errors == 0

    def summary(self) -> Dict[str, int]:
        return {
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON report schema.

        Returns:
            Dictionary with url, valid, tags, issues and summary keys
        """
        return {
            "url": self.final_url,
            "valid": self.valid,
            "tags": dict(self.tags),
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": self.summary(),
        }
