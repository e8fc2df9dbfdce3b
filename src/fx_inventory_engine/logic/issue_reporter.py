# src/fx_inventory_engine/logic/issue_reporter.py

from typing import Dict, List, Tuple

from ..core.enums.issue_type import IssueType
from ..core.models.response import ReplayIssue
from ..monitoring import DATA_QUALITY_ISSUES_TOTAL


class IssueReporter:
    """
    Collects the non-fatal problems found while replaying a ledger.
    One instance belongs to exactly one computation.
    """
    def __init__(self):
        self._issues: Dict[Tuple[str, IssueType], ReplayIssue] = {}

    def add_issue(self, transaction_id: str, issue_type: IssueType, message: str):
        key = (transaction_id, issue_type)
        if key in self._issues:
            existing = self._issues[key]
            if message not in existing.message:
                existing.message += f"; {message}"
        else:
            self._issues[key] = ReplayIssue(
                transaction_id=transaction_id,
                issue_type=issue_type,
                message=message
            )
            DATA_QUALITY_ISSUES_TOTAL.labels(issue_type=issue_type.value).inc()

    def get_issues(self) -> List[ReplayIssue]:
        return list(self._issues.values())

    def has_issues(self) -> bool:
        return bool(self._issues)

    def has_issues_for(self, transaction_id: str) -> bool:
        return any(txn_id == transaction_id for txn_id, _ in self._issues)

    def clear(self):
        self._issues = {}
