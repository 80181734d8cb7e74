"""Rules — the analysis core.

Public API:
    ALL_ISSUES, ALL_RULES
    get_issue(issue_id) -> Issue
    rules_for(config) -> list[ComposableRule]
    classify(type_ref, family, registry) -> bool
    is_eligible(fn, markers) -> bool
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from compose_lint.exceptions import UnknownIssueError
from compose_lint.rules.base import ComposableRule
from compose_lint.rules.classifier import TypeFamily, TypeRegistry, classify
from compose_lint.rules.emitter import Diagnostic, DiagnosticSink, Emitter, ListSink, SuggestedEdit
from compose_lint.rules.filters import is_component, is_eligible
from compose_lint.rules.issues import MODIFIER_WITHOUT_DEFAULT, UNSTABLE_COLLECTIONS, Issue
from compose_lint.rules.modifier_default import ModifierWithoutDefaultRule
from compose_lint.rules.unstable_collections import UnstableCollectionsRule

if TYPE_CHECKING:
    from compose_lint.config import Config

ALL_RULES: tuple[type[ComposableRule], ...] = (
    ModifierWithoutDefaultRule,
    UnstableCollectionsRule,
)

ALL_ISSUES: tuple[Issue, ...] = tuple(rule.issue for rule in ALL_RULES)


def get_issue(issue_id: str) -> Issue:
    """Look up a registered issue by id (case-insensitive)."""
    for issue in ALL_ISSUES:
        if issue.id.lower() == issue_id.lower():
            return issue
    raise UnknownIssueError(f"Unknown issue id: {issue_id}")


def rules_for(config: Config) -> list[ComposableRule]:
    """Instantiate every rule whose issue is not disabled in ``config``."""
    disabled = {issue_id.lower() for issue_id in config.disabled_issues}
    return [rule(config) for rule in ALL_RULES if rule.issue.id.lower() not in disabled]


__all__ = [
    "ALL_ISSUES",
    "ALL_RULES",
    "MODIFIER_WITHOUT_DEFAULT",
    "UNSTABLE_COLLECTIONS",
    "ComposableRule",
    "Diagnostic",
    "DiagnosticSink",
    "Emitter",
    "Issue",
    "ListSink",
    "ModifierWithoutDefaultRule",
    "SuggestedEdit",
    "TypeFamily",
    "TypeRegistry",
    "UnstableCollectionsRule",
    "classify",
    "get_issue",
    "is_component",
    "is_eligible",
    "rules_for",
]
