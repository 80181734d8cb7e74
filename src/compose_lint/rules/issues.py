"""Issue identities reported by the rules.

Created once at import time and never mutated; safe to share between
worker threads.
"""

from __future__ import annotations

from dataclasses import dataclass

from compose_lint.models import Category, Severity

PRIORITY_NORMAL = 5


@dataclass(frozen=True, slots=True)
class Issue:
    """Identity and documentation of one kind of diagnostic."""

    id: str
    brief: str
    explanation: str
    category: Category = Category.PRODUCTIVITY
    severity: Severity = Severity.ERROR
    priority: int = PRIORITY_NORMAL


MODIFIER_WITHOUT_DEFAULT = Issue(
    id="ComposeModifierWithoutDefault",
    brief="Missing Modifier default value",
    explanation=(
        "This @Composable function has a modifier parameter but it doesn't have a "
        "default value.\n\n"
        "See https://twitter.github.io/compose-rules/rules/"
        "#modifiers-should-have-default-parameters for more information."
    ),
)

UNSTABLE_COLLECTIONS = Issue(
    id="ComposeUnstableCollections",
    brief="Immutable collections should be used in Composables",
    explanation=(
        "The Compose Compiler cannot infer the stability of a parameter typed as a "
        "raw collection, even if the item type is stable. Use an immutable collection "
        "type or an @Immutable wrapper class instead.\n\n"
        "See https://twitter.github.io/compose-rules/rules/"
        "#avoid-using-unstable-collections for more information."
    ),
)
