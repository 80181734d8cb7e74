"""ComposeUnstableCollections: raw collection parameters defeat skipping.

Report-only: both an immutable collection type and a wrapper class are valid
remedies, so no edit is suggested.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from compose_lint.rules.base import ComposableRule
from compose_lint.rules.classifier import TypeFamily, classify, immutable_counterpart
from compose_lint.rules.issues import UNSTABLE_COLLECTIONS

if TYPE_CHECKING:
    from compose_lint.rules.emitter import Diagnostic, Emitter
    from compose_lint.scanner.types import FunctionDeclaration

FALLBACK_TYPE_TEXT = "List/Set/Map"


def capitalized(value: str) -> str:
    """Upper-case the first character only, independent of locale."""
    return value[:1].upper() + value[1:]


def create_error_message(type_text: str, raw_type: str, variable: str, immutable_type: str) -> str:
    wrapper = f"{capitalized(variable)}{capitalized(raw_type)}"
    return (
        f"The Compose Compiler cannot infer the stability of a parameter if a {type_text} "
        f"is used in it, even if the item type is stable.\n"
        f"You should use Kotlinx Immutable Collections instead: "
        f"`{variable}: {immutable_type}` or create an `@Immutable` wrapper for this class: "
        f"`@Immutable data class {wrapper}(val items: {type_text})`\n\n"
        f"See https://twitter.github.io/compose-rules/rules/#avoid-using-unstable-collections "
        f"for more information."
    )


class UnstableCollectionsRule(ComposableRule):
    issue = UNSTABLE_COLLECTIONS

    def visit_component(self, fn: FunctionDeclaration, emitter: Emitter) -> list[Diagnostic]:
        registry = self.config.registry
        diagnostics: list[Diagnostic] = []

        for param in fn.parameters:
            type_ref = param.type
            if not classify(type_ref, TypeFamily.UNSTABLE_COLLECTION, registry):
                continue
            type_text = type_ref.text or FALLBACK_TYPE_TEXT
            immutable_type = immutable_counterpart(type_ref.raw_name) + type_ref.generic_suffix
            message = create_error_message(
                type_text=type_text,
                raw_type=type_ref.raw_name,
                variable=param.name,
                immutable_type=immutable_type,
            )
            location = type_ref.span or param.span
            diagnostics.append(emitter.emit(self.issue, location, message))
        return diagnostics
