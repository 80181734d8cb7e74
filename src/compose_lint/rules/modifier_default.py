"""ComposeModifierWithoutDefault: modifier parameters must have a default."""

from __future__ import annotations

from typing import TYPE_CHECKING

from compose_lint.rules.base import ComposableRule
from compose_lint.rules.classifier import TypeFamily, classify
from compose_lint.rules.emitter import SuggestedEdit
from compose_lint.rules.issues import MODIFIER_WITHOUT_DEFAULT

if TYPE_CHECKING:
    from compose_lint.rules.emitter import Diagnostic, Emitter
    from compose_lint.scanner.types import FunctionDeclaration, ParameterDeclaration


class ModifierWithoutDefaultRule(ComposableRule):
    issue = MODIFIER_WITHOUT_DEFAULT

    def visit_component(self, fn: FunctionDeclaration, emitter: Emitter) -> list[Diagnostic]:
        registry = self.config.registry
        diagnostics: list[Diagnostic] = []

        for param in fn.parameters:
            if param.has_default:
                continue
            if not classify(param.type, TypeFamily.MODIFIER, registry):
                continue
            diagnostics.append(
                emitter.emit(
                    self.issue,
                    param.span,
                    self.issue.explanation,
                    self.default_value_fix(param),
                )
            )
        return diagnostics

    def default_value_fix(self, param: ParameterDeclaration) -> SuggestedEdit:
        """Append `` = <default>`` to the parameter's last token."""
        default = self.config.default_modifier_expression
        token = param.trailing_token
        return SuggestedEdit(
            span=token.span,
            original_text=token.text,
            replacement_text=f"{token.text} = {default}",
            name=f"Add '= {default}' default value.",
            auto_fix=param.accepts_default,
        )
