"""Shared base for rules that inspect UI component functions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from compose_lint.rules.filters import is_eligible

if TYPE_CHECKING:
    from compose_lint.config import Config
    from compose_lint.rules.emitter import Diagnostic, Emitter
    from compose_lint.rules.issues import Issue
    from compose_lint.scanner.types import FunctionDeclaration


class ComposableRule(ABC):
    """Runs ``visit_component`` on eligible declarations only.

    Subclasses set ``issue`` and implement ``visit_component``.
    """

    issue: ClassVar[Issue]

    def __init__(self, config: Config | None = None) -> None:
        if config is None:
            from compose_lint.config import Config

            config = Config()
        self.config = config

    def run(self, fn: FunctionDeclaration, emitter: Emitter) -> list[Diagnostic]:
        if not is_eligible(fn, self.config.component_markers):
            return []
        return self.visit_component(fn, emitter)

    @abstractmethod
    def visit_component(self, fn: FunctionDeclaration, emitter: Emitter) -> list[Diagnostic]:
        """Inspect one eligible component and return what was emitted for it."""
