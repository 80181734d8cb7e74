"""Eligibility filter shared by every rule.

Interface members, abstract and expect/actual declarations cannot carry
defaults, and overrides must match their supertype's signature, so all of
them are skipped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from compose_lint.scanner.types import FunctionDeclaration

DEFAULT_COMPONENT_MARKERS = frozenset({"Composable", "composable"})


def is_component(
    fn: FunctionDeclaration, markers: Iterable[str] = DEFAULT_COMPONENT_MARKERS
) -> bool:
    """True if the declaration carries a UI component marker."""
    return not fn.markers.isdisjoint(markers)


def is_eligible(
    fn: FunctionDeclaration, markers: Iterable[str] = DEFAULT_COMPONENT_MARKERS
) -> bool:
    """True if the declaration is a component whose signature is ours to change."""
    return is_component(fn, markers) and not fn.flags.constrained
