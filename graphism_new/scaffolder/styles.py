"""API style resolution.

A generated project exposes its schema through one or more API styles.  The
set of enabled styles is never empty: when no style flag is switched on the
default style is used.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

STYLES: tuple[str, ...] = ("graphql", "rest")
DEFAULT_STYLE = "graphql"

_LABELS: dict[str, str] = {
    "graphql": "GraphQL",
    "rest": "REST",
}


def resolve_styles(
    flags: Mapping[str, bool], default: str = DEFAULT_STYLE
) -> frozenset[str]:
    """Return the enabled styles selected by *flags*.

    Only recognised styles whose flag is ``True`` are kept.  If none remain,
    ``{default}`` is returned.
    """
    enabled = frozenset(name for name in STYLES if flags.get(name) is True)
    return enabled or frozenset({default})


def ordered(styles: Iterable[str]) -> list[str]:
    """Return *styles* in declaration order."""
    selected = set(styles)
    return [name for name in STYLES if name in selected]


def styles_label(styles: Iterable[str]) -> str:
    """Human readable list, e.g. ``'GraphQL and REST'``."""
    labels = [_LABELS[name] for name in ordered(styles)]
    if len(labels) <= 1:
        return "".join(labels)
    return ", ".join(labels[:-1]) + " and " + labels[-1]
