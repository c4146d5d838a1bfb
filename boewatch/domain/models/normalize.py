"""Label normalization shared by every taxonomy parser."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, TypeVar

_ACCENT_TABLE = str.maketrans("ÁÉÍÓÚ", "AEIOU")

E = TypeVar("E", bound=Enum)


class InvalidLabelError(ValueError):
    """Raised when a label has no match in a taxonomy and no default applies."""

    def __init__(self, kind: str, text: str) -> None:
        super().__init__(f"Unknown {kind} label: {text!r}")
        self.kind = kind
        self.text = text


def normalize(text: str) -> str:
    """Uppercase ``text``, drop every space and fold the accented vowels.

    >>> normalize("Local comercial")
    'LOCALCOMERCIAL'
    >>> normalize("Situación posesoria")
    'SITUACIONPOSESORIA'
    """
    return text.upper().replace(" ", "").translate(_ACCENT_TABLE)


def build_label_index(labels: Mapping[E, tuple[str, ...]]) -> dict[str, E]:
    """Return a normalized-label to member lookup table.

    Two members claiming the same normalized label is a programming error.
    """
    index: dict[str, E] = {}
    for member, variants in labels.items():
        for variant in variants:
            key = normalize(variant)
            if key in index and index[key] is not member:
                raise ValueError(
                    f"label {variant!r} maps to both {index[key]} and {member}"
                )
            index[key] = member
    return index


def lookup_label(index: Mapping[str, E], kind: str, text: str) -> E:
    """Match ``text`` against a table built by :func:`build_label_index`."""
    try:
        return index[normalize(text.strip())]
    except KeyError:
        raise InvalidLabelError(kind, text) from None


__all__ = ["InvalidLabelError", "build_label_index", "lookup_label", "normalize"]
