"""Tolerant JSON parsing that degrades instead of raising.

Provider responses are not trusted to be JSON, or to have the shape we
expect.  :func:`tolerant_json` always returns a :class:`ParseOutcome`;
callers branch on ``ok`` and never need a ``try`` block.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ParseOutcome:
    """Result of a tolerant parse.

    ``value`` is the decoded JSON when ``ok`` is ``True`` and ``None``
    otherwise.
    """

    ok: bool
    value: Any = None

    @classmethod
    def failed(cls) -> ParseOutcome:
        return cls(ok=False, value=None)


def tolerant_json(text: str | bytes | None, expect: type | None = None) -> ParseOutcome:
    """Decode *text* as JSON without raising.

    Args:
        text: Raw response body.
        expect: Optional required top-level type (``list`` or ``dict``).
            A decoded value of any other type is a failed outcome.
    """
    if text is None:
        return ParseOutcome.failed()
    try:
        value = json.loads(text)
    except (ValueError, TypeError):
        return ParseOutcome.failed()

    if expect is not None and not isinstance(value, expect):
        return ParseOutcome.failed()
    return ParseOutcome(ok=True, value=value)
