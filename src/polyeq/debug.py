"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from polyeq.tokens import Token, describe


def dump_tokens(tokens: Sequence[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*: index, kind, display form, position."""
    file.write(f"Tokens ({len(tokens)})\n")
    for idx, tok in enumerate(tokens):
        start = tok.span.start
        file.write(f"  {idx:>3} {tok.kind.name:<10} {describe(tok):<8} {start.line}:{start.column}\n")
