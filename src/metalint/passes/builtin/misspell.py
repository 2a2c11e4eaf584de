# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Spell checking of comments and string literals."""

from __future__ import annotations

import io
import re
import tokenize
from collections.abc import Iterator
from typing import TYPE_CHECKING, Final

from ...core.models import InlineFix, Replacement
from ...loader.model import SourceFile

if TYPE_CHECKING:
    from ...execution.context import PassContext

MISSPELLINGS: Final[dict[str, str]] = {
    "accross": "across",
    "adress": "address",
    "behaviour": "behavior",
    "colour": "color",
    "definately": "definitely",
    "enviroment": "environment",
    "existant": "existent",
    "honour": "honor",
    "initialise": "initialize",
    "langauge": "language",
    "normalise": "normalize",
    "occured": "occurred",
    "paramter": "parameter",
    "recieve": "receive",
    "retreive": "retrieve",
    "seperate": "separate",
    "succesful": "successful",
    "untill": "until",
    "wich": "which",
}
_WORD: Final[re.Pattern[str]] = re.compile(r"[A-Za-z]+")


def _match_case(original: str, correction: str) -> str:
    if original.isupper():
        return correction.upper()
    if original[0].isupper():
        return correction.capitalize()
    return correction


def _text_tokens(source: SourceFile) -> Iterator[tokenize.TokenInfo]:
    try:
        for token in tokenize.generate_tokens(io.StringIO(source.text).readline):
            if token.type in (tokenize.COMMENT, tokenize.STRING):
                yield token
    except (tokenize.TokenError, SyntaxError):
        return


def run_misspell(context: PassContext) -> None:
    """Report commonly misspelled English words in comments and strings."""

    raw_ignored = context.settings.get("ignore_words")
    ignored = (
        {word.lower() for word in raw_ignored if isinstance(word, str)} if isinstance(raw_ignored, list) else set()
    )
    for source in context.iter_files(parsed_only=False):
        for token in _text_tokens(source):
            row, col = token.start
            for offset, line_text in enumerate(token.string.split("\n")):
                line = row + offset
                base = col if offset == 0 else 0
                for match in _WORD.finditer(line_text):
                    word = match.group(0)
                    correction = MISSPELLINGS.get(word.lower())
                    if correction is None or word.lower() in ignored:
                        continue
                    start = base + match.start()
                    context.report(
                        source.path,
                        line,
                        start + 1,
                        f"`{word}` is a misspelling of `{_match_case(word, correction)}`",
                        replacement=Replacement(
                            inline=InlineFix(start_col=start, length=len(word), new_text=_match_case(word, correction)),
                        ),
                    )


__all__ = ["MISSPELLINGS", "run_misspell"]
