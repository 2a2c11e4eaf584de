# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Changed-line data used to restrict issues to a diff."""

from __future__ import annotations

import logging
import re
import subprocess
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..config.models import DiffConfig
from ..errors import ConfigurationError
from ..filesystem.paths import normalize_path_key

LOGGER = logging.getLogger(__name__)

_HUNK_HEADER: Final[re.Pattern[str]] = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,(\d+))? @@")
_NEW_FILE_HEADER: Final[re.Pattern[str]] = re.compile(r"^\+\+\+ (?:b/)?(.+?)(?:\t.*)?$")
_DEV_NULL_SENTINEL: Final[str] = "/dev/null"


@dataclass(frozen=True, slots=True)
class ChangedLines:
    """Added line numbers keyed by POSIX path relative to the base directory."""

    files: Mapping[str, frozenset[int]]

    def contains(self, path: str, line: int) -> bool:
        """Return ``True`` when ``line`` of ``path`` was added or modified."""

        return line in self.files.get(path, frozenset())

    def __len__(self) -> int:
        return len(self.files)


def parse_unified_diff(text: str) -> dict[str, set[int]]:
    """Return the lines added by a unified diff, keyed by new file path.

    Args:
        text: Unified diff text, for example the output of ``git diff``.

    Returns:
        dict[str, set[int]]: Added or modified line numbers per file.
    """

    lines: dict[str, set[int]] = defaultdict(set)
    file_path: str | None = None
    current = 0
    for raw_line in text.splitlines():
        header = _NEW_FILE_HEADER.match(raw_line)
        if header:
            candidate = header.group(1).strip()
            file_path = None if candidate == _DEV_NULL_SENTINEL else candidate
            continue
        if raw_line.startswith(("--- ", "diff ", "index ")):
            continue
        hunk = _HUNK_HEADER.match(raw_line)
        if hunk:
            current = int(hunk.group(1))
            continue
        if file_path is None or current == 0:
            continue
        if raw_line.startswith("+"):
            lines[file_path].add(current)
            current += 1
        elif raw_line.startswith(" ") or raw_line == "":
            current += 1
    return {path: data for path, data in lines.items() if data}


def collect_git_changes(revision: str, cwd: Path) -> str:
    """Return ``git diff`` output against ``revision`` for ``cwd``.

    Raises:
        ConfigurationError: If git is unavailable or rejects the revision.
    """

    try:
        completed = subprocess.run(
            ["git", "diff", "--relative", "--unified=0", "--no-color", revision],
            cwd=cwd,
            check=False,
            capture_output=True,
            text=True,
        )
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"cannot run git diff against {revision!r}: {exc}") from exc
    if completed.returncode != 0:
        detail = completed.stderr.strip() or f"exit code {completed.returncode}"
        raise ConfigurationError(f"cannot compute changes against {revision!r}: {detail}")
    return completed.stdout


def build_changed_lines(config: DiffConfig, base_dir: Path) -> ChangedLines | None:
    """Return the changed-line restriction described by ``config``.

    Sources are consulted in order: explicit ``changed_lines``, inline
    ``patch`` text, ``patch_path``, then ``git diff`` against ``new_from_rev``.

    Args:
        config: Diff configuration.
        base_dir: Directory diff paths are relative to.

    Returns:
        ChangedLines | None: Restriction, or ``None`` when no diff is configured.

    Raises:
        ConfigurationError: If the patch file or git revision cannot be read.
    """

    if not config.active:
        return None
    if config.changed_lines is not None:
        raw: Mapping[str, set[int] | list[int]] = config.changed_lines
    elif config.patch is not None:
        raw = parse_unified_diff(config.patch)
    elif config.patch_path is not None:
        try:
            raw = parse_unified_diff(config.patch_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"cannot read patch {config.patch_path}: {exc}") from exc
    else:
        raw = parse_unified_diff(collect_git_changes(config.new_from_rev or "HEAD", base_dir))
    files = {
        normalize_path_key(path, base_dir=base_dir): frozenset(int(line) for line in numbers)
        for path, numbers in raw.items()
    }
    LOGGER.debug("diff restriction covers %d file(s)", len(files))
    return ChangedLines(files=files)


__all__ = ["ChangedLines", "build_changed_lines", "collect_git_changes", "parse_unified_diff"]
