# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pass metadata, registry and built-in catalog."""

from __future__ import annotations

from .catalog import BUILTIN_PASSES, default_registry
from .descriptor import PassCallable, PassDescriptor, PassResult
from .registry import PassRegistry

__all__ = [
    "BUILTIN_PASSES",
    "PassCallable",
    "PassDescriptor",
    "PassRegistry",
    "PassResult",
    "default_registry",
]
