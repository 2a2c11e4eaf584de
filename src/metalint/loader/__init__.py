# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Semantic model loading for metalint."""

from __future__ import annotations

from .builder import SemanticModelLoader, is_test_file, package_chain
from .directives import LineDirective, LineDirectiveMap, SourcePosition
from .generated import GeneratedFileDetector, is_generated_source
from .handle import ModelHandle
from .model import CodeUnit, LoadError, LoadMode, SemanticModel, SourceFile
from .roots import RootSpec, parse_root
from .symbols import ImportBinding, ModuleSymbols, collect_module_symbols

__all__ = [
    "CodeUnit",
    "GeneratedFileDetector",
    "ImportBinding",
    "LineDirective",
    "LineDirectiveMap",
    "LoadError",
    "LoadMode",
    "ModelHandle",
    "ModuleSymbols",
    "RootSpec",
    "SemanticModel",
    "SemanticModelLoader",
    "SourceFile",
    "SourcePosition",
    "collect_module_symbols",
    "is_generated_source",
    "is_test_file",
    "package_chain",
    "parse_root",
]
