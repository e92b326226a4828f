"""
Shallow, language-specific syntax checks.

Runs before any classification; the first rule that fires produces the
diagnostic and nothing else is evaluated.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from .config import settings
from .languages import Language
from .shapes import mask_code

logger = logging.getLogger("playground.validator")

BRACE_LANGUAGES = frozenset({Language.JAVA, Language.CPP, Language.C, Language.JAVASCRIPT})
ALL_LANGUAGES = frozenset(Language)

_CLASS = re.compile(r"\bclass\b")
_PUBLIC_CLASS = re.compile(r"\bpublic\s+class\b")
_JAVA_MAIN = re.compile(r"\b(?:public\s+static|static\s+public)\s+void\s+main\s*\(")
_C_MAIN = re.compile(r"\bmain\s*\(")
_COUT = re.compile(r"\bcout\b")
_PRINTF = re.compile(r"\bprintf\s*\(")
_PY_BLOCK = re.compile(r"\b(?:def|if|for)\s")
_PY_PRINT = re.compile(r"\bprint\s*\(")
_FOREVER = re.compile(
    r"\bwhile\s+True\s*:|\bwhile\s*\(\s*(?:true|1)\s*\)|\bfor\s*\(\s*;\s*;\s*\)"
)
_LOOP_EXIT = re.compile(r"\b(?:break|return|exit|throw|raise)\b|\bsys\.exit\b|\bprocess\.exit\b")


@dataclass(frozen=True)
class SyntaxRule:
    """A named check; ``check(code, masked)`` returns a diagnostic or None."""

    name: str
    languages: frozenset[Language]
    check: Callable[[str, str], Optional[str]]


def _brace_balance(code: str, masked: str) -> Optional[str]:
    if masked.count("{") != masked.count("}"):
        return "error: mismatched curly braces"
    return None


def _java_structure(code: str, masked: str) -> Optional[str]:
    if not _CLASS.search(masked):
        return "error: class declaration missing"
    if _PUBLIC_CLASS.search(masked) and not _JAVA_MAIN.search(masked):
        return "error: main method missing"
    return None


def _c_main(code: str, masked: str) -> Optional[str]:
    if not _C_MAIN.search(masked):
        return "error: main function missing"
    return None


def _cpp_headers(code: str, masked: str) -> Optional[str]:
    if _COUT.search(masked) and "iostream" not in code:
        return "error: iostream header missing for cout"
    return None


def _c_headers(code: str, masked: str) -> Optional[str]:
    if _PRINTF.search(masked) and "stdio.h" not in code:
        return "error: stdio.h header missing for printf"
    return None


def _python_block_colon(code: str, masked: str) -> Optional[str]:
    if _PY_BLOCK.search(masked) and ":" not in masked:
        return 'SyntaxError: expected ":"'
    return None


def _python_print_parens(code: str, masked: str) -> Optional[str]:
    if _PY_PRINT.search(masked) and masked.count("(") != masked.count(")"):
        return "SyntaxError: unexpected EOF while parsing"
    return None


def _unbounded_loop(code: str, masked: str) -> Optional[str]:
    if _FOREVER.search(masked) and not _LOOP_EXIT.search(masked):
        return "error: potential infinite loop detected"
    return None


BRACE_BALANCE = SyntaxRule("brace-balance", BRACE_LANGUAGES, _brace_balance)
JAVA_STRUCTURE = SyntaxRule("java-structure", frozenset({Language.JAVA}), _java_structure)
C_MAIN = SyntaxRule("c-main", frozenset({Language.C, Language.CPP}), _c_main)
CPP_HEADERS = SyntaxRule("cpp-headers", frozenset({Language.CPP}), _cpp_headers)
C_HEADERS = SyntaxRule("c-headers", frozenset({Language.C}), _c_headers)
PYTHON_BLOCK_COLON = SyntaxRule("python-block-colon", frozenset({Language.PYTHON}), _python_block_colon)
PYTHON_PRINT_PARENS = SyntaxRule("python-print-parens", frozenset({Language.PYTHON}), _python_print_parens)
UNBOUNDED_LOOP = SyntaxRule("unbounded-loop", ALL_LANGUAGES, _unbounded_loop)


class SyntaxValidator:
    """Ordered syntax rule chain."""

    def __init__(self, require_main: Optional[bool] = None):
        if require_main is None:
            require_main = settings.REQUIRE_MAIN
        self.rules: tuple[SyntaxRule, ...] = tuple(
            rule for rule in (
                BRACE_BALANCE,
                JAVA_STRUCTURE,
                C_MAIN,
                CPP_HEADERS,
                C_HEADERS,
                PYTHON_BLOCK_COLON,
                PYTHON_PRINT_PARENS,
                UNBOUNDED_LOOP,
            )
            if rule is not C_MAIN or require_main
        )

    def validate(self, code: str, language: "str | Language") -> Optional[str]:
        """Return the first diagnostic for ``code``, or None when it looks fine."""
        language = Language.parse(language)
        masked = mask_code(code, language)
        for rule in self.rules:
            if language not in rule.languages:
                continue
            diagnostic = rule.check(code, masked)
            if diagnostic:
                logger.debug("Rule %s rejected %s snippet: %s", rule.name, language.value, diagnostic)
                return diagnostic
        return None
