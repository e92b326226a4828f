"""
Language tags and the per-language idiom table.

The table is immutable rule data built once at import time.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class UnsupportedLanguageError(ValueError):
    """Raised when a language tag is outside the supported set."""


class Language(str, Enum):
    """Closed set of snippet languages understood by the engine."""

    PYTHON = "python"
    JAVA = "java"
    CPP = "cpp"
    C = "c"
    JAVASCRIPT = "javascript"

    @classmethod
    def parse(cls, value: "str | Language") -> "Language":
        """Resolve a tag or a common alias (``py``, ``c++``, ``js``...)."""
        if isinstance(value, Language):
            return value
        key = str(value).strip().lower()
        resolved = _ALIASES.get(key, key)
        try:
            return cls(resolved)
        except ValueError:
            raise UnsupportedLanguageError(f"Unsupported language: {value!r}") from None


_ALIASES = {
    "py": "python",
    "python3": "python",
    "c++": "cpp",
    "cxx": "cpp",
    "js": "javascript",
    "node": "javascript",
}


@dataclass(frozen=True)
class LanguageProfile:
    """Textual idioms the heuristics look for in one language."""

    language: Language
    display_name: str
    uses_braces: bool
    comment_prefix: str
    # Names of print-like calls, in the order they are scanned
    print_calls: tuple[str, ...]
    # Print idiom presence (any form, including stream operators)
    print_idiom: re.Pattern[str]
    input_idiom: re.Pattern[str]
    # "[1, 2, 3]" vs "1 2 3"
    bracketed_arrays: bool
    default_output: str
    loop_output: str
    recursion_output: str


PROFILES: dict[Language, LanguageProfile] = {
    Language.PYTHON: LanguageProfile(
        language=Language.PYTHON,
        display_name="Python",
        uses_braces=False,
        comment_prefix="#",
        print_calls=("print",),
        print_idiom=re.compile(r"\bprint\s*\("),
        input_idiom=re.compile(r"\binput\s*\(|\bsys\.stdin\b"),
        bracketed_arrays=True,
        default_output="Program executed successfully (no print statements found)",
        loop_output="Loop executed successfully (no print statements found)",
        recursion_output="Recursive function executed successfully (no print statements found)",
    ),
    Language.JAVA: LanguageProfile(
        language=Language.JAVA,
        display_name="Java",
        uses_braces=True,
        comment_prefix="//",
        print_calls=("System.out.println", "System.out.printf", "System.out.print"),
        print_idiom=re.compile(r"\bSystem\.out\.print(?:ln|f)?\s*\("),
        input_idiom=re.compile(r"\bScanner\b|\bSystem\.in\b|\breadLine\s*\("),
        bracketed_arrays=True,
        default_output="Program compiled and ran successfully (no output statements found)",
        loop_output="Program compiled and ran successfully (loop executed, no output statements found)",
        recursion_output="Program compiled and ran successfully (recursive method executed, no output statements found)",
    ),
    Language.CPP: LanguageProfile(
        language=Language.CPP,
        display_name="C++",
        uses_braces=True,
        comment_prefix="//",
        print_calls=("printf",),
        print_idiom=re.compile(r"\bcout\s*<<|\bprintf\s*\("),
        input_idiom=re.compile(r"\bcin\s*>>|\bgetline\s*\(|\bscanf\s*\("),
        bracketed_arrays=False,
        default_output="Program executed successfully (no output statements found)",
        loop_output="Loop executed successfully (no output statements found)",
        recursion_output="Recursive function executed successfully (no output statements found)",
    ),
    Language.C: LanguageProfile(
        language=Language.C,
        display_name="C",
        uses_braces=True,
        comment_prefix="//",
        print_calls=("printf", "puts"),
        print_idiom=re.compile(r"\bprintf\s*\(|\bputs\s*\("),
        input_idiom=re.compile(r"\bscanf\s*\(|\bfgets\s*\(|\bgets\s*\(|\bgetchar\s*\("),
        bracketed_arrays=False,
        default_output="Program executed successfully (no output statements found)",
        loop_output="Loop executed successfully (no output statements found)",
        recursion_output="Recursive function executed successfully (no output statements found)",
    ),
    Language.JAVASCRIPT: LanguageProfile(
        language=Language.JAVASCRIPT,
        display_name="JavaScript",
        uses_braces=True,
        comment_prefix="//",
        print_calls=("console.log",),
        print_idiom=re.compile(r"\bconsole\.log\s*\("),
        input_idiom=re.compile(r"\bprompt\s*\(|\breadline\b|\bprocess\.stdin\b"),
        bracketed_arrays=True,
        default_output="Program executed successfully (no console output found)",
        loop_output="Loop executed successfully (no console output found)",
        recursion_output="Recursive function executed successfully (no console output found)",
    ),
}


def profile_for(language: "str | Language") -> LanguageProfile:
    return PROFILES[Language.parse(language)]


def format_array(values: list[int], language: Language) -> str:
    """Render a sample array the way the language would print it."""
    if PROFILES[language].bracketed_arrays:
        return "[" + ", ".join(str(v) for v in values) + "]"
    return " ".join(str(v) for v in values)
