"""
Shared shape vocabulary.

Pure text predicates used independently by the pattern, complexity and
insight rule chains. Everything here works on plain strings; nothing is
parsed for real. Most predicates first mask comments and string contents so
that braces, keywords and identifiers inside them are ignored.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .languages import PROFILES, Language


# ---------------------------------------------------------------------------
# Masking
# ---------------------------------------------------------------------------


def _blank(chars: list[str], start: int, end: int) -> None:
    for i in range(start, min(end, len(chars))):
        if chars[i] != "\n":
            chars[i] = " "


def mask_code(code: str, language: Language) -> str:
    """
    Blank out comments and the contents of string literals.

    Quote characters are kept and offsets are preserved, so positions found in
    the masked text index the same characters in the original.
    """
    profile = PROFILES[language]
    quotes = "'\"`" if language is Language.JAVASCRIPT else "'\""
    chars = list(code)
    i, n = 0, len(code)

    while i < n:
        if code.startswith(profile.comment_prefix, i):
            end = code.find("\n", i)
            end = n if end == -1 else end
            _blank(chars, i, end)
            i = end
            continue
        if profile.uses_braces and code.startswith("/*", i):
            end = code.find("*/", i + 2)
            end = n if end == -1 else end + 2
            _blank(chars, i, end)
            i = end
            continue

        ch = code[i]
        if ch in quotes:
            if language is Language.PYTHON and code.startswith(ch * 3, i):
                end = code.find(ch * 3, i + 3)
                end = n if end == -1 else end
                _blank(chars, i + 3, end)
                i = end + 3
                continue
            j = i + 1
            while j < n and code[j] != ch and (code[j] != "\n" or ch == "`"):
                if code[j] == "\\":
                    j += 1
                j += 1
            _blank(chars, i + 1, j)
            i = j + 1
            continue
        i += 1

    return "".join(chars)


# ---------------------------------------------------------------------------
# Bracket helpers
# ---------------------------------------------------------------------------


_PAIRS = {"(": ")", "{": "}", "[": "]"}


def match_bracket(masked: str, pos: int) -> Optional[int]:
    """Index of the bracket closing the one at ``pos``, or None."""
    opener = masked[pos]
    closer = _PAIRS[opener]
    depth = 0
    for i in range(pos, len(masked)):
        if masked[i] == opener:
            depth += 1
        elif masked[i] == closer:
            depth -= 1
            if depth == 0:
                return i
    return None


def split_top_level(masked: str, start: int, end: int, sep: str = ",") -> list[tuple[int, int]]:
    """Split ``masked[start:end]`` on ``sep`` outside of nested brackets."""
    parts = []
    depth = 0
    begin = start
    i = start
    while i < end:
        ch = masked[i]
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif depth == 0 and masked.startswith(sep, i):
            parts.append((begin, i))
            begin = i + len(sep)
            i = begin
            continue
        i += 1
    parts.append((begin, end))
    return parts


# ---------------------------------------------------------------------------
# Loops
# ---------------------------------------------------------------------------


_PY_LOOP_LINE = re.compile(r"(?:async\s+)?(?:for|while)\b")
_PY_FOR = re.compile(r"\bfor\b")
_BRACE_LOOP = re.compile(r"\b(?:for|while)\s*\(|\bdo\s*(?=\{)")


def _python_loop_depth(masked: str) -> tuple[int, int]:
    """Return (max nesting depth, number of loop openers) by indentation."""
    stack: list[int] = []
    depth = 0
    count = 0
    for line in masked.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        indent = len(line) - len(line.lstrip())
        while stack and indent <= stack[-1]:
            stack.pop()

        head = _PY_LOOP_LINE.match(stripped)
        # Comprehension clauses nest inside whatever is open on this line
        inline = len(_PY_FOR.findall(stripped)) - (1 if head and "for" in head.group(0) else 0)
        if head:
            stack.append(indent)
            count += 1
        count += inline
        depth = max(depth, len(stack) + inline)
    return depth, count


def _statement_end(masked: str, pos: int) -> int:
    """End offset of the statement starting at ``pos`` (a loop body)."""
    n = len(masked)
    while pos < n and masked[pos].isspace():
        pos += 1
    if pos >= n:
        return n
    if masked[pos] == "{":
        close = match_bracket(masked, pos)
        return n if close is None else close + 1

    header = _BRACE_LOOP.match(masked, pos)
    if header:
        if header.group(0).startswith("do"):
            return _statement_end(masked, header.end())
        close = match_bracket(masked, header.end() - 1)
        return n if close is None else _statement_end(masked, close + 1)

    semi = masked.find(";", pos)
    brace = masked.find("{", pos)
    if brace != -1 and (semi == -1 or brace < semi):
        close = match_bracket(masked, brace)
        return n if close is None else close + 1
    return n if semi == -1 else semi + 1


def loop_spans(masked: str) -> list[tuple[int, int]]:
    """Header-to-body-end spans of every brace-language loop."""
    spans = []
    for m in _BRACE_LOOP.finditer(masked):
        if m.group(0).startswith("do"):
            end = _statement_end(masked, m.end())
        else:
            close = match_bracket(masked, m.end() - 1)
            end = len(masked) if close is None else _statement_end(masked, close + 1)
        spans.append((m.start(), end))
    return spans


def loop_depth(code: str, language: Language) -> int:
    """Deepest loop nesting found in the snippet (0 when there is no loop)."""
    masked = mask_code(code, language)
    if language is Language.PYTHON:
        return _python_loop_depth(masked)[0]

    spans = loop_spans(masked)
    deepest = 0
    for start, _ in spans:
        enclosing = sum(1 for s, e in spans if s < start < e)
        deepest = max(deepest, enclosing + 1)
    return deepest


def loop_count(code: str, language: Language) -> int:
    masked = mask_code(code, language)
    if language is Language.PYTHON:
        return _python_loop_depth(masked)[1]
    return len(loop_spans(masked))


def has_loop(code: str, language: Language) -> bool:
    return loop_depth(code, language) >= 1


def has_nested_loops(code: str, language: Language) -> bool:
    return loop_depth(code, language) >= 2


# ---------------------------------------------------------------------------
# Functions and recursion
# ---------------------------------------------------------------------------


_PY_DEF = re.compile(r"^([ \t]*)(?:async\s+)?def\s+([A-Za-z_]\w*)\s*\(", re.MULTILINE)
_BRACE_DEF = re.compile(
    r"\b([A-Za-z_]\w*)\s*\([^()]*\)\s*(?:const\s*)?(?:throws\s+[\w.,\s]+?)?\s*\{"
)
_JS_ARROW_DEF = re.compile(
    r"\b(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*=\s*(?:async\s*)?(?:function\s*)?\([^()]*\)\s*(?:=>\s*)?\{"
)
_NOT_FUNCTIONS = frozenset(
    {"if", "for", "while", "switch", "catch", "return", "do", "else", "sizeof",
     "synchronized", "function", "try", "new"}
)


def _python_bodies(masked: str) -> list[tuple[str, str]]:
    bodies = []
    lines = masked.splitlines(keepends=True)
    offsets = []
    total = 0
    for line in lines:
        offsets.append(total)
        total += len(line)

    for m in _PY_DEF.finditer(masked):
        indent = len(m.group(1))
        line_no = masked.count("\n", 0, m.start())
        body_lines = []
        for line in lines[line_no + 1:]:
            if not line.strip():
                continue
            if len(line) - len(line.lstrip()) <= indent:
                break
            body_lines.append(line)
        # Single-line bodies: "def f(n): return f(n - 1)"
        header_rest = lines[line_no][m.end() - offsets[line_no]:] if line_no < len(lines) else ""
        bodies.append((m.group(2), header_rest.split(":", 1)[-1] + "".join(body_lines)))
    return bodies


def _brace_bodies(masked: str) -> list[tuple[str, str]]:
    bodies = []
    for pattern in (_BRACE_DEF, _JS_ARROW_DEF):
        for m in pattern.finditer(masked):
            name = m.group(1)
            if name in _NOT_FUNCTIONS:
                continue
            open_brace = m.end() - 1
            close = match_bracket(masked, open_brace)
            body = masked[open_brace + 1:close] if close is not None else masked[open_brace + 1:]
            bodies.append((name, body))
    return bodies


def function_bodies(code: str, language: Language) -> list[tuple[str, str]]:
    """(name, body) pairs for every function definition that can be found."""
    masked = mask_code(code, language)
    if language is Language.PYTHON:
        return _python_bodies(masked)
    return _brace_bodies(masked)


def recursive_functions(code: str, language: Language) -> list[str]:
    """Names of functions that call themselves inside their own body."""
    names = []
    for name, body in function_bodies(code, language):
        if re.search(rf"(?<![\w$]){re.escape(name)}\s*\(", body) and name not in names:
            names.append(name)
    return names


def has_recursion(code: str, language: Language) -> bool:
    return bool(recursive_functions(code, language))


# ---------------------------------------------------------------------------
# Print calls
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrintCall:
    """One output statement and its raw argument texts."""

    name: str
    arguments: tuple[str, ...]
    newline: bool


_COUT = re.compile(r"(?:\bstd::)?\bcout\s*<<")
_ENDL = re.compile(r"^(?:std::)?endl$|^[\"']\\n[\"']$")


def _call_pattern(name: str) -> re.Pattern[str]:
    return re.compile(r"(?<![\w.])" + re.escape(name) + r"\s*\(")


def _function_prints(code: str, masked: str, language: Language) -> list[tuple[int, PrintCall]]:
    found = []
    for name in PROFILES[language].print_calls:
        for m in _call_pattern(name).finditer(masked):
            open_paren = m.end() - 1
            close = match_bracket(masked, open_paren)
            if close is None:
                continue
            parts = split_top_level(masked, open_paren + 1, close)
            arguments = tuple(code[s:e].strip() for s, e in parts if code[s:e].strip())
            newline = name in ("print", "System.out.println", "puts", "console.log")
            found.append((m.start(), PrintCall(name, arguments, newline)))
    return found


def _stream_prints(code: str, masked: str) -> list[tuple[int, PrintCall]]:
    found = []
    for m in _COUT.finditer(masked):
        end = masked.find(";", m.end())
        end = len(masked) if end == -1 else end
        parts = split_top_level(masked, m.end(), end, sep="<<")
        segments = [code[s:e].strip() for s, e in parts if code[s:e].strip()]
        newline = any(_ENDL.match(seg) for seg in segments)
        arguments = tuple(seg for seg in segments if not _ENDL.match(seg))
        found.append((m.start(), PrintCall("cout", arguments, newline)))
    return found


def print_calls(code: str, language: Language) -> list[PrintCall]:
    """Output statements in source order."""
    masked = mask_code(code, language)
    found = _function_prints(code, masked, language)
    if language is Language.CPP:
        found += _stream_prints(code, masked)
    return [call for _, call in sorted(found, key=lambda item: item[0])]


def has_print(code: str, language: Language) -> bool:
    return bool(PROFILES[language].print_idiom.search(mask_code(code, language)))


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------


_FIB_NAME = re.compile(r"fib", re.IGNORECASE)
_FIB_CALL = re.compile(r"\b\w*fib\w*\s*\(\s*(\d+)\s*\)", re.IGNORECASE)
_N_MINUS_1 = re.compile(r"\bn\s*-\s*1\b")
_N_MINUS_2 = re.compile(r"\bn\s*-\s*2\b")
_ACCUMULATION = re.compile(r"\b[A-Za-z_]\w*\s*\+\s*[A-Za-z_]\w*\b")
_RETURN = re.compile(r"\breturn\b")

_MEMO = re.compile(r"memo|lru_cache|@cache\b|\bcache\b", re.IGNORECASE)
_DP = re.compile(r"\bdp\b", re.IGNORECASE)
_ENTRY_ARGS = re.compile(r"String\s*\[\s*\]\s*args|String\.\.\.\s*args|\bargv\s*\[\s*\]|\*\s*argv\s*\[\s*\]")
_ARRAY = re.compile(
    r"\b(?:arr|array|arrays|list|lists|vector|arraylist|nums|numbers|items)\b"
    r"|\w\s*\[|\[\s*\]|=\s*\[|\.append\s*\(|\.push(?:_back)?\s*\(",
    re.IGNORECASE,
)

_MID = re.compile(r"\bmid", re.IGNORECASE)
_LEFT = re.compile(r"\b(?:left|lo|low)\b", re.IGNORECASE)
_RIGHT = re.compile(r"\b(?:right|hi|high)\b", re.IGNORECASE)
_MERGE = re.compile(r"merge", re.IGNORECASE)
_DIVIDE = re.compile(r"divide", re.IGNORECASE)
_CONQUER = re.compile(r"conquer", re.IGNORECASE)
_GREEDY = re.compile(r"greedy", re.IGNORECASE)
_SORT = re.compile(r"sort", re.IGNORECASE)
_MAX = re.compile(r"\bmax", re.IGNORECASE)
_PICK = re.compile(r"\b(?:pick|select|choose)", re.IGNORECASE)

_SWAP = re.compile(
    r"\b(?:temp|tmp)\b\s*=|\bswap\s*\("
    r"|(\w+\[[^\]\n]+\])\s*,\s*(\w+\[[^\]\n]+\])\s*=\s*\2\s*,\s*\1"
    r"|\[\s*(\w+\[[^\]\n]+\])\s*,\s*(\w+\[[^\]\n]+\])\s*\]\s*=\s*\[\s*\4\s*,\s*\3\s*\]",
    re.IGNORECASE,
)
_ADJACENT = re.compile(r"\w+\s*\[\s*\w+\s*\]\s*[<>]=?\s*\w+\s*\[\s*\w+\s*\+\s*1\s*\]|\[\s*\w+\s*\+\s*1\s*\]\s*[<>]")
_BUBBLE = re.compile(r"bubble", re.IGNORECASE)
_MIN = re.compile(r"\bmin\w*|minimum|smallest", re.IGNORECASE)

_FACTORIAL = re.compile(r"factorial", re.IGNORECASE)
_TIMES_N = re.compile(r"\bn\s*\*|\*\s*\(?\s*n\b|\*=")
_ARITHMETIC = re.compile(r"[\w)]\s*[-+*/%]\s*[\w(]")
_HELLO = re.compile(r"[\"'`]\s*Hello")


def fibonacci_argument(code: str, language: Language) -> Optional[int]:
    """
    First integer literal passed to a ``fib``-named call, if any.

    Print arguments are searched unmasked first so that calls interpolated
    into f-strings or template literals are found.
    """
    for call in print_calls(code, language):
        for argument in call.arguments:
            m = _FIB_CALL.search(argument)
            if m:
                return int(m.group(1))
    m = _FIB_CALL.search(mask_code(code, language))
    return int(m.group(1)) if m else None


def mentions_fibonacci(code: str, language: Language) -> bool:
    return bool(_FIB_NAME.search(mask_code(code, language)))


def has_fibonacci_subtraction(code: str, language: Language) -> bool:
    masked = mask_code(code, language)
    return bool(_N_MINUS_1.search(masked) and _N_MINUS_2.search(masked))


def has_fibonacci_shape(code: str, language: Language) -> bool:
    """A fib-named routine built from n-1/n-2 terms or an a+b accumulation."""
    if not mentions_fibonacci(code, language):
        return False
    masked = mask_code(code, language)
    return has_fibonacci_subtraction(code, language) or bool(_ACCUMULATION.search(masked))


def has_recursive_fibonacci(code: str, language: Language) -> bool:
    """The textbook doubly recursive Fibonacci."""
    return (
        mentions_fibonacci(code, language)
        and has_fibonacci_subtraction(code, language)
        and bool(_RETURN.search(mask_code(code, language)))
    )


def has_array_vocabulary(code: str, language: Language) -> bool:
    masked = _ENTRY_ARGS.sub(" ", mask_code(code, language))
    return bool(_ARRAY.search(masked))


def has_memoization(code: str, language: Language) -> bool:
    masked = mask_code(code, language)
    if _MEMO.search(masked):
        return True
    return bool(_DP.search(masked)) and has_array_vocabulary(code, language)


def has_binary_search(code: str, language: Language) -> bool:
    masked = mask_code(code, language)
    return bool(_MID.search(masked) and _LEFT.search(masked) and _RIGHT.search(masked))


def has_divide_and_conquer(code: str, language: Language) -> bool:
    masked = mask_code(code, language)
    return bool(_MERGE.search(masked) or (_DIVIDE.search(masked) and _CONQUER.search(masked)))


def has_greedy_choice(code: str, language: Language) -> bool:
    masked = mask_code(code, language)
    if _GREEDY.search(masked):
        return True
    return bool(_SORT.search(masked) and _MAX.search(masked) and _PICK.search(masked))


def has_swap(code: str, language: Language) -> bool:
    return bool(_SWAP.search(mask_code(code, language)))


def has_adjacent_compare(code: str, language: Language) -> bool:
    return bool(_ADJACENT.search(mask_code(code, language)))


def mentions_bubble(code: str, language: Language) -> bool:
    return bool(_BUBBLE.search(mask_code(code, language)))


def has_minimum_search(code: str, language: Language) -> bool:
    return bool(_MIN.search(mask_code(code, language)))


def has_factorial_shape(code: str, language: Language) -> bool:
    masked = mask_code(code, language)
    return bool(_FACTORIAL.search(masked) and _TIMES_N.search(masked))


def has_arithmetic(code: str, language: Language) -> bool:
    return bool(_ARITHMETIC.search(mask_code(code, language)))


def has_hello_literal(code: str) -> bool:
    return bool(_HELLO.search(code))


def has_blocking_input(code: str, language: Language) -> bool:
    return bool(PROFILES[language].input_idiom.search(mask_code(code, language)))
