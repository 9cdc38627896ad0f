# fsviz/pattern.py

"""
Glob pattern compilation.

This module turns shell-style glob patterns into a predicate over paths
relative to the traversal root. It supports the usual wildcards (``*``,
``?``, ``[...]``), brace alternation (``{a,b}``) and the globstar
(``**/``), which matches zero or more whole directory segments.

Several patterns may be given in a single string, separated by ``,`` or
``|`` outside of braces and brackets. A path is matched when any of the
alternatives matches the *whole* path.

Patterns are validated eagerly: :func:`compile_patterns` raises
:class:`GlobError` for anything it cannot translate, so a broken pattern
never ends up silently matching nothing or everything.
"""


from __future__ import annotations

import re
from typing import Iterable


class GlobError(ValueError):
    """Raised when a glob pattern cannot be compiled."""


def split_patterns(text: str) -> list[str]:
    """
    Split a delimited pattern string into its alternatives.

    ``,`` and ``|`` separate alternatives only at the top level: inside
    ``{...}`` a comma is part of the alternation, and inside ``[...]`` both
    are ordinary characters. Backslash escapes are kept as-is for
    :func:`translate`. Empty alternatives are dropped.

    Parameters
    ----------
    text : str
        Raw pattern string, e.g. ``"*.log|build/**"``.

    Returns
    -------
    list[str]
        The non-empty alternatives, in their original order.
    """

    parts: list[str] = []
    current: list[str] = []
    depth = 0
    in_class = False
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\" and i + 1 < len(text):
            current.append(text[i : i + 2])
            i += 2
            continue
        if in_class:
            if c == "]":
                in_class = False
        elif c == "[":
            in_class = True
            # A "]" right after "[" or "[!" belongs to the class, as in _class_end.
            j = i + 1
            if j < len(text) and text[j] in "!^":
                j += 1
            if j < len(text) and text[j] == "]":
                j += 1
            current.append(text[i:j])
            i = j
            continue
        elif c == "{":
            depth += 1
        elif c == "}":
            depth = max(depth - 1, 0)
        elif c in ",|" and depth == 0:
            parts.append("".join(current))
            current = []
            i += 1
            continue
        current.append(c)
        i += 1
    parts.append("".join(current))
    return [p for p in parts if p]


def _class_end(pattern: str, start: int) -> int:
    # Index of the "]" closing the class opened at ``start``; -1 if unterminated.
    j = start + 1
    if j < len(pattern) and pattern[j] in "!^":
        j += 1
    if j < len(pattern) and pattern[j] == "]":
        j += 1
    while j < len(pattern) and pattern[j] != "]":
        j += 1
    return j if j < len(pattern) else -1


def translate(pattern: str) -> str:
    """
    Translate a single glob pattern into an (unanchored) regular expression.

    Parameters
    ----------
    pattern : str
        One glob alternative, without top-level ``,``/``|`` separators.

    Returns
    -------
    str
        Regular expression source; use it with ``re.fullmatch``.

    Raises
    ------
    GlobError
        On a trailing backslash, an unterminated ``[`` or unbalanced braces.
    """

    out: list[str] = []
    depth = 0
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        prev = pattern[i - 1] if i else ""
        # A wildcard opening a path segment never matches a leading dot.
        segment_start = i == 0 or prev == "/" or (depth > 0 and prev in "{,")
        no_dot = "(?!\\.)" if segment_start else ""

        if c == "\\":
            if i + 1 >= n:
                raise GlobError(f"Invalid pattern {pattern!r}: trailing backslash")
            out.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "*":
            if pattern.startswith("**/", i):
                out.append("(?:[^/]+/)*")
                i += 3
            elif pattern.startswith("**", i):
                out.append(".*")
                i += 2
            else:
                out.append(no_dot + "[^/]*")
                i += 1
        elif c == "?":
            out.append(no_dot + "[^/]")
            i += 1
        elif c == "[":
            end = _class_end(pattern, i)
            if end < 0:
                raise GlobError(
                    f"Invalid pattern {pattern!r}: unterminated character class"
                )
            body = pattern[i + 1 : end]
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            body = body.replace("\\", "\\\\")
            out.append("[" + ("^" if negate else "") + body + "]")
            i = end + 1
        elif c == "{":
            depth += 1
            out.append("(?:")
            i += 1
        elif c == "}":
            if depth == 0:
                raise GlobError(f"Invalid pattern {pattern!r}: unmatched '}}'")
            depth -= 1
            out.append(")")
            i += 1
        elif c == "," and depth > 0:
            out.append("|")
            i += 1
        else:
            out.append(re.escape(c))
            i += 1

    if depth:
        raise GlobError(f"Invalid pattern {pattern!r}: unclosed '{{'")
    return "".join(out)


class GlobMatcher:
    """
    Compiled set of glob alternatives.

    Instances are immutable and callable: ``matcher(relpath)`` is the same
    as ``matcher.matches(relpath)``.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        self.patterns: tuple[str, ...] = tuple(patterns)
        if not self.patterns:
            raise GlobError("Invalid pattern: no pattern given")
        source = "|".join(f"(?:{translate(p)})" for p in self.patterns)
        try:
            self._regex = re.compile(source, re.DOTALL)
        except re.error as exc:
            raise GlobError(f"Invalid pattern {'|'.join(self.patterns)!r}: {exc}") from exc

    def matches(self, relpath: str) -> bool:
        """Return ``True`` if ``relpath`` matches any alternative."""
        return self._regex.fullmatch(relpath) is not None

    __call__ = matches

    def __repr__(self) -> str:
        return f"GlobMatcher({'|'.join(self.patterns)!r})"


def compile_patterns(patterns: str | Iterable[str]) -> GlobMatcher:
    """
    Compile one delimited pattern string, or several, into a matcher.

    Parameters
    ----------
    patterns : str | Iterable[str]
        Either a single string such as ``"*.js|*.ts"`` or an iterable of
        such strings. Every string is split on top-level ``,`` and ``|``.

    Returns
    -------
    GlobMatcher
        Predicate over POSIX paths relative to the traversal root.

    Raises
    ------
    GlobError
        If no non-empty alternative is given or any alternative is invalid.
    """

    if isinstance(patterns, str):
        patterns = [patterns]
    alternatives = [alt for text in patterns for alt in split_patterns(text)]
    return GlobMatcher(alternatives)
