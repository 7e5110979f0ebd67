"""
Namespace filter using glob patterns
"""

import re
from typing import Iterable, Tuple, Union

from ns_logger.core.log_entry import LogEntry
from ns_logger.filters.base_filter import BaseFilter

DEFAULT_NAMESPACE = "default"
MATCH_ALL = ("*",)


def compile_glob(pattern: str) -> "re.Pattern":
    """
    Compile a namespace glob into a regular expression.

    ``*`` and ``?`` never match ``/``, and never match a leading ``.`` of a
    path segment. A segment that is exactly ``**`` matches any number of
    segments.
    """
    segments = []
    for segment in pattern.split("/"):
        if segment == "**":
            segments.append(None)
            continue
        parts = []
        if segment[:1] in ("*", "?"):
            parts.append(r"(?!\.)")
        for char in segment:
            if char == "*":
                parts.append("[^/]*")
            elif char == "?":
                parts.append("[^/]")
            else:
                parts.append(re.escape(char))
        segments.append("".join(parts))

    regex = ""
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment is None:
            regex += r"(?:(?!\.)[^/]*(?:/|$))*" if not last else r"(?:(?!\.)[^/]*(?:/(?!\.)[^/]*)*)?"
        else:
            regex += segment + ("" if last else "/")
    return re.compile(regex + r"\Z")


class NamespaceFilter(BaseFilter):
    """
    Keep log entries whose namespace matches any configured glob pattern.

    Entries without a namespace are matched as ``"default"``. Matching is
    case-sensitive; ``*`` and ``?`` stay within one ``/``-separated segment
    and skip segments starting with ``.``. An empty pattern list matches
    nothing.
    """

    def __init__(self, ns: Union[str, Iterable[str], None] = None):
        """
        Initialize namespace filter.

        Args:
            ns: Glob pattern or list of patterns (default: match all)

        Example:
            # Only database namespaces
            filter = NamespaceFilter(["db*"])

            # Either of two subsystems
            filter = NamespaceFilter(["http:*", "auth"])
        """
        if ns is None:
            patterns: Tuple[str, ...] = MATCH_ALL
        elif isinstance(ns, str):
            patterns = (ns,)
        else:
            patterns = tuple(ns)

        for pattern in patterns:
            if not isinstance(pattern, str):
                raise TypeError(f"namespace pattern must be a string, got {pattern!r}")

        self.patterns = patterns
        self._compiled = [compile_glob(pattern) for pattern in patterns]

    def matches(self, namespace: str) -> bool:
        """Check a namespace string against the patterns."""
        return any(regex.match(namespace) for regex in self._compiled)

    def should_log(self, entry: LogEntry) -> bool:
        """
        Check if entry's namespace matches one of the patterns.

        Args:
            entry: Log entry to check

        Returns:
            True if the namespace matches, False otherwise
        """
        return self.matches(entry.ns or DEFAULT_NAMESPACE)

    def __repr__(self) -> str:
        """String representation."""
        return f"NamespaceFilter(ns={list(self.patterns)})"
