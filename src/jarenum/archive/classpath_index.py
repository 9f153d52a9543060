"""Parsing of the classpath index entry.

Each non-blank line names one archive-relative entry::

    - "BOOT-INF/lib/spring-core-6.1.2.jar"
"""

import re

from jarenum.errors import ClasspathIndexError

_LINE_RE = re.compile(r'^- "(?P<name>[^"]+)"$')


def parse_classpath_index(content: bytes, source: str = "classpath index") -> list[str]:
    """Return the listed entry names in file order."""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ClasspathIndexError(f"{source} is not valid UTF-8: {e}") from e

    names: list[str] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        match = _LINE_RE.match(line)
        if not match:
            raise ClasspathIndexError(f"{source}:{line_no}: cannot parse line {line!r}")
        names.append(match.group("name"))
    return names
