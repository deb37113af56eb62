"""File-name pattern expansion.

Two placeholder kinds are supported::

    [[site]]          -> host of the site, without scheme and port
    {{yyyy-MM-dd}}    -> the timestamp formatted with the enclosed spec

Date specs use the classic pattern letters (``yyyy``, ``MM``, ``dd``,
``HH``, ``mm``, ``ss`` ...), ``'quoted'`` literal text and ``''`` for a
single quote.
"""

from __future__ import annotations

import re
from datetime import datetime

from src.reports.errors import FormatSpecError

SITE_PLACEHOLDER = "[[site]]"
DATETIME_PATTERN = re.compile(r"\{\{(.*?)\}\}")


def normalize_site(site: str | None) -> str:
    """Strip everything up to ``//`` and cut the port off."""
    if not site:
        return ""
    i = site.find("//")
    if i >= 0:
        site = site[i + 2 :]
    i = site.find(":")
    if i >= 0:
        site = site[:i]
    return site


def expand_pattern(pattern: str, site: str | None, when: datetime | None = None) -> str:
    """Resolve site and date placeholders in a file-name pattern.

    Raises:
        FormatSpecError: If a ``{{...}}`` segment is not a valid date spec.
    """
    if when is None:
        when = datetime.now()
    # Single pass: replaced text is never re-scanned.
    name = pattern.replace(SITE_PLACEHOLDER, normalize_site(site))

    out: list[str] = []
    last = 0
    for match in DATETIME_PATTERN.finditer(name):
        out.append(name[last : match.start()])
        out.append(format_date(match.group(1), when))
        last = match.end()
    out.append(name[last:])
    return "".join(out)


# ═══════════════════════════════════════════════════════════════════════════
#  Date spec formatting
# ═══════════════════════════════════════════════════════════════════════════


def _field(letter: str, count: int, when: datetime, spec: str) -> str:
    if letter == "y":
        if count == 2:
            return f"{when.year % 100:02d}"
        return str(when.year).zfill(count)
    if letter == "M":
        if count >= 4:
            return when.strftime("%B")
        if count == 3:
            return when.strftime("%b")
        return str(when.month).zfill(count)
    if letter == "d":
        return str(when.day).zfill(count)
    if letter == "D":
        return str(when.timetuple().tm_yday).zfill(count)
    if letter == "H":
        return str(when.hour).zfill(count)
    if letter == "k":
        return str(when.hour or 24).zfill(count)
    if letter == "K":
        return str(when.hour % 12).zfill(count)
    if letter == "h":
        return str(when.hour % 12 or 12).zfill(count)
    if letter == "m":
        return str(when.minute).zfill(count)
    if letter == "s":
        return str(when.second).zfill(count)
    if letter == "S":
        return str(when.microsecond // 1000).zfill(count)
    if letter == "E":
        return when.strftime("%A" if count >= 4 else "%a")
    if letter == "u":
        return str(when.isoweekday()).zfill(count)
    if letter == "a":
        return "AM" if when.hour < 12 else "PM"
    if letter == "z":
        return when.tzname() or ""
    if letter == "Z":
        return when.strftime("%z")
    raise FormatSpecError(spec, f"unknown pattern letter '{letter}'")


def format_date(spec: str, when: datetime) -> str:
    """Format *when* according to a date pattern such as ``yyyy-MM-dd``."""
    out: list[str] = []
    i = 0
    n = len(spec)
    while i < n:
        ch = spec[i]
        if ch == "'":
            if i + 1 < n and spec[i + 1] == "'":
                out.append("'")
                i += 2
                continue
            i += 1
            while True:
                if i >= n:
                    raise FormatSpecError(spec, "unterminated quote")
                if spec[i] == "'":
                    if i + 1 < n and spec[i + 1] == "'":
                        out.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                out.append(spec[i])
                i += 1
        elif ch.isascii() and ch.isalpha():
            j = i
            while j < n and spec[j] == ch:
                j += 1
            out.append(_field(ch, j - i, when, spec))
            i = j
        else:
            out.append(ch)
            i += 1
    return "".join(out)
