"""
Subdomain wordlists.

A wordlist comes either from user-supplied text (labels separated by
newlines or commas) or from the packaged default file, and is always cut
to at most MAX_WORDLIST_ENTRIES labels before a scan.
"""

import re
from importlib import resources
from pathlib import Path
from typing import Optional

from .config import MAX_WORDLIST_ENTRIES
from .enums import LogLevel, WordlistSource
from .models import Wordlist


WORDLIST_SEPARATOR_PATTERN = re.compile(r"[\r\n,]+")

DEFAULT_WORDLIST_RESOURCE = "subdomains.txt"


def parse_wordlist(raw_text: Optional[str]) -> list[str]:
    """
    Split raw text into labels.

    Entries are separated by runs of CR, LF or commas, trimmed, and dropped
    when empty. Input order is kept; duplicates are kept.
    """
    if not raw_text:
        return []
    entries = (entry.strip() for entry in WORDLIST_SEPARATOR_PATTERN.split(raw_text))
    return [entry for entry in entries if entry]


def load_default_wordlist(path: Optional[Path] = None, logger=None) -> str:
    """
    Read the default wordlist text.

    Args:
        path: Optional file overriding the packaged list
        logger: Optional AuditLogger

    Returns:
        File contents, or "" if the file cannot be read
    """
    try:
        if path is not None:
            return Path(path).read_text(encoding="utf-8")
        resource = resources.files("domain_lookup") / "data" / DEFAULT_WORDLIST_RESOURCE
        return resource.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        if logger:
            logger.log(
                LogLevel.WARN,
                "Wordlist",
                "Default wordlist is not readable",
                {"path": str(path) if path else DEFAULT_WORDLIST_RESOURCE, "error": str(e)},
            )
        return ""


def build_wordlist(
    custom_text: Optional[str] = None,
    default_path: Optional[Path] = None,
    limit: int = MAX_WORDLIST_ENTRIES,
    logger=None,
) -> Wordlist:
    """
    Build a bounded wordlist for a scan.

    Args:
        custom_text: User-supplied labels; used when not blank
        default_path: Optional default wordlist file
        limit: Maximum number of entries (never above MAX_WORDLIST_ENTRIES)
        logger: Optional AuditLogger

    Returns:
        Wordlist with at most `limit` entries
    """
    limit = max(0, min(limit, MAX_WORDLIST_ENTRIES))

    if custom_text and custom_text.strip():
        source = WordlistSource.CUSTOM
        entries = parse_wordlist(custom_text)
    else:
        source = WordlistSource.DEFAULT
        entries = parse_wordlist(load_default_wordlist(default_path, logger=logger))

    original_count = len(entries)
    truncated = original_count > limit

    if truncated and logger:
        logger.log(
            LogLevel.INFO,
            "Wordlist",
            f"Wordlist cut to {limit} of {original_count} entries",
            {"source": source.value, "limit": limit, "original_count": original_count},
        )

    return Wordlist(
        entries=tuple(entries[:limit]),
        source=source,
        original_count=original_count,
        truncated=truncated,
    )
