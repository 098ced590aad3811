"""Files downloaded more than once (same name, same size)."""

from __future__ import annotations

from collections.abc import Sequence

from ecoindex_analyzer.models import analytics, requests
from ecoindex_analyzer.utils import url as url_mod

# Names too generic to identify a file across URLs.
_IGNORED_FILENAMES = frozenset({"", "index.html"})


def compute_duplicate_stats(records: Sequence[requests.RequestRecord]) -> analytics.DuplicateAnalytics:
    """Find resources fetched from several URLs.

    Two requests are duplicates when the last path segment of their
    URLs and their resource sizes are equal.  Each group wastes
    ``(occurrences - 1) * resource_size`` bytes.  Groups are sorted by
    descending waste, then filename.
    """
    groups: dict[tuple[str, int], list[requests.RequestRecord]] = {}
    for record in records:
        filename = url_mod.extract_filename(record.url)
        if filename in _IGNORED_FILENAMES:
            continue
        groups.setdefault((filename, record.resource_size), []).append(record)

    duplicates = [
        analytics.DuplicateGroup(
            filename=filename,
            resource_size=size,
            resource_type=members[0].resource_type,
            urls=tuple(member.url for member in members),
            domains=tuple(sorted({member.domain for member in members if member.domain})),
            wasted_bytes=(len(members) - 1) * size,
        )
        for (filename, size), members in groups.items()
        if len(members) >= 2
    ]
    duplicates.sort(key=lambda group: (-group.wasted_bytes, group.filename))

    return analytics.DuplicateAnalytics(
        duplicates=tuple(duplicates),
        total_wasted_bytes=sum(group.wasted_bytes for group in duplicates),
        duplicate_count=len(duplicates),
    )
