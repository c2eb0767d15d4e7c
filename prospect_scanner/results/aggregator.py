from collections.abc import Iterable

from prospect_scanner.session.models import FileStatus, Prospect, UploadedFile


def aggregate(files: Iterable[UploadedFile]) -> list[Prospect]:
    """Flatten the records of every completed file, in file-list order."""
    prospects: list[Prospect] = []
    for uploaded in files:
        if uploaded.status is FileStatus.COMPLETED and uploaded.extracted_data:
            prospects.extend(uploaded.extracted_data)
    return prospects


def matches(prospect: Prospect, query: str) -> bool:
    """Case-insensitive substring match against any field of the record."""
    needle = query.lower()
    return any(needle in value.lower() for value in prospect.values())


def filter_prospects(records: Iterable[Prospect], query: str) -> list[Prospect]:
    """Records matching ``query``; an empty query keeps everything."""
    if not query:
        return list(records)
    return [p for p in records if matches(p, query)]
