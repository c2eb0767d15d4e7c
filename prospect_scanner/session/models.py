import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class FileStatus(str, enum.Enum):
    """Lifecycle of an uploaded image: pending -> processing -> completed | error."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class ProspectField:
    """One column of a prospect record."""

    attribute: str
    key: str
    header: str


PROSPECT_FIELDS: tuple[ProspectField, ...] = (
    ProspectField(attribute="name", key="Name", header="Name"),
    ProspectField(attribute="phone_number", key="PhoneNumber", header="Phone Number"),
    ProspectField(attribute="company", key="Company", header="Company"),
    ProspectField(attribute="email", key="Email", header="Email"),
    ProspectField(attribute="address", key="Address", header="Address"),
)


@dataclass(frozen=True)
class Prospect:
    """A single contact extracted from a page image."""

    name: str = ""
    phone_number: str = ""
    company: str = ""
    email: str = ""
    address: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Prospect":
        """Build a prospect from a service object keyed by wire names.

        Missing or null values become empty strings. No other validation is
        applied; the service is trusted to follow its schema.
        """
        values: dict[str, str] = {}
        for f in PROSPECT_FIELDS:
            value = raw.get(f.key)
            values[f.attribute] = "" if value is None else str(value)
        return cls(**values)

    def values(self) -> list[str]:
        """Field values in column order."""
        return [getattr(self, f.attribute) for f in PROSPECT_FIELDS]

    def to_dict(self) -> dict[str, str]:
        return {f.key: getattr(self, f.attribute) for f in PROSPECT_FIELDS}


@dataclass(frozen=True)
class ImageSource:
    """A candidate file picked by the user; the reference to its raw bytes."""

    path: Path
    name: str
    mime_type: str

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class PreviewHandle:
    """Opaque reference to a displayable preview held by the preview store."""

    key: str


@dataclass(frozen=True)
class UploadedFile:
    """An accepted image and its processing state.

    ``extracted_data`` is set if and only if ``status`` is completed.
    """

    id: str
    source: ImageSource
    preview: PreviewHandle
    status: FileStatus = FileStatus.PENDING
    extracted_data: tuple[Prospect, ...] | None = None

    @property
    def is_runnable(self) -> bool:
        return self.status in (FileStatus.PENDING, FileStatus.ERROR)


@dataclass(frozen=True)
class SessionState:
    """Snapshot of everything the user sees: the file list, the run flag, the error."""

    files: tuple[UploadedFile, ...] = field(default_factory=tuple)
    is_processing: bool = False
    error: str | None = None

    def find(self, file_id: str) -> UploadedFile | None:
        for uploaded in self.files:
            if uploaded.id == file_id:
                return uploaded
        return None

    def runnable(self) -> list[UploadedFile]:
        """Pending and failed files, in list order."""
        return [f for f in self.files if f.is_runnable]


@dataclass(frozen=True)
class ProcessingStatus:
    """Progress counters derived from a session state."""

    total: int
    pending: int
    processed: int
    failed: int
    is_processing: bool
    current_file: str | None = None

    @classmethod
    def from_state(cls, state: SessionState) -> "ProcessingStatus":
        current = next(
            (f.source.name for f in state.files if f.status is FileStatus.PROCESSING),
            None,
        )
        return cls(
            total=len(state.files),
            pending=sum(1 for f in state.files if f.status is FileStatus.PENDING),
            processed=sum(1 for f in state.files if f.status is FileStatus.COMPLETED),
            failed=sum(1 for f in state.files if f.status is FileStatus.ERROR),
            is_processing=state.is_processing,
            current_file=current,
        )

    def describe(self) -> str:
        """Human readable progress line."""
        if self.is_processing:
            text = f"Processing... ({self.processed}/{self.total})"
        elif self.pending > 0:
            text = f"{self.pending} files ready to process"
        else:
            text = "All files processed"
        if self.failed > 0:
            text += f" ({self.failed} failed)"
        return text
