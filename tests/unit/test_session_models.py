from pathlib import Path

from prospect_scanner.session.models import (
    PROSPECT_FIELDS,
    FileStatus,
    ImageSource,
    PreviewHandle,
    ProcessingStatus,
    Prospect,
    SessionState,
    UploadedFile,
)


def _file(file_id: str, status: FileStatus, data: tuple[Prospect, ...] | None = None) -> UploadedFile:
    source = ImageSource(path=Path(f"/tmp/{file_id}.png"), name=f"{file_id}.png", mime_type="image/png")
    return UploadedFile(
        id=file_id,
        source=source,
        preview=PreviewHandle(key=file_id),
        status=status,
        extracted_data=data,
    )


class TestProspectFromDict:
    def test_maps_wire_keys(self) -> None:
        p = Prospect.from_dict(
            {
                "Name": "Alice",
                "PhoneNumber": "01712345678",
                "Company": "Acme",
                "Email": "a@acme.com",
                "Address": "Dhaka",
            }
        )
        assert p == Prospect("Alice", "01712345678", "Acme", "a@acme.com", "Dhaka")

    def test_missing_and_null_fields_become_empty(self) -> None:
        p = Prospect.from_dict({"Name": "Bob", "Email": None})
        assert p.email == ""
        assert p.phone_number == ""
        assert p.address == ""

    def test_non_string_values_are_stringified(self) -> None:
        p = Prospect.from_dict({"Name": "Bob", "PhoneNumber": 1712345678})
        assert p.phone_number == "1712345678"

    def test_values_follow_column_order(self) -> None:
        p = Prospect("n", "p", "c", "e", "a")
        assert p.values() == ["n", "p", "c", "e", "a"]
        assert [f.header for f in PROSPECT_FIELDS] == [
            "Name",
            "Phone Number",
            "Company",
            "Email",
            "Address",
        ]

    def test_to_dict_round_trips_wire_keys(self) -> None:
        p = Prospect("n", "p", "c", "e", "a")
        assert Prospect.from_dict(p.to_dict()) == p


class TestImageSource:
    def test_is_image(self) -> None:
        assert ImageSource(Path("a.png"), "a.png", "image/png").is_image
        assert not ImageSource(Path("a.pdf"), "a.pdf", "application/pdf").is_image


class TestSessionState:
    def test_runnable_keeps_pending_and_error_in_order(self) -> None:
        state = SessionState(
            files=(
                _file("a", FileStatus.ERROR),
                _file("b", FileStatus.COMPLETED, ()),
                _file("c", FileStatus.PENDING),
            )
        )
        assert [f.id for f in state.runnable()] == ["a", "c"]

    def test_find_unknown_returns_none(self) -> None:
        assert SessionState().find("missing") is None


class TestProcessingStatus:
    def test_counts(self) -> None:
        state = SessionState(
            files=(
                _file("a", FileStatus.PENDING),
                _file("b", FileStatus.PROCESSING),
                _file("c", FileStatus.COMPLETED, ()),
                _file("d", FileStatus.ERROR),
            ),
            is_processing=True,
        )
        status = ProcessingStatus.from_state(state)
        assert (status.total, status.pending, status.processed, status.failed) == (4, 1, 1, 1)
        assert status.current_file == "b.png"

    def test_describe_while_processing(self) -> None:
        status = ProcessingStatus(total=4, pending=2, processed=1, failed=1, is_processing=True)
        assert status.describe() == "Processing... (1/4) (1 failed)"

    def test_describe_ready(self) -> None:
        status = ProcessingStatus(total=3, pending=3, processed=0, failed=0, is_processing=False)
        assert status.describe() == "3 files ready to process"

    def test_describe_all_processed(self) -> None:
        status = ProcessingStatus(total=2, pending=0, processed=2, failed=0, is_processing=False)
        assert status.describe() == "All files processed"
