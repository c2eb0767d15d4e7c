"""Pure state transitions for an extraction session.

Every function takes the current state and returns the next state together
with the side-effecting commands the session must execute. Nothing here
touches the filesystem or the network.
"""

import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from prospect_scanner.session.models import (
    FileStatus,
    ImageSource,
    PreviewHandle,
    Prospect,
    SessionState,
    UploadedFile,
)


@dataclass(frozen=True)
class CreatePreview:
    handle: PreviewHandle
    source: ImageSource


@dataclass(frozen=True)
class ReleasePreview:
    handle: PreviewHandle


@dataclass(frozen=True)
class ExtractFile:
    file_id: str


Command = CreatePreview | ReleasePreview | ExtractFile


@dataclass(frozen=True)
class Transition:
    state: SessionState
    commands: tuple[Command, ...] = field(default_factory=tuple)


def _new_file_id() -> str:
    return uuid.uuid4().hex


def too_many_files_message(max_files: int) -> str:
    return f"You can only upload up to {max_files} images at a time."


def intake(
    state: SessionState,
    candidates: Sequence[ImageSource],
    *,
    max_files: int,
    new_id: Callable[[], str] = _new_file_id,
) -> Transition:
    """Accept a whole batch of candidates, or reject it entirely over the cap."""
    if len(state.files) + len(candidates) > max_files:
        return Transition(replace(state, error=too_many_files_message(max_files)))

    accepted: list[UploadedFile] = []
    commands: list[Command] = []
    for source in candidates:
        file_id = new_id()
        handle = PreviewHandle(key=file_id)
        accepted.append(UploadedFile(id=file_id, source=source, preview=handle))
        commands.append(CreatePreview(handle=handle, source=source))
    return Transition(
        replace(state, files=state.files + tuple(accepted), error=None),
        tuple(commands),
    )


def remove(state: SessionState, file_id: str) -> Transition:
    """Drop a file regardless of its status and release its preview."""
    target = state.find(file_id)
    if target is None:
        return Transition(state)
    remaining = tuple(f for f in state.files if f.id != file_id)
    return Transition(
        replace(state, files=remaining),
        (ReleasePreview(target.preview),),
    )


def reset(state: SessionState) -> Transition:
    """Clear everything unless a run is in progress."""
    if state.is_processing:
        return Transition(state)
    commands = tuple(ReleasePreview(f.preview) for f in state.files)
    return Transition(SessionState(), commands)


def begin_run(state: SessionState) -> Transition:
    """Start a run over pending and failed files.

    Leaves the state untouched when a run is already active or there is
    nothing to process, so the processing flag never flickers.
    """
    if state.is_processing:
        return Transition(state)
    runnable = state.runnable()
    if not runnable:
        return Transition(state)
    return Transition(
        replace(state, is_processing=True, error=None),
        tuple(ExtractFile(f.id) for f in runnable),
    )


def finish_run(state: SessionState) -> Transition:
    return Transition(replace(state, is_processing=False))


def _update_file(
    state: SessionState,
    file_id: str,
    update: Callable[[UploadedFile], UploadedFile],
) -> Transition:
    if state.find(file_id) is None:
        return Transition(state)
    files = tuple(update(f) if f.id == file_id else f for f in state.files)
    return Transition(replace(state, files=files))


def mark_processing(state: SessionState, file_id: str) -> Transition:
    def _update(uploaded: UploadedFile) -> UploadedFile:
        # completed is terminal
        if not uploaded.is_runnable:
            return uploaded
        return replace(uploaded, status=FileStatus.PROCESSING, extracted_data=None)

    return _update_file(state, file_id, _update)


def mark_completed(
    state: SessionState,
    file_id: str,
    prospects: Sequence[Prospect],
) -> Transition:
    return _update_file(
        state,
        file_id,
        lambda f: replace(f, status=FileStatus.COMPLETED, extracted_data=tuple(prospects)),
    )


def mark_failed(state: SessionState, file_id: str) -> Transition:
    return _update_file(
        state,
        file_id,
        lambda f: replace(f, status=FileStatus.ERROR, extracted_data=None),
    )
