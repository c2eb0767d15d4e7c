from collections.abc import Callable, Sequence

from prospect_scanner.logging.logger import Log
from prospect_scanner.results.aggregator import aggregate, filter_prospects
from prospect_scanner.session import transitions
from prospect_scanner.session.models import (
    ImageSource,
    ProcessingStatus,
    Prospect,
    SessionState,
    UploadedFile,
)
from prospect_scanner.session.previews import PreviewStore
from prospect_scanner.session.transitions import CreatePreview, ReleasePreview, Transition

StateListener = Callable[[SessionState], None]


class Session:
    """State container for one batch of uploaded images.

    All changes go through ``apply``: the new state is stored, preview
    commands are executed, and listeners receive the snapshot.
    """

    def __init__(self, previews: PreviewStore, max_files: int = 20) -> None:
        self._previews = previews
        self._max_files = max_files
        self._state = SessionState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def files(self) -> tuple[UploadedFile, ...]:
        return self._state.files

    @property
    def is_processing(self) -> bool:
        return self._state.is_processing

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def previews(self) -> PreviewStore:
        return self._previews

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def get(self, file_id: str) -> UploadedFile | None:
        return self._state.find(file_id)

    def apply(self, transition: Transition) -> Transition:
        """Commit a transition and run its preview commands.

        ``ExtractFile`` commands are left for the processor.
        """
        self._state = transition.state
        for command in transition.commands:
            if isinstance(command, CreatePreview):
                self._previews.create(command.handle, command.source)
            elif isinstance(command, ReleasePreview):
                self._previews.release(command.handle)
        for listener in self._listeners:
            listener(self._state)
        return transition

    def submit_files(self, candidates: Sequence[ImageSource]) -> bool:
        """Add a batch of images; the whole batch is rejected over the cap."""
        images = [c for c in candidates if c.is_image]
        if len(images) < len(candidates):
            Log.info(f"Ignored {len(candidates) - len(images)} non-image files")
        if not images:
            return False
        self.apply(transitions.intake(self._state, images, max_files=self._max_files))
        if self._state.error:
            Log.warning(f"Rejected batch of {len(images)} files: {self._state.error}")
            return False
        Log.info(f"Accepted {len(images)} files ({len(self._state.files)} total)")
        return True

    def remove_file(self, file_id: str) -> None:
        self.apply(transitions.remove(self._state, file_id))

    def reset(self) -> bool:
        """Clear the session; returns False when blocked by an active run."""
        if self._state.is_processing:
            Log.warning("Reset ignored while processing is in progress")
            return False
        self.apply(transitions.reset(self._state))
        return True

    def status(self) -> ProcessingStatus:
        return ProcessingStatus.from_state(self._state)

    def prospects(self) -> list[Prospect]:
        return aggregate(self._state.files)

    def search(self, query: str) -> list[Prospect]:
        return filter_prospects(self.prospects(), query)

    def close(self) -> None:
        self._previews.close()
