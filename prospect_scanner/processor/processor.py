import asyncio

from prospect_scanner.config.settings import Settings
from prospect_scanner.extraction.base import BaseExtractor
from prospect_scanner.extraction.factory import ExtractorFactory
from prospect_scanner.logging.logger import Log
from prospect_scanner.processor.file_loader import ImageEncoder
from prospect_scanner.processor.models import RunSummary
from prospect_scanner.session import transitions
from prospect_scanner.session.session import Session
from prospect_scanner.session.transitions import ExtractFile


class SequentialProcessor:
    """Sends pending and failed images to the extractor, one at a time.

    Per file: mark processing -> encode -> extract -> mark completed.
    A failure marks only that file as error; the run moves on to the next one.
    """

    def __init__(self, encoder: ImageEncoder, extractor: BaseExtractor) -> None:
        self._encoder = encoder
        self._extractor = extractor

    async def run(self, session: Session) -> RunSummary:
        """Process the runnable subset captured at start, in list order."""
        summary = RunSummary()
        started = session.apply(transitions.begin_run(session.state))
        queue = [c for c in started.commands if isinstance(c, ExtractFile)]
        if not queue:
            Log.info("Nothing to process")
            return summary

        Log.info(f"Processing {len(queue)} files")
        try:
            for command in queue:
                await self._process_one(session, command.file_id, summary)
        finally:
            session.apply(transitions.finish_run(session.state))

        Log.info(
            f"Run finished: {summary.completed} completed, {summary.failed} failed, "
            f"{summary.skipped} skipped, {summary.prospects} prospects"
        )
        return summary

    async def _process_one(self, session: Session, file_id: str, summary: RunSummary) -> None:
        uploaded = session.get(file_id)
        if uploaded is None or not uploaded.is_runnable:
            Log.debug(f"Skipping file {file_id}: no longer queued")
            summary.skipped += 1
            return

        summary.attempted += 1
        session.apply(transitions.mark_processing(session.state, file_id))
        try:
            encoded = await self._encoder.encode(uploaded.source)
            prospects = await asyncio.to_thread(
                self._extractor.extract, encoded, uploaded.source.mime_type
            )
        except Exception as exc:
            Log.error(f"Error processing file {uploaded.source.name}: {exc}", exc=exc)
            session.apply(transitions.mark_failed(session.state, file_id))
            summary.failed += 1
            return
        except BaseException:
            # Cancelled or interrupted: leave the file retryable, not stuck in processing.
            Log.warning(f"Interrupted while processing {uploaded.source.name}")
            session.apply(transitions.mark_failed(session.state, file_id))
            summary.failed += 1
            raise

        session.apply(transitions.mark_completed(session.state, file_id, prospects))
        summary.completed += 1
        summary.prospects += len(prospects)
        Log.info(f"Extracted {len(prospects)} prospects from {uploaded.source.name}")


def build_processor(settings: Settings) -> SequentialProcessor:
    """Build a SequentialProcessor with the configured extractor."""
    return SequentialProcessor(
        encoder=ImageEncoder(),
        extractor=ExtractorFactory.create(settings),
    )
