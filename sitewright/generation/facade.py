# sitewright/generation/facade.py
"""
Single entry point of the materialization pipeline.

Collaborators hand over model output (a complete string, or a chunk stream),
an output kind and an application id, and get back a directory handle.
Concurrent calls for the same application id are not serialized: the last
writer wins.
"""
import asyncio
from pathlib import Path
from typing import AsyncIterable, AsyncIterator, Iterable, List, Optional, Union

from sitewright.constants import README_FILE
from sitewright.generation.builder import ProjectBuilder
from sitewright.generation.models import (
    AppId,
    BuildOutcome,
    GenerationResult,
    OutputDirectory,
    OutputKind,
)
from sitewright.generation.parser import parse_output
from sitewright.generation.scaffolder import ProjectScaffolder, skeleton_files
from sitewright.generation.writer import planned_files, validate_app_id, write_file_set
from sitewright.utils.logging import get_logger

logger = get_logger(__name__)

Chunks = Union[Iterable[str], AsyncIterable[str]]


async def _iterate(chunks: Chunks) -> AsyncIterator[str]:
    """Iterate a sync or async chunk source uniformly."""
    if hasattr(chunks, "__aiter__"):
        async for chunk in chunks:
            yield chunk
    else:
        for chunk in chunks:
            yield chunk


class StreamSession:
    """
    Per-call state of one streaming generation.

    Holds the accumulator and guarantees that finalize runs at most once.
    """

    def __init__(self, facade: "GenerationFacade", kind: OutputKind, app_id: AppId):
        self.facade = facade
        self.kind = kind
        self.app_id = app_id
        self.chunks: List[str] = []
        self.directory: Optional[OutputDirectory] = None
        self.build_task: Optional["asyncio.Task[BuildOutcome]"] = None
        self.build: Optional[BuildOutcome] = None
        self.finalized = False
        self._logger = logger.with_context(app_id=str(app_id), kind=kind.value)

    def append(self, chunk: str) -> None:
        self.chunks.append(chunk)

    @property
    def text(self) -> str:
        return "".join(self.chunks)

    def start(self) -> None:
        """Scaffold and kick off the build early for framework projects."""
        if self.kind is not OutputKind.FRAMEWORK_PROJECT:
            return
        try:
            self.directory = self.facade.scaffolder.scaffold(self.app_id)
        except OSError:
            self._logger.exception("Scaffolding failed before streaming")
            return
        self.build_task = asyncio.ensure_future(self.facade.builder.build(self.directory))

    async def finalize(self) -> Optional[OutputDirectory]:
        """
        Materialize the accumulated text. Errors are logged, never raised.

        Returns:
            The output directory, or None if nothing usable was produced
        """
        if self.finalized:
            return self.directory
        self.finalized = True

        try:
            if self.kind.is_parsed:
                file_set = parse_output(self.text, self.kind)
                self.directory = write_file_set(file_set, self.app_id, self.facade.root)
                self._logger.info(f"Stream output saved to {self.directory.absolute_path()}")
            elif self.directory is not None:
                self.facade.scaffolder.write_notes(self.directory, self.text.strip())
                self.build = await self.wait_for_build()
        except Exception:
            self._logger.exception("Failed to save streamed output")
            return None

        return self.directory

    async def wait_for_build(self) -> Optional[BuildOutcome]:
        if self.build_task is None:
            return None
        self.build = await self.build_task
        self._logger.info(
            f"Stream build finished: attempted={self.build.attempted} succeeded={self.build.succeeded}"
        )
        return self.build


class GenerationFacade:
    """
    Dispatches by output kind and drives parse -> write, or
    scaffold -> build for framework projects.
    """

    def __init__(
        self,
        root: Optional[Union[str, Path]] = None,
        scaffolder: Optional[ProjectScaffolder] = None,
        builder: Optional[ProjectBuilder] = None,
    ):
        self.root = root
        self.scaffolder = scaffolder or ProjectScaffolder(root)
        self.builder = builder or ProjectBuilder()

    async def generate_and_save(self, model_text: str, kind, app_id: AppId) -> GenerationResult:
        """
        Materialize a complete model response.

        Args:
            model_text: The complete model output
            kind: OutputKind or its string value
            app_id: Application identifier

        Returns:
            GenerationResult with the directory handle (and build outcome for
            framework projects)

        Raises:
            UnsupportedKindError: Unknown kind, nothing is done
            ValidationError: Empty primary content or invalid app id
            OSError: Directory or file could not be written
        """
        kind = OutputKind.parse(kind)
        validate_app_id(app_id)
        log = logger.with_context(app_id=str(app_id), kind=kind.value)

        try:
            if kind.is_parsed:
                file_set = parse_output(model_text, kind)
                directory = write_file_set(file_set, app_id, self.root)
                return GenerationResult(
                    directory=directory,
                    kind=kind,
                    written_files=planned_files(file_set),
                )

            notes = (model_text or "").strip() or None
            directory = self.scaffolder.scaffold(app_id, notes)
            written = sorted(skeleton_files(app_id))
            if notes:
                written.append(README_FILE)

            build = await self.builder.build(directory)
            return GenerationResult(directory=directory, kind=kind, written_files=written, build=build)
        except Exception as e:
            log.error(f"Code generation failed: {e}")
            raise

    def generate_and_save_stream(self, chunks: Chunks, kind, app_id: AppId) -> AsyncIterator[str]:
        """
        Pass chunks through to the caller and materialize them once the source ends.

        The kind and app id are validated immediately, before any chunk is read.

        Args:
            chunks: Sync or async iterable of text chunks
            kind: OutputKind or its string value
            app_id: Application identifier

        Returns:
            Async iterator yielding every chunk unchanged and in order
        """
        kind = OutputKind.parse(kind)
        validate_app_id(app_id)
        return self._stream(StreamSession(self, kind, app_id), chunks)

    async def _stream(self, session: StreamSession, chunks: Chunks) -> AsyncIterator[str]:
        session.start()
        completed = False
        try:
            async for chunk in _iterate(chunks):
                session.append(chunk)
                yield chunk
            completed = True
        finally:
            if completed:
                await session.finalize()
            elif session.build_task is not None:
                # Source failed or the consumer stopped; still reap the build
                await session.wait_for_build()

    async def open_stream(self, chunks: Chunks, kind, app_id: AppId) -> StreamSession:
        """
        Consume a whole chunk stream and return its finished session.

        Convenience for callers that only need the side effect.
        """
        kind = OutputKind.parse(kind)
        validate_app_id(app_id)
        session = StreamSession(self, kind, app_id)
        async for _ in self._stream(session, chunks):
            pass
        return session
