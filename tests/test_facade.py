"""Tests for the generation facade: synchronous and streaming paths."""
import pytest
from unittest.mock import patch

from sitewright.config import BuildConfig
from sitewright.generation.builder import ProjectBuilder
from sitewright.generation.errors import UnsupportedKindError, ValidationError
from sitewright.generation.facade import GenerationFacade, StreamSession
from sitewright.generation.models import OutputKind
from sitewright.generation.parser import parse_output


@pytest.fixture
def facade(output_root, build_config):
    return GenerationFacade(root=output_root, builder=ProjectBuilder(build_config))


async def _async_chunks(chunks):
    for chunk in chunks:
        yield chunk


async def _collect(stream):
    return [chunk async for chunk in stream]


# --- synchronous path ---

@pytest.mark.asyncio
async def test_generate_single_file(facade):
    result = await facade.generate_and_save("```html\n<p>hi</p>\n```", OutputKind.SINGLE_FILE, 1)

    assert result.kind == OutputKind.SINGLE_FILE
    assert result.written_files == ["index.html"]
    assert result.build is None
    assert result.directory.exists()
    assert (result.directory.path / "index.html").read_text(encoding="utf-8") == "<p>hi</p>"


@pytest.mark.asyncio
async def test_generate_multi_file(facade, sample_multi_file_response):
    result = await facade.generate_and_save(sample_multi_file_response, "multi_file", 2)

    assert result.written_files == ["index.html", "style.css", "script.js"]
    assert result.absolute_path().endswith("multi_file_2")


@pytest.mark.asyncio
async def test_unknown_kind_does_no_work(facade, output_root):
    with pytest.raises(UnsupportedKindError):
        await facade.generate_and_save("<p>hi</p>", "react_project", 1)

    assert not output_root.exists()


@pytest.mark.asyncio
async def test_validation_error_propagates(facade, output_root):
    with pytest.raises(ValidationError):
        await facade.generate_and_save("   ", OutputKind.MULTI_FILE, 1)

    assert not output_root.exists()


@pytest.mark.asyncio
async def test_regeneration_overwrites(facade):
    await facade.generate_and_save("<p>one</p>", OutputKind.SINGLE_FILE, 7)
    result = await facade.generate_and_save("<p>two</p>", OutputKind.SINGLE_FILE, 7)

    assert (result.directory.path / "index.html").read_text(encoding="utf-8") == "<p>two</p>"


@pytest.mark.asyncio
async def test_framework_project_scaffolds_and_builds(facade):
    result = await facade.generate_and_save("# Todo app\nUses Vue 3.", OutputKind.FRAMEWORK_PROJECT, 3)

    assert "package.json" in result.written_files
    assert "README.md" in result.written_files
    assert result.build is not None
    assert result.build.succeeded is True
    assert (result.directory.path / "dist" / "index.html").exists()


@pytest.mark.asyncio
async def test_framework_build_failure_is_not_fatal(output_root, failing_build_config):
    facade = GenerationFacade(root=output_root, builder=ProjectBuilder(failing_build_config))

    result = await facade.generate_and_save("", OutputKind.FRAMEWORK_PROJECT, 4)

    assert result.directory.exists()
    assert (result.directory.path / "package.json").exists()
    assert (result.directory.path / "src" / "App.vue").exists()
    assert result.build.attempted is True
    assert result.build.succeeded is False
    assert "README.md" not in result.written_files


@pytest.mark.asyncio
async def test_write_errors_propagate(facade):
    with patch("sitewright.generation.facade.write_file_set", side_effect=PermissionError("read-only")):
        with pytest.raises(PermissionError):
            await facade.generate_and_save("<p>x</p>", OutputKind.SINGLE_FILE, 1)


# --- streaming path ---

@pytest.mark.asyncio
async def test_stream_passthrough_equals_accumulation(facade, output_root):
    chunks = ["<ht", "ml>ok</html>"]

    received = await _collect(facade.generate_and_save_stream(chunks, OutputKind.SINGLE_FILE, 5))

    assert received == chunks
    expected = parse_output("<html>ok</html>", OutputKind.SINGLE_FILE).html
    assert (output_root / "html_5" / "index.html").read_text(encoding="utf-8") == expected


@pytest.mark.asyncio
async def test_stream_accepts_async_source(facade, output_root):
    chunks = ["```html\n<h1>", "x</h1>\n```\n", "```css\nh1{}\n```"]

    received = await _collect(facade.generate_and_save_stream(_async_chunks(chunks), "multi_file", 6))

    assert received == chunks
    directory = output_root / "multi_file_6"
    assert sorted(p.name for p in directory.iterdir()) == ["index.html", "style.css"]


@pytest.mark.asyncio
async def test_stream_finalize_failure_is_swallowed(facade, output_root):
    received = await _collect(facade.generate_and_save_stream(["  ", "\n"], OutputKind.SINGLE_FILE, 8))

    assert received == ["  ", "\n"]
    assert not (output_root / "html_8").exists()


def test_stream_rejects_unknown_kind_eagerly(facade):
    with pytest.raises(UnsupportedKindError):
        facade.generate_and_save_stream(["x"], "svelte", 1)


@pytest.mark.asyncio
async def test_stream_source_error_skips_finalize(facade, output_root):
    def broken_source():
        yield "<p>partial"
        raise ConnectionError("model stream dropped")

    stream = facade.generate_and_save_stream(broken_source(), OutputKind.SINGLE_FILE, 9)
    received = []
    with pytest.raises(ConnectionError):
        async for chunk in stream:
            received.append(chunk)

    assert received == ["<p>partial"]
    assert not (output_root / "html_9").exists()


@pytest.mark.asyncio
async def test_stream_finalizes_exactly_once(facade):
    session = await facade.open_stream(["<p>", "once</p>"], OutputKind.SINGLE_FILE, 10)

    with patch("sitewright.generation.facade.write_file_set") as mock_write:
        again = await session.finalize()

    mock_write.assert_not_called()
    assert session.finalized is True
    assert again == session.directory
    assert session.text == "<p>once</p>"


@pytest.mark.asyncio
async def test_stream_framework_project_builds_and_writes_notes(facade, output_root):
    chunks = ["Project ", "notes"]

    session = await facade.open_stream(chunks, OutputKind.FRAMEWORK_PROJECT, 12)

    directory = output_root / "vue_project_12"
    assert (directory / "package.json").exists()
    assert (directory / "README.md").read_text(encoding="utf-8") == "Project notes"
    assert session.build is not None and session.build.succeeded is True
    assert session.build_task.done()


@pytest.mark.asyncio
async def test_stream_framework_scaffolds_before_first_chunk(output_root):
    facade = GenerationFacade(
        root=output_root,
        builder=ProjectBuilder(BuildConfig(build_command=["definitely-not-npm"], install_command=["definitely-not-npm"])),
    )
    stream = facade.generate_and_save_stream(["a", "b"], OutputKind.FRAMEWORK_PROJECT, 13)

    first = await stream.__anext__()

    assert first == "a"
    assert (output_root / "vue_project_13" / "package.json").exists()
    rest = await _collect(stream)
    assert rest == ["b"]


@pytest.mark.asyncio
async def test_stream_closed_early_skips_finalize_but_reaps_build(facade, output_root):
    sessions = []

    class RecordingSession(StreamSession):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            sessions.append(self)

    with patch("sitewright.generation.facade.StreamSession", RecordingSession):
        stream = facade.generate_and_save_stream(
            ["Some notes", " that never finish"], OutputKind.FRAMEWORK_PROJECT, 14
        )

    assert await stream.__anext__() == "Some notes"
    await stream.aclose()

    session = sessions[0]
    project = output_root / "vue_project_14"
    assert session.finalized is False
    assert not (project / "README.md").exists()
    assert session.build_task.done()
    assert (project / "dist" / "index.html").exists()
