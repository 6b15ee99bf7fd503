# sitewright/generation/writer.py
"""
Materialization of parsed file sets on disk.

Every kind follows the same three steps: validate, resolve the output
directory, write the kind's files. Only the file table differs per kind.
"""
from pathlib import Path
from typing import Dict, List, Optional, Union

from sitewright.config import output_root
from sitewright.constants import CSS_FILE, HTML_FILE, JS_FILE
from sitewright.generation.errors import ValidationError
from sitewright.generation.models import AppId, OutputDirectory, OutputKind, ParsedFileSet
from sitewright.utils.logging import get_logger

logger = get_logger(__name__)

# slot -> file name, per parsed kind
FILE_LAYOUTS: Dict[OutputKind, Dict[str, str]] = {
    OutputKind.SINGLE_FILE: {"html": HTML_FILE},
    OutputKind.MULTI_FILE: {"html": HTML_FILE, "css": CSS_FILE, "js": JS_FILE},
}


def validate_app_id(app_id: AppId) -> str:
    """
    Check that an application id can be used as part of a directory name.

    Returns:
        The id rendered as a string

    Raises:
        ValidationError: For non-positive ints, blank strings or path-like ids
    """
    if isinstance(app_id, bool) or app_id is None:
        raise ValidationError(f"Invalid application id: {app_id!r}")
    if isinstance(app_id, int):
        if app_id <= 0:
            raise ValidationError(f"Application id must be positive, got {app_id}")
        return str(app_id)
    if isinstance(app_id, str):
        rendered = app_id.strip()
        if not rendered or "/" in rendered or "\\" in rendered or rendered in (".", ".."):
            raise ValidationError(f"Invalid application id: {app_id!r}")
        return rendered
    raise ValidationError(f"Invalid application id type: {type(app_id).__name__}")


def output_directory_for(kind, app_id: AppId, root: Optional[Union[str, Path]] = None) -> OutputDirectory:
    """Compute the handle for `root/{kind}_{appId}` without touching the disk."""
    kind = OutputKind.parse(kind)
    name = f"{kind.value}_{validate_app_id(app_id)}"
    return OutputDirectory(output_root(root) / name, kind, app_id)


def resolve_output_directory(kind, app_id: AppId, root: Optional[Union[str, Path]] = None) -> OutputDirectory:
    """Compute the output directory and create it (with parents) if absent."""
    directory = output_directory_for(kind, app_id, root)
    directory.path.mkdir(parents=True, exist_ok=True)
    return directory


def planned_files(file_set: ParsedFileSet) -> List[str]:
    """File names that writing `file_set` would produce."""
    layout = FILE_LAYOUTS.get(file_set.kind, {})
    return [layout[slot] for slot, value in file_set.slots() if value and value.strip()]


def write_text(directory: Path, filename: str, content: str) -> Optional[Path]:
    """Overwrite `directory/filename` with `content`; blank content is skipped."""
    if not content or not content.strip():
        return None
    file_path = directory / filename
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path


def write_file_set(
    file_set: ParsedFileSet,
    app_id: AppId,
    root: Optional[Union[str, Path]] = None,
) -> OutputDirectory:
    """
    Write a parsed file set under its deterministic output directory.

    Args:
        file_set: Parsed SINGLE_FILE or MULTI_FILE result
        app_id: Application identifier
        root: Optional output root override (defaults to the configured root)

    Returns:
        The output directory handle

    Raises:
        ValidationError: Empty primary slot, bad app id, or a kind that is
            scaffolded rather than written
        OSError: If the directory or a file cannot be written
    """
    if file_set.kind not in FILE_LAYOUTS:
        raise ValidationError(f"{file_set.kind.value} output is scaffolded, not written from a file set")

    # Validation happens before the directory is created
    file_set.require_primary()
    directory = output_directory_for(file_set.kind, app_id, root)

    directory.path.mkdir(parents=True, exist_ok=True)

    layout = FILE_LAYOUTS[file_set.kind]
    written = []
    for slot, value in file_set.slots():
        if write_text(directory.path, layout[slot], value) is not None:
            written.append(layout[slot])

    logger.info(
        f"Saved {file_set.kind.value} output to {directory.absolute_path()}",
        extra={"app_id": str(app_id), "files": written},
    )
    return directory


class OutputWriter:
    """Service wrapper around :func:`write_file_set` bound to an output root."""

    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = root

    def write(self, file_set: ParsedFileSet, app_id: AppId) -> OutputDirectory:
        return write_file_set(file_set, app_id, self.root)

    def directory_for(self, kind, app_id: AppId) -> OutputDirectory:
        return output_directory_for(kind, app_id, self.root)
