# sitewright/generation/archive.py
"""
Zip packaging of output directories for download.
"""
import time
import zipfile
from pathlib import Path
from typing import List, Optional, Union

from sitewright.config import get_config
from sitewright.constants import ARCHIVE_EXCLUDES, ARCHIVE_MAX_AGE_HOURS
from sitewright.generation.models import OutputDirectory
from sitewright.utils.logging import get_logger

logger = get_logger(__name__)


def _download_dir(dest_dir: Optional[Union[str, Path]]) -> Path:
    target = Path(dest_dir) if dest_dir is not None else get_config().output.download_dir
    return target.expanduser().resolve()


def package_output_directory(
    directory: OutputDirectory,
    dest_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Zip an output directory as `{kind}_{appId}.zip`.

    Installed dependencies and VCS/editor folders are left out. Entries are
    stored relative to the project root.

    Args:
        directory: The directory to package
        dest_dir: Where to put the archive (defaults to the configured download dir)

    Returns:
        Path of the written archive

    Raises:
        FileNotFoundError: If the output directory does not exist
    """
    if not directory.exists():
        raise FileNotFoundError(f"Output directory does not exist: {directory.absolute_path()}")

    target_dir = _download_dir(dest_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    archive_path = target_dir / f"{directory.path.name}.zip"

    count = 0
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
        for path in sorted(directory.path.rglob("*")):
            relative = path.relative_to(directory.path)
            if path == archive_path or any(part in ARCHIVE_EXCLUDES for part in relative.parts):
                continue
            if path.is_file():
                archive.write(path, relative.as_posix())
                count += 1

    logger.info(f"Packaged {count} files into {archive_path} ({archive_path.stat().st_size} bytes)")
    return archive_path


def cleanup_expired_archives(
    dest_dir: Optional[Union[str, Path]] = None,
    max_age_hours: float = ARCHIVE_MAX_AGE_HOURS,
) -> List[Path]:
    """Delete archives older than `max_age_hours`. Returns the removed files."""
    target_dir = _download_dir(dest_dir)
    if not target_dir.is_dir():
        return []

    cutoff = time.time() - max_age_hours * 3600
    removed = []
    for archive_path in target_dir.glob("*.zip"):
        if archive_path.stat().st_mtime < cutoff:
            archive_path.unlink()
            removed.append(archive_path)
            logger.info(f"Removed expired archive: {archive_path.name}")
    return removed
