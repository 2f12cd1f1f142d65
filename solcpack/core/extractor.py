"""Archive expansion with leading path component stripping.

Supports tar (plain, gzip, bzip2, xz) and zip archives. Anything else is
treated as a single executable file and copied into the destination. A file
named like an archive that cannot be read as one raises ArchiveError.
Every member is checked to stay inside the destination directory.
"""

from __future__ import annotations

import logging
import lzma
import shutil
import stat
import tarfile
import zipfile
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)

TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz", ".txz")
ZIP_SUFFIXES = (".zip",)


class ArchiveError(RuntimeError):
    """Raised when an archive cannot be expanded safely."""


def extract(artifact: Path, destination: Path, strip_components: int = 0) -> None:
    """Expand *artifact* into *destination*, dropping *strip_components* leading segments.

    Members whose path is entirely consumed by stripping (e.g. the top-level
    directory itself) are skipped.
    """
    artifact = Path(artifact)
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    name = artifact.name.lower()
    if name.endswith(TAR_SUFFIXES) or tarfile.is_tarfile(artifact):
        _extract_tar(artifact, destination, strip_components)
    elif name.endswith(ZIP_SUFFIXES) or zipfile.is_zipfile(artifact):
        _extract_zip(artifact, destination, strip_components)
    else:
        target = destination / artifact.name
        shutil.copyfile(artifact, target)
        target.chmod(0o755)
    logger.debug("Expanded %s into %s", artifact, destination)


def strip_path(name: str, strip_components: int) -> str | None:
    """Return *name* without its first *strip_components* segments, or None if nothing is left.

    Raises ArchiveError for absolute paths and ``..`` segments.
    """
    path = PurePosixPath(name)
    if path.is_absolute() or ".." in path.parts:
        raise ArchiveError(f"Archive member escapes destination: {name!r}")
    parts = [p for p in path.parts if p not in ("", ".")]
    remaining = parts[strip_components:]
    if not remaining:
        return None
    return str(PurePosixPath(*remaining))


def _extract_tar(artifact: Path, destination: Path, strip_components: int) -> None:
    try:
        with tarfile.open(artifact) as archive:
            for member in archive.getmembers():
                stripped = strip_path(member.name, strip_components)
                if stripped is None:
                    continue
                member.name = stripped
                if member.islnk():
                    linked = strip_path(member.linkname, strip_components)
                    if linked is None:
                        continue
                    member.linkname = linked
                try:
                    archive.extract(member, destination, filter="data")
                except tarfile.FilterError as exc:
                    raise ArchiveError(f"Rejected archive member {member.name!r}: {exc}") from exc
    except (tarfile.TarError, lzma.LZMAError, EOFError) as exc:
        raise ArchiveError(f"Unable to read tar archive {artifact.name}: {exc}") from exc


def _extract_zip(artifact: Path, destination: Path, strip_components: int) -> None:
    root = destination.resolve()
    try:
        archive = zipfile.ZipFile(artifact)
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Unable to read zip archive {artifact.name}: {exc}") from exc

    with archive:
        for info in archive.infolist():
            stripped = strip_path(info.filename, strip_components)
            if stripped is None:
                continue
            target = (destination / stripped).resolve()
            if not target.is_relative_to(root):
                raise ArchiveError(f"Archive member escapes destination: {info.filename!r}")

            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(info) as source, target.open("wb") as sink:
                shutil.copyfileobj(source, sink)

            mode = (info.external_attr >> 16) & 0o777
            if mode:
                target.chmod(mode | stat.S_IRUSR | stat.S_IWUSR)
