"""Per-version commit message files.

Each release has a ``<version>.txt`` file in the resource directory,
written by a human before the release. relflow only reads these files;
it never creates, edits or deletes them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from relflow.core.result import Err, Ok, Result
from relflow.services.release.errors import ReleaseError
from relflow.services.release.versions import VERSION_PATTERN, is_version

MESSAGE_SUFFIX = ".txt"
PREVIEW_LINES = 5


@dataclass(frozen=True, slots=True)
class VersionIndex:
    """Versions found in a resource directory.

    Iterating rescans the directory, so the index can be iterated any
    number of times and always reflects what is on disk.
    """

    directory: Path

    def __iter__(self) -> Iterator[str]:
        if not self.directory.is_dir():
            return iter(())
        names = sorted(
            p.stem
            for p in self.directory.iterdir()
            if p.is_file() and p.suffix == MESSAGE_SUFFIX and is_version(p.stem)
        )
        return iter(names)

    def __contains__(self, version: object) -> bool:
        return isinstance(version, str) and version in list(self)


class MessageStore:
    """Read-only access to the resource directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def versions(self) -> VersionIndex:
        return VersionIndex(self.directory)

    def path_for(self, version: str) -> Path:
        return self.directory / f"{version}{MESSAGE_SUFFIX}"

    def exists(self, version: str) -> bool:
        return is_version(version) and self.path_for(version).is_file()

    def read(self, version: str) -> str:
        """Message text for display.

        Bytes that are not UTF-8 are replaced rather than rejected; git is
        handed the file itself, so the committed message is unaffected.
        """
        return self.path_for(version).read_text(encoding="utf-8", errors="replace")

    def preview(self, version: str, lines: int = PREVIEW_LINES) -> list[str]:
        """First ``lines`` lines of the message, trailing whitespace removed."""
        return [ln.rstrip() for ln in self.read(version).splitlines()[:lines]]

    def summary(self, version: str) -> str:
        """First non-empty line of the message ("" if the file is blank)."""
        for line in self.read(version).splitlines():
            if line.strip():
                return line.strip()
        return ""

    def require(self, version: str) -> Result[Path, ReleaseError]:
        """Path of the message file for ``version``, or a version error.

        The error hint lists the versions that do exist so the operator can
        spot a typo.
        """
        known = list(self.versions())
        if not is_version(version):
            hint = f"expected {VERSION_PATTERN}, e.g. v1.2.0 or v0.1.0-alpha"
            if known:
                hint += f"; available versions: {', '.join(known)}"
            return Err(
                ReleaseError(
                    kind="invalid_version",
                    message=f"invalid version identifier: {version!r}",
                    hint=hint,
                )
            )

        path = self.path_for(version)
        if path.is_file():
            return Ok(path)

        if known:
            hint = f"available versions: {', '.join(known)}"
        else:
            hint = f"no version files found; create {path}"
        return Err(
            ReleaseError(
                kind="version_not_found",
                message=f"no commit message file for {version} ({path})",
                hint=hint,
            )
        )
