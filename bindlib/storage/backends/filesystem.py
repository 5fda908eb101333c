"""File system binding library backend."""

import os
import tempfile
from pathlib import Path

from ..events import ShutdownNotifier
from .base import LibraryFactory
from .dictionary import DictionaryLibrary

# bld stands for binding library data
LIBRARY_FILE_EXTENSION = ".bld"


def default_library_directory() -> Path:
    """Application-local directory used when no directory is configured."""
    xdg_data_home = Path(
        os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
    )
    return xdg_data_home / "bindlib" / "BindingLibrary"


def _id_to_filename(library_id: str) -> str:
    """Convert a library id to a file name inside the library directory."""
    safe_id = "".join(c if c.isalnum() or c in "-_." else "_" for c in library_id)
    return f"{safe_id}{LIBRARY_FILE_EXTENSION}"


class FileLibrary(DictionaryLibrary):
    """Binding library stored as one binary file per library.

    The file lives at ``<directory>/<library_id>.bld``, with characters other
    than letters, digits, ``-``, ``_`` and ``.`` in the id replaced by ``_``.
    The directory is, in order of precedence, the one given to the instance,
    the class-wide ``FileLibrary.default_directory``, or the application data
    directory.
    """

    default_directory: Path | None = None

    def __init__(
        self,
        library_id: str,
        persist_on_shutdown: bool = True,
        notifier: ShutdownNotifier | None = None,
        directory: Path | str | None = None,
    ):
        self._directory = Path(directory) if directory is not None else None
        super().__init__(library_id, persist_on_shutdown, notifier)

    @classmethod
    def factory(
        cls,
        directory: Path | str | None = None,
        notifier: ShutdownNotifier | None = None,
    ) -> LibraryFactory:
        """Create a LibraryFactory producing file libraries."""

        def create(library_id: str, persist_on_shutdown: bool = True) -> "FileLibrary":
            return cls(
                library_id,
                persist_on_shutdown,
                notifier=notifier,
                directory=directory,
            )

        return create

    @property
    def directory(self) -> Path:
        """Directory holding the library file."""
        if self._directory is not None:
            return self._directory
        if FileLibrary.default_directory is not None:
            return Path(FileLibrary.default_directory)
        return default_library_directory()

    @property
    def file_path(self) -> Path:
        """Path of the library file."""
        return self.directory / _id_to_filename(self.library_id)

    @property
    def location(self) -> str:
        return str(self.file_path)

    def _read_blob(self) -> bytes | None:
        path = self.file_path
        if not path.is_file():
            return None
        return path.read_bytes()

    def _write_blob(self, data: bytes) -> None:
        path = self.file_path
        path.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with open(temp_fd, "wb") as f:
                f.write(data)

            Path(temp_path).replace(path)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise

    def _delete_blob(self) -> None:
        self.file_path.unlink(missing_ok=True)
