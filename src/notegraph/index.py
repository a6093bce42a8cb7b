"""VaultIndex: keeps a LinkGraph in step with the markdown files of a vault.

The index performs the startup scan and translates file-system
notifications (created / modified / moved / deleted) into graph updates.
It never touches the files itself beyond reading them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from notegraph.config import Settings
from notegraph.errors import NameCollisionError
from notegraph.graph import LinkGraph
from notegraph.note import Note, normalize_name
from notegraph.parser import extract_note

logger = logging.getLogger(__name__)


class VaultIndex:
    """Scans a vault directory and maintains its :class:`LinkGraph`."""

    def __init__(self, vault_dir: Path, settings: Settings | None = None) -> None:
        self.vault_dir = Path(vault_dir)
        self.settings = settings or Settings()
        self.graph = LinkGraph()

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self) -> LinkGraph:
        """Scan the vault and index every note into a fresh graph.

        Files that cannot be read, and files whose name is already taken by
        an earlier file, are skipped with a warning.
        """
        self.graph = LinkGraph()
        for path in self.note_paths():
            try:
                self.graph.create(self._read(path))
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable note %s: %s", path, exc)
            except NameCollisionError as exc:
                logger.warning("Skipping %s: %s", path, exc)
        logger.info("Indexed %d notes from %s", len(self.graph), self.vault_dir)
        return self.graph

    def note_paths(self) -> list[Path]:
        """All note files below the vault root, sorted."""
        return sorted(
            path
            for path in self.vault_dir.rglob("*")
            if path.is_file() and self.is_note_path(path)
        )

    def is_note_path(self, path: Path) -> bool:
        path = Path(path)
        if path.suffix not in self.settings.suffixes:
            return False
        try:
            parts = path.relative_to(self.vault_dir).parts
        except ValueError:
            parts = path.parts
        return not any(part in self.settings.exclude_dirs for part in parts[:-1])

    @staticmethod
    def note_name(path: Path) -> str:
        """The note name of a file: its normalised stem."""
        return normalize_name(Path(path).stem)

    def _read(self, path: Path, content: str | None = None) -> Note:
        if content is None:
            content = path.read_text(encoding="utf-8")
        return extract_note(self.note_name(path), path, content)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def ingest(self, name: str, path: Path | None, content: str) -> Note:
        """Extract *content* and index it under *name*, replacing any old version."""
        return self.graph.upsert(extract_note(name, path, content))

    def indexed_from(self, path: Path) -> bool:
        """True if the note named after *path* was indexed from that very file."""
        name = self.note_name(path)
        if name not in self.graph:
            return False
        stored = self.graph.get(name).path
        return stored is None or Path(stored).resolve() == Path(path).resolve()

    def _foreign(self, path: Path) -> bool:
        # The name is taken by a different file, e.g. a skipped duplicate stem.
        name = self.note_name(path)
        if name in self.graph and not self.indexed_from(path):
            logger.warning(
                "Ignoring %s: note '%s' is indexed from %s",
                path, name, self.graph.get(name).path,
            )
            return True
        return False

    def on_created(self, path: Path, content: str | None = None) -> Note | None:
        """Index a newly created file; raise :class:`NameCollisionError` if taken.

        Files that are not notes (wrong suffix, excluded directory) are
        ignored and ``None`` is returned.
        """
        path = Path(path)
        if not self.is_note_path(path):
            logger.debug("Ignoring non-note file %s", path)
            return None
        return self.graph.create(self._read(path, content))

    def on_modified(self, path: Path, content: str | None = None) -> Note | None:
        """Re-index a changed file, replacing its counts, tags and links.

        Returns ``None`` for non-note files and for files whose name is
        indexed from another path.
        """
        path = Path(path)
        if not self.is_note_path(path):
            logger.debug("Ignoring non-note file %s", path)
            return None
        if self._foreign(path):
            return None
        return self.graph.upsert(self._read(path, content))

    def on_deleted(self, path: Path) -> bool:
        """Drop the note of a deleted file (no-op if it was not indexed from it)."""
        path = Path(path)
        if self._foreign(path):
            return False
        return self.graph.remove(self.note_name(path))

    def on_moved(self, src: Path, dest: Path, content: str | None = None) -> Note | None:
        """Follow a file that was moved or renamed.

        A move that keeps the file stem only updates the stored path; a
        changed stem renames the note, which breaks links to the old name
        and resolves links to the new one.  Moving a note out of the note
        files (excluded directory, other suffix) deletes it; moving a file
        in creates it.
        """
        src, dest = Path(src), Path(dest)
        if not self.indexed_from(src):
            return self.on_created(dest, content)
        old, new = self.note_name(src), self.note_name(dest)
        if not self.is_note_path(dest):
            self.graph.remove(old)
            return None
        if new != old:
            self.graph.rename(old, new)
        note = self.graph.get(new)
        return self.graph.upsert(replace(note, path=dest))
