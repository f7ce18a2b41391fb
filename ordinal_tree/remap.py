"""Old-to-new folder path table produced by renumbering.

When a shift renames a folder, any pending path that runs through that
folder is stale. ``PathRemapper`` records each rename as root-relative POSIX
paths and rewrites such paths.
"""

from __future__ import annotations

from collections.abc import Iterator


def _normalize(path: str) -> str:
    return path.replace("\\", "/").strip("/")


class PathRemapper:
    """Insertion-ordered mapping of renamed folder paths."""

    def __init__(self, mapping: dict[str, str] | None = None):
        self._mapping: dict[str, str] = {}
        for old, new in (mapping or {}).items():
            self.record(old, new)

    def record(self, old_path: str, new_path: str) -> None:
        self._mapping[_normalize(old_path)] = _normalize(new_path)

    def merge(self, other: PathRemapper) -> None:
        """Fold another table into this one.

        Entries already recorded here whose new path was renamed again by
        ``other`` are chained so they point at the final location.
        """
        for old, new in list(self._mapping.items()):
            self._mapping[old] = other.remap(new)
        for old, new in other:
            self._mapping.setdefault(old, new)

    def remap(self, path: str) -> str:
        """Rewrite ``path`` if it is, or passes through, a renamed folder.

        A leading ``/`` on the input is preserved. Paths that merely share a
        name prefix with a renamed folder (``0001_x`` vs ``0001_xy``) are left
        alone.
        """
        normalized = _normalize(path)
        for old, new in self._mapping.items():
            if normalized == old or normalized.startswith(old + "/"):
                rewritten = new + normalized[len(old):]
                return "/" + rewritten if path.startswith("/") else rewritten
        return path

    def to_dict(self) -> dict[str, str]:
        return dict(self._mapping)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._mapping.items()))

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, old_path: object) -> bool:
        return isinstance(old_path, str) and _normalize(old_path) in self._mapping

    def __repr__(self) -> str:
        return f"PathRemapper({self._mapping!r})"
