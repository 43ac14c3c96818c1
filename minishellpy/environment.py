"""The shell's own copy of the process environment."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

_PREVIOUS_DIR = "OLDPWD"
_PATH_PREFIX = "PATH="
_PATH_SEPARATOR = ":"


def _entry_name(entry: str) -> str:
    name, _, _ = entry.partition("=")
    return name


def _names_match(name: str, entry: str) -> bool:
    """True if the entry defines ``name``, with or without a value."""
    return entry.startswith(name) and entry[len(name):len(name) + 1] in ("=", "")


@dataclass
class Environment:
    """Ordered ``NAME=value`` entries; entries without ``=`` are names only."""

    entries: list[str] = field(default_factory=list)

    @classmethod
    def from_environ(cls, envp: Mapping[str, str] | Iterable[str]) -> Environment:
        """Copy an environment, adding an empty ``OLDPWD=`` if it has none."""
        if isinstance(envp, Mapping):
            entries = [f"{name}={value}" for name, value in envp.items()]
        else:
            entries = list(envp)
        if not any(entry.startswith(_PREVIOUS_DIR + "=") for entry in entries):
            entries.append(_PREVIOUS_DIR + "=")
        return cls(entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def _index_with_value(self, name: str) -> int | None:
        prefix = name + "="
        for index, entry in enumerate(self.entries):
            if entry.startswith(prefix):
                return index
        return None

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or None if it has no ``NAME=`` entry."""
        index = self._index_with_value(name)
        if index is None:
            return None
        return self.entries[index][len(name) + 1:]

    def set(self, name: str, value: str) -> None:
        """Give ``name`` a value, replacing its entry or appending a new one."""
        entry = f"{name}={value}"
        index = self._index_with_value(name)
        if index is None:
            self.entries.append(entry)
        else:
            self.entries[index] = entry

    def update(self, name: str, value: str) -> None:
        """Replace the value of an existing ``name``; KeyError if it is absent."""
        index = self._index_with_value(name)
        if index is None:
            raise KeyError(name)
        self.entries[index] = f"{name}={value}"

    def put(self, entry: str) -> None:
        """Store an entry as ``export`` does: replace the same name or append."""
        name = _entry_name(entry)
        for index, existing in enumerate(self.entries):
            if _names_match(name, existing):
                self.entries[index] = entry
                return
        self.add(entry)

    def add(self, entry: str) -> None:
        """Append an entry as it is."""
        self.entries.append(entry)

    def unset(self, names: Iterable[str]) -> None:
        """Remove every entry whose name is one of ``names``."""
        wanted = list(names)
        self.entries = [
            entry
            for entry in self.entries
            if not any(_names_match(name, entry) for name in wanted)
        ]

    def search_paths(self) -> list[str] | None:
        """Directories of the first ``PATH=`` entry, or None without one."""
        for entry in self.entries:
            if entry.startswith(_PATH_PREFIX):
                value = entry[len(_PATH_PREFIX):]
                return [part for part in value.split(_PATH_SEPARATOR) if part]
        return None

    def to_dict(self) -> dict[str, str]:
        """The entries that carry a value, as a mapping for child processes."""
        result: dict[str, str] = {}
        for entry in self.entries:
            name, sep, value = entry.partition("=")
            if sep and name not in result:
                result[name] = value
        return result