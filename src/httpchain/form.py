# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL-encoded form bodies."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from urllib.parse import urlencode


@dataclass(frozen=True)
class Form:
    """Ordered multimap of form fields; `add` and `set` return new forms."""

    pairs: tuple[tuple[str, str], ...] = ()

    @classmethod
    def of(cls, values: Mapping[str, str | Iterable[str]] | Iterable[tuple[str, str]] | None = None) -> Form:
        """Build a form from a mapping (values may be lists) or an iterable of pairs."""
        if values is None:
            return cls()
        pairs: list[tuple[str, str]] = []
        if isinstance(values, Mapping):
            for key, value in values.items():
                if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                    pairs.append((str(key), str(value)))
                else:
                    pairs.extend((str(key), str(item)) for item in value)
        else:
            pairs.extend((str(key), str(value)) for key, value in values)
        return cls(tuple(pairs))

    def add(self, key: str, value: str) -> Form:
        return Form(self.pairs + ((key, value),))

    def set(self, key: str, value: str) -> Form:
        kept = tuple(pair for pair in self.pairs if pair[0] != key)
        return Form(kept + ((key, value),))

    def get(self, key: str, default: str | None = None) -> str | None:
        for name, value in self.pairs:
            if name == key:
                return value
        return default

    def get_list(self, key: str) -> list[str]:
        return [value for name, value in self.pairs if name == key]

    def encode(self) -> str:
        return urlencode(list(self.pairs))

    def __len__(self) -> int:
        return len(self.pairs)

    def __bool__(self) -> bool:
        return bool(self.pairs)


__all__ = ["Form"]
