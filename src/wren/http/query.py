"""Query string parameters.

``QueryParams`` is the read-only mapping ``bind()`` reads for GET and
HEAD requests. Lookups return the first value for a name; ``get_list``
returns every value in the order the client sent them. Values stay
strings; conversion is left to ``bind()`` and to handlers.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Immutable, ordered view of a raw ASGI ``query_string``."""

    __slots__ = ("_pairs", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        self._raw = query_string
        self._pairs: tuple[tuple[str, str], ...] = tuple(
            parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
        )

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"QueryParams({self._raw!r})"

    def get_list(self, key: str) -> list[str]:
        """Return every value sent for *key* (``?tag=a&tag=b``)."""
        return [value for name, value in self._pairs if name == key]
