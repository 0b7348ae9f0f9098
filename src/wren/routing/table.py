"""Route table builder.

Walks module instances once at startup and produces the two structures
the request pipeline reads: the ordered route entries (registered with
the router, one dispatch function each) and the known-path set used to
tell "wrong verb" (405) apart from "no such path" (404).
"""

from collections.abc import Iterable
from dataclasses import dataclass

from wren.module import Module
from wren.routing.route import RouteEntry


def normalize_path(path: str) -> str:
    """Normalize a path for known-path lookups.

    Strips surrounding slashes and case-folds, so ``"/Foo/"``, ``"foo"``
    and ``"FOO"`` all map to ``"foo"``. ``"/"`` and ``""`` map to ``""``.
    Idempotent.
    """
    return path.strip("/").casefold()


@dataclass(frozen=True, slots=True)
class RouteTable:
    """Compiled routes plus the verb-agnostic set of owned paths.

    ``known_paths`` is deliberately coarser than ``entries``: it records
    that a path belongs to the app, not which verbs it accepts.
    """

    entries: tuple[RouteEntry, ...]
    known_paths: frozenset[str]

    def __len__(self) -> int:
        return len(self.entries)

    def owns(self, path: str) -> bool:
        """Whether *path* (in any casing or slash form) is a registered path."""
        return normalize_path(path) in self.known_paths


def build_route_table(modules: Iterable[Module]) -> RouteTable:
    """Build the route table from module instances.

    *modules* is consumed in order; entries keep module order, then each
    module's declaration order. A module that declares no routes
    contributes nothing.
    """
    entries: list[RouteEntry] = []
    known_paths: set[str] = set()

    for module in modules:
        module_type = type(module)
        for key in module.routes:
            entries.append(RouteEntry(verb=key.verb, path=key.path, module_type=module_type))
            known_paths.add(normalize_path(key.path))

    return RouteTable(entries=tuple(entries), known_paths=frozenset(known_paths))
