import glob
import logging
import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from parse import compile as parse_compile  # type: ignore[import-untyped]

from celframes.errors import ResourceNotFoundError
from celframes.kernel.fileio import ArrayBuffer, map_file

# e.g. "diabdat/levels/l1data/l1.min"
LEVEL_PATTERN = 'levels/{dirname}data/{name}.min'


class ResourceLookup(Protocol):
    def read(self, name: str) -> ArrayBuffer: ...


@dataclass(frozen=True)
class MemoryLookup:
    resources: Mapping[str, bytes] = field(default_factory=dict)

    def read(self, name: str) -> bytes:
        try:
            return bytes(self.resources[name])
        except KeyError:
            raise ResourceNotFoundError(name) from None


@dataclass(frozen=True)
class DirectoryLookup:
    """Resolves level names against an extracted archive directory.

    The pattern has a ``{dirname}`` and a ``{name}`` field, both filled
    with the resource name when locating a file. ``names`` reverses the
    pattern, only accepting paths where both fields agree.
    """

    basedir: str | os.PathLike[str]
    pattern: str = LEVEL_PATTERN
    logger: logging.Logger = logging.getLogger(__name__)

    def path(self, name: str) -> str:
        return os.path.join(self.basedir, self.pattern.format(dirname=name, name=name))

    def read(self, name: str) -> memoryview:
        path = self.path(name)
        self.logger.debug('reading %s from %s', name, path)
        try:
            return map_file(path)
        except OSError as exc:
            raise ResourceNotFoundError(name, path) from exc

    def names(self) -> Iterator[str]:
        matcher = parse_compile(self.pattern)
        wildcard = self.pattern.format(dirname='*', name='*')
        for path in sorted(glob.iglob(os.path.join(self.basedir, wildcard))):
            relpath = os.path.relpath(path, self.basedir).replace(os.sep, '/')
            res = matcher.parse(relpath)
            if res and res['dirname'] == res['name']:
                yield res['name']
