import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from celframes.errors import CelFramesError, ResourceFailureError
from celframes.kernel.lookup import ResourceLookup
from celframes.level.mapping import FrameTypeMapping, reduce_pieces
from celframes.level.min import read_min
from celframes.level.preset import MinLayout, layout_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AggregatedResult:
    mappings: tuple[FrameTypeMapping, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(mapping.resource_name for mapping in self.mappings)

    def __len__(self) -> int:
        return len(self.mappings)

    def __iter__(self) -> Iterator[FrameTypeMapping]:
        return iter(self.mappings)

    def __getitem__(self, name: str) -> FrameTypeMapping:
        for mapping in self.mappings:
            if mapping.resource_name == name:
                return mapping
        raise KeyError(name)


def check_names(names: Sequence[str]) -> None:
    if not names:
        raise ValueError('expected at least one resource name')
    seen = set()
    for name in names:
        if name in seen:
            raise ValueError(f'resource name listed twice: {name}')
        seen.add(name)


def build_mapping(
    lookup: ResourceLookup,
    name: str,
    layouts: Mapping[str, MinLayout] | None = None,
    fill_holes: bool = False,
) -> FrameTypeMapping:
    pieces = read_min(lookup, name, layout_for(name, layouts))
    return reduce_pieces(name, pieces, fill_holes=fill_holes)


def aggregate(
    lookup: ResourceLookup,
    names: Sequence[str],
    *,
    layouts: Mapping[str, MinLayout] | None = None,
    fill_holes: bool = False,
) -> AggregatedResult:
    check_names(names)
    mappings = []
    for name in names:
        try:
            mapping = build_mapping(lookup, name, layouts, fill_holes)
        except CelFramesError as exc:
            raise ResourceFailureError(name, exc) from exc
        logger.info('%s: %d frames', name, len(mapping))
        mappings.append(mapping)
    return AggregatedResult(tuple(mappings))
