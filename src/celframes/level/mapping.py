import functools
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from celframes.errors import DuplicateFrameConflictError, SparseFrameRangeError
from celframes.level.frame import FrameType
from celframes.level.min import Block, Piece, iter_blocks

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FrameTypeMapping:
    """Frame types of one level CEL file, indexed by frame number."""

    resource_name: str
    frame_types: tuple[FrameType, ...]

    def __len__(self) -> int:
        return len(self.frame_types)

    def __iter__(self) -> Iterator[FrameType]:
        return iter(self.frame_types)

    def __getitem__(self, frame_num: int) -> FrameType:
        return self.frame_types[frame_num]

    def __repr__(self) -> str:
        return f'FrameTypeMapping<{self.resource_name}>[{len(self)}]'


def fold_block(acc: dict[int, FrameType], block: Block) -> dict[int, FrameType]:
    known = acc.setdefault(block.frame_num, block.frame_type)
    if known != block.frame_type:
        raise DuplicateFrameConflictError(block.frame_num, known, block.frame_type)
    return acc


def collect_frame_types(blocks: Iterable[Block]) -> dict[int, FrameType]:
    return functools.reduce(fold_block, blocks, {})


def densify(
    frame_types: Mapping[int, FrameType],
    fill_holes: bool = False,
) -> tuple[FrameType, ...]:
    if not frame_types:
        return ()
    max_frame_num = max(frame_types)
    missing = [num for num in range(max_frame_num) if num not in frame_types]
    if missing and not fill_holes:
        raise SparseFrameRangeError(missing, max_frame_num)
    return tuple(
        frame_types.get(num, FrameType.TYPE0) for num in range(max_frame_num + 1)
    )


def reduce_pieces(
    resource_name: str,
    pieces: Iterable[Piece],
    *,
    fill_holes: bool = False,
) -> FrameTypeMapping:
    frame_types = collect_frame_types(iter_blocks(pieces))
    dense = densify(frame_types, fill_holes=fill_holes)
    holes = len(dense) - len(frame_types)
    if holes:
        logger.warning('%s: %d undeclared frames set to type 0', resource_name, holes)
    return FrameTypeMapping(resource_name, dense)
