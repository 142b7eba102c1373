"""MIN container reader.

A MIN file is a headerless sequence of piece records. Every record holds
the same number of little-endian 16-bit block words; each word packs a
1-based frame number (bits 0-11, zero for an empty slot) and the frame
type selecting the CEL decoder (bits 12-14).
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from celframes.errors import MalformedContainerError, ResourceNotFoundError
from celframes.kernel.lookup import ResourceLookup
from celframes.level.frame import FrameType
from celframes.level.preset import MinLayout, layout_for, standard

FRAME_NUM_MASK = 0x0FFF
FRAME_TYPE_MASK = 0x7000
FRAME_TYPE_SHIFT = 12
MAX_FRAME_TYPE = max(FrameType).value


@dataclass(frozen=True, slots=True)
class Block:
    frame_num: int
    frame_type: FrameType


@dataclass(frozen=True, slots=True)
class Piece:
    index: int
    blocks: tuple[Block, ...]

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __repr__(self) -> str:
        return f'Piece<{self.index}>[{len(self)}]'


def read_words(cfg: MinLayout, buffer: ArrayLike) -> NDArray[np.uint16]:
    if cfg.blocks_per_piece <= 0:
        raise MalformedContainerError(
            f'invalid block count per piece: {cfg.blocks_per_piece}'
        )
    data = memoryview(buffer).cast('B')  # type: ignore[arg-type]
    size = len(data)
    trailing = size % cfg.record_size
    if trailing:
        raise MalformedContainerError(
            f'truncated piece record: {trailing} trailing bytes'
            f' after {size // cfg.record_size} records of {cfg.record_size} bytes',
            offset=size - trailing,
        )
    if not size:
        return np.zeros((0, cfg.blocks_per_piece), dtype=cfg.word_dtype)
    words = np.frombuffer(data, dtype=cfg.word_dtype)
    return words.reshape(-1, cfg.blocks_per_piece)


def check_frame_types(cfg: MinLayout, words: NDArray[np.uint16]) -> None:
    types = (words & FRAME_TYPE_MASK) >> FRAME_TYPE_SHIFT
    invalid = np.flatnonzero(types > MAX_FRAME_TYPE)
    if invalid.size:
        idx = int(invalid[0])
        raise MalformedContainerError(
            f'frame type {int(types.flat[idx])} out of range'
            f' 0-{MAX_FRAME_TYPE}',
            offset=idx * cfg.word_dtype.itemsize,
        )


def decode_block(word: int) -> Block | None:
    frame_num = word & FRAME_NUM_MASK
    if not frame_num:
        return None
    frame_type = FrameType((word & FRAME_TYPE_MASK) >> FRAME_TYPE_SHIFT)
    return Block(frame_num - 1, frame_type)


def decode_pieces(words: NDArray[np.uint16]) -> Iterator[Piece]:
    for idx, record in enumerate(words.tolist()):
        blocks = (decode_block(word) for word in record)
        yield Piece(idx, tuple(block for block in blocks if block is not None))


def parse_min(buffer: ArrayLike, cfg: MinLayout = standard) -> list[Piece]:
    words = read_words(cfg, buffer)
    check_frame_types(cfg, words)
    return list(decode_pieces(words))


def read_min(
    lookup: ResourceLookup,
    name: str,
    cfg: MinLayout | None = None,
) -> list[Piece]:
    cfg = cfg or layout_for(name)
    try:
        data = lookup.read(name)
    except OSError as exc:
        raise ResourceNotFoundError(name) from exc
    pieces = parse_min(data, cfg)
    cfg.logger.debug(
        '%s: %d pieces of %d blocks', name, len(pieces), cfg.blocks_per_piece
    )
    return pieces


def iter_blocks(pieces: Iterable[Piece]) -> Iterator[Block]:
    for piece in pieces:
        yield from piece
