import struct
from collections.abc import Sequence

import pytest

from celframes.kernel.lookup import MemoryLookup


def pack_word(frame_num: int | None, frame_type: int = 0) -> int:
    # frame numbers are stored 1-based, 0 marks an empty slot
    if frame_num is None:
        return frame_type << 12
    return (frame_type << 12) | (frame_num + 1)


def pack_min(
    pieces: Sequence[Sequence[tuple[int, int] | None]],
    blocks_per_piece: int = 10,
) -> bytes:
    words = []
    for piece in pieces:
        record = [pack_word(*block) if block else 0 for block in piece]
        assert len(record) <= blocks_per_piece
        words += record + [0] * (blocks_per_piece - len(record))
    return struct.pack(f'<{len(words)}H', *words)


@pytest.fixture
def level_data() -> dict[str, bytes]:
    return {
        'l1': pack_min([[(0, 2), (1, 0)]]),
        'l2': pack_min([[(0, 1), (1, 1), None, (2, 4)], [(2, 4), (3, 5)]]),
        'l4': pack_min([[(0, 3)] * 16, [(1, 6), (2, 0)]], blocks_per_piece=16),
    }


@pytest.fixture
def lookup(level_data: dict[str, bytes]) -> MemoryLookup:
    return MemoryLookup(level_data)


@pytest.fixture
def make_min():
    return pack_min
