import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Self

import numpy as np


@dataclass(frozen=True)
class _DefaultOverride:
    def __call__(self, **kwargs: Any) -> Self:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class MinLayout(_DefaultOverride):
    blocks_per_piece: int = 10
    word_dtype: np.dtype = np.dtype('<u2')
    logger: logging.Logger = logging.getLogger('celframes.level.min')

    @property
    def record_size(self) -> int:
        return self.blocks_per_piece * self.word_dtype.itemsize


standard = MinLayout(blocks_per_piece=10)
tall = standard(blocks_per_piece=16)

# pieces of the hell and town levels are 16 blocks tall
LAYOUTS: Mapping[str, MinLayout] = {
    'l1': standard,
    'l2': standard,
    'l3': standard,
    'l4': tall,
    'town': tall,
}

DEFAULT_LEVELS = ('l1', 'l2', 'l3', 'l4', 'town')


def layout_for(name: str, layouts: Mapping[str, MinLayout] | None = None) -> MinLayout:
    # explicit layouts override the per-level defaults
    return {**LAYOUTS, **(layouts or {})}.get(name, standard)
