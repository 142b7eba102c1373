import re
import textwrap
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from celframes.level.aggregate import AggregatedResult
from celframes.level.mapping import FrameTypeMapping

HEADER = """\
# generated by celframes-gen; DO NOT EDIT.

# Mappings from frame numbers to frame types for each of the level CEL files
# {files}.
"""


class Emitter(Protocol):
    def emit(self, result: AggregatedResult) -> str: ...


def table_name(resource_name: str) -> str:
    ident = re.sub(r'\W', '_', resource_name).upper()
    if ident[:1].isdigit():
        ident = f'_{ident}'
    return f'{ident}_FRAME_TYPES'


def check_table_names(names: Iterable[str]) -> None:
    seen: dict[str, str] = {}
    for name in names:
        other = seen.setdefault(table_name(name), name)
        if other != name:
            raise ValueError(
                f'resources {other!r} and {name!r} share table {table_name(name)}'
            )


@dataclass(frozen=True)
class PythonSourceEmitter:
    width: int = 79

    def emit_table(self, mapping: FrameTypeMapping) -> str:
        name = table_name(mapping.resource_name)
        if not mapping.frame_types:
            return f'{name} = ()\n'
        body = textwrap.fill(
            ', '.join(str(int(frame_type)) for frame_type in mapping) + ',',
            width=self.width,
            initial_indent='    ',
            subsequent_indent='    ',
        )
        return f'{name} = (\n{body}\n)\n'

    def emit(self, result: AggregatedResult) -> str:
        check_table_names(result.names)
        files = ', '.join(f'"{name}.cel"' for name in result.names)
        tables = '\n'.join(self.emit_table(mapping) for mapping in result)
        index = ''.join(
            f'    {name!r}: {table_name(name)},\n' for name in result.names
        )
        header = HEADER.format(files=files)
        return f'{header}\n{tables}\nFRAME_TYPES = {{\n{index}}}\n'

    def write(self, result: AggregatedResult, path: str | Path) -> int:
        return Path(path).write_text(self.emit(result), encoding='utf-8')
