import logging

import typer

from celframes.errors import CelFramesError
from celframes.kernel.lookup import DirectoryLookup
from celframes.level.aggregate import aggregate, build_mapping
from celframes.level.emit import PythonSourceEmitter
from celframes.level.preset import DEFAULT_LEVELS

app = typer.Typer()

logger = logging.getLogger('celframes')


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )


@app.command()
def generate(
    mpqdir: str = typer.Option('diabdat/', help='Path to extracted "diabdat.mpq"'),
    output: str = typer.Option('data.py', '--output', '-o', help='File to generate'),
    levels: list[str] = typer.Option(
        list(DEFAULT_LEVELS), '--level', '-l', help='Level names, in output order'
    ),
    fill_holes: bool = typer.Option(
        False, help='Set undeclared frames below the highest one to type 0'
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v'),
) -> None:
    setup_logging(verbose)
    try:
        result = aggregate(DirectoryLookup(mpqdir), levels, fill_holes=fill_holes)
        PythonSourceEmitter().write(result, output)
    except (CelFramesError, ValueError) as exc:
        logger.error(exc)
        raise typer.Exit(code=1) from exc
    logger.info('wrote %d frame type tables to %s', len(result), output)


@app.command()
def dump(
    level: str = typer.Argument(..., help='Level name, e.g. l1'),
    mpqdir: str = typer.Option('diabdat/', help='Path to extracted "diabdat.mpq"'),
    fill_holes: bool = typer.Option(False),
) -> None:
    setup_logging(False)
    try:
        mapping = build_mapping(DirectoryLookup(mpqdir), level, fill_holes=fill_holes)
    except CelFramesError as exc:
        logger.error('%s: %s', level, exc)
        raise typer.Exit(code=1) from exc
    for frame_num, frame_type in enumerate(mapping):
        typer.echo(f'{frame_num:4d} {frame_type.name}')


@app.command('list')
def list_levels(
    mpqdir: str = typer.Option('diabdat/', help='Path to extracted "diabdat.mpq"'),
) -> None:
    for name in DirectoryLookup(mpqdir).names():
        typer.echo(name)


if __name__ == '__main__':
    app()
