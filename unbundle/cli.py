from typing import Annotated

import typer
from rich.console import Console

from unbundle.config import FormatterKind, UnbundleConfig, get_config
from unbundle.exceptions import UnbundleError
from unbundle.log import configure_logging
from unbundle.splitting import Unbundler

console = Console()
app = typer.Typer(
    name='unbundle',
    help='Split a Go file or package into smaller files',
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    from unbundle import __version__

    console.print(f'unbundle version: {__version__}')
    raise typer.Exit()


def build_config(
    config_path: str | None,
    source: str,
    **overrides,
) -> UnbundleConfig:
    """Load the configuration file and apply command line overrides."""
    config = get_config(config_path)
    updates = {key: value for key, value in overrides.items() if value is not None}
    updates['source'] = source
    return UnbundleConfig(**{**config.model_dump(), **updates})


@app.command()
def unbundle(
    source: Annotated[
        str,
        typer.Argument(
            metavar='PACKAGE_OR_FILE',
            help='Go file (ending in .go) or package to split',
        ),
    ],
    dst: Annotated[
        str | None,
        typer.Option(
            '--dst',
            help='Destination path the package folder is created in (default: unbundled)',
        ),
    ] = None,
    newpkg: Annotated[
        str | None,
        typer.Option(
            '--newpkg',
            help='Destination package name and folder inside the destination path',
        ),
    ] = None,
    pubfunc: Annotated[
        str | None,
        typer.Option('--pubfunc', help='Public functions file (no extension)'),
    ] = None,
    privfunc: Annotated[
        str | None,
        typer.Option('--privfunc', help='Private functions file (no extension)'),
    ] = None,
    types: Annotated[
        str | None,
        typer.Option('--types', help='Definitions file (no extension)'),
    ] = None,
    formatter: Annotated[
        FormatterKind | None,
        typer.Option('--formatter', help='Formatter run over every generated file'),
    ] = None,
    sort_imports: Annotated[
        bool,
        typer.Option(
            '--sort-imports',
            help='Sort import specs instead of keeping first-seen order',
        ),
    ] = False,
    keep_existing: Annotated[
        bool,
        typer.Option(
            '--keep-existing',
            help='Fail instead of removing an existing destination package folder',
        ),
    ] = False,
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Enable debug logging')
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            '--version',
            callback=_version_callback,
            is_eager=True,
            help='Show the version of unbundle',
        ),
    ] = None,
) -> None:
    """Split a Go file or package into one file per type plus function files.

    Examples:
        unbundle --newpkg http $GOROOT/src/net/http
        unbundle --dst out --newpkg server ./server.go
        unbundle -c unbundle.yaml ./server
    """
    configure_logging(verbose=verbose)

    try:
        settings = build_config(
            config,
            source,
            destination=dst,
            package_name=newpkg,
            public_functions_file=pubfunc,
            private_functions_file=privfunc,
            definitions_file=types,
            formatter=formatter,
            sort_imports=sort_imports or None,
            clean_destination=False if keep_existing else None,
        )
        written = Unbundler(settings).run()
    except (UnbundleError, ValueError) as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)

    console.print(
        f'[green]Split {settings.source} into {len(written)} files[/green]'
    )
    for item in written:
        console.print(f'  - {item.key} -> {item.path}')


if __name__ == '__main__':
    app()
