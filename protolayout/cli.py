from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from protolayout.config import LayoutConfig, get_config
from protolayout.declarations import load_declarations
from protolayout.exceptions import ConfigurationError, ProtoLayoutError
from protolayout.languages import LANGUAGE_CAPABILITIES, resolve_language
from protolayout.layout.resolver import PathResolver, plan_layout
from protolayout.report import LayoutReport, LayoutReportWriter

console = Console()
app = typer.Typer(
    name='protolayout',
    help='Plan the generated file layout of protocol messages',
    no_args_is_help=True,
)


def _load_resolver(config: LayoutConfig, declarations: str | None) -> PathResolver:
    source = declarations or config.declarations
    if not source:
        raise ConfigurationError(
            'No declarations file given', field='declarations'
        )
    return plan_layout(load_declarations(source), fold=config.fold_protocol)


@app.command()
def plan(
    declarations: Annotated[
        str | None,
        typer.Argument(help='YAML or JSON file listing the message declarations'),
    ] = None,
    config: Annotated[
        str | None,
        typer.Option('--config', '-c', help='Path to configuration file (YAML)'),
    ] = None,
    language: Annotated[
        list[str] | None,
        typer.Option(
            '--language', '-l', help='Target language to resolve paths for (repeatable)'
        ),
    ] = None,
    no_fold: Annotated[
        bool,
        typer.Option('--no-fold', help='Generate every protocol at the root level'),
    ] = False,
    output: Annotated[
        str | None,
        typer.Option('--output', '-o', help='Write the layout report as JSON'),
    ] = None,
) -> None:
    """Plan the file layout of protocol messages.

    Examples:
        protolayout plan protocols.yaml
        protolayout plan protocols.yaml -l TypeScript -l Python
        protolayout plan -c protolayout.yaml -o layout.json
    """
    try:
        layout_config = get_config(config)
        if no_fold:
            layout_config.fold_protocol = False
        languages = (
            [resolve_language(item) for item in language]
            if language
            else layout_config.languages
        )

        resolver = _load_resolver(layout_config, declarations)
        report = LayoutReport.from_resolver(
            resolver, languages, fold_protocol=layout_config.fold_protocol
        )

        table = Table(title='Protocol layout')
        table.add_column('Id', justify='right')
        table.add_column('Declaration')
        table.add_column('Path')
        table.add_column('Group')
        for item in languages:
            table.add_column(item.value)
        for entry in report.entries:
            table.add_row(
                str(entry.protocol_id),
                entry.declaration_name,
                entry.path or '.',
                entry.fold_group,
                *(entry.absolute_paths[item.value] for item in languages),
            )
        console.print(table)

        target = output or layout_config.output
        if target:
            LayoutReportWriter().write(report, target)
            console.print(f'[dim]Layout report written to {target}[/dim]')

        resolver.clear()

    except ProtoLayoutError as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        raise typer.Exit(1)


@app.command()
def relative(
    from_id: Annotated[int, typer.Argument(help='Protocol id of the referencing file')],
    to_id: Annotated[int, typer.Argument(help='Protocol id of the referenced file')],
    declarations: Annotated[
        str | None,
        typer.Argument(help='YAML or JSON file listing the message declarations'),
    ] = None,
    config: Annotated[
        str | None,
        typer.Option('--config', '-c', help='Path to configuration file (YAML)'),
    ] = None,
) -> None:
    """Print how the file of one protocol references the file of another."""
    try:
        resolver = _load_resolver(get_config(config), declarations)
        for protocol_id in (from_id, to_id):
            resolver.registry.get(protocol_id)
        path = resolver.get_relative_path(from_id, to_id)
        console.print(path if path else '[dim](same file)[/dim]')
        resolver.clear()
    except ProtoLayoutError as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        raise typer.Exit(1)


@app.command()
def languages() -> None:
    """List the supported target languages and their path conventions."""
    table = Table(title='Target languages')
    table.add_column('Language')
    table.add_column('Style')
    table.add_column('Separator')
    table.add_column('Root marker')
    for language, capability in LANGUAGE_CAPABILITIES.items():
        if capability.internal:
            style = 'internal'
        elif capability.is_package_style:
            style = 'package'
        else:
            style = 'directory'
        table.add_row(
            language.value,
            style,
            capability.path_separator,
            capability.empty_path_marker or '-',
        )
    console.print(table)


@app.command()
def version() -> None:
    """Show the version of protolayout."""
    from protolayout import __version__

    console.print(f'protolayout version: {__version__}')


if __name__ == '__main__':
    app()
