"""Main CLI entry point and application setup."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import click
import msgspec
from click.exceptions import Exit
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ftsquery import __version__
from ftsquery.cli.config import load_config, resolve_options
from ftsquery.condition import (
    ConditionError,
    ConditionExpression,
    ConditionParser,
    SearchOptions,
)
from ftsquery.condition.options import OPTION_NAMES
from ftsquery.fulltext import FullTextSearch, literal, parse
from ftsquery.interceptor import (
    DEFAULT_PREFIX,
    Command,
    CommandParameter,
    FullTextParseOption,
    FullTextSearchInterceptor,
)

logger = logging.getLogger(__name__)


@dataclass
class Context:
    """CLI context that holds shared resources."""

    console: Console
    options: SearchOptions = SearchOptions.DEFAULT
    config: dict = field(default_factory=dict)
    debug: bool = False


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.WARNING
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


class FtsQueryGroup(click.Group):
    """Custom group that reports errors without tracebacks."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {escape(str(e))}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


option_choice = click.option(
    "--option",
    "-o",
    "option_names",
    multiple=True,
    type=click.Choice(OPTION_NAMES, case_sensitive=False),
    help="Search option to apply (repeatable, replaces configured options)",
)
strict_flag = click.option(
    "--strict", is_flag=True, help="Reject malformed conditions instead of repairing"
)


def get_options(
    ctx: click.Context, option_names: tuple[str, ...], strict: bool
) -> SearchOptions:
    """Resolve the options for a command from its flags and the context."""
    if option_names:
        options = SearchOptions.from_names(option_names)
    else:
        options = ctx.obj.options
    if strict:
        options |= SearchOptions.THROW_ON_ALL
    return options


@click.group(cls=FtsQueryGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.version_option(
    version=__version__, prog_name="ftsquery", message="ftsquery version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
) -> None:
    """Full-text search condition normalizer.

    Rewrites loosely typed boolean search conditions into predicates that a
    full-text engine accepts.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    console = create_console(no_color=no_color)

    try:
        config_data = load_config(config)
        options = resolve_options(config_data)
    except ValueError as e:
        if debug:
            raise
        console.print(f"[red]Error loading configuration:[/red] {escape(str(e))}")
        ctx.exit(1)

    ctx.obj = Context(
        console=console, options=options, config=config_data, debug=debug
    )


@cli.command(name="parse")
@click.argument("condition")
@option_choice
@strict_flag
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def parse_command(
    ctx: click.Context,
    condition: str,
    option_names: tuple[str, ...],
    strict: bool,
    as_json: bool,
) -> None:
    """Normalize CONDITION into a full-text predicate."""
    options = get_options(ctx, option_names, strict)

    if as_json:
        result = FullTextSearch.from_condition(condition, options)
        click.echo(msgspec.json.encode(result.to_dict()).decode())
    else:
        click.echo(parse(condition, options))


@cli.command()
@click.argument("condition")
@option_choice
@strict_flag
@click.pass_context
def terms(
    ctx: click.Context, condition: str, option_names: tuple[str, ...], strict: bool
) -> None:
    """List the search terms found in CONDITION."""
    options = get_options(ctx, option_names, strict)
    result = FullTextSearch.from_condition(condition, options)

    for term in result.search_terms:
        click.echo(term)


@cli.command()
@click.argument("condition")
@option_choice
@strict_flag
@click.pass_context
def explain(
    ctx: click.Context, condition: str, option_names: tuple[str, ...], strict: bool
) -> None:
    """Show the expression tree built for CONDITION."""
    console = ctx.obj.console
    options = get_options(ctx, option_names, strict)
    root = ConditionParser(condition, options).root_expression

    tree = Tree(Text("condition", style="bold"))
    _add_branches(tree, root)
    console.print(tree)
    console.print()
    console.print(Text(str(root)))


def _add_branches(tree: Tree, expression: ConditionExpression) -> None:
    for index, exp in enumerate(expression.children):
        label = Text()
        if index > 0:
            label.append(f"{exp.operator} ", style="cyan")
        if exp.is_subexpression:
            label.append("( )" if not exp.has_subexpressions else "group", style="bold")
            _add_branches(tree.add(label), exp)
            continue

        label.append(f'"{exp.term}"')
        markers = [
            name
            for name, flag in (
                ("phrase", exp.term_is_phrase),
                ("prefix", exp.term_is_prefix),
                ("stem", exp.do_stem()),
            )
            if flag
        ]
        if markers:
            label.append(f"  [{', '.join(markers)}]", style="dim")
        tree.add(label)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@option_choice
@strict_flag
@click.option(
    "--fallback-literal",
    is_flag=True,
    help="Quote rejected conditions as a single literal term",
)
@click.pass_context
def batch(
    ctx: click.Context,
    file: Path,
    option_names: tuple[str, ...],
    strict: bool,
    fallback_literal: bool,
) -> None:
    """Normalize every non-blank line of FILE."""
    console = ctx.obj.console
    options = get_options(ctx, option_names, strict)

    table = Table(title=f"Conditions in {file.name}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Condition")
    table.add_column("Normal form")

    failures = 0
    lines = file.read_text(encoding="utf-8").splitlines()
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            normal_form = escape(parse(line, options))
        except ConditionError as e:
            if fallback_literal:
                logger.info(f"Line {number} rejected ({e}), using literal term")
                normal_form = escape(literal(line))
            else:
                failures += 1
                normal_form = f"[red]{escape(str(e))}[/red]"
        table.add_row(str(number), escape(line), normal_form)

    console.print(table)

    if failures:
        console.print(f"[red]{failures} condition(s) rejected[/red]")
        ctx.exit(1)


@cli.command()
@click.argument("command_text")
@click.option(
    "--param",
    "-p",
    "params",
    multiple=True,
    metavar="NAME=VALUE",
    help="String parameter bound to the command (repeatable)",
)
@click.option(
    "--mode",
    type=click.Choice([o.value for o in FullTextParseOption]),
    default=FullTextParseOption.PARSE_AS_PREFIX.value,
    show_default=True,
    help="How intercepted conditions are processed",
)
@click.option("--prefix", help="Sentinel prefix marking full-text parameters")
@click.pass_context
def rewrite(
    ctx: click.Context,
    command_text: str,
    params: tuple[str, ...],
    mode: str,
    prefix: str | None,
) -> None:
    """Rewrite LIKE filters in COMMAND_TEXT into full-text predicates."""
    parameters = []
    for param in params:
        name, sep, value = param.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"Expected NAME=VALUE, got {param!r}", param_hint="--param"
            )
        parameters.append(CommandParameter(name=name.lstrip("@"), value=value))

    interceptor = FullTextSearchInterceptor(
        prefix=prefix or ctx.obj.config.get("prefix", DEFAULT_PREFIX),
        option=FullTextParseOption(mode),
        options=ctx.obj.options,
    )
    command = Command(text=command_text, parameters=parameters)
    interceptor.reader_executing(command)

    click.echo(command.text)
    for parameter in command.parameters:
        click.echo(f"@{parameter.name} = {parameter.value}")


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
