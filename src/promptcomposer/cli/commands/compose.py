"""Composition CLI commands."""

import asyncio
import json
import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console(stderr=True)


def _parse_meta(pairs):
    metadata = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"expected KEY=VALUE, got '{pair}'", param_hint="--meta")
        key, value = pair.split("=", 1)
        metadata[key] = value
    return metadata


def _load_memory(path):
    with open(path, encoding="utf-8") as f:
        try:
            memory = json.load(f)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--memory") from e
    if not isinstance(memory, dict):
        raise click.BadParameter("expected a JSON object", param_hint="--memory")
    return memory


@click.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-b", "--base-dir", type=click.Path(file_okay=False), default=None,
              help="Directory for relative file paths (default: config directory)")
@click.option("-u", "--user-id", default=None, help="User identifier for the context")
@click.option("-s", "--session-id", default=None, help="Session identifier for the context")
@click.option("-m", "--meta", multiple=True, help="Context metadata as KEY=VALUE (repeatable)")
@click.option("--memory", "memory_file", type=click.Path(exists=True, dir_okay=False),
              default=None, help="JSON file with memory context entries")
@click.option("-o", "--output", "output_file", type=click.Path(), help="Write prompt to file")
@click.option("-v", "--verbose", is_flag=True, help="Show provider results")
def compose(config_file, base_dir, user_id, session_id, meta, memory_file, output_file, verbose):
    """Compose a system prompt from a provider configuration.

    Examples:

        pc compose prompts.json

        pc compose prompts.json -u alice -m environment=production -v
    """
    from ...core.exceptions import PromptComposerError
    from ...core.types import ProviderContext
    from ...engine import EnhancedPromptManager

    metadata = _parse_meta(meta)
    memory = _load_memory(memory_file) if memory_file else {}

    context = ProviderContext(
        user_id=user_id,
        session_id=session_id,
        memory_context=memory,
        metadata=metadata,
    )

    async def run():
        async with EnhancedPromptManager() as manager:
            await manager.load_from_file(config_file, base_dir=base_dir)
            result = await manager.generate(context)
            return result, manager.initialization_errors

    try:
        result, init_errors = asyncio.run(run())
    except PromptComposerError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise SystemExit(1)

    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(result.content)
        console.print(f"[green]Saved to:[/green] {output_file}")
    else:
        click.echo(result.content)

    if verbose:
        table = Table(title="Providers")
        table.add_column("Provider", style="cyan")
        table.add_column("Status")
        table.add_column("Time", justify="right")
        table.add_column("Error", style="red")

        for r in result.provider_results:
            status = "[green]ok[/green]" if r.success else "[red]failed[/red]"
            table.add_row(r.provider_id, status, f"{r.generation_time_ms:.1f}ms", escape(r.error or ""))
        for error in init_errors:
            table.add_row(error.provider or "?", "[yellow]excluded[/yellow]", "-", escape(error.message))

        console.print(table)
        console.print(f"[bold]Total:[/bold] {result.generation_time_ms:.1f}ms")

    if not result.success:
        raise SystemExit(2)


@click.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def validate(config_file):
    """Validate a provider configuration file.

    Example:

        pc validate prompts.json
    """
    from ...config import ConfigManager
    from ...core.exceptions import ConfigValidationError, ConfigurationError

    manager = ConfigManager()
    try:
        config = manager.load_from_file(config_file)
    except ConfigValidationError as e:
        console.print("[bold]Validation Result:[/bold] [red]Invalid[/red]")
        for error in e.validation_errors or [e.message]:
            console.print(f"  [red]✗[/red] {escape(error)}")
        raise SystemExit(1)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise SystemExit(1)

    console.print("[bold]Validation Result:[/bold] [green]Valid[/green]")
    table = Table()
    table.add_column("Provider", style="cyan")
    table.add_column("Type")
    table.add_column("Priority", justify="right")
    table.add_column("Enabled")
    for provider in config.providers:
        table.add_row(provider.name, provider.type, str(provider.priority),
                      "yes" if provider.enabled else "no")
    console.print(table)
