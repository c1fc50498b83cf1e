"""Main CLI entry point."""

import click

from .commands import compose, validate
from ..core.logging import configure_logging


@click.group()
@click.version_option(version="1.0.0", prog_name="promptcomposer")
def cli():
    """PromptComposer - system prompts assembled from providers.

    \b
    Examples:
        pc compose prompts.json
        pc compose prompts.json -u alice -v
        pc validate prompts.json

    Logging is controlled with PC_LOG_LEVEL and PC_LOG_FORMAT.
    Use --help on any command for more details.
    """
    pass


cli.add_command(compose)
cli.add_command(validate)


def main():
    """Main entry point."""
    configure_logging()
    cli()


if __name__ == "__main__":
    main()
