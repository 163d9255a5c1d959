#!/usr/bin/env python3
"""
redditread - read Reddit from your terminal
Search a subreddit, list its newest posts, or read a post with comments
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from .commands.reddit import reddit
from .utils.config import load_config

console = Console()

@click.group(invoke_without_command=True)
@click.option('--verbose', '-v', is_flag=True, help='Log HTTP requests to stderr')
@click.pass_context
@click.version_option(version='0.1.0', prog_name='redditread')
def cli(ctx, verbose):
    """
    redditread - Reddit CLI Tool

    Read-only access to Reddit's public JSON endpoints.

    Examples:
        redditread reddit search programming javascript
        redditread reddit latest python -l 10
        redditread reddit post https://www.reddit.com/r/python/comments/abc123/title/
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())

# Register commands
cli.add_command(reddit)

@cli.command()
def config():
    """View the effective configuration"""
    config_data = load_config()
    console.print("[bold cyan]Current Configuration:[/bold cyan]")
    for key, value in config_data.items():
        console.print(f"  {key}: {value}")

if __name__ == '__main__':
    cli()
