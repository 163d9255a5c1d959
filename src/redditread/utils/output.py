"""Output handling utilities for redditread"""

import json
import sys
from pathlib import Path
from typing import Any, Optional
from rich.console import Console
from rich.syntax import Syntax
import pyperclip

console = Console()


def resolve_pretty(pretty: Optional[bool]) -> bool:
    """Default to pretty output only when stdout is a terminal"""
    if pretty is None:
        return sys.stdout.isatty()
    return pretty


def display_json(content: Any, pretty: bool = True):
    """Display JSON in the terminal, highlighted when pretty"""
    text = content if isinstance(content, str) else json.dumps(content, indent=2 if pretty else None)
    if not pretty:
        # Plain output for pipes or non-interactive
        print(text)
        return
    console.print(Syntax(text, "json", theme="monokai"))


def save_to_file(content: Any, filepath: str):
    """Save JSON content to a file"""
    path = Path(filepath)

    # Create parent directories if they don't exist
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        if isinstance(content, str):
            f.write(content)
        else:
            json.dump(content, f, indent=2)

    console.print(f"[green]✓ Saved to {filepath}[/green]")


def copy_to_clipboard(content: Any):
    """Copy content to clipboard"""
    text = content if isinstance(content, str) else json.dumps(content, indent=2)
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        console.print(f"[red]Failed to copy to clipboard: {e}[/red]")
        return
    console.print("[green]✓ Copied to clipboard[/green]")


def handle_output(
    content: Any,
    output_file: Optional[str] = None,
    copy: bool = False,
    pretty: bool = True,
):
    """Handle all output options for a JSON payload"""
    if output_file:
        save_to_file(content, output_file)

    if copy:
        copy_to_clipboard(content)

    if not output_file:
        display_json(content, pretty)
