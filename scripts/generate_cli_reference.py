#!/usr/bin/env python3
"""Generate CLI reference documentation from the typer app."""

import sys
from pathlib import Path
from typing import Any

# Add parent directory to path to import tillcount
sys.path.insert(0, str(Path(__file__).parent.parent))

import typer

from tillcount.cli import app


def format_param(param: Any) -> str:
    """Format one option or argument as a markdown bullet."""
    if getattr(param, "param_type_name", "") == "argument":
        return f"- `{param.human_readable_name}` (required)"

    flags = list(param.opts)
    flags += getattr(param, "secondary_opts", None) or []
    line = "- " + ", ".join(f"`{flag}`" for flag in flags)

    help_text = getattr(param, "help", None)
    if help_text:
        line += f": {help_text}"
    # Unset defaults are sentinels on newer click releases
    if isinstance(param.default, (str, int)) and param.default is not False:
        line += f" (default: {param.default})"
    return line


def generate_command_doc(name: str, command: Any) -> str:
    """Generate documentation for a single command."""
    lines = [
        f"### {name}",
        "",
        (command.help or "No description available.").strip(),
        "",
        "**Usage:**",
        "",
        "```bash",
        f"uv run tillcount {name}",
        "```",
        "",
    ]

    params = [p for p in command.params if p.name != "help"]
    if params:
        lines += ["**Options:**", ""]
        lines += [format_param(p) for p in params]
        lines.append("")

    return "\n".join(lines)


def generate_cli_reference() -> str:
    """Generate complete CLI reference documentation."""
    group = typer.main.get_command(app)
    commands = getattr(group, "commands", {})

    lines = [
        "# CLI Commands Reference",
        "",
        "```bash",
        "uv run tillcount [GLOBAL OPTIONS] [COMMAND] [OPTIONS]",
        "```",
        "",
        "## Global Options",
        "",
    ]
    lines += [format_param(p) for p in group.params if p.name != "help"]
    lines += ["", "## Commands", ""]

    for name in sorted(commands):
        lines.append(generate_command_doc(name, commands[name]))

    return "\n".join(lines)


def main() -> None:
    """Generate and write CLI reference documentation."""
    output_path = Path(__file__).parent.parent / "docs" / "cli-commands.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(generate_cli_reference())
    print(f"Generated CLI reference at {output_path}")


if __name__ == "__main__":
    main()
