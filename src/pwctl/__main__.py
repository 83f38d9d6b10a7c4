"""Allow ``python -m pwctl`` (used by the clipboard clearing helper)."""

from pwctl.cli import cli

if __name__ == "__main__":
    cli()
