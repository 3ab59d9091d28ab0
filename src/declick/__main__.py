"""Allow ``python -m declick``."""

from declick.cli.main import cli

if __name__ == "__main__":
    cli()
