# SPDX-License-Identifier: MIT

import typer

from sheetshark.cleanup import register_cleanup
from sheetshark.errors import ConfigurationError
from sheetshark.initialize import initialize
from sheetshark.terminal.app import run


def main() -> None:
    try:
        initialize()
    except ConfigurationError as e:
        typer.echo(f"Error: {e}")
        raise SystemExit(1)
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
