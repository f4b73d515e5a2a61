"""CLI command groups registered on the root Typer app in :mod:`catalogcli.app`."""
