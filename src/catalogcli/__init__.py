"""catalogcli -- browse the DummyJSON product catalog from the terminal.

The package wraps the DummyJSON product endpoints in a read-through
repository backed by an in-memory TTL cache, and exposes it as a Typer CLI
with one-shot commands and an interactive shell.

Typical workflow::

    catalogcli products list --sort-by price --order desc
    catalogcli products search phone
    catalogcli shell                     # cache stays warm between queries

Modules:
    app: Typer application and CLI entry point.
    repository: Read-through repository over three TTL caches.
    cache: Generic in-memory cache with per-entry TTL.
    usecases: Input validation in front of the repository.
    result: Success / Error / Loading outcome wrapper.
    models: Pydantic models (config, wire payloads, domain objects).
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
