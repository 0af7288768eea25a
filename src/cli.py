"""``notify-router`` command — send one notification from the shell.

Usage::

    notify-router -t "Deploy" -b "v1.2 is live" ntfy://ntfy.sh/deploys
    notify-router -g ops,urgent -c ~/alerts.yml -b "disk almost full"
    echo "backup finished" | notify-router -t Backup

Destinations come from the arguments, then NOTIFY_URLS, then config files.
Exits non-zero when any destination fails.
"""

import asyncio
import sys
from typing import List, Optional

import typer

from src.config import get_settings
from src.logging_config import setup_logging
from src.notify import ConfigError, Message, build_router, parse_tags

app = typer.Typer(
    name="notify-router",
    help="Fan a notification out to every configured destination URL.",
    add_completion=False,
)


def _read_body(body: Optional[str]) -> str:
    if body:
        return body.strip()
    stdin = typer.get_text_stream("stdin")
    if stdin.isatty():
        return ""
    return stdin.read().strip()


@app.command()
def send(
    urls: Optional[List[str]] = typer.Argument(None, help="Destination URLs to send to."),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Notification title/subject."),
    body: Optional[str] = typer.Option(
        None, "--body", "-b", help="Notification body; read from stdin when absent."
    ),
    tag: Optional[List[str]] = typer.Option(
        None, "--tag", "-g", help="Only send to destinations with these tags (comma or space separated)."
    ),
    config: Optional[List[str]] = typer.Option(
        None, "--config", "-c", help="Additional config file paths."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors."),
) -> None:
    """Send a notification to every selected destination."""
    setup_logging("ERROR" if quiet else "DEBUG" if verbose else "WARNING", stream=sys.stderr)

    text = _read_body(body)
    if not text:
        typer.echo("Error: No message body provided. Use -b or pipe to stdin.", err=True)
        raise typer.Exit(code=1)

    try:
        notifier = build_router(get_settings(), urls=urls or [], config_paths=config or [])
    except ConfigError as exc:
        typer.echo(f"Error: {exc} ({exc.path})", err=True)
        raise typer.Exit(code=1)

    if not notifier.urls():
        typer.echo("Error: No notification URLs provided.", err=True)
        typer.echo(
            "Provide URLs as arguments, via NOTIFY_URLS, or in config files.", err=True
        )
        raise typer.Exit(code=1)

    tags = parse_tags(",".join(tag)) if tag else None
    results = asyncio.run(notifier.send(Message(body=text, title=title), tags=tags))

    has_error = False
    for result in results:
        if not result.success:
            has_error = True
            if not quiet:
                typer.echo(f"[{result.provider_id}] FAIL: {result.error}", err=True)
        elif not quiet:
            typer.echo(f"[{result.provider_id}] OK")

    raise typer.Exit(code=1 if has_error else 0)


if __name__ == "__main__":
    app()
