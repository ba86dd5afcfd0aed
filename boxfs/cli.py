"""
CLI entry point for the Box filesystem adapter.
Exposes the adapter operations as shell commands.
"""
import logging
import sys
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Callable, Optional

import click

from .adapter import BoxAdapter
from .box_client import BoxClient
from .config import DEFAULT_ROOT_FOLDER_ID, LOG_FILE
from .exceptions import BoxFsError, UnableToRetrieveMetadata


logger = logging.getLogger(__name__)


def setup_logging(log_level: str, log_file: Path) -> None:
    """Configure logging with the specified level."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stderr)
        ]
    )
    logger.debug(f"Logging initialized at level {log_level}")


def handle_errors(func: Callable) -> Callable:
    """Report adapter failures as click errors instead of tracebacks."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BoxFsError as e:
            logger.debug("Command failed", exc_info=True)
            raise click.ClickException(str(e)) from e
    return wrapper


def format_timestamp(timestamp: Optional[int]) -> str:
    if timestamp is None:
        return "-"
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@click.group()
@click.option("--token", envvar="BOX_ACCESS_TOKEN", help="Box access token (default: $BOX_ACCESS_TOKEN)")
@click.option("--root-folder", default=DEFAULT_ROOT_FOLDER_ID, show_default=True,
              help="ID of the folder that '/' refers to")
@click.option("--prefix", default="", help="Path prepended to every remote path")
@click.option("--log-level", type=click.Choice(["debug", "info", "warning", "error", "critical"]),
              default="warning", show_default=True, help="Set the logging level")
@click.option("--log-file", type=click.Path(path_type=Path), default=LOG_FILE, show_default=True,
              help="File receiving the log output")
@click.version_option(package_name="boxfs")
@click.pass_context
def main(ctx: click.Context, token: Optional[str], root_folder: str, prefix: str,
         log_level: str, log_file: Path) -> None:
    """Path-based access to files stored in Box."""
    setup_logging(log_level, log_file)

    # An adapter may be injected through the context object
    if ctx.obj is not None:
        return

    if not token:
        raise click.UsageError("No access token given; use --token or set BOX_ACCESS_TOKEN")

    client = BoxClient(token)
    ctx.call_on_close(client.close)
    ctx.obj = BoxAdapter(client, prefix=prefix, root_folder_id=root_folder)


@main.command("ls")
@click.argument("path", default="")
@click.pass_obj
@handle_errors
def list_command(adapter: BoxAdapter, path: str) -> None:
    """List the contents of a directory."""
    for item in adapter.list_contents(path):
        if item.is_dir():
            click.echo(f"d {'-':>12} {format_timestamp(item.last_modified)} {item.path}/")
        else:
            size = item.file_size if item.file_size is not None else "-"
            click.echo(f"- {size:>12} {format_timestamp(item.last_modified)} {item.path}")


@main.command("cat")
@click.argument("path")
@click.pass_obj
@handle_errors
def cat_command(adapter: BoxAdapter, path: str) -> None:
    """Write a file's contents to stdout."""
    click.echo(adapter.read(path), nl=False)


@main.command("get")
@click.argument("path")
@click.argument("target", type=click.Path(dir_okay=False, writable=True, path_type=Path))
@click.pass_obj
@handle_errors
def get_command(adapter: BoxAdapter, path: str, target: Path) -> None:
    """Download a file to a local path."""
    stream = adapter.read_stream(path)
    try:
        with open(target, "wb") as f:
            f.write(stream.read())
    finally:
        stream.close()
    click.echo(f"Downloaded {path} to {target}")


@main.command("put")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("path")
@click.pass_obj
@handle_errors
def put_command(adapter: BoxAdapter, source: Path, path: str) -> None:
    """Upload a local file, creating missing folders."""
    with open(source, "rb") as f:
        adapter.write_stream(path, f)
    click.echo(f"Uploaded {source} to {path}")


@main.command("rm")
@click.argument("path")
@click.pass_obj
@handle_errors
def remove_command(adapter: BoxAdapter, path: str) -> None:
    """Delete a file."""
    adapter.delete(path)
    click.echo(f"Deleted {path}")


@main.command("rmdir")
@click.argument("path")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
@handle_errors
def remove_directory_command(adapter: BoxAdapter, path: str, yes: bool) -> None:
    """Delete a directory and everything inside it."""
    if not yes:
        click.confirm(f"Delete {path} and all of its contents?", abort=True)
    adapter.delete_directory(path)
    click.echo(f"Deleted directory {path}")


@main.command("mkdir")
@click.argument("path")
@click.option("-p", "--parents", is_flag=True, help="Create every missing level of the path")
@click.pass_obj
@handle_errors
def make_directory_command(adapter: BoxAdapter, path: str, parents: bool) -> None:
    """Create a directory (one missing level unless --parents)."""
    if not parents:
        adapter.create_directory(path)
    elif adapter.directory_exists(path):
        click.echo(f"Directory exists: {path}")
        return
    else:
        while not adapter.directory_exists(path):
            adapter.create_directory(path)
    click.echo(f"Created {path}")


@main.command("stat")
@click.argument("path")
@click.pass_obj
@handle_errors
def stat_command(adapter: BoxAdapter, path: str) -> None:
    """Show the metadata of a file or directory."""
    metadata = adapter.get_metadata(path)

    click.echo(f"Path:          {path}")
    click.echo(f"Type:          {'directory' if metadata.is_dir() else 'file'}")
    click.echo(f"ID:            {metadata.extra_metadata.get('id')}")
    click.echo(f"Last modified: {format_timestamp(metadata.last_modified)}")
    if metadata.is_file():
        click.echo(f"Size:          {metadata.file_size}")
        try:
            click.echo(f"MIME type:     {adapter.mime_type(path).mime_type}")
        except UnableToRetrieveMetadata:
            click.echo("MIME type:     unknown")


if __name__ == "__main__":
    main()
