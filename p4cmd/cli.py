"""p4cmd CLI entrypoint."""

import sys
from typing import BinaryIO, Callable, Optional

import click

from p4cmd.commands import DECODERS
from p4cmd.config import get_config
from p4cmd.connection import P4
from p4cmd.errors import EXIT_ERROR, EXIT_PARTIAL, EXIT_SUCCESS, P4Error
from p4cmd.items import ItemStream, MessageLevel
from p4cmd.logging import get_logger, setup_logging
from p4cmd.render.colors import echo_error, echo_warning, style_level
from p4cmd.render.json import render_items_json
from p4cmd.render.text import render_item

logger = get_logger("cli")


def _exit_status(items: list) -> int:
    """
    Exit codes:
      the p4 exit code when it is in 1..255
      EXIT_ERROR (1): p4 exit code outside what a process can report
      EXIT_PARTIAL (4): p4 exited 0 but reported errors in-stream
      EXIT_SUCCESS (0): otherwise
    """
    code = items[-1].as_error().code
    if 0 < code <= 255:
        return code
    if code != 0:
        echo_warning(f"Warning: p4 exit status {code} reported as {EXIT_ERROR}")
        return EXIT_ERROR
    for item in items:
        message = item.as_message()
        if message is not None and message.level is MessageLevel.ERROR:
            return EXIT_PARTIAL
    return EXIT_SUCCESS


def _emit(command: str, run: Callable[[], ItemStream], json_output: bool) -> None:
    """Run a command, print its stream and exit with the matching status."""
    try:
        items = list(run())
    except P4Error as e:
        logger.debug(f"{command} failed: {e!r}")
        echo_error(f"Error: {e}")
        if e.cause is not None:
            echo_error(f"Caused by: {e.cause}")
        sys.exit(e.exit_code)

    if json_output:
        click.echo(render_items_json(command, items))
    else:
        for item in items:
            if item.is_error:
                continue
            message = item.as_message()
            if message is not None:
                click.echo(style_level(render_item(item), message.level))
            else:
                click.echo(render_item(item))

    sys.exit(_exit_status(items))


def _connection(ctx: click.Context) -> P4:
    connection = ctx.obj
    assert isinstance(connection, P4)
    return connection


json_option = click.option("--json", "json_output", is_flag=True, help="JSON output")
max_files_option = click.option(
    "-m", "--max-files", type=click.IntRange(min=1), default=None, help="Limit to the first N files"
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option("--p4", "p4_cmd", default=None, help="p4 executable to run")
@click.option("-p", "--port", default=None, help="Server address (overrides P4PORT)")
@click.option("-u", "--user", default=None, help="User name (overrides P4USER)")
@click.option("-c", "--client", default=None, help="Client workspace (overrides P4CLIENT)")
@click.option(
    "-r", "--retries", type=click.IntRange(min=0), default=None, help="Network retries"
)
@click.version_option(package_name="p4cmd")
@click.pass_context
def p4cmd(
    ctx: click.Context,
    verbose: bool,
    p4_cmd: Optional[str],
    port: Optional[str],
    user: Optional[str],
    client: Optional[str],
    retries: Optional[int],
) -> None:
    """p4cmd - typed access to Perforce tagged output."""
    setup_logging(verbose=verbose)

    try:
        config = get_config()
    except P4Error as e:
        echo_error(f"Error: {e}")
        sys.exit(e.exit_code)

    if p4_cmd is not None:
        config.p4_cmd = p4_cmd
    if port is not None:
        config.port = port
    if user is not None:
        config.user = user
    if client is not None:
        config.client = client
    if retries is not None:
        config.retries = retries

    ctx.obj = P4.from_config(config)


@p4cmd.command()
@click.argument("dirs", nargs=-1, required=True)
@click.option("-C", "client_only", is_flag=True, help="Only directories in the client view")
@click.option("-S", "stream", default=None, help="Only directories mapped by this stream")
@click.option("-D", "include_deleted", is_flag=True, help="Include deleted directories")
@click.option("-H", "include_synced", is_flag=True, help="Only directories with synced files")
@click.option("-i", "ignore_case", is_flag=True, help="Case-insensitive matching")
@json_option
@click.pass_context
def dirs(
    ctx: click.Context,
    dirs: tuple[str, ...],
    client_only: bool,
    stream: Optional[str],
    include_deleted: bool,
    include_synced: bool,
    ignore_case: bool,
    json_output: bool,
) -> None:
    """List depot subdirectories."""
    connection = _connection(ctx)
    _emit(
        "dirs",
        lambda: connection.dirs(
            *dirs,
            client_only=client_only,
            stream=stream,
            include_deleted=include_deleted,
            include_synced=include_synced,
            ignore_case=ignore_case,
        ),
        json_output,
    )


@p4cmd.command()
@click.argument("files", nargs=-1, required=True)
@click.option("-a", "list_revisions", is_flag=True, help="List all revisions in the range")
@click.option("-e", "syncable_only", is_flag=True, help="Skip deleted/purged/archived files")
@click.option("-i", "ignore_case", is_flag=True, help="Case-insensitive matching")
@max_files_option
@json_option
@click.pass_context
def files(
    ctx: click.Context,
    files: tuple[str, ...],
    list_revisions: bool,
    syncable_only: bool,
    ignore_case: bool,
    max_files: Optional[int],
    json_output: bool,
) -> None:
    """List files in the depot."""
    connection = _connection(ctx)
    _emit(
        "files",
        lambda: connection.files(
            *files,
            list_revisions=list_revisions,
            syncable_only=syncable_only,
            ignore_case=ignore_case,
            max_files=max_files,
        ),
        json_output,
    )


@p4cmd.command("print")
@click.argument("files", nargs=-1, required=True)
@click.option("-a", "all_revs", is_flag=True, help="Print every revision in the range")
@click.option("-k", "no_keywords", is_flag=True, help="Suppress keyword expansion")
@max_files_option
@json_option
@click.pass_context
def print_files(
    ctx: click.Context,
    files: tuple[str, ...],
    all_revs: bool,
    no_keywords: bool,
    max_files: Optional[int],
    json_output: bool,
) -> None:
    """
    Print depot file contents.

    Binary content is summarized in text output and base64 encoded in JSON.
    """
    connection = _connection(ctx)
    _emit(
        "print",
        lambda: connection.print(
            *files,
            all_revs=all_revs,
            keyword_expansion=not no_keywords,
            max_files=max_files,
        ),
        json_output,
    )


@p4cmd.command()
@click.argument("files", nargs=-1)
@click.option("-f", "force", is_flag=True, help="Resync files the client already has")
@click.option("-n", "preview", is_flag=True, help="Preview without updating the workspace")
@click.option("-k", "server_only", is_flag=True, help="Update server metadata only")
@click.option("-p", "client_only", is_flag=True, help="Populate workspace without server update")
@click.option("-s", "verify", is_flag=True, help="Verify digests before overwriting")
@click.option("--parallel", type=click.IntRange(min=0), default=None, help="Transfer threads")
@max_files_option
@json_option
@click.pass_context
def sync(
    ctx: click.Context,
    files: tuple[str, ...],
    force: bool,
    preview: bool,
    server_only: bool,
    client_only: bool,
    verify: bool,
    parallel: Optional[int],
    max_files: Optional[int],
    json_output: bool,
) -> None:
    """Synchronize the client with its view of the depot."""
    connection = _connection(ctx)
    _emit(
        "sync",
        lambda: connection.sync(
            *files,
            force=force,
            preview=preview,
            server_only=server_only,
            client_only=client_only,
            verify=verify,
            max_files=max_files,
            parallel=parallel,
        ),
        json_output,
    )


@p4cmd.command()
@click.argument("files", nargs=-1)
@json_option
@click.pass_context
def where(ctx: click.Context, files: tuple[str, ...], json_output: bool) -> None:
    """Show how file names are mapped by the client view."""
    connection = _connection(ctx)
    _emit("where", lambda: connection.where(*files), json_output)


@p4cmd.command()
@click.argument("kind", type=click.Choice(sorted(DECODERS)))
@click.argument("source", type=click.File("rb"), default="-")
@json_option
def decode(kind: str, source: BinaryIO, json_output: bool) -> None:
    """
    Decode captured `p4 -s -ztag` output.

    Reads SOURCE (default: stdin) and decodes it with the grammar of
    command KIND, without running p4.

    Examples:
      p4 -s -ztag files //depot/... > out.txt
      p4cmd decode files out.txt --json
    """
    data = source.read()
    invocation = f"decode {kind} {getattr(source, 'name', '-')}"
    _emit(kind, lambda: DECODERS[kind](data, invocation), json_output)
