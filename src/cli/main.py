"""Main CLI entry point for the dokuwiki-client command.

This module provides the Typer application exposing the DokuWikiClient
operations as subcommands. Connection settings come from the environment
(.env) and an optional YAML config file.
"""

import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer

from src.cli.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.dokuwiki_client.auth import Authenticator
from src.dokuwiki_client.errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    RemoteFaultError,
    WikiClientError,
)
from src.dokuwiki_client.page_id import join
from src.dokuwiki_client.wiki_client import DokuWikiClient
from src.models.client_config import ClientConfig

__version__ = "0.1.0"

app = typer.Typer(
    name="dokuwiki-client",
    help="""Work with DokuWiki namespaces, pages and attachments over XML-RPC.

Credentials are read from DOKUWIKI_URL, DOKUWIKI_USER and DOKUWIKI_PASSWORD
(a .env file is honoured). URL and user may also come from .dokuwiki-client.yaml.""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

CONSOLE_HANDLER_NAME = "dokuwiki-client-console"
FILE_HANDLER_NAME = "dokuwiki-client-file"


@dataclass
class CLIState:
    """Options shared by all subcommands."""
    output: OutputHandler
    config_path: Optional[str] = None


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    # Repeated calls in one process replace our handlers instead of stacking them
    for handler in list(app_logger.handlers):
        if handler.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME):
            app_logger.removeHandler(handler)
            handler.close()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"dokuwiki-client_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _create_client(config_path: Optional[str]) -> DokuWikiClient:
    """Build a client from the config file (if any) and the environment.

    An explicit config path must exist; the default path is used only when
    present.

    Raises:
        ConfigError: If the config file is invalid
        ConfigFilesystemError: If the config file cannot be read
        InvalidCredentialsError: If url, user or password is missing
    """
    config = None
    if config_path is not None:
        config = ConfigLoader.load(config_path)
    elif os.path.exists(DEFAULT_CONFIG_PATH):
        config = ConfigLoader.load(DEFAULT_CONFIG_PATH)
    return DokuWikiClient.from_authenticator(Authenticator(config))


@contextmanager
def _wiki_session(ctx: typer.Context) -> Iterator[DokuWikiClient]:
    """Yield a connected client and map failures to exit codes."""
    state: CLIState = ctx.obj
    output = state.output
    if state.config_path:
        output.debug(f"Using config file {state.config_path}")
    try:
        with _create_client(state.config_path) as client:
            yield client
    except InvalidCredentialsError as e:
        logger.error(f"Authentication failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.AUTH_ERROR)
    except APIUnreachableError as e:
        logger.error(f"Wiki unreachable: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.NETWORK_ERROR)
    except RemoteFaultError as e:
        logger.error(f"Wiki rejected {e.method}: {e}")
        output.error(f"Wiki error: {e}")
        raise typer.Exit(ExitCode.REMOTE_FAULT)
    except WikiClientError as e:
        logger.error(f"Operation failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except OSError as e:
        output.error(f"File error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dokuwiki-client version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help=f"YAML config file (default: {DEFAULT_CONFIG_PATH} if present)",
        metavar="FILE",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Work with DokuWiki namespaces, pages and attachments over XML-RPC."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIState(
        output=OutputHandler(verbosity=verbosity, no_color=no_color),
        config_path=config,
    )


@app.command("wiki-version")
def wiki_version(ctx: typer.Context) -> None:
    """Show version of the remote wiki."""
    with _wiki_session(ctx) as client:
        ctx.obj.output.print(client.get_version())


@app.command("namespaces")
def namespaces(
    ctx: typer.Context,
    namespace: str = typer.Argument("", help="Parent namespace (root if omitted)"),
    full_ids: bool = typer.Option(False, "--full-ids", help="Print full namespace ids"),
) -> None:
    """List names of namespaces directly below NAMESPACE."""
    with _wiki_session(ctx) as client:
        names = sorted(client.get_namespace_names(namespace))
        if full_ids:
            names = [join(namespace, name) for name in names]
        ctx.obj.output.print_lines(names)


@app.command("pages")
def pages(
    ctx: typer.Context,
    namespace: str = typer.Argument("", help="Namespace to list (root if omitted)"),
    depth: int = typer.Option(0, "--depth", help="Absolute depth from root, 0 = unlimited", min=0),
) -> None:
    """List pages in NAMESPACE with revision and size."""
    with _wiki_session(ctx) as client:
        result = client.get_pages(namespace, depth)
        ctx.obj.output.print_table(
            ["id", "rev", "size", "mtime"],
            [(page.id, page.rev, page.size, page.mtime) for page in result],
        )


@app.command("page-names")
def page_names(
    ctx: typer.Context,
    namespace: str = typer.Argument("", help="Namespace to list (root if omitted)"),
    full_ids: bool = typer.Option(False, "--full-ids", help="Print full page ids"),
) -> None:
    """List names of pages directly in NAMESPACE."""
    with _wiki_session(ctx) as client:
        names = client.get_page_names(namespace)
        if full_ids:
            names = [join(namespace, name) for name in names]
        ctx.obj.output.print_lines(names)


@app.command("all-pages")
def all_pages(ctx: typer.Context) -> None:
    """List every page of the wiki."""
    with _wiki_session(ctx) as client:
        result = client.get_all_pages()
        ctx.obj.output.print_table(
            ["id", "perms", "size", "last modified"],
            [(page.id, page.perms, page.size, page.last_modified.isoformat()) for page in result],
        )


@app.command("search")
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Fulltext query in wiki search syntax"),
    ids_only: bool = typer.Option(False, "--ids-only", help="Print only page ids"),
) -> None:
    """Search pages matching QUERY."""
    with _wiki_session(ctx) as client:
        if ids_only:
            ctx.obj.output.print_lines(client.search_page_ids(query))
            return
        hits = client.search_pages(query)
        ctx.obj.output.print_table(
            ["id", "score", "title", "snippet"],
            [(hit.id, hit.score, hit.title, hit.snippet) for hit in hits],
        )


@app.command("get")
def get_page(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., metavar="ID", help="Page id"),
) -> None:
    """Print raw wiki text of page ID unchanged; warn if it is missing or empty."""
    with _wiki_session(ctx) as client:
        text = client.get_page(page_id)
        if not text:
            ctx.obj.output.warning(f"Page {page_id} does not exist or is empty")
            return
        ctx.obj.output.print(text)


@app.command("put")
def put_page(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., metavar="ID", help="Page id"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File with new wiki text"),
    summary: Optional[str] = typer.Option(None, "--summary", help="Change summary"),
    minor: Optional[bool] = typer.Option(None, "--minor/--major", help="Mark change as minor"),
) -> None:
    """Create or overwrite page ID with the content of FILE."""
    with _wiki_session(ctx) as client:
        client.put_page(page_id, file.read_text(encoding="utf-8"), summary=summary, minor=minor)
        ctx.obj.output.success(f"Saved page {page_id}")


@app.command("delete-page")
def delete_page(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., metavar="ID", help="Page id"),
) -> None:
    """Delete page ID (saves empty content)."""
    with _wiki_session(ctx) as client:
        client.delete_page(page_id)
        ctx.obj.output.success(f"Deleted page {page_id}")


@app.command("attachments")
def attachments(
    ctx: typer.Context,
    namespace: str = typer.Argument("", help="Namespace to list (root if omitted)"),
    depth: Optional[int] = typer.Option(
        None,
        "--depth",
        help="Absolute depth from root, 0 = unlimited (default: only NAMESPACE itself)",
        min=0,
    ),
    names_only: bool = typer.Option(False, "--names-only", help="Print only file names"),
) -> None:
    """List attachments in NAMESPACE."""
    with _wiki_session(ctx) as client:
        if names_only and depth is None:
            ctx.obj.output.print_lines(client.get_attachment_file_names(namespace))
            return
        result = client.get_attachments(namespace, depth)
        if names_only:
            ctx.obj.output.print_lines(attachment.file for attachment in result)
            return
        ctx.obj.output.print_table(
            ["id", "size", "image", "writable", "last modified"],
            [
                (a.id, a.size, a.is_img, a.writable, a.last_modified.isoformat())
                for a in result
            ],
        )


@app.command("get-attachment")
def get_attachment(
    ctx: typer.Context,
    media_id: str = typer.Argument(..., metavar="ID", help="Media id"),
    out: Path = typer.Argument(..., dir_okay=False, help="File to write the content to"),
) -> None:
    """Download attachment ID into OUT."""
    with _wiki_session(ctx) as client:
        data = client.get_attachment(media_id)
        out.write_bytes(data)
        ctx.obj.output.success(f"Wrote {len(data)} bytes to {out}")


@app.command("put-attachment")
def put_attachment(
    ctx: typer.Context,
    media_id: str = typer.Argument(..., metavar="ID", help="Media id"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to upload"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing file"),
    mtime: Optional[int] = typer.Option(
        None,
        "--mtime",
        help="Modification time to record (unix timestamp)",
    ),
) -> None:
    """Upload FILE as attachment ID."""
    with _wiki_session(ctx) as client:
        client.put_attachment(media_id, file.read_bytes(), overwrite, mtime=mtime)
        ctx.obj.output.success(f"Uploaded attachment {media_id}")


@app.command("delete-attachment")
def delete_attachment(
    ctx: typer.Context,
    media_id: str = typer.Argument(..., metavar="ID", help="Media id"),
) -> None:
    """Delete attachment ID."""
    with _wiki_session(ctx) as client:
        client.delete_attachment(media_id)
        ctx.obj.output.success(f"Deleted attachment {media_id}")


@app.command("delete-namespace")
def delete_namespace(
    ctx: typer.Context,
    namespace: str = typer.Argument(..., help="Namespace to remove"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete all pages, then all attachments, under NAMESPACE.

    Not atomic: if an attachment cannot be deleted, the pages are already gone.
    """
    if not yes:
        typer.confirm(
            f"Delete all pages and attachments under '{namespace}'?",
            abort=True,
        )
    with _wiki_session(ctx) as client:
        ctx.obj.output.info(f"Deleting pages, then attachments, under {namespace}")
        with ctx.obj.output.spinner(f"Deleting namespace {namespace}..."):
            client.delete_namespace(namespace)
        ctx.obj.output.success(f"Deleted namespace {namespace}")


@app.command("init-config")
def init_config(
    ctx: typer.Context,
    url: str = typer.Option(..., "--url", help="XML-RPC endpoint, e.g. https://wiki.example.com/lib/exe/xmlrpc.php"),
    user: Optional[str] = typer.Option(None, "--user", help="Wiki user name"),
    timeout: int = typer.Option(30, "--timeout", help="HTTP timeout in seconds", min=1),
    no_verify_ssl: bool = typer.Option(False, "--no-verify-ssl", help="Do not verify TLS certificates"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write a config file with connection settings (never the password)."""
    output: OutputHandler = ctx.obj.output
    config_path = ctx.obj.config_path or DEFAULT_CONFIG_PATH

    if not url.startswith(("http://", "https://")):
        output.error(f"URL must start with http:// or https://, got '{url}'")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    if os.path.exists(config_path) and not force:
        output.error(f"{config_path} already exists (use --force to overwrite)")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    config = ClientConfig(url=url, user=user, timeout=timeout, verify_ssl=not no_verify_ssl)
    try:
        ConfigLoader.save(config_path, config)
    except WikiClientError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    logger.info(f"Wrote configuration to {config_path}")
    output.success(f"Wrote {config_path}")


def main() -> None:
    """Main entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
