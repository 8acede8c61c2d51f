"""CLI interface for pass-fxa."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import click

from .api import LoginSyncClient
from .config import config
from .exceptions import AmbiguousCredentialsError, PassFxaError
from .output import OutputFormatter
from .store import GpgContext, PasswordStore
from .sync import Operation, SyncEngine

logger = logging.getLogger(__name__)

# Exit status when several secrets could hold the account credentials
EXIT_AMBIGUOUS_CREDENTIALS = 2


async def _run_engine(engine: SyncEngine, operation: Operation, dry_run: bool) -> dict:
    async with engine.client:
        return await engine.run(operation, dry_run=dry_run)


def _sync(ctx: Any, operation: Operation) -> None:
    """Run one reconciliation and turn errors into exit statuses."""
    out: OutputFormatter = ctx.obj["out"]
    store_dir: Optional[Path] = ctx.obj["store_dir"]

    try:
        client = LoginSyncClient(api_url=ctx.obj["api_url"], timeout=config.timeout)
        engine = SyncEngine(
            store=PasswordStore(store_dir or config.store_dir),
            gpg=GpgContext(config.gpg_binary),
            client=client,
            output=out,
            pass_name=ctx.obj["pass_name"],
            account_host=config.account_host,
        )
        stats = asyncio.run(_run_engine(engine, operation, ctx.obj["dry_run"]))
    except AmbiguousCredentialsError as e:
        out.error(f"{e}:")
        for secret_name, username in e.candidates:
            out.error(f"- {secret_name}: {username}")
        ctx.exit(EXIT_AMBIGUOUS_CREDENTIALS)
    except PassFxaError as e:
        out.error(str(e))
        ctx.exit(1)

    if out.json_output:
        out.output_json(stats)


@click.group(invoke_without_command=True)
@click.option(
    "--pass-name",
    help="Specify the credential location for FxA authentication",
)
@click.option(
    "--store-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Password store directory (default: $PASSWORD_STORE_DIR or ~/.password-store)",
)
@click.option(
    "--api-url",
    envvar="PASS_FXA_API_URL",
    help="Base URL of the login sync service",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be done without changing remote logins",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output statistics in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="pass-fxa")
@click.pass_context
def main(
    ctx: Any,
    pass_name: Optional[str],
    store_dir: Optional[Path],
    api_url: Optional[str],
    dry_run: bool,
    quiet: bool,
    json: bool,
    verbose: bool,
) -> None:
    """pass-fxa - Sync passwords from a pass store to Firefox Sync.

    Without a command, uploads new and changed passwords.
    """
    ctx.ensure_object(dict)
    ctx.obj["pass_name"] = pass_name
    ctx.obj["store_dir"] = store_dir
    ctx.obj["api_url"] = api_url
    ctx.obj["dry_run"] = dry_run
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)

    # Configure logging based on verbose flag
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pass_fxa").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    if ctx.invoked_subcommand is None:
        _sync(ctx, Operation.UPLOAD)


@main.command()
@click.pass_context
def upload(ctx: Any) -> None:
    """Upload new and changed local passwords (default)."""
    _sync(ctx, Operation.UPLOAD)


@main.command()
@click.pass_context
def delete(ctx: Any) -> None:
    """Delete all remote passwords that are present locally."""
    _sync(ctx, Operation.DELETE)


if __name__ == "__main__":
    main()
