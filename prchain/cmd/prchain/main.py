"""CLI entry point."""

import sys
import click
import logging
import yaml
from typing import NoReturn, Optional
from click import Context

from ...config import Config, default_config
from ...config.config_parser import parse_config
from ...git import RealGit
from ...chain import StackResolver
from ...pretty import log_plan
from ...typing import PrChainError, RepositoryNotFound

# Get module logger
logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = 'PRCHAIN_LOG'

def check(err: Exception) -> NoReturn:
    """Report an error and exit."""
    logger.error(f"{type(err).__name__}: {err}")
    sys.exit(1)

@click.group()
@click.option('--log-level', envvar=LOG_LEVEL_ENV, default=None,
              help=f"Set the log level (debug, info, warning, error). Also read from {LOG_LEVEL_ENV}")
@click.version_option(package_name='prchain')
@click.pass_context
def cli(ctx: Context, log_level: Optional[str]) -> None:
    """prchain - lay out a stack of dependent branches as a chain of PRs."""
    ctx.ensure_object(dict)
    ctx.obj['log_level'] = log_level

def setup_git(directory: Optional[str] = None) -> RealGit:
    """Open the repository and load its config."""
    try:
        git_cmd = RealGit(default_config(), directory)
    except RepositoryNotFound as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(2)

    try:
        cfg = parse_config(git_cmd.root)
    except (yaml.YAMLError, ValueError) as e:
        check(e)
    git_cmd.config = Config(cfg)
    return git_cmd

@cli.command(name="log", help="Show how the stack ending at BRANCH splits into one PR per branch")
@click.argument('branch')
@click.option('--trunk', default=None,
              help="Branch the stack is built on (default from config, else 'main')")
@click.option('--no-fetch', is_flag=True, help="Don't fetch remotes before resolving the stack")
@click.option('-C', '--directory', type=click.Path(exists=True, file_okay=False, dir_okay=True),
              help='Run as if prchain was started in DIRECTORY instead of the current working directory')
@click.option('-v', '--verbose', count=True, help="Increase verbosity (can be used multiple times for more verbosity)")
@click.pass_context
def log(ctx: Context, branch: str, trunk: Optional[str], no_fetch: bool,
        directory: Optional[str], verbose: int) -> None:
    """Log command."""
    from ... import setup_logging
    try:
        setup_logging(verbose, ctx.obj.get('log_level'))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'--log-level'")

    git_cmd = setup_git(directory)
    config = git_cmd.config
    trunk_name = trunk or config.repo.trunk

    try:
        if config.repo.fetch and not no_fetch:
            git_cmd.fetch_remotes()
        chain = StackResolver(git_cmd).build_chain(trunk_name, branch)
        log_plan(chain, git_cmd, color=None if config.user.color else False)
    except PrChainError as e:
        check(e)


def main() -> None:
    """Main entry point."""
    cli(obj={})

if __name__ == "__main__":
    main()
