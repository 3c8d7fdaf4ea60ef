"""CLI entry point."""

import os
import sys
import click
import logging
from typing import Dict, Optional, Tuple, Any
from click import Context

import git

from ...config import Config, default_config
from ...config.config_parser import merge_event_from_env, parse_config
from ...git import RealGit
from ...github import GitHubClient, find_github_token
from ...github.adapters import create_github_adapter
from ...pretty import format_report, print_header, print_json
from ...restack import MergeEvent, StackWalker, discover_stack
from ...typing import ConfigurationError

# Get module logger
logger = logging.getLogger(__name__)

def check(err: Exception) -> None:
    """Check for error and exit if needed."""
    if err:
        logger.error(f"Error: {err}")
        sys.exit(1)

class AliasedGroup(click.Group):
    """Command group with support for aliases."""

    def __init__(self, name: Optional[str] = None, commands: Optional[Dict[str, click.Command]] = None, **attrs: Any) -> None:
        """Initialize with aliases map."""
        super().__init__(name, commands, **attrs)
        self.aliases: Dict[str, str] = {}

    def add_alias(self, alias: str, command: str) -> None:
        """Add an alias for a command."""
        self.aliases[alias] = command

    def get_command(self, ctx: Context, cmd_name: str) -> Optional[click.Command]:
        """Get a command by name, supporting aliases."""
        if cmd_name in self.aliases:
            cmd_name = self.aliases[cmd_name]
        return super().get_command(ctx, cmd_name)

@click.group(cls=AliasedGroup)
@click.pass_context
def cli(ctx: Context) -> None:
    """Keep stacked pull requests up to date after one of them is squash-merged."""
    ctx.obj = {}

def restore_git_state(git_cmd: RealGit, branch: str, head: str) -> None:
    """Attempt to restore git to a known good state."""
    logger.info("Attempting to restore repository state...")

    try:
        if git_cmd.merge_in_progress():
            git_cmd.merge_abort()
    except Exception as e:
        logger.error(f"Failed to abort merge: {e}")

    # A detached HEAD (as in CI checkouts) is restored by commit
    target = head if branch == "HEAD" else branch
    try:
        git_cmd.must_git(f"checkout -f {target}")
    except Exception:
        logger.error(f"Failed to checkout {target}")
        return

    try:
        git_cmd.reset_hard(head)
        logger.info("Repository restored to original state")
    except Exception as e:
        logger.error(f"Failed to reset to {head}: {e}")
        logger.error("Repository may be in an inconsistent state")
        logger.error(f"To manually restore: git checkout {branch} && git reset --hard {head}")

def setup_git(directory: Optional[str] = None, git_executable: Optional[str] = None) -> Tuple[Config, RealGit]:
    """Setup Git command and config."""
    if git_executable:
        git.refresh(git_executable)
    if directory:
        os.chdir(directory)

    git_cmd = RealGit(default_config())
    try:
        git_cmd.run_cmd("rev-parse --git-dir")
    except Exception as e:
        check(e)

    cfg = parse_config(git_cmd)
    config = Config(cfg)
    return config, RealGit(config)

def setup_github(config: Config) -> GitHubClient:
    """Create the GitHub pull request directory."""
    token = find_github_token()
    if not token:
        raise ConfigurationError("No GitHub token found. Set GITHUB_TOKEN or log in with 'gh auth login'")
    return GitHubClient(config, create_github_adapter(token, config.repo.github_api_url))

def log_diagnostics(event: MergeEvent, git_cmd: RealGit) -> None:
    """Describe the inputs and the checkout before anything changes."""
    print_header("autorestack update-stack starting", file=sys.stderr)
    logger.info(f"SQUASH_COMMIT: {event.squash_commit}")
    logger.info(f"MERGED_BRANCH: {event.merged_branch}")
    logger.info(f"TARGET_BRANCH: {event.target_branch}")
    logger.info(f"Current directory: {os.getcwd()}")
    logger.info(f"Git remotes:\n{git_cmd.run_cmd('remote -v')}")
    logger.info(f"Git branches:\n{git_cmd.run_cmd('branch -a')}")

@cli.command(name="update-stack", help="Update the pull requests stacked on a branch that was just squash-merged")
@click.option('-C', '--directory', type=click.Path(exists=True, file_okay=False, dir_okay=True),
              help='Run as if autorestack was started in DIRECTORY instead of the current working directory')
@click.option('--squash-commit', envvar='SQUASH_COMMIT',
              help="The squash commit that landed on the target branch [env: SQUASH_COMMIT]")
@click.option('--merged-branch', envvar='MERGED_BRANCH',
              help="The branch that was merged and will be deleted [env: MERGED_BRANCH]")
@click.option('--target-branch', envvar='TARGET_BRANCH',
              help="The branch the pull request was merged into [env: TARGET_BRANCH]")
@click.option('--git-executable', envvar='GIT', help="Path of the git executable to use [env: GIT]")
@click.option('--pretend', is_flag=True, help="Merge locally but don't push or edit pull requests")
@click.option('--json', 'as_json', is_flag=True, help="Print the run report as JSON")
@click.option('-v', '--verbose', count=True, help="Increase verbosity (can be used multiple times for more verbosity)")
@click.pass_context
def update_stack(ctx: Context, directory: Optional[str], squash_commit: Optional[str],
                 merged_branch: Optional[str], target_branch: Optional[str],
                 git_executable: Optional[str], pretend: bool, as_json: bool, verbose: int) -> None:
    """Update stack command."""
    from ... import setup_logging
    setup_logging(verbose)

    try:
        event = merge_event_from_env({
            'SQUASH_COMMIT': squash_commit,
            'MERGED_BRANCH': merged_branch,
            'TARGET_BRANCH': target_branch,
        })
    except ConfigurationError as e:
        check(e)
        return

    config, git_cmd = setup_git(directory, git_executable)
    config.tool.pretend = pretend
    log_diagnostics(event, git_cmd)

    # Save current git state for recovery
    try:
        current_branch = git_cmd.current_branch()
        current_head = git_cmd.rev_parse("HEAD")
    except Exception as e:
        logger.error(f"Failed to get current git state: {e}")
        sys.exit(1)

    try:
        github = setup_github(config)
        report = StackWalker(config, git_cmd, github, event).run()
    except Exception as e:
        logger.error(f"Error during stack update: {e}")
        restore_git_state(git_cmd, current_branch, current_head)
        sys.exit(1)

    if as_json:
        print_json(report.to_dict())
    else:
        print_header(f"Stack update after merging {event.merged_branch} into {event.target_branch}")
        print(format_report(report))
    if report.conflicted:
        logger.warning(f"Conflicts need manual resolution in: {', '.join(report.conflicted_branches)}")

@cli.command(name="show-stack", help="Show the tree of pull request branches based on BRANCH")
@click.argument('branch')
@click.option('-C', '--directory', type=click.Path(exists=True, file_okay=False, dir_okay=True),
              help='Run as if autorestack was started in DIRECTORY instead of the current working directory')
@click.option('-v', '--verbose', count=True, help="Increase verbosity (can be used multiple times for more verbosity)")
@click.pass_context
def show_stack(ctx: Context, branch: str, directory: Optional[str], verbose: int) -> None:
    """Show stack command."""
    from ... import setup_logging
    setup_logging(verbose)

    config, _ = setup_git(directory)
    try:
        github = setup_github(config)
        stack = discover_stack(github, branch)
    except Exception as e:
        check(e)
        return
    print("\n".join(stack.render()))


def main() -> None:
    """Main entry point."""
    cli.add_alias('up', 'update-stack')
    cli.add_alias('st', 'show-stack')
    cli(obj={})

if __name__ == "__main__":
    main()
