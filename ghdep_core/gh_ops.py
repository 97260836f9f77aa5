"""GitHub CLI wrapper for pull request operations."""

import json
import shutil
import subprocess
import sys

from ghdep_core.paths import log_shell_command

# Set once _check_gh has passed in this process
_gh_checked = False


class GhCommandError(Exception):
    """A gh invocation exited non-zero."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr.strip()
        super().__init__(self.stderr or f"{' '.join(cmd)} failed (rc={returncode})")


def _check_gh():
    """Check that gh CLI is installed and authenticated. Exit with guidance if not."""
    global _gh_checked
    if _gh_checked:
        return

    if not shutil.which("gh"):
        print(
            "Error: ghdep requires the GitHub CLI (gh).\n"
            "Install it: https://cli.github.com",
            file=sys.stderr,
        )
        raise SystemExit(1)

    result = subprocess.run(
        ["gh", "auth", "status"],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        print(
            "Error: gh CLI is not authenticated.\n"
            "Run: gh auth login",
            file=sys.stderr,
        )
        raise SystemExit(1)
    _gh_checked = True


def run_gh(*args: str) -> str:
    """Run a gh CLI command and return its stripped stdout.

    Raises GhCommandError carrying gh's stderr if the command fails.
    """
    cmd = ["gh", *args]
    log_shell_command(cmd, prefix="gh")
    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        log_shell_command(cmd, prefix="gh", returncode=result.returncode)
        raise GhCommandError(cmd, result.returncode, result.stderr or "")
    return result.stdout.strip()


def graphql(query: str, **variables: str | int | None) -> dict:
    """Run a GraphQL query through ``gh api graphql`` and return ``data``.

    String variables are passed with -f, integers with -F; None is skipped.
    """
    args = ["api", "graphql", "-f", f"query={query}"]
    for name, value in variables.items():
        if value is None:
            continue
        if isinstance(value, int):
            args += ["-F", f"{name}={value}"]
        else:
            args += ["-f", f"{name}={value}"]
    response = json.loads(run_gh(*args))
    if response.get("errors"):
        messages = "; ".join(e.get("message", "?") for e in response["errors"])
        raise GhCommandError(["gh", *args], 0, messages)
    return response["data"]


def current_user() -> str:
    """Return the login of the authenticated user."""
    return run_gh("api", "graphql", "-f", "query={viewer{login}}",
                  "--jq", ".data.viewer.login")


def approve_pr(url: str) -> None:
    run_gh("pr", "review", "--approve", url)


def merge_pr(url: str, method: str) -> None:
    """Enable auto-merge with the given method flag ("rebase", "merge", "squash")."""
    run_gh("pr", "merge", "--auto", f"--{method}", url)


def comment_pr(url: str, body: str) -> None:
    run_gh("pr", "comment", url, "--body", body)


def close_pr(url: str) -> None:
    run_gh("pr", "close", url)


def browse_pr(url: str) -> None:
    """Open a PR in the default browser."""
    run_gh("pr", "view", "--web", url)


def view_pr(url: str) -> str:
    """Return gh's plain-text rendering of a PR (title, metadata and body)."""
    return run_gh("pr", "view", url)
