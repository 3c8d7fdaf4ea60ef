"""Conflict reporting on pull requests."""

import logging
from typing import List, Sequence

from .models import ConflictRecord
from ..config.models import RestackConfig
from ..typing import PRDirectoryInterface
from ..util import format_branch_list

logger = logging.getLogger(__name__)

def format_conflict_comment(branch: str, sources: Sequence[str], remote: str = "origin") -> str:
    """Markdown comment explaining which merges failed and how to finish them by hand."""
    lines: List[str] = [
        "### ⚠️ Automatic update blocked by merge conflicts",
        "",
        f"I tried to merge {format_branch_list(sources)}",
        "into this branch while updating the PR stack and hit conflicts.",
        "",
        "#### How to resolve",
        "```bash",
        f"git fetch {remote}",
        f"git switch {branch}",
    ]
    for source in sources:
        lines += [
            f"git merge {source}",
            "# ...",
            "# fix conflicts, for instance with `git mergetool`",
            "# ...",
            "git commit",
        ]
    lines += ["git push", "```"]
    return "\n".join(lines) + "\n"

class ConflictReporter:
    """Posts a resolution recipe and a label on the PR of a conflicted branch.

    Reporting is not idempotent: reporting the same conflict twice posts two comments.
    """

    def __init__(self, config: RestackConfig, github: PRDirectoryInterface):
        self.config = config
        self.github = github

    def report(self, record: ConflictRecord) -> None:
        logger.info(f"Reporting conflicts on {record.branch}: {', '.join(record.sources)}")
        body = format_conflict_comment(record.branch, record.sources, self.config.repo.github_remote)
        self.github.comment(record.branch, body)
        self.github.add_label(record.branch, self.config.repo.conflict_label)
