"""Data types for a stack update run."""

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, List, Literal, Optional, Tuple

UpdateStatus = Literal['skipped', 'updated', 'conflicted']

@dataclass(frozen=True)
class MergeEvent:
    """The merge that triggered this run."""
    squash_commit: str
    merged_branch: str
    target_branch: str

@dataclass(frozen=True)
class StackNode:
    """A branch and the PR branches based on it, as discovered at the start of the run."""
    branch: str
    children: Tuple['StackNode', ...] = ()

    def walk(self) -> Iterator[Tuple[str, 'StackNode']]:
        """Yield (base branch, node) for every descendant, parents before children."""
        for child in self.children:
            yield self.branch, child
            yield from child.walk()

    def branches(self) -> List[str]:
        """This branch followed by every descendant, pre-order."""
        return [self.branch] + [node.branch for _, node in self.walk()]

    def render(self) -> List[str]:
        """Draw the tree, one branch per line."""
        lines = [self.branch]
        for i, child in enumerate(self.children):
            last = i == len(self.children) - 1
            sub = child.render()
            lines.append(("└── " if last else "├── ") + sub[0])
            lines.extend(("    " if last else "│   ") + line for line in sub[1:])
        return lines

@dataclass
class ConflictRecord:
    """A branch and the merge sources that could not be merged into it, in attempt order."""
    branch: str
    sources: List[str]

@dataclass
class UpdateResult:
    """Outcome of updating one branch."""
    branch: str
    status: UpdateStatus
    commit: Optional[str] = None
    conflict: Optional[ConflictRecord] = None

    @classmethod
    def skipped(cls, branch: str) -> 'UpdateResult':
        return cls(branch, 'skipped')

    @classmethod
    def updated(cls, branch: str, commit: str) -> 'UpdateResult':
        return cls(branch, 'updated', commit=commit)

    @classmethod
    def conflicted(cls, record: ConflictRecord) -> 'UpdateResult':
        return cls(record.branch, 'conflicted', conflict=record)

@dataclass
class RunReport:
    """What a run did to each branch of the stack."""
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    conflicted: List[ConflictRecord] = field(default_factory=list)
    retargeted: List[str] = field(default_factory=list)
    pushed: List[str] = field(default_factory=list)
    deleted: Optional[str] = None

    def record(self, result: UpdateResult) -> None:
        if result.status == 'updated':
            self.updated.append(result.branch)
        elif result.status == 'skipped':
            self.skipped.append(result.branch)
        elif result.conflict is not None:
            self.conflicted.append(result.conflict)

    @property
    def conflicted_branches(self) -> List[str]:
        return [c.branch for c in self.conflicted]

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)
