"""
Commit records and parsing of `git log` output
"""

from dataclasses import dataclass, field
from enum import Enum

# Pipe-separated: hash, parents, author name, author email, author time, subject, decorations
GIT_LOG_FORMAT = "%H|%P|%an|%ae|%at|%s|%D"


class RefType(str, Enum):
    """Kinds of symbolic reference shown next to a commit."""

    BRANCH = "branch"
    TAG = "tag"
    REMOTE = "remote"
    HEAD = "head"
    STASH = "stash"


@dataclass(frozen=True)
class Ref:
    name: str
    type: RefType


@dataclass
class CommitRecord:
    """A commit as handed to the graph layout.

    Only `hash` and `parents` matter for layout; the rest is for display.
    """

    hash: str
    parents: list[str]
    author: str = ""
    email: str = ""
    timestamp: int = 0
    subject: str = ""
    refs: list[Ref] = field(default_factory=list)

    @property
    def short_id(self) -> str:
        return self.hash[:7]

    @property
    def is_merge(self) -> bool:
        return len(self.parents) >= 2


def parse_refs(raw: str) -> list[Ref]:
    """Parse a `%D` decoration string, e.g. "HEAD -> main, tag: v1.0, origin/main"."""
    if not raw.strip():
        return []

    refs: list[Ref] = []
    for part in raw.split(","):
        name = part.strip()
        if not name:
            continue
        if name.startswith("HEAD -> "):
            refs.append(Ref("HEAD", RefType.HEAD))
            refs.append(Ref(name[len("HEAD -> ") :], RefType.BRANCH))
        elif name == "HEAD":
            refs.append(Ref(name, RefType.HEAD))
        elif name.startswith("tag: "):
            refs.append(Ref(name[len("tag: ") :], RefType.TAG))
        elif name == "refs/stash":
            refs.append(Ref("stash", RefType.STASH))
        elif "/" in name:
            refs.append(Ref(name, RefType.REMOTE))
        else:
            refs.append(Ref(name, RefType.BRANCH))
    return refs


def parse_log_output(output: str) -> list[CommitRecord]:
    """Parse `git log --format=GIT_LOG_FORMAT` output.

    The subject may itself contain pipes, so everything between the timestamp
    and the last field is rejoined. With exactly six fields there are no refs.
    Lines with fewer than six fields are skipped.
    """
    commits: list[CommitRecord] = []
    for line in output.split("\n"):
        if not line.strip():
            continue
        parts = line.split("|")
        if len(parts) < 6:
            continue

        if len(parts) == 6:
            subject = parts[5]
            ref_str = ""
        else:
            subject = "|".join(parts[5:-1])
            ref_str = parts[-1]

        try:
            timestamp = int(parts[4])
        except ValueError:
            timestamp = 0

        commits.append(
            CommitRecord(
                hash=parts[0],
                parents=parts[1].split() if parts[1] else [],
                author=parts[2],
                email=parts[3],
                timestamp=timestamp,
                subject=subject,
                refs=parse_refs(ref_str),
            )
        )
    return commits


def checked_out_branch(commits: list[CommitRecord]) -> str | None:
    """Branch that HEAD points at according to the decorations, or None when detached."""
    for commit in commits:
        for i, ref in enumerate(commit.refs):
            if ref.type is not RefType.HEAD:
                continue
            following = commit.refs[i + 1] if i + 1 < len(commit.refs) else None
            if following is not None and following.type is RefType.BRANCH:
                return following.name
            return None
    return None
