"""
Commit history loading using pygit2
"""

from pathlib import Path

import pygit2

from lanegraph.git_backend.commit_types import CommitRecord, Ref, RefType


class HistoryRepository:
    """Reads commit history for graph layout"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Initialize repository"""
        if repo_path is None:
            repo_path = self._find_repo()

        try:
            self.repo = pygit2.Repository(repo_path)
        except pygit2.GitError as e:
            raise ValueError(f"Not a git repository: {repo_path}") from e

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    def get_checked_out_branch(self) -> str | None:
        """Name of the checked out branch, or None when HEAD is detached or unborn"""
        if self.repo.head_is_unborn or self.repo.head_is_detached:
            return None
        return self.repo.head.shorthand

    def _collect_refs(self) -> dict[str, list[Ref]]:
        """Map commit oid -> refs pointing at it, HEAD and the current branch first."""
        refs: dict[str, list[Ref]] = {}

        def add(oid: str, ref: Ref) -> None:
            refs.setdefault(oid, []).append(ref)

        current = self.get_checked_out_branch()
        if not self.repo.head_is_unborn:
            head_oid = str(self.repo.head.peel(pygit2.Commit).id)
            add(head_oid, Ref("HEAD", RefType.HEAD))
            if current:
                add(head_oid, Ref(current, RefType.BRANCH))

        for branch_name in self.repo.branches.local:
            if branch_name == current:
                continue
            commit = self.repo.branches.local[branch_name].peel(pygit2.Commit)
            add(str(commit.id), Ref(branch_name, RefType.BRANCH))

        for branch_name in self.repo.branches.remote:
            # origin/HEAD is a symbolic alias of another remote branch
            if branch_name.endswith("/HEAD"):
                continue
            commit = self.repo.branches.remote[branch_name].peel(pygit2.Commit)
            add(str(commit.id), Ref(branch_name, RefType.REMOTE))

        for ref_name in self.repo.references:
            if not ref_name.startswith("refs/tags/"):
                continue
            try:
                commit = self.repo.references[ref_name].peel(pygit2.Commit)
            except (ValueError, pygit2.GitError):
                # Tags on trees or blobs have no place in the graph
                continue
            add(str(commit.id), Ref(ref_name[len("refs/tags/") :], RefType.TAG))

        return refs

    def _tip_oids(self) -> list[pygit2.Oid]:
        """Commits to start walking from: HEAD plus every ref target, as `git log --all`."""
        tips: list[pygit2.Oid] = []
        if not self.repo.head_is_unborn:
            tips.append(self.repo.head.peel(pygit2.Commit).id)
        for ref_name in self.repo.references:
            try:
                oid = self.repo.references[ref_name].peel(pygit2.Commit).id
            except (ValueError, pygit2.GitError):
                continue
            if oid not in tips:
                tips.append(oid)
        return tips

    def load_commits(self, max_count: int | None = None) -> list[CommitRecord]:
        """
        Load history reachable from any ref, children before parents.

        Args:
            max_count: Keep only the newest commits. Parents falling outside
                the window are still listed on the commits that reference them.

        Returns:
            Commit records in topological order (newest first)
        """
        tips = self._tip_oids()
        if not tips:
            return []

        refs = self._collect_refs()
        walker = self.repo.walk(
            tips[0], pygit2.enums.SortMode.TOPOLOGICAL | pygit2.enums.SortMode.TIME
        )
        for oid in tips[1:]:
            walker.push(oid)

        commits: list[CommitRecord] = []
        for c in walker:
            if max_count is not None and len(commits) >= max_count:
                break
            oid = str(c.id)
            commits.append(
                CommitRecord(
                    hash=oid,
                    parents=[str(p) for p in c.parent_ids],
                    author=c.author.name,
                    email=c.author.email,
                    timestamp=c.author.time,
                    subject=c.message.strip().split("\n")[0],
                    refs=refs.get(oid, []),
                )
            )
        return commits
