"""Tests for git log parsing."""

from lanegraph.git_backend.commit_types import (
    CommitRecord,
    Ref,
    RefType,
    checked_out_branch,
    parse_log_output,
    parse_refs,
)


class TestParseRefs:
    def test_empty(self):
        """No decorations means no refs."""
        assert parse_refs("") == []
        assert parse_refs("   ") == []

    def test_head_pointing_at_branch(self):
        """"HEAD -> x" yields HEAD followed by the branch."""
        assert parse_refs("HEAD -> main") == [Ref("HEAD", RefType.HEAD), Ref("main", RefType.BRANCH)]

    def test_detached_head(self):
        assert parse_refs("HEAD") == [Ref("HEAD", RefType.HEAD)]

    def test_mixed(self):
        """Tags, remotes and local branches are told apart."""
        assert parse_refs("HEAD -> main, origin/main, tag: v1.0, feature") == [
            Ref("HEAD", RefType.HEAD),
            Ref("main", RefType.BRANCH),
            Ref("origin/main", RefType.REMOTE),
            Ref("v1.0", RefType.TAG),
            Ref("feature", RefType.BRANCH),
        ]

    def test_stash(self):
        assert parse_refs("refs/stash") == [Ref("stash", RefType.STASH)]

    def test_skips_empty_parts(self):
        """Stray commas are ignored."""
        assert parse_refs("main, ,") == [Ref("main", RefType.BRANCH)]


class TestParseLogOutput:
    def test_regular_line(self):
        """All seven fields are picked up."""
        (c,) = parse_log_output("aaa|bbb|Ann|ann@example.com|1700000000|Fix bug|HEAD -> main\n")
        assert c == CommitRecord(
            hash="aaa",
            parents=["bbb"],
            author="Ann",
            email="ann@example.com",
            timestamp=1700000000,
            subject="Fix bug",
            refs=[Ref("HEAD", RefType.HEAD), Ref("main", RefType.BRANCH)],
        )

    def test_root_and_merge_parents(self):
        """An empty parent field is a root; a space-separated list is a merge."""
        root, merge = parse_log_output("r||A|a@x|1|init|\nm|p1 p2|A|a@x|2|Merge|")
        assert root.parents == []
        assert merge.parents == ["p1", "p2"]
        assert merge.is_merge and not root.is_merge

    def test_subject_with_pipes(self):
        """Pipes inside the subject are kept; the last field is still the refs."""
        (c,) = parse_log_output("h|p|A|a@x|5|a | b | c|tag: v2")
        assert c.subject == "a | b | c"
        assert c.refs == [Ref("v2", RefType.TAG)]

    def test_six_fields_has_no_refs(self):
        (c,) = parse_log_output("h|p|A|a@x|5|subject")
        assert c.subject == "subject"
        assert c.refs == []

    def test_skips_blank_and_short_lines(self):
        """Lines that are empty or have too few fields are dropped."""
        out = parse_log_output("\n\ngarbage|line\nh|p|A|a@x|5|ok|\n")
        assert [c.hash for c in out] == ["h"]

    def test_short_id(self):
        assert CommitRecord("0123456789abcdef", []).short_id == "0123456"


class TestCheckedOutBranch:
    def test_branch_after_head(self):
        """The branch decorated right after HEAD is the checked out one."""
        commits = parse_log_output("a|b|A|a@x|2|tip|origin/main\nb||A|a@x|1|base|HEAD -> dev, main")
        assert checked_out_branch(commits) == "dev"

    def test_detached(self):
        """A bare HEAD decoration means no branch is checked out."""
        commits = parse_log_output("a||A|a@x|1|tip|HEAD, tag: v1, main")
        assert checked_out_branch(commits) is None

    def test_no_head_in_window(self):
        assert checked_out_branch(parse_log_output("a||A|a@x|1|tip|main")) is None
