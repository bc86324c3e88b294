"""Tests for outgoing-log parsing and commit ownership resolution."""

import os

from dcr_core.commits import Commit, CommitAttributor, parse_log, resolve_ownership, unquote_path
from dcr_core.vcs.git import Git

ROOT = "/repo"


def _exists_all(path):
    return True


def _commit(commit_id, *files):
    return Commit(
        id=commit_id,
        committer_email=f"{commit_id}@example.com",
        subject=f"commit {commit_id}",
        timestamp=1700000000,
        files={f"{ROOT}/{f}": True for f in files},
    )


def _owned(commits):
    return {cid: sorted(os.path.basename(p) for p in c.files) for cid, c in commits.items()}


# ---------------------------------------------------------------------------
# parse_log
# ---------------------------------------------------------------------------


class TestParseLog:
    def test_parses_headers_and_files_in_emission_order(self):
        output = (
            "INFO:bbb|bob@example.com|Second change|1700000200\n"
            "modules/foo/foo.module\n"
            "\n"
            "INFO:aaa|alice@example.com|First change|1700000100\n"
            "modules/bar/bar.inc\n"
            "modules/bar/bar.info\n"
        )
        commits = parse_log(output, ROOT, exists=_exists_all)

        assert list(commits) == ["bbb", "aaa"]
        assert commits["bbb"].committer_email == "bob@example.com"
        assert commits["bbb"].subject == "Second change"
        assert commits["bbb"].timestamp == 1700000200
        assert list(commits["bbb"].files) == ["/repo/modules/foo/foo.module"]
        assert list(commits["aaa"].files) == ["/repo/modules/bar/bar.inc", "/repo/modules/bar/bar.info"]

    def test_order_is_not_resorted_by_timestamp(self):
        output = "INFO:old|a@x|old|100\nfile1\nINFO:new|a@x|new|900\nfile2\n"
        commits = parse_log(output, ROOT, exists=_exists_all)
        assert list(commits) == ["old", "new"]

    def test_subject_containing_pipes(self):
        commits = parse_log("INFO:abc|a@x|Fix a|b|c parsing|123\n", ROOT, exists=_exists_all)
        assert commits["abc"].subject == "Fix a|b|c parsing"
        assert commits["abc"].timestamp == 123

    def test_deleted_files_are_dropped(self):
        output = "INFO:abc|a@x|s|1\nkept.php\ngone.php\n"
        commits = parse_log(output, ROOT, exists=lambda p: p.endswith("kept.php"))
        assert list(commits["abc"].files) == ["/repo/kept.php"]

    def test_checks_existence_on_disk_by_default(self, tmp_path):
        (tmp_path / "present.php").write_text("<?php\n")
        output = "INFO:abc|a@x|s|1\npresent.php\nmissing.php\n"
        commits = parse_log(output, str(tmp_path))
        assert list(commits["abc"].files) == [str(tmp_path / "present.php")]

    def test_malformed_header_is_skipped_with_its_files(self):
        output = "INFO:garbage\norphan.php\nINFO:abc|a@x|s|1\nfile.php\n"
        commits = parse_log(output, ROOT, exists=_exists_all)
        assert list(commits) == ["abc"]
        assert list(commits["abc"].files) == ["/repo/file.php"]

    def test_non_numeric_timestamp_is_malformed(self):
        commits = parse_log("INFO:abc|a@x|s|yesterday\nfile.php\n", ROOT, exists=_exists_all)
        assert commits == {}

    def test_file_lines_before_any_header_are_skipped(self):
        commits = parse_log("noise\nINFO:abc|a@x|s|1\nfile.php\n", ROOT, exists=_exists_all)
        assert list(commits["abc"].files) == ["/repo/file.php"]

    def test_commit_with_no_files_is_kept(self):
        commits = parse_log("INFO:abc|a@x|s|1\nINFO:def|a@x|s|2\nfile.php\n", ROOT, exists=_exists_all)
        assert commits["abc"].files == {}
        assert list(commits["def"].files) == ["/repo/file.php"]

    def test_repeated_commit_id_keeps_first_record(self):
        output = "INFO:abc|a@x|first|1\none.php\nINFO:abc|b@x|second|2\ntwo.php\n"
        commits = parse_log(output, ROOT, exists=_exists_all)
        assert len(commits) == 1
        assert commits["abc"].subject == "first"
        assert list(commits["abc"].files) == ["/repo/one.php", "/repo/two.php"]

    def test_empty_output(self):
        assert parse_log("", ROOT, exists=_exists_all) == {}

    def test_non_ascii_path_kept(self, tmp_path):
        (tmp_path / "caf\u00e9.php").write_text("<?php\n")
        commits = parse_log("INFO:abc|a@x|s|1\ncaf\u00e9.php\n", str(tmp_path))
        assert list(commits["abc"].files) == [str(tmp_path / "caf\u00e9.php")]

    def test_quoted_octal_path_is_unquoted(self, tmp_path):
        (tmp_path / "caf\u00e9.php").write_text("<?php\n")
        output = 'INFO:abc|a@x|s|1\n"caf\\303\\251.php"\n'
        commits = parse_log(output, str(tmp_path))
        assert list(commits["abc"].files) == [str(tmp_path / "caf\u00e9.php")]


class TestUnquotePath:
    def test_plain_path_unchanged(self):
        assert unquote_path("modules/foo.module") == "modules/foo.module"

    def test_octal_escapes_decoded_as_utf8(self):
        assert unquote_path('"caf\\303\\251.php"') == "caf\u00e9.php"

    def test_tab_and_quote_escapes(self):
        assert unquote_path('"a\\tb\\"c.php"') == 'a\tb"c.php'


# ---------------------------------------------------------------------------
# resolve_ownership
# ---------------------------------------------------------------------------


class TestResolveOwnership:
    def test_first_emitted_commit_wins(self):
        commits = {"A": _commit("A", "x", "y"), "B": _commit("B", "y", "z")}
        assert _owned(resolve_ownership(commits)) == {"A": ["x", "y"], "B": ["z"]}

    def test_first_emitted_wins_even_with_older_timestamp(self):
        a = _commit("A", "x")
        a.timestamp = 100
        b = _commit("B", "x")
        b.timestamp = 999
        result = resolve_ownership({"A": a, "B": b})
        assert _owned(result) == {"A": ["x"], "B": []}

    def test_each_file_owned_exactly_once(self):
        commits = {
            "A": _commit("A", "x"),
            "B": _commit("B", "x", "y"),
            "C": _commit("C", "x", "y", "z"),
        }
        result = resolve_ownership(commits)
        owners = [p for c in result.values() for p in c.files]
        assert sorted(owners) == sorted(set(owners))
        assert _owned(result) == {"A": ["x"], "B": ["y"], "C": ["z"]}

    def test_emission_order_preserved_and_empty_commits_returned(self):
        commits = {"A": _commit("A", "x"), "B": _commit("B", "x"), "C": _commit("C", "w")}
        result = resolve_ownership(commits)
        assert list(result) == ["A", "B", "C"]
        assert result["B"].files == {}

    def test_file_order_within_commit_preserved(self):
        commits = {"A": _commit("A", "c", "a", "b"), "B": _commit("B", "a")}
        result = resolve_ownership(commits)
        assert [os.path.basename(p) for p in result["A"].files] == ["c", "a", "b"]

    def test_no_commits(self):
        assert resolve_ownership({}) == {}


# ---------------------------------------------------------------------------
# CommitAttributor
# ---------------------------------------------------------------------------


class TestCommitAttributor:
    def test_attribute_queries_git_and_dedupes(self, runner, tmp_path):
        for name in ("x.php", "y.php", "z.php"):
            (tmp_path / name).write_text("<?php\n")
        runner.on("git", "rev-parse", "--show-toplevel", stdout=f"{tmp_path}\n")
        runner.on(
            "git",
            "-c",
            "core.quotePath=false",
            "log",
            stdout="INFO:A|a@x|first|2\nx.php\ny.php\nINFO:B|b@x|second|1\ny.php\nz.php\n",
        )

        commits = CommitAttributor(Git(runner)).attribute("master", "a@x")

        assert _owned(commits) == {"A": ["x.php", "y.php"], "B": ["z.php"]}
        log_call = next(c for c in runner.calls if "log" in c)
        assert "--author=a@x" in log_call
        assert log_call[-1] == "master...HEAD"

    def test_attribute_without_author_filter(self, runner, tmp_path):
        runner.on("git", "rev-parse", "--show-toplevel", stdout=f"{tmp_path}\n")
        runner.on("git", "-c", "core.quotePath=false", "log", stdout="")

        assert CommitAttributor(Git(runner)).attribute("develop") == {}
        log_call = next(c for c in runner.calls if "log" in c)
        assert not any(arg.startswith("--author") for arg in log_call)
