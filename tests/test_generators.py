"""
Tests for the pre-commit document generator.
"""

import logging

import pytest
import yaml
from pydantic import ValidationError

from devstack.core.models.hooks import Hook, HookRepo
from devstack.core.models.template import GeneratedFile
from devstack.core.services.generators.precommit import (
    MANIFEST_FILE,
    PIPELINE_FILE,
    build_pipeline,
    generate,
    hook_ids,
    merge_repos,
    write_files,
)


def _by_path(files):
    return {f.path: f for f in files}


class TestGenerate:
    def test_two_documents(self):
        files = generate()
        assert [f.path for f in files] == [PIPELINE_FILE, MANIFEST_FILE]

    def test_deterministic(self):
        assert [f.content for f in generate()] == [f.content for f in generate()]

    def test_pipeline_parses(self):
        data = yaml.safe_load(_by_path(generate())[PIPELINE_FILE].content)
        repos = {r["repo"]: r for r in data["repos"]}
        assert "https://github.com/bridgecrewio/checkov" in repos
        assert "local" in repos
        assert "rev" not in repos["local"]

    def test_pipeline_content(self):
        data = yaml.safe_load(_by_path(generate())[PIPELINE_FILE].content)
        ids = [h["id"] for r in data["repos"] for h in r["hooks"]]
        for expected in (
            "trailing-whitespace", "detect-private-key", "flake8", "black",
            "golangci-lint", "checkov", "custom-python-linter", "htmlhint",
        ):
            assert expected in ids
        large = next(
            h for r in data["repos"] for h in r["hooks"] if h["id"] == "check-added-large-files"
        )
        assert large["args"] == ["--maxkb=5000"]

    def test_no_duplicate_ids_per_repo(self):
        data = yaml.safe_load(_by_path(generate())[PIPELINE_FILE].content)
        for repo in data["repos"]:
            ids = [h["id"] for h in repo["hooks"]]
            assert len(ids) == len(set(ids)), repo["repo"]

    def test_repo_listed_once(self):
        data = yaml.safe_load(_by_path(generate())[PIPELINE_FILE].content)
        urls = [r["repo"] for r in data["repos"]]
        assert len(urls) == len(set(urls))

    def test_manifest_is_a_list(self):
        data = yaml.safe_load(_by_path(generate())[MANIFEST_FILE].content)
        assert isinstance(data, list)
        assert data[0]["id"] == "validate_manifest"
        assert data[0]["language"] == "python"

    def test_unset_keys_omitted(self):
        data = yaml.safe_load(_by_path(generate())[PIPELINE_FILE].content)
        black = next(h for r in data["repos"] for h in r["hooks"] if h["id"] == "black")
        assert black == {"id": "black"}

    def test_extra_repos_merged(self):
        extra = [{
            "repo": "https://github.com/psf/black",
            "rev": "24.1.0",
            "hooks": [{"id": "black"}, {"id": "black-jupyter"}],
        }]
        repos = build_pipeline(extra)
        black = next(r for r in repos if r.repo == "https://github.com/psf/black")
        assert black.rev == "25.1.0"
        assert [h.id for h in black.hooks] == ["black", "black-jupyter"]

    def test_extra_repo_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            build_pipeline([{"repo": "local", "hooks": [{"id": "x", "bogus": 1}]}])


class TestMergeRepos:
    def test_first_declaration_wins(self, caplog):
        repos = [
            HookRepo(repo="r", rev="v1", hooks=[Hook(id="a"), Hook(id="b")]),
            HookRepo(repo="other", rev="v9", hooks=[Hook(id="a")]),
            HookRepo(repo="r", rev="v2", hooks=[Hook(id="b", args=["-x"]), Hook(id="c")]),
        ]
        with caplog.at_level(logging.WARNING):
            merged = merge_repos(repos)

        assert [r.repo for r in merged] == ["r", "other"]
        assert merged[0].rev == "v1"
        assert hook_ids(merged) == ["a", "b", "c", "a"]
        assert merged[0].hooks[1].args is None
        assert "Conflicting revisions" in caplog.text
        assert "Duplicate hook id 'b'" in caplog.text

    def test_duplicate_in_same_block(self, caplog):
        repos = [HookRepo(repo="r", rev="v1", hooks=[Hook(id="a"), Hook(id="a")])]
        with caplog.at_level(logging.WARNING):
            merged = merge_repos(repos)
        assert hook_ids(merged) == ["a"]
        assert caplog.text.count("Duplicate hook id") == 1

    def test_input_not_mutated(self):
        original = HookRepo(repo="r", rev="v1", hooks=[Hook(id="a")])
        merge_repos([original, HookRepo(repo="r", rev="v1", hooks=[Hook(id="b")])])
        assert [h.id for h in original.hooks] == ["a"]


class TestWriteFiles:
    def test_writes_both(self, tmp_path):
        written = write_files(generate(), tmp_path)
        assert {p.name for p in written} == {PIPELINE_FILE, MANIFEST_FILE}
        assert (tmp_path / PIPELINE_FILE).read_text(encoding="utf-8").startswith("# Generated")

    def test_rerun_is_byte_identical(self, tmp_path):
        write_files(generate(), tmp_path)
        first = (tmp_path / PIPELINE_FILE).read_bytes()
        write_files(generate(), tmp_path)
        assert (tmp_path / PIPELINE_FILE).read_bytes() == first

    def test_overwrites_existing(self, tmp_path):
        (tmp_path / MANIFEST_FILE).write_text("stale")
        write_files(generate(), tmp_path)
        assert "stale" not in (tmp_path / MANIFEST_FILE).read_text()

    def test_creates_missing_dir(self, tmp_path):
        target = tmp_path / "a" / "b"
        write_files(generate(), target)
        assert (target / PIPELINE_FILE).is_file()

    def test_respects_overwrite_false(self, tmp_path):
        (tmp_path / "keep.txt").write_text("x")
        with pytest.raises(FileExistsError):
            write_files([GeneratedFile(path="keep.txt", content="y", overwrite=False)], tmp_path)
        assert (tmp_path / "keep.txt").read_text() == "x"
