import logging
from pathlib import Path

import pytest
from ruamel.yaml import YAMLError

from runner_policy import discovery
from runner_policy.discovery import collect_runner_tags, find_workflow_files, load_workflow
from runner_policy.errors import WorkflowDiscoveryError
from runner_policy.extract import extract_runs_on


def test_find_workflow_files_recurses_and_filters(workspace, write_workflow):
    write_workflow("ci.yml", "jobs: {}\n")
    write_workflow("release.yaml", "jobs: {}\n")
    write_workflow("nested/deep/deploy.yml", "jobs: {}\n")
    write_workflow("README.md", "# not a workflow\n")
    write_workflow("notes.yml.bak", "jobs: {}\n")
    (workspace / ".github" / "workflows" / "dir.yml").mkdir()

    files = find_workflow_files(workspace / ".github" / "workflows")

    names = [p.relative_to(workspace / ".github" / "workflows").as_posix() for p in files]
    assert names == ["ci.yml", "nested/deep/deploy.yml", "release.yaml"]


def test_find_workflow_files_empty_directory(workspace):
    assert find_workflow_files(workspace / ".github" / "workflows") == []


def test_find_workflow_files_missing_directory_is_fatal(tmp_path):
    with pytest.raises(WorkflowDiscoveryError, match="not found"):
        find_workflow_files(tmp_path / "missing")


def test_load_workflow_preserves_job_order(write_workflow):
    path = write_workflow(
        "ci.yml",
        "on: push\n"
        "jobs:\n"
        "  zeta:\n"
        "    runs-on: ubuntu-latest\n"
        "  alpha:\n"
        "    runs-on: [self-hosted, linux]\n",
    )
    document = load_workflow(path)
    assert list(document["jobs"]) == ["zeta", "alpha"]
    assert document["jobs"]["alpha"]["runs-on"] == ["self-hosted", "linux"]


def test_load_workflow_raises_on_malformed_yaml(write_workflow):
    path = write_workflow("bad.yml", "jobs: [unclosed\n")
    with pytest.raises(YAMLError):
        load_workflow(path)


def test_collect_runner_tags_concatenates_in_file_order(write_workflow):
    first = write_workflow("a.yml", "jobs:\n  test:\n    runs-on: ubuntu-latest\n")
    second = write_workflow("b.yml", "jobs:\n  build:\n    runs-on: self-hosted\n")
    assert collect_runner_tags([first, second]) == ["ubuntu-latest", "self-hosted"]


def test_collect_runner_tags_skips_bad_files(write_workflow, caplog):
    caplog.set_level(logging.WARNING, logger="runner_policy")
    bad = write_workflow("bad.yml", b"\xff\xfe\x00jobs")
    broken = write_workflow("broken.yml", "jobs: [unclosed\n")
    good = write_workflow("good.yml", "jobs:\n  test:\n    runs-on: ubuntu-latest\n")

    tags = collect_runner_tags([bad, broken, good])

    assert tags == ["ubuntu-latest"]
    assert f"Error processing file {bad}" in caplog.text
    assert f"Error processing file {broken}" in caplog.text


def test_collect_runner_tags_uses_given_loader():
    documents = {
        Path("one.yml"): {"jobs": {"a": {"runs-on": "x"}}},
        Path("two.yml"): None,
    }

    def loader(path):
        if path not in documents:
            raise OSError("File not found")
        return documents[path]

    tags = collect_runner_tags([Path("one.yml"), Path("missing.yml"), Path("two.yml")], loader=loader)
    assert tags == ["x"]


def test_collect_runner_tags_handles_mixed_key_runs_on(write_workflow):
    odd = write_workflow("odd.yml", "jobs:\n  a:\n    runs-on: {1: x, group: g}\n")
    good = write_workflow("good.yml", "jobs:\n  b:\n    runs-on: ubuntu-latest\n")

    assert collect_runner_tags([odd, good]) == ['{"1":"x","group":"g"}', "ubuntu-latest"]


def test_collect_runner_tags_skips_file_when_extraction_fails(
    write_workflow, monkeypatch, caplog
):
    caplog.set_level(logging.WARNING, logger="runner_policy")
    odd = write_workflow("odd.yml", "jobs:\n  a:\n    runs-on: weird\n")
    good = write_workflow("good.yml", "jobs:\n  b:\n    runs-on: ubuntu-latest\n")

    def extract(document):
        if document["jobs"].get("a"):
            raise TypeError("unsupported runs-on")
        return extract_runs_on(document)

    monkeypatch.setattr(discovery, "extract_runs_on", extract)

    assert collect_runner_tags([odd, good]) == ["ubuntu-latest"]
    assert f"Error processing file {odd}: unsupported runs-on" in caplog.text


def test_collect_runner_tags_logs_skipped_files_as_warnings(write_workflow, caplog):
    caplog.set_level(logging.INFO, logger="runner_policy")
    bad = write_workflow("bad.yml", "jobs: [unclosed\n")

    assert collect_runner_tags([bad]) == []

    records = [r for r in caplog.records if "Error processing file" in r.getMessage()]
    assert len(records) == 1
    assert records[0].levelno == logging.WARNING
