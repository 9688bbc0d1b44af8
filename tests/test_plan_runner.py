# tests/test_plan_runner.py
from __future__ import annotations

from filewriter.config.write_plan import WritePlan
from filewriter.runtime.plan_runner import (
    STATUS_FAILED,
    STATUS_OK,
    STATUS_SKIPPED,
    PlanRunner,
)


def _run(tmp_project_root, test_logger, data, start_from=0):
    plan = WritePlan.from_dict(data)
    runner = PlanRunner(tmp_project_root, plan, start_from=start_from, logger=test_logger)
    return runner.run()


def test_runs_example_scenario(tmp_project_root, test_logger):
    data = {
        "steps": [
            {"action": "overwrite", "target": "tmp/a/b/file.txt", "content": "First line\n"},
            {"action": "append", "target": "tmp/a/b/file.txt", "content": "Second line\n"},
            {"action": "prepend", "target": "tmp/a/b/file.txt", "content": "Zero line\n"},
            {"action": "read", "target": "tmp/a/b/file.txt"},
            {"action": "delete", "target": "tmp/a/b/file.txt"},
        ]
    }

    result = _run(tmp_project_root, test_logger, data)

    assert result.ok is True
    assert [s.status for s in result.steps] == [STATUS_OK] * 5
    assert result.steps[3].output == "Zero line\nFirst line\nSecond line\n"
    assert not (tmp_project_root / "tmp/a/b/file.txt").exists()
    assert (tmp_project_root / "tmp/a/b").is_dir()


def test_stops_after_first_failure(tmp_project_root, test_logger):
    data = {
        "steps": [
            {"action": "delete", "target": "missing.txt"},
            {"action": "overwrite", "target": "never.txt", "content": "x"},
        ]
    }

    result = _run(tmp_project_root, test_logger, data)

    assert result.ok is False
    assert [s.status for s in result.steps] == [STATUS_FAILED, STATUS_SKIPPED]
    assert not (tmp_project_root / "never.txt").exists()


def test_continues_when_stop_on_failure_disabled(tmp_project_root, test_logger):
    data = {
        "stop_on_failure": False,
        "steps": [
            {"action": "delete", "target": "missing.txt"},
            {"action": "overwrite", "target": "written.txt", "content": "x"},
        ],
    }

    result = _run(tmp_project_root, test_logger, data)

    assert result.ok is False
    assert [s.status for s in result.steps] == [STATUS_FAILED, STATUS_OK]
    assert result.count(STATUS_FAILED) == 1
    assert (tmp_project_root / "written.txt").read_text(encoding="utf-8") == "x"


def test_start_from_skips_earlier_steps(tmp_project_root, test_logger):
    data = {
        "steps": [
            {"action": "overwrite", "target": "a.txt", "content": "skipped"},
            {"action": "overwrite", "target": "b.txt", "content": "run"},
        ]
    }

    result = _run(tmp_project_root, test_logger, data, start_from=1)

    assert [s.status for s in result.steps] == [STATUS_SKIPPED, STATUS_OK]
    assert not (tmp_project_root / "a.txt").exists()
    assert (tmp_project_root / "b.txt").read_text(encoding="utf-8") == "run"


def test_start_from_beyond_plan_runs_nothing(tmp_project_root, test_logger):
    data = {"steps": [{"action": "overwrite", "target": "a.txt", "content": "x"}]}

    result = _run(tmp_project_root, test_logger, data, start_from=5)

    assert [s.status for s in result.steps] == [STATUS_SKIPPED]
    assert result.ok is True


def test_content_file_is_loaded_relative_to_project_root(tmp_project_root, test_logger):
    (tmp_project_root / "templates").mkdir()
    (tmp_project_root / "templates" / "header.txt").write_bytes(b"# header\r\n")
    (tmp_project_root / "doc.txt").write_text("body\n", encoding="utf-8")
    data = {
        "steps": [
            {"action": "prepend", "target": "doc.txt", "content_file": "templates/header.txt"},
        ]
    }

    result = _run(tmp_project_root, test_logger, data)

    assert result.ok is True
    assert (tmp_project_root / "doc.txt").read_bytes() == b"# header\r\nbody\n"


def test_missing_content_file_fails_step(tmp_project_root, test_logger):
    data = {"steps": [{"action": "append", "target": "doc.txt", "content_file": "nope.txt"}]}

    result = _run(tmp_project_root, test_logger, data)

    assert [s.status for s in result.steps] == [STATUS_FAILED]
    assert not (tmp_project_root / "doc.txt").exists()


def test_content_file_outside_root_is_refused(tmp_project_root, test_logger):
    project = tmp_project_root / "project"
    project.mkdir()
    (tmp_project_root / "secret.txt").write_text("s", encoding="utf-8")
    data = {"steps": [{"action": "overwrite", "target": "copy.txt", "content_file": "../secret.txt"}]}

    result = _run(project, test_logger, data)

    assert [s.status for s in result.steps] == [STATUS_FAILED]
    assert not (project / "copy.txt").exists()


def test_writer_settings_apply_to_steps(tmp_project_root, test_logger):
    data = {
        "writer": {"encoding": "latin-1"},
        "steps": [{"action": "overwrite", "target": "l1.txt", "content": "café"}],
    }

    result = _run(tmp_project_root, test_logger, data)

    assert result.ok is True
    assert (tmp_project_root / "l1.txt").read_bytes() == "café".encode("latin-1")
