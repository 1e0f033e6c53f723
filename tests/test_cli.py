"""Tests for storyfacts.cli and storyfacts.dataset."""

import json
from unittest.mock import patch

import numpy as np
import pytest

from storyfacts import __version__
from storyfacts.cli import main
from storyfacts.config import GeneratorConfig
from storyfacts.dataset import StoryLimitExceeded, generate_records, story_record
from storyfacts.tasks import IsDir


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.delenv("STORYFACTS_SEED", raising=False)
    with patch("storyfacts.config.CONFIG_FILE", tmp_path / "no-config.json"):
        yield


def _read(path):
    return [json.loads(line) for line in path.read_text().splitlines()]


class TestStoryRecord:
    def test_support_points_at_story_lines(self):
        result = IsDir(rng=np.random.default_rng(0)).generate()
        record = story_record(result)
        assert record["task"] == "is_dir"
        assert len(record["story"]) == 3
        (question,) = record["questions"]
        assert question["line"] == 3
        assert question["answer"] == "yes"
        assert len(question["support"]) == 1
        assert question["support"][0] in (1, 2)
        assert "graphs" not in record

    def test_graphs_per_step(self):
        result = IsDir(rng=np.random.default_rng(0)).generate()
        record = story_record(result, knowledge_graph=True)
        assert len(record["graphs"]) == result.knowledge.t
        assert all(set(graph) == {"nodes", "edges"} for graph in record["graphs"])


class TestGenerateRecords:
    def test_count_and_reproducibility(self):
        config = GeneratorConfig(seed=4)
        first = list(generate_records("is_dir", 3, config))
        second = list(generate_records("is_dir", 3, config))
        assert len(first) == 3
        assert first == second

    def test_limit_exceeded(self):
        config = GeneratorConfig(seed=4, limit_story=1, max_retries=3)
        with pytest.raises(StoryLimitExceeded):
            list(generate_records("is_dir", 1, config))


class TestMain:
    def test_generate_writes_json_lines(self, tmp_path):
        output = tmp_path / "out" / "is_dir.jsonl"
        code = main(["generate", "is_dir", "4", str(output), "--seed", "1", "--knowledge-graph"])
        assert code == 0
        records = _read(output)
        assert len(records) == 4
        assert all("graphs" in record for record in records)

    def test_seeded_runs_identical(self, tmp_path):
        a, b = tmp_path / "a.jsonl", tmp_path / "b.jsonl"
        main(["generate", "who_what_gave", "2", str(a), "--seed", "8"])
        main(["generate", "who_what_gave", "2", str(b), "--seed", "8"])
        assert a.read_text() == b.read_text()

    def test_stdout_output(self, capsys):
        assert main(["generate", "is_dir", "1", "-", "--seed", "2"]) == 0
        out = capsys.readouterr().out
        assert json.loads(out.splitlines()[0])["task"] == "is_dir"

    def test_unknown_task(self, tmp_path, capsys):
        code = main(["generate", "nope", "1", str(tmp_path / "x.jsonl")])
        assert code == 1
        assert "unknown task" in capsys.readouterr().err
        assert not (tmp_path / "x.jsonl").exists()

    def test_limit_story_error(self, tmp_path, capsys):
        code = main(["generate", "is_dir", "1", str(tmp_path / "x.jsonl"), "--limit-story", "1"])
        assert code == 1
        assert "no story within" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path, capsys):
        code = main(["generate", "is_dir", "1", "-", "--config", str(tmp_path / "none.json")])
        assert code == 1
        assert "cannot read config" in capsys.readouterr().err

    def test_non_object_config_file(self, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text("[1, 2]")
        code = main(["generate", "is_dir", "1", str(tmp_path / "x.jsonl"), "--config", str(config)])
        assert code == 1
        assert "cannot read config" in capsys.readouterr().err
        assert not (tmp_path / "x.jsonl").exists()

    def test_limit_failure_leaves_no_output(self, tmp_path):
        output = tmp_path / "x.jsonl"
        code = main(["generate", "is_dir", "2", str(output), "--limit-story", "2"])
        assert code == 1
        assert not output.exists()
        assert list(tmp_path.iterdir()) == []

    def test_failure_partway_leaves_no_output(self, tmp_path):
        def one_then_fail(task_name, count, config):
            yield {"task": task_name, "story": [], "questions": []}
            raise StoryLimitExceeded("no story within 2 lines")

        output = tmp_path / "x.jsonl"
        with patch("storyfacts.dataset.generate_records", one_then_fail):
            code = main(["generate", "is_dir", "2", str(output)])
        assert code == 1
        assert list(tmp_path.iterdir()) == []

    def test_failure_keeps_previous_output(self, tmp_path):
        output = tmp_path / "x.jsonl"
        output.write_text("previous\n")
        code = main(["generate", "is_dir", "1", str(output), "--limit-story", "1"])
        assert code == 1
        assert output.read_text() == "previous\n"

    def test_tasks_command(self, capsys):
        assert main(["tasks"]) == 0
        out = capsys.readouterr().out
        assert "is_dir" in out
        assert "who_what_gave" in out

    def test_no_command(self):
        assert main([]) == 1

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out
