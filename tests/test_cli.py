"""Tests for the madr CLI: discovery, reporting, environment config and exit codes."""

import json
import os

import pytest

from madr._config import RunConfig
from madr.cli import main
from madr.discovery import discover_files, validate_file, validate_files
from madr.reporting import RunSummary, annotation, write_github_output
from validator import AdrValidator, FindingCode, ValidationResult

from conftest import VALID_ADR

WARNING_ADR = VALID_ADR.replace("Risk Assessment: medium\n", "")
INVALID_ADR = VALID_ADR.replace("## Links", "## Resources")

ENV_VARS = (
    "INPUT_PATH", "INPUT_PATTERN", "INPUT_SCHEMA", "INPUT_RULES", "INPUT_STRICT",
    "INPUT_FAIL_ON_ERROR", "INPUT_JOBS", "GITHUB_OUTPUT", "GITHUB_ACTIONS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # load_dotenv pisze do os.environ, więc każdy test dostaje własną kopię
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    monkeypatch.setattr(os, "environ", env)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def adr_dir(tmp_path):
    root = tmp_path / "docs" / "decisions"
    root.mkdir(parents=True)
    return root


def _write(root, name, text):
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

class TestDiscovery:

    def test_directory_glob_is_sorted_and_recursive(self, adr_dir):
        _write(adr_dir, "b.md", VALID_ADR)
        _write(adr_dir, "a.md", VALID_ADR)
        _write(adr_dir, "nested/c.md", VALID_ADR)
        _write(adr_dir, "notes.txt", "x")
        names = [p.relative_to(adr_dir).as_posix() for p in discover_files(adr_dir)]
        assert names == ["a.md", "b.md", "nested/c.md"]

    def test_single_file(self, adr_dir):
        path = _write(adr_dir, "adr.md", VALID_ADR)
        assert discover_files(path) == [path]

    def test_missing_path(self, tmp_path):
        assert discover_files(tmp_path / "nope") == []

    def test_unreadable_file_is_a_single_error(self, adr_dir):
        path = adr_dir / "broken.md"
        path.write_bytes(b"\xff\xfe\x00 not utf-8")
        result = validate_file(path, AdrValidator())
        assert [e.code for e in result.errors] == [FindingCode.READ_FAILED]
        assert result.errors[0].message.startswith("Failed to read file:")
        assert result.warnings == []

    def test_byte_order_mark_is_ignored(self, adr_dir):
        path = adr_dir / "bom.md"
        path.write_bytes(("\ufeff" + VALID_ADR).encode("utf-8"))
        result = validate_file(path, AdrValidator())
        assert result.errors == []
        assert result.valid

    def test_paths_are_relative_to_cwd(self, adr_dir):
        path = _write(adr_dir, "adr.md", VALID_ADR)
        assert validate_file(path, AdrValidator()).path == "docs/decisions/adr.md"

    def test_parallel_results_keep_order(self, adr_dir):
        paths = [
            _write(adr_dir, f"adr-{i:02d}.md", INVALID_ADR if i % 2 else VALID_ADR)
            for i in range(8)
        ]
        results = validate_files(paths, AdrValidator(), jobs=4)
        assert [r.path.rsplit("/", 1)[-1] for r in results] == [p.name for p in paths]
        assert [r.valid for r in results] == [i % 2 == 0 for i in range(8)]


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

class TestReporting:

    def test_annotation_with_line(self):
        assert annotation("error", "Missing section", "docs/a.md", 12) == (
            "::error file=docs/a.md,line=12::Missing section"
        )

    def test_annotation_without_line_or_file(self):
        assert annotation("warning", "w", "docs/a.md") == "::warning file=docs/a.md::w"
        assert annotation("warning", "No files") == "::warning::No files"

    def test_annotation_escapes_newlines(self):
        assert annotation("error", "a\nb 100%") == "::error::a%0Ab 100%25"

    def test_summary_counts(self):
        ok, warn, bad = ValidationResult(), ValidationResult(), ValidationResult()
        warn.add_warning(FindingCode.SECTION_ORDER, "w")
        bad.add_error(FindingCode.SECTION_MISSING, "e")
        bad.add_warning(FindingCode.SECTION_ORDER, "w")

        summary = RunSummary.from_results([ok, warn, bad])
        assert (summary.total, summary.passed, summary.failed) == (3, 2, 1)
        assert (summary.errors, summary.warnings) == (1, 2)
        assert not summary.valid

    def test_strict_summary_fails_on_warnings(self):
        warn = ValidationResult()
        warn.add_warning(FindingCode.SECTION_ORDER, "w")
        assert RunSummary.from_results([warn]).valid
        assert not RunSummary.from_results([warn], strict=True).valid

    def test_github_output_is_appended(self, tmp_path):
        out = tmp_path / "out.txt"
        out.write_text("previous=1\n", encoding="utf-8")
        write_github_output(out, RunSummary(total=2, passed=2))
        assert out.read_text(encoding="utf-8") == (
            "previous=1\nvalid=true\ntotal=2\npassed=2\nfailed=0\nwarnings=0\n"
        )


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestRunConfig:

    def test_defaults(self):
        cfg = RunConfig.from_env()
        assert cfg.path == "docs/decisions"
        assert cfg.pattern == "**/*.md"
        assert cfg.schema is None
        assert not cfg.strict
        assert cfg.fail_on_error
        assert cfg.jobs == 1

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("INPUT_STRICT", "true")
        monkeypatch.setenv("INPUT_FAIL_ON_ERROR", "false")
        monkeypatch.setenv("INPUT_JOBS", "3")
        monkeypatch.setenv("GITHUB_ACTIONS", "true")
        cfg = RunConfig.from_env()
        assert cfg.strict and not cfg.fail_on_error
        assert cfg.jobs == 3
        assert cfg.annotations

    def test_non_integer_jobs(self, monkeypatch):
        monkeypatch.setenv("INPUT_JOBS", "many")
        with pytest.raises(ValueError, match="INPUT_JOBS"):
            RunConfig.from_env()

    def test_dotenv_file_in_cwd(self, tmp_path):
        (tmp_path / ".env").write_text("INPUT_PATTERN=*.markdown\n", encoding="utf-8")
        assert RunConfig.from_env().pattern == "*.markdown"


# ---------------------------------------------------------------------------
# madr validate
# ---------------------------------------------------------------------------

class TestValidateCommand:

    def test_valid_directory_exits_cleanly(self, adr_dir, capsys):
        _write(adr_dir, "adr-0001.md", VALID_ADR)
        main(["validate"])
        assert "docs/decisions/adr-0001.md" in capsys.readouterr().out

    def test_errors_exit_with_one(self, adr_dir):
        _write(adr_dir, "adr-0001.md", INVALID_ADR)
        with pytest.raises(SystemExit) as exc:
            main(["validate", str(adr_dir)])
        assert exc.value.code == 1

    def test_no_fail_on_error(self, adr_dir):
        _write(adr_dir, "adr-0001.md", INVALID_ADR)
        main(["validate", str(adr_dir), "--no-fail-on-error"])

    def test_warnings_only_fail_in_strict_mode(self, adr_dir, monkeypatch):
        _write(adr_dir, "adr-0001.md", WARNING_ADR)
        main(["validate", str(adr_dir)])

        with pytest.raises(SystemExit):
            main(["validate", str(adr_dir), "--strict"])

        monkeypatch.setenv("INPUT_STRICT", "true")
        with pytest.raises(SystemExit):
            main(["validate", str(adr_dir)])

    def test_github_output_and_annotations(self, adr_dir, tmp_path, monkeypatch, capsys):
        out = tmp_path / "github_output"
        monkeypatch.setenv("GITHUB_OUTPUT", str(out))
        _write(adr_dir, "adr-0001.md", VALID_ADR)
        _write(adr_dir, "adr-0002.md", INVALID_ADR)

        with pytest.raises(SystemExit):
            main(["validate", "--annotations"])

        stdout = capsys.readouterr().out
        assert "::error file=docs/decisions/adr-0002.md::Missing required section: ## Links" in stdout
        assert out.read_text(encoding="utf-8") == (
            "valid=false\ntotal=2\npassed=1\nfailed=1\nwarnings=0\n"
        )

    def test_json_output(self, adr_dir, capsys):
        _write(adr_dir, "adr-0001.md", WARNING_ADR)
        main(["validate", str(adr_dir), "--json-output", "--jobs", "2"])

        report = json.loads(capsys.readouterr().out)
        assert report["summary"]["total"] == 1
        assert report["summary"]["valid"] is True
        [result] = report["results"]
        assert result["valid"] is True
        assert result["warnings"][0]["code"] == "W_OPTION_ELEMENT_MISSING"

    def test_json_output_with_annotations_stays_parseable(self, adr_dir, capsys):
        _write(adr_dir, "adr-0001.md", INVALID_ADR)
        with pytest.raises(SystemExit):
            main(["validate", str(adr_dir), "--json-output", "--annotations"])

        captured = capsys.readouterr()
        report = json.loads(captured.out)
        assert report["summary"]["failed"] == 1
        assert "::error file=docs/decisions/adr-0001.md::Missing required section: ## Links" in captured.err

    def test_invalid_jobs_variable_exits_with_two(self, adr_dir, monkeypatch, capsys):
        monkeypatch.setenv("INPUT_JOBS", "many")
        _write(adr_dir, "adr-0001.md", VALID_ADR)
        with pytest.raises(SystemExit) as exc:
            main(["validate", str(adr_dir)])
        assert exc.value.code == 2
        assert "INPUT_JOBS" in capsys.readouterr().out

    def test_empty_audit_in_rules_file_exits_with_two(self, adr_dir, tmp_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("audit:\n", encoding="utf-8")
        _write(adr_dir, "adr-0001.md", VALID_ADR)
        with pytest.raises(SystemExit) as exc:
            main(["validate", str(adr_dir), "--rules", str(rules)])
        assert exc.value.code == 2

    def test_no_files_found(self, adr_dir, tmp_path, monkeypatch):
        out = tmp_path / "github_output"
        monkeypatch.setenv("GITHUB_OUTPUT", str(out))
        main(["validate", str(adr_dir)])
        assert out.read_text(encoding="utf-8").startswith("valid=true\ntotal=0\n")

    def test_custom_schema_file(self, adr_dir, tmp_path):
        schema = tmp_path / "strict.schema.json"
        schema.write_text(json.dumps({"type": "object", "required": ["reviewer"]}), encoding="utf-8")
        _write(adr_dir, "adr-0001.md", VALID_ADR)

        with pytest.raises(SystemExit) as exc:
            main(["validate", str(adr_dir), "--schema", str(schema)])
        assert exc.value.code == 1

        main(["validate", str(adr_dir), "--no-schema"])

    def test_missing_schema_file_exits_with_two(self, adr_dir, tmp_path):
        _write(adr_dir, "adr-0001.md", VALID_ADR)
        with pytest.raises(SystemExit) as exc:
            main(["validate", str(adr_dir), "--schema", str(tmp_path / "nope.json")])
        assert exc.value.code == 2

    def test_ambiguous_rules_file_exits_with_two(self, adr_dir, tmp_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("sections: [Decision, Decision Outcome]\n", encoding="utf-8")
        _write(adr_dir, "adr-0001.md", VALID_ADR)
        with pytest.raises(SystemExit) as exc:
            main(["validate", str(adr_dir), "--rules", str(rules)])
        assert exc.value.code == 2


# ---------------------------------------------------------------------------
# madr headings
# ---------------------------------------------------------------------------

class TestHeadingsCommand:

    def test_lists_headings_outside_code(self, adr_dir, capsys):
        text = VALID_ADR.replace("## Links", "```\n## Fake Heading\n```\n\n## Links")
        path = _write(adr_dir, "adr-0001.md", text)
        main(["headings", str(path)])
        out = capsys.readouterr().out
        assert "Background and Problem Statement" in out
        assert "Fake Heading" not in out

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["headings", str(tmp_path / "nope.md")])
