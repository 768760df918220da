"""CLI smoke tests for ops scripts.

These are minimal tests that verify:
1. Script runs without crashing
2. Exit code is 0
3. Output exists (stdout or file)

These tests do NOT verify correctness - that's the job of the unit tests.
CLI scripts are thin wrappers around the pipeline.
"""

import subprocess
import sys
from pathlib import Path

import pytest


# Project root for PYTHONPATH
PROJECT_ROOT = Path(__file__).parent.parent
SCRIPTS_DIR = PROJECT_ROOT / "scripts"


def run_script(script_path: Path, args: list = None) -> subprocess.CompletedProcess:
    """Run a script with PYTHONPATH set to src."""
    env = {
        "PYTHONPATH": str(PROJECT_ROOT / "src"),
    }

    cmd = [sys.executable, str(script_path)]
    if args:
        cmd.extend(args)

    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        env={**subprocess.os.environ, **env},
        cwd=str(PROJECT_ROOT),
        timeout=300,
    )


class TestTrainAndEvalCLI:
    """Smoke tests for the training + evaluation script."""

    def test_runs_and_exits_zero(self, shared_input_dir, tmp_path):
        """Full run on synthetic inputs should exit 0 and write artifacts."""
        script = SCRIPTS_DIR / "ops" / "train_and_eval.py"
        result = run_script(script, [
            "--data-dir", str(shared_input_dir),
            "--models-dir", str(tmp_path / "models"),
            "--output-dir", str(tmp_path / "output"),
            "--models", "tree", "forest",
        ])

        assert result.returncode == 0, f"Exit code {result.returncode}, stderr: {result.stderr}"
        assert "PIPELINE COMPLETE" in result.stdout
        assert (tmp_path / "models" / "report.json").exists()
        assert (tmp_path / "output" / "scored_calls.csv").exists()

    def test_missing_data_dir_fails(self, tmp_path):
        script = SCRIPTS_DIR / "ops" / "train_and_eval.py"
        result = run_script(script, ["--data-dir", str(tmp_path / "nowhere")])
        assert result.returncode != 0
        assert "Missing input table" in result.stderr


class TestCLIHelpOutput:
    """Test that CLI scripts have help output."""

    @pytest.mark.parametrize("script", [
        "ops/train_and_eval.py",
        "ops/profile_columns.py",
    ])
    def test_has_help(self, script):
        path = SCRIPTS_DIR / script
        result = run_script(path, ["--help"])
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()


class TestCheckImportanceCLI:
    """Smoke test for the importance report over saved models."""

    def test_runs_without_saved_forest(self):
        """Missing model files are reported, not raised."""
        result = run_script(SCRIPTS_DIR / "check_importance.py")
        assert result.returncode == 0, f"stderr: {result.stderr}"
        assert "FOREST" in result.stdout or "No forest model" in result.stdout
