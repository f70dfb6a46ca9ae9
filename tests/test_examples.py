"""Smoke tests for example scripts."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def test_newton_rosenbrock_demo_runs() -> None:
    """Test that examples/newton_rosenbrock_demo.py runs successfully."""
    script = ROOT / "examples" / "newton_rosenbrock_demo.py"
    assert script.exists(), f"Example script not found: {script}"

    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        check=False,
        timeout=60,
    )

    assert result.returncode == 0, (
        f"Example script failed with return code {result.returncode}.\n"
        f"STDOUT:\n{result.stdout}\n"
        f"STDERR:\n{result.stderr}"
    )
    assert "maximum_iterations: Maximum iterations (1) reached." in result.stdout
    assert "All examples completed." in result.stdout
