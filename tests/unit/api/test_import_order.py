"""Each API module must import cleanly on its own in a fresh interpreter."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[3]


def _import_fresh(module: str) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join([str(REPO_ROOT / "src"), str(REPO_ROOT)])
    return subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=REPO_ROOT,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )


@pytest.mark.parametrize(
    "module",
    [
        "api.dependencies.auth",
        "api.v1.dependencies",
        "api.v1.routes.comments",
        "api.v1.routes.users",
        "main",
    ],
)
def test_module_imports_first(module: str) -> None:
    result = _import_fresh(module)

    assert result.returncode == 0, f"import {module} failed:\n{result.stderr}"
