from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/webbundle/bundle.py",
        "src/webbundle/registry.py",
        "src/webbundle/cli.py",
        "src/webbundle/paths/__init__.py",
        "src/webbundle/readers/__init__.py",
        "src/webbundle/resolver/__init__.py",
        "src/webbundle/variants/__init__.py",
        "src/webbundle/fingerprint/__init__.py",
        "src/webbundle/logging/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
