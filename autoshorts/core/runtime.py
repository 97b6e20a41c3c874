"""
Environment parsing helpers and start-up checks.
"""

import os
from pathlib import Path
from typing import Dict, Iterable


def parse_bool_env(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(int(raw), minimum)
    except (TypeError, ValueError):
        return default


def env_float(name: str, default: float, minimum: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(float(raw), minimum)
    except (TypeError, ValueError):
        return default


def assert_directory_writable(path: Path, *, create: bool = True) -> None:
    if create:
        path.mkdir(parents=True, exist_ok=True)
    if not path.exists() or not path.is_dir():
        raise RuntimeError(f"Required directory is missing: {path}")

    probe = path / f".write_probe_{os.getpid()}.tmp"
    try:
        with open(probe, "w", encoding="utf-8") as f:
            f.write("ok")
        probe.unlink(missing_ok=True)
    except OSError as exc:
        raise RuntimeError(f"Directory is not writable: {path}") from exc


def run_startup_runtime_checks(directories: Iterable[tuple[str, Path]], *, strict: bool = True) -> Dict[str, object]:
    """Verify the data directories; raise on the first failure when ``strict``."""
    report: Dict[str, object] = {"directories": {}, "ok": True}

    for dir_name, dir_path in directories:
        try:
            assert_directory_writable(dir_path)
            report["directories"][dir_name] = {"path": str(dir_path), "writable": True}
        except RuntimeError as exc:
            report["directories"][dir_name] = {
                "path": str(dir_path),
                "writable": False,
                "error": str(exc),
            }
            report["ok"] = False
            if strict:
                raise

    return report
