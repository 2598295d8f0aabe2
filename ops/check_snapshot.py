import argparse
import hashlib
import json
import os
import sys
from datetime import datetime, timezone
from pathlib import Path


REPO = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO))

from src.settings import SNAPSHOT_PATH, STATUS_DIR  # noqa: E402


TOP_KEYS = {"timestamp", "updated", "global", "japan"}
SCOPE_KEYS = {"layer7", "layer3", "bot"}
LAYER7_KEYS = {
    "global": {"timeseries", "summary", "locations"},
    "japan": {"timeseries", "summary", "sources"},
}
LAYER3_KEYS = {"timeseries", "protocol"}
BOT_KEYS = {"class"}


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _expect_keys(problems: list[str], where: str, obj, expected: set[str]) -> bool:
    if not isinstance(obj, dict):
        problems.append(f"{where}: expected object, got {type(obj).__name__}")
        return False
    keys = set(obj.keys())
    missing = sorted(expected - keys)
    extra = sorted(keys - expected)
    if missing:
        problems.append(f"{where}: missing {missing}")
    if extra:
        problems.append(f"{where}: unexpected {extra}")
    return True


def shape_problems(payload) -> list[str]:
    problems: list[str] = []
    if not _expect_keys(problems, "snapshot", payload, TOP_KEYS):
        return problems

    for scope in ("global", "japan"):
        if scope not in payload:
            continue
        block = payload[scope]
        if not _expect_keys(problems, scope, block, SCOPE_KEYS):
            continue
        if "layer7" in block:
            _expect_keys(problems, f"{scope}.layer7", block["layer7"], LAYER7_KEYS[scope])
        if "layer3" in block:
            _expect_keys(problems, f"{scope}.layer3", block["layer3"], LAYER3_KEYS)
        if "bot" in block:
            _expect_keys(problems, f"{scope}.bot", block["bot"], BOT_KEYS)

    for key in ("timestamp", "updated"):
        if key in payload and not isinstance(payload[key], str):
            problems.append(f"{key}: expected string")
    return problems


def build_status(snapshot_path: Path) -> dict:
    if not snapshot_path.exists():
        raise SystemExit(f"missing: {snapshot_path}")

    try:
        payload = json.loads(snapshot_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SystemExit(f"invalid json: {snapshot_path} ({e})") from e
    except (UnicodeDecodeError, OSError) as e:
        raise SystemExit(f"unreadable: {snapshot_path} ({e})") from e

    mtime_iso = datetime.fromtimestamp(os.path.getmtime(snapshot_path), tz=timezone.utc).isoformat()
    return {
        "generated_utc": datetime.now(timezone.utc).isoformat(),
        "snapshot_path": str(snapshot_path),
        "file_mtime_utc": mtime_iso,
        "timestamp": payload.get("timestamp") if isinstance(payload, dict) else None,
        "updated": payload.get("updated") if isinstance(payload, dict) else None,
        "problems": shape_problems(payload),
        "snapshot_sha256": sha256_file(snapshot_path),
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--snapshot", default=SNAPSHOT_PATH)
    parser.add_argument("--status-dir", default=STATUS_DIR)
    args = parser.parse_args(argv)

    snapshot_path = Path(args.snapshot).resolve()
    status_dir = Path(args.status_dir).resolve()
    status_dir.mkdir(parents=True, exist_ok=True)
    out_json = status_dir / "snapshot_status.json"

    status = build_status(snapshot_path)
    out_json.write_text(json.dumps(status, ensure_ascii=False, indent=2), encoding="utf-8")

    print(f"[snapshot status] wrote: {out_json}", flush=True)
    print(
        "[snapshot status] "
        f"timestamp={status['timestamp']} "
        f"updated={status['updated']} "
        f"problems={len(status['problems'])}",
        flush=True,
    )
    for p in status["problems"]:
        print(f"[snapshot status] problem: {p}", file=sys.stderr, flush=True)
    return 1 if status["problems"] else 0


if __name__ == "__main__":
    sys.exit(main())
