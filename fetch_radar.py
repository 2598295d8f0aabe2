# fetch_radar.py
# Pull Cloudflare Radar attack / bot summaries (global + JP, last 7 days)
# and overwrite public/data/latest.json with one snapshot.

import os
import sys

import requests
from dotenv import find_dotenv, load_dotenv

from src.acquisition import fetch_all
from src.radar_client import MissingCredentialError, RadarClient
from src.settings import COUNTRY_CODE, DATE_RANGE, SNAPSHOT_PATH, TOKEN_ENV
from src.snapshot import build_snapshot, write_snapshot


def eprint(*args, **kwargs):
    kwargs.setdefault("flush", True)
    print(*args, file=sys.stderr, **kwargs)


def read_token() -> str:
    load_dotenv(find_dotenv(usecwd=True))
    token = (os.getenv(TOKEN_ENV) or "").strip()
    if not token:
        raise MissingCredentialError(f"{TOKEN_ENV} が設定されていません")
    return token


def run(snapshot_path: str, token: str, session=None):
    if session is None:
        with requests.Session() as own_session:
            return run(snapshot_path, token, session=own_session)

    client = RadarClient(token, session=session)
    global_scope, japan_scope = fetch_all(client, DATE_RANGE, COUNTRY_CODE)
    snapshot = build_snapshot(global_scope, japan_scope)
    out = write_snapshot(snapshot, snapshot_path)
    return snapshot, out


def main(snapshot_path=None, session=None) -> int:
    try:
        token = read_token()
    except MissingCredentialError as e:
        eprint(f"❌ {e}")
        return 1

    print("🚀 Cloudflare Radarデータ取得開始...\n", flush=True)

    try:
        snapshot, out = run(snapshot_path or SNAPSHOT_PATH, token, session=session)
    except Exception as e:
        eprint("\n❌ エラーが発生しました:")
        eprint(str(e))
        return 1

    print("\n✅ データ取得完了！", flush=True)
    print(f"📁 保存先: {out}", flush=True)
    print(f"⏰ 取得時刻: {snapshot.updated}", flush=True)
    print("\n📊 取得データ:", flush=True)
    print("  ✅ Layer 7攻撃（WAF/DDoS/HTTP）", flush=True)
    print("  ✅ Layer 3攻撃（DDoS/ネットワーク）", flush=True)
    print("  ✅ ボットトラフィック", flush=True)
    print(f"  ✅ グローバル + {COUNTRY_CODE}", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
