from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
API_RADAR = "https://api.cloudflare.com/client/v4/radar"
TOKEN_ENV = "CF_API_TOKEN"
DATE_RANGE = "7d"
COUNTRY_CODE = "JP"
TOP_LIMIT = 10
SNAPSHOT_PATH = str((REPO_ROOT / "public" / "data" / "latest.json").resolve())
STATUS_DIR = str((REPO_ROOT / "output" / "live").resolve())
