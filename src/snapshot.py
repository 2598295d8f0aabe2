from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any


JST = timezone(timedelta(hours=9), "JST")


@dataclass(frozen=True)
class Layer7Block:
    timeseries: Any
    summary: Any
    top: Any
    top_key: str

    def to_dict(self) -> dict:
        return {"timeseries": self.timeseries, "summary": self.summary, self.top_key: self.top}


@dataclass(frozen=True)
class Layer3Block:
    timeseries: Any
    protocol: Any

    def to_dict(self) -> dict:
        return {"timeseries": self.timeseries, "protocol": self.protocol}


@dataclass(frozen=True)
class BotBlock:
    bot_class: Any

    def to_dict(self) -> dict:
        return {"class": self.bot_class}


@dataclass(frozen=True)
class ScopeBlock:
    layer7: Layer7Block
    layer3: Layer3Block
    bot: BotBlock

    @classmethod
    def from_fetched(cls, fetched: dict, top_key: str) -> "ScopeBlock":
        l7 = fetched["layer7"]
        l3 = fetched["layer3"]
        return cls(
            layer7=Layer7Block(l7["timeseries"], l7["summary"], l7[top_key], top_key),
            layer3=Layer3Block(l3["timeseries"], l3["protocol"]),
            bot=BotBlock(fetched["bot"]["class"]),
        )

    def to_dict(self) -> dict:
        return {
            "layer7": self.layer7.to_dict(),
            "layer3": self.layer3.to_dict(),
            "bot": self.bot.to_dict(),
        }


@dataclass(frozen=True)
class Snapshot:
    timestamp: str
    updated: str
    global_scope: ScopeBlock
    japan: ScopeBlock

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "updated": self.updated,
            "global": self.global_scope.to_dict(),
            "japan": self.japan.to_dict(),
        }


def utc_iso_ms(dt: datetime) -> str:
    d = dt.astimezone(timezone.utc)
    return d.strftime("%Y-%m-%dT%H:%M:%S.") + f"{d.microsecond // 1000:03d}Z"


def jst_display(dt: datetime) -> str:
    # ja-JP style: 2026/1/5 9:05:03
    d = dt.astimezone(JST)
    return f"{d.year}/{d.month}/{d.day} {d.hour}:{d.minute:02d}:{d.second:02d}"


def build_snapshot(global_fetched: dict, japan_fetched: dict, now: datetime | None = None) -> Snapshot:
    captured = now or datetime.now(timezone.utc)
    return Snapshot(
        timestamp=utc_iso_ms(captured),
        updated=jst_display(captured),
        global_scope=ScopeBlock.from_fetched(global_fetched, "locations"),
        japan=ScopeBlock.from_fetched(japan_fetched, "sources"),
    )


def write_snapshot(snapshot: Snapshot, path: str | Path) -> Path:
    """
    Write the snapshot as 2-space indented JSON.
    The target is replaced in one step; a failed write leaves it untouched.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(f".{target.name}.tmp")
    text = json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2)
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(str(tmp), str(target))
    finally:
        if tmp.exists():
            tmp.unlink()
    return target
