from __future__ import annotations

from typing import Any, Dict, List
import json
import os

import pandas as pd


def load_telemetry(path: str, max_rows: int = 2000) -> pd.DataFrame:
    """Read a turn log into a flat DataFrame, skipping malformed lines."""
    if not os.path.exists(path):
        return pd.DataFrame()
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                rec = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(rec, dict):
                records.append(rec)
    if not records:
        return pd.DataFrame()
    df = pd.json_normalize(records)
    return df.tail(max_rows).reset_index(drop=True)


def summarize_turns(df: pd.DataFrame) -> Dict[str, Any]:
    """Aggregate turn counts, rejected moves and distinct visited cells."""
    if df.empty:
        return {"turns": 0, "rejected_moves": 0, "cells_visited": 0, "commands": {}}

    accepted = df["accepted"].fillna(True).astype(bool) if "accepted" in df.columns else pd.Series(True, index=df.index)
    cells_visited = 0
    if "pose.x" in df.columns and "pose.y" in df.columns:
        poses = df[["pose.x", "pose.y"]].dropna()
        cells = set(zip(poses["pose.x"].astype(int), poses["pose.y"].astype(int)))
        if "before.x" in df.columns and "before.y" in df.columns:
            starts = df[["before.x", "before.y"]].dropna()
            if not starts.empty:
                cells.add((int(starts.iloc[0]["before.x"]), int(starts.iloc[0]["before.y"])))
        cells_visited = len(cells)

    commands: Dict[str, int] = {}
    if "command" in df.columns:
        commands = {str(k): int(v) for k, v in df["command"].value_counts().items()}

    return {
        "turns": int(len(df)),
        "rejected_moves": int((~accepted).sum()),
        "cells_visited": cells_visited,
        "commands": commands,
    }
