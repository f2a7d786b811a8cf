import json
import os
from typing import Any, Dict, List

import pandas as pd

from src.utils.io import load_json
from src.utils.logging_utils import get_logger

logger = get_logger()

# Columns that hold nested structures; parquet datasets usually store them as JSON text.
_STRUCTURED_FIELDS = ("variables", "domains", "constraints", "arcs", "assignment")


def load_problems(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads problem definitions from a file. Handles .json, .jsonl and .parquet.
    Returns a list of raw problem dictionaries (see `parse_problem`).
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _coerce(value: Any) -> Any:
        if isinstance(value, dict):
            return {k: _coerce(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [_coerce(v) for v in value]
        if hasattr(value, "tolist"):
            return _coerce(value.tolist())
        return value

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        for key in _STRUCTURED_FIELDS:
            value = record.get(key)
            if isinstance(value, str) and value.strip():
                try:
                    record[key] = json.loads(value)
                except json.JSONDecodeError:
                    logger.warning("Field %r of record %d is not valid JSON", key, index)
            elif value is not None:
                record[key] = _coerce(value)

        pid = record.get("id")
        if pid is None or pid == "" or (isinstance(pid, float) and pd.isna(pid)):
            stem = os.path.splitext(os.path.basename(file_path))[0]
            record["id"] = f"{stem}-{index}"
        return record

    # Case 1: Parquet file (one problem per row)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    def _read_lines() -> List[Dict[str, Any]]:
        data = []
        with open(file_path, "r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    obj = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Skipping malformed line %d in %s", line_no, file_path)
                    continue
                if isinstance(obj, dict):
                    data.append(obj)
        return [_normalize_record(r, i) for i, r in enumerate(data)]

    # Case 2: JSON file (array or object)
    if file_path.endswith(".json"):
        try:
            payload = load_json(file_path)
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL.
            return _read_lines()
        if isinstance(payload, list):
            records = [p for p in payload if isinstance(p, dict)]
            return [_normalize_record(r, i) for i, r in enumerate(records)]
        if isinstance(payload, dict):
            return [_normalize_record(payload, 0)]
        return []

    # Case 3: JSONL file
    return _read_lines()
