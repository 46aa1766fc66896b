from __future__ import annotations

import csv
import threading
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from ..core.exceptions import StoreError

# One lock per file path: appends from parallel requests must not interleave.
_file_locks: Dict[Path, threading.Lock] = {}
_registry_lock = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _registry_lock:
        return _file_locks.setdefault(path.resolve(), threading.Lock())


def read_rows(path: Path) -> List[Dict[str, str]]:
    """Rows keyed by header name. A missing file reads as empty.

    Header names are trimmed and lower-cased, so an older sheet with a
    different column set still reads; absent columns are simply absent keys.
    A leading byte-order mark (Excel, the history.csv export) is dropped.
    """

    if not path.exists():
        return []
    try:
        with _lock_for(path), path.open("r", encoding="utf-8-sig", newline="") as fh:
            reader = csv.reader(fh)
            header = next(reader, None)
            if not header:
                return []
            names = [h.strip().lower() for h in header]
            rows: List[Dict[str, str]] = []
            for values in reader:
                if not any(v.strip() for v in values):
                    continue
                rows.append({name: value for name, value in zip(names, values) if name})
            return rows
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        raise StoreError(f"Cannot read {path.name}: {e}") from e


def append_row(path: Path, fieldnames: Sequence[str], row: Mapping[str, object]) -> None:
    """Append one row, writing the header first when the file is new or empty.

    An existing file keeps its own header and column order, but it must carry
    every column in `fieldnames`.
    Appends are written without a byte-order mark.
    """

    try:
        with _lock_for(path):
            path.parent.mkdir(parents=True, exist_ok=True)
            header: List[str] = list(fieldnames)
            is_new = not path.exists() or path.stat().st_size == 0
            if not is_new:
                with path.open("r", encoding="utf-8-sig", newline="") as fh:
                    existing = next(csv.reader(fh), None)
                if existing:
                    header = [h.strip().lower() for h in existing]
                    missing = [name for name in fieldnames if name not in header]
                    if missing:
                        raise StoreError(f"{path.name} is missing columns {missing}; migrate the sheet first")
                else:
                    is_new = True

            with path.open("a", encoding="utf-8", newline="") as fh:
                writer = csv.writer(fh)
                if is_new:
                    writer.writerow(header)
                writer.writerow(["" if row.get(name) is None else row.get(name) for name in header])
    except (OSError, csv.Error) as e:
        raise StoreError(f"Cannot write {path.name}: {e}") from e
