"""Read and write lattice files, statistics tables and run configs.

Lattice file layout:

    [header]
    dimensions=2
    size=<record count>
    state=<one '0'/'1' per record>
    [parts]
    <id>\t<x>\t<y>\t<z>\t<mx>\t<my>\t<mz>\t<state>
"""
from __future__ import annotations

import json
import logging
import os
from typing import Dict, Iterable, List, Tuple

import numpy as np

from latticecut.errors import IOFailure, MalformedRecord
from latticecut.records.store import RecordStore
from latticecut.sampling.corners import SizeStatistic, StatisticsConfig

logger = logging.getLogger(__name__)

PARTS_MARKER = "[parts]"
HEADER_MARKER = "[header]"
FLOAT_DIGITS = 16

_RECORD_FIELDS = ("id", "x", "y", "z", "mx", "my", "mz", "state")


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def _read_text(path: str) -> str:
    try:
        with open(path) as f:
            return f.read()
    except OSError as e:
        raise IOFailure(f"Cannot read {path}: {e}") from e


def _write_text(path: str, text: str) -> None:
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w") as f:
            f.write(text)
    except OSError as e:
        raise IOFailure(f"Cannot write {path}: {e}") from e


def _fmt(value: float) -> str:
    return f"{value:.{FLOAT_DIGITS}f}"


# ---------------------------------------------------------------------------
# Lattice files
# ---------------------------------------------------------------------------

def _parse_record(fields: List[str], line_number: int):
    if len(fields) < len(_RECORD_FIELDS):
        missing = _RECORD_FIELDS[len(fields)]
        raise MalformedRecord(
            f"expected {len(_RECORD_FIELDS)} tab-separated fields, got {len(fields)} "
            f"(missing '{missing}')",
            line_number=line_number, field=missing,
        )
    if len(fields) > len(_RECORD_FIELDS):
        logger.warning(
            f"line {line_number}: ignoring {len(fields) - len(_RECORD_FIELDS)} field(s) "
            f"after 'state'"
        )

    try:
        record_id = int(fields[0])
    except ValueError:
        raise MalformedRecord(
            f"field 'id' is not an integer: {fields[0]!r}",
            line_number=line_number, field="id",
        ) from None

    values = []
    for name, text in zip(_RECORD_FIELDS[1:7], fields[1:7]):
        try:
            values.append(float(text))
        except ValueError:
            raise MalformedRecord(
                f"field '{name}' is not a number: {text!r}",
                line_number=line_number, field=name,
            ) from None

    state_text = fields[7].strip()
    if state_text not in ("0", "1"):
        raise MalformedRecord(
            f"field 'state' must be '0' or '1', got {state_text!r}",
            line_number=line_number, field="state",
        )

    return record_id, values[0:3], values[3:6], state_text == "1"


def parse_header(lines: Iterable[str]) -> Dict[str, str]:
    """Collect key=value pairs from the header section."""
    header = {}
    for line in lines:
        line = line.strip()
        if not line or line == HEADER_MARKER or "=" not in line:
            continue
        key, value = line.split("=", 1)
        header[key.strip()] = value.strip()
    return header


def parse_store(text: str) -> RecordStore:
    """Parse lattice file contents into a RecordStore.

    Raises:
        MalformedRecord: If the [parts] section is missing or a record line
            has a missing or non-numeric field.
    """
    lines = text.splitlines()
    try:
        parts_index = next(i for i, line in enumerate(lines) if PARTS_MARKER in line)
    except StopIteration:
        raise MalformedRecord(f"no '{PARTS_MARKER}' section found") from None

    header = parse_header(lines[:parts_index])

    ids, positions, moments, states = [], [], [], []
    for offset, line in enumerate(lines[parts_index + 1:]):
        if not line.strip():
            continue
        line_number = parts_index + 2 + offset
        record_id, pos, mom, state = _parse_record(line.rstrip("\r\n").split("\t"), line_number)
        ids.append(record_id)
        positions.append(pos)
        moments.append(mom)
        states.append(state)

    if "size" in header and header["size"] != str(len(ids)):
        logger.warning(
            f"Header size={header['size']} disagrees with {len(ids)} records in {PARTS_MARKER}"
        )
    state_column = "".join("1" if s else "0" for s in states)
    if "state" in header and header["state"] != state_column:
        logger.warning(
            f"Header state disagrees with the state column of {PARTS_MARKER}; "
            f"using the per-record values"
        )

    return RecordStore(
        ids=ids,
        positions=np.array(positions, dtype=np.float64).reshape(-1, 3),
        moments=np.array(moments, dtype=np.float64).reshape(-1, 3),
        states=states,
    )


def load_store(path: str) -> RecordStore:
    """Load a lattice file."""
    store = parse_store(_read_text(path))
    logger.info(f"Loaded {store.n_records} records ({store.side}x{store.side} sites) from {path}")
    return store


def format_store(store: RecordStore) -> str:
    """Render a RecordStore in the lattice file layout."""
    out = [
        HEADER_MARKER,
        "dimensions=2",
        f"size={store.n_records}",
        f"state={store.state_string()}",
        PARTS_MARKER,
    ]
    for rid, pos, mom, state in zip(store.ids, store.positions, store.moments, store.states):
        out.append("\t".join(
            [str(int(rid))]
            + [_fmt(v) for v in pos]
            + [_fmt(v) for v in mom]
            + ["1" if state else "0"]
        ))
    return "\n".join(out) + "\n"


def save_store(path: str, store: RecordStore) -> None:
    """Write a RecordStore to ``path``, creating parent directories."""
    _write_text(path, format_store(store))
    logger.info(f"Wrote {store.n_records} records to {path}")


# ---------------------------------------------------------------------------
# Statistics tables
# ---------------------------------------------------------------------------

def format_statistic(stat: SizeStatistic) -> str:
    """One table line: mean<TAB>stddev<TAB>#size."""
    return f"{_fmt(stat.mean_energy)}\t{_fmt(stat.stddev_energy)}\t#{stat.size}\n"


def format_statistics(stats: Iterable[SizeStatistic]) -> str:
    return "".join(format_statistic(s) for s in stats)


class StatisticsWriter:
    """Write statistics lines as they are produced.

    Each line is flushed immediately, so rows for completed sizes survive a
    later failure.
    """

    def __init__(self, path: str):
        self.path = path
        self._file = None

    def __enter__(self) -> "StatisticsWriter":
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            self._file = open(self.path, "w")
        except OSError as e:
            raise IOFailure(f"Cannot write {self.path}: {e}") from e
        return self

    def write(self, stat: SizeStatistic) -> None:
        try:
            self._file.write(format_statistic(stat))
            self._file.flush()
        except OSError as e:
            raise IOFailure(f"Cannot write {self.path}: {e}") from e

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


def save_statistics(path: str, stats: Iterable[SizeStatistic]) -> None:
    """Write a complete statistics table."""
    _write_text(path, format_statistics(stats))


def save_statistics_json(path: str, stats: Iterable[SizeStatistic]) -> None:
    """Dump statistics, including per-corner energies, as JSON."""
    entries = [
        {
            "size": s.size,
            "mean_energy": s.mean_energy,
            "stddev_energy": s.stddev_energy,
            "energies": s.energies,
        }
        for s in stats
    ]
    _write_text(path, json.dumps(entries, indent=2, cls=_NumpyEncoder))


def load_statistics(path: str) -> List[Tuple[int, float, float]]:
    """Read a statistics table back as (size, mean, stddev) tuples."""
    rows = []
    for line_number, line in enumerate(_read_text(path).splitlines(), start=1):
        if not line.strip():
            continue
        fields = line.split("\t")
        try:
            mean, std, size = float(fields[0]), float(fields[1]), int(fields[2].lstrip("#"))
        except (IndexError, ValueError):
            raise MalformedRecord(
                f"expected 'mean\\tstddev\\t#size', got {line!r}",
                line_number=line_number,
            ) from None
        rows.append((size, mean, std))
    return rows


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------

def load_statistics_config(path: str) -> StatisticsConfig:
    """Load a StatisticsConfig from a JSON object.

    Recognized keys: sizes, corners, strict, skip_invalid. Missing keys keep
    their defaults.
    """
    try:
        raw = json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise MalformedRecord(f"invalid JSON in {path}: {e}", line_number=e.lineno) from e
    if not isinstance(raw, dict):
        raise MalformedRecord(f"config {path} must be a JSON object")

    config = StatisticsConfig()
    if "sizes" in raw:
        sizes = raw["sizes"]
        if not isinstance(sizes, list) or not all(
            isinstance(s, int) and not isinstance(s, bool) for s in sizes
        ):
            raise MalformedRecord(
                f"config {path}: 'sizes' must be a list of integers, got {sizes!r}",
                field="sizes",
            )
        config.sizes = list(sizes)
    if "corners" in raw:
        corners = raw["corners"]
        if not isinstance(corners, list) or not all(isinstance(c, str) for c in corners):
            raise MalformedRecord(
                f"config {path}: 'corners' must be a list of tokens, got {corners!r}",
                field="corners",
            )
        config.corners = list(corners)
    for key in ("strict", "skip_invalid"):
        if key in raw:
            if not isinstance(raw[key], bool):
                raise MalformedRecord(
                    f"config {path}: '{key}' must be true or false, got {raw[key]!r}",
                    field=key,
                )
            setattr(config, key, raw[key])
    unknown = set(raw) - {"sizes", "corners", "strict", "skip_invalid"}
    if unknown:
        logger.warning(f"Ignoring unknown config keys in {path}: {sorted(unknown)}")
    return config
