"""CSV input parsing and output writing."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable

from placeaudit.exceptions import (
    InputInvalid,
    InputNotFound,
    InputUnreadable,
)
from placeaudit.models import (
    ERROR_HEADER,
    OUTPUT_HEADER,
    ErrorRecord,
    InputRecord,
    OutputRecord,
)

logger = logging.getLogger(__name__)

_COORD_COLUMNS = ("expectedLat", "expectedLong")


def _parse_coordinate(
    raw: str, line: int, column: str, strict: bool
) -> float:
    try:
        return float(raw.strip())
    except ValueError:
        if strict:
            raise InputInvalid(line, column, raw) from None
        logger.warning(
            "Line %d: %s '%s' is not a number, using 0.0", line, column, raw
        )
        return 0.0


def read_input(path: str | Path, strict: bool = False) -> list[InputRecord]:
    """
    Read ``text, expectedLat, expectedLong`` rows, skipping the header.

    Unparsable coordinates become 0.0 (with a warning) unless *strict*,
    in which case InputInvalid is raised. Blank lines are ignored and do
    not consume an index.
    """
    path = Path(path)
    if not path.is_file():
        raise InputNotFound(str(path))

    records: list[InputRecord] = []
    try:
        with path.open(newline="", encoding="utf-8") as fh:
            reader = csv.reader(fh)
            next(reader, None)  # header
            for row in reader:
                if not row:
                    continue
                # Short rows are padded rather than rejected
                text, lat_raw, long_raw = (row + ["", "", ""])[:3]
                lat = _parse_coordinate(
                    lat_raw, reader.line_num, _COORD_COLUMNS[0], strict
                )
                long = _parse_coordinate(
                    long_raw, reader.line_num, _COORD_COLUMNS[1], strict
                )
                records.append(
                    InputRecord(
                        index=len(records),
                        text=text,
                        expected_lat=lat,
                        expected_long=long,
                    )
                )
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise InputUnreadable(str(path), str(exc)) from exc

    logger.info("Read %d records from %s", len(records), path)
    return records


def _write(path: Path, header: list[str], rows: Iterable[list[str]]) -> None:
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        writer.writerows(rows)


def write_output(records: Iterable[OutputRecord], path: str | Path) -> None:
    """Write resolved records, one row each, under OUTPUT_HEADER."""
    _write(Path(path), OUTPUT_HEADER, (r.to_row() for r in records))


def write_errors(records: Iterable[ErrorRecord], path: str | Path) -> None:
    """Write failed records under ERROR_HEADER."""
    _write(Path(path), ERROR_HEADER, (r.to_row() for r in records))


def write_run(
    successes: Iterable[OutputRecord],
    errors: Iterable[ErrorRecord],
    out_path: str | Path,
    err_path: str | Path,
) -> None:
    """
    Write both streams of a run, or neither.

    Each file is written under a ``.part`` name first and only renamed
    once both writes have succeeded; on failure the partial files are
    removed and the OSError propagates.
    """
    out_path, err_path = Path(out_path), Path(err_path)
    out_tmp = out_path.with_name(out_path.name + ".part")
    err_tmp = err_path.with_name(err_path.name + ".part")
    try:
        write_output(successes, out_tmp)
        write_errors(errors, err_tmp)
    except OSError:
        for tmp in (out_tmp, err_tmp):
            tmp.unlink(missing_ok=True)
        raise
    out_tmp.replace(out_path)
    err_tmp.replace(err_path)


def read_output(path: str | Path) -> list[OutputRecord]:
    """Load a file produced by write_output back into records."""
    with Path(path).open(newline="", encoding="utf-8") as fh:
        return [
            OutputRecord(
                index=int(row["Index"]),
                input_text=row["InputText"],
                input_lat=float(row["InputLat"]),
                input_long=float(row["InputLong"]),
                output_text=row["OutputText"],
                output_lat=float(row["OutputLat"]),
                output_long=float(row["OutputLong"]),
                confidence=float(row["Confidence"]),
                distance=row["Distance"],
                status=row["Status"],
            )
            for row in csv.DictReader(fh)
        ]


def read_errors(path: str | Path) -> list[ErrorRecord]:
    """Load a file produced by write_errors back into records."""
    with Path(path).open(newline="", encoding="utf-8") as fh:
        return [
            ErrorRecord(
                index=int(row["Index"]), text=row["Text"], error=row["Error"]
            )
            for row in csv.DictReader(fh)
        ]


def output_paths(
    base: str, timestamp: int, directory: str | Path = "."
) -> tuple[Path, Path]:
    """
    Timestamped (success, error) file paths for one run, e.g.
    ``report_1700000000.csv`` and ``err_report_1700000000.csv``.
    """
    directory = Path(directory)
    return (
        directory / f"{base}_{timestamp}.csv",
        directory / f"err_{base}_{timestamp}.csv",
    )
