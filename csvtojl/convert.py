import csv
import logging

from tqdm import tqdm

from csvtojl.util import LOGGER_NAME, read_csv, to_json_line

logger = logging.getLogger(LOGGER_NAME)


class ConversionError(Exception):
    pass


def build_record(header, row):
    # Duplicate header names: the key keeps its first position, the last value wins.
    return dict(zip(header, row))


def write_records(w, header, records, ensure_ascii=False, show_progress=False):
    written = 0
    skipped = 0
    for line_num, row in tqdm(records, desc="Converting", unit="row", disable=not show_progress):
        if len(row) != len(header):
            logger.warning(
                "Line %d: number of columns in the record (%d) does not match headers (%d)",
                line_num, len(row), len(header)
            )
            skipped += 1
            continue

        record = build_record(header, row)
        try:
            line = to_json_line(record, ensure_ascii=ensure_ascii)
        except (TypeError, ValueError) as e:
            logger.warning("Line %d: error converting to JSON: %s", line_num, e)
            skipped += 1
            continue

        w.write(line)
        written += 1
    return written, skipped


def convert(input_path, output_path, ensure_ascii=False, show_progress=False):
    """
    Convert a CSV file with a header row into a JSON Lines file.

    Every data row whose column count matches the header becomes one JSON
    object with the header names as keys and the cells as string values.
    Mismatched rows are skipped with a warning.

    Returns a (written, skipped) tuple. Raises ConversionError on any
    fatal problem; the output file is not touched unless the input parsed
    and has at least one data row.
    """
    try:
        rows = read_csv(input_path)
    except OSError as e:
        raise ConversionError("Unable to open input file: {}".format(e)) from e
    except csv.Error as e:
        raise ConversionError("Error reading CSV file: {}".format(e)) from e

    if len(rows) < 2:
        raise ConversionError("Not enough data in the CSV file")

    _, header = rows[0]
    records = rows[1:]

    try:
        w = open(output_path, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise ConversionError("Unable to create output file: {}".format(e)) from e

    try:
        with w:
            written, skipped = write_records(
                w, header, records,
                ensure_ascii=ensure_ascii,
                show_progress=show_progress
            )
    except OSError as e:
        raise ConversionError("Error writing to JSON Lines file: {}".format(e)) from e

    logger.debug("Wrote %d records to %s, skipped %d", written, output_path, skipped)
    return written, skipped
