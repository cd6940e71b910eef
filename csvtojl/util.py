import csv
import json
import logging
import sys

LOGGER_NAME = "csvtojl"


def raise_field_limit():
    # Lift csv's 128 KiB cell limit to the largest value the platform's C long accepts.
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return limit
        except OverflowError:
            limit //= 10


def read_csv(path):
    """
    Read the whole CSV file into memory.

    Returns a list of (line_num, row) pairs, line_num being the physical
    line the record starts on; blank lines are dropped. Undecodable bytes
    are replaced with U+FFFD. Raises OSError if the file can't be read and
    csv.Error on malformed input.
    """
    raise_field_limit()
    rows = []
    with open(path, newline="", encoding="utf-8", errors="replace") as r:
        reader = csv.reader(r, strict=True)
        start = 1
        for row in reader:
            if row:
                rows.append((start, row))
            start = reader.line_num + 1
    return rows


def to_json_line(record, ensure_ascii=False):
    return json.dumps(record, ensure_ascii=ensure_ascii, separators=(",", ":")) + "\n"


def setup_logging(log_file=None):
    """
    Set up the csvtojl logger: INFO to the console, DEBUG to an optional file.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        handler = logging.FileHandler(log_file)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
