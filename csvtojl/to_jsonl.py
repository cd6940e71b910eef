import argparse
import logging
import sys

from csvtojl.config import ConfigError, load_config
from csvtojl.convert import ConversionError, convert
from csvtojl.instrument import measured, profiled
from csvtojl.util import LOGGER_NAME, setup_logging

USAGE = "Usage: csvtojl <input_csv_file> <output_jsonl_file>"


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        print(USAGE)
        print("{}: error: {}".format(self.prog, message))
        sys.exit(1)


def build_parser():
    parser = ArgumentParser(prog="csvtojl", usage=USAGE[len("Usage: "):])
    parser.add_argument("input_path", type=str, nargs="?", default=None)
    parser.add_argument("output_path", type=str, nargs="?", default=None)
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--cpu-profile", type=str, default=None)
    parser.add_argument("--stats", action="store_true", default=None)
    parser.add_argument("--ensure-ascii", action="store_true", default=None)
    parser.add_argument("--no-progress", dest="progress", action="store_false", default=None)
    parser.add_argument("--log-file", type=str, default=None)
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        parser.error(str(e))

    if args.input_path is not None and args.output_path is None:
        parser.error("expected both an input and an output path")
    if args.input_path is None:
        args.input_path = config["paths"]["input"]
        args.output_path = config["paths"]["output"]
        if not args.input_path or not args.output_path:
            parser.error("no input/output paths given and none configured")

    def pick(value, default):
        return default if value is None else value

    return {
        "input_path": args.input_path,
        "output_path": args.output_path,
        "cpu_profile": pick(args.cpu_profile, config["instrumentation"]["cpu_profile"]),
        "stats": pick(args.stats, config["instrumentation"]["stats"]),
        "ensure_ascii": pick(args.ensure_ascii, config["output"]["ensure_ascii"]),
        "progress": pick(args.progress, config["progress"]),
        "log_file": pick(args.log_file, config["logging"]["file"])
    }


def main(
    input_path,
    output_path,
    cpu_profile=None,
    stats=False,
    ensure_ascii=False,
    progress=True,
    log_file=None
):
    try:
        logger = setup_logging(log_file)
    except OSError as e:
        logging.getLogger(LOGGER_NAME).error("Unable to open log file: %s", e)
        return 1

    run = convert
    if stats:
        run = measured(logger)(run)
    if cpu_profile:
        run = profiled(cpu_profile)(run)

    try:
        written, skipped = run(
            input_path,
            output_path,
            ensure_ascii=ensure_ascii,
            show_progress=progress
        )
    except ConversionError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error("Unable to write CPU profile: %s", e)
        return 1

    if skipped:
        logger.info("Skipped %d malformed records", skipped)
    logger.info("Wrote %d records to %s", written, output_path)
    print("CSV file has been successfully converted to JSON Lines file")
    return 0


def cli(argv=None):
    sys.exit(main(**parse_args(argv)))


if __name__ == "__main__":
    cli()
