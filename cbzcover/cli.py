"""Command line: extract the cover of an archive and print its path."""

import argparse
import json
import logging
import os
import sys

from cbzcover import __version__
from cbzcover.errors import CoverError
from cbzcover.logconf import setup_logging
from cbzcover.thumbnail import DEFAULT_SIZE, extract_cover

logger = logging.getLogger("cbzcover")

CONF = "config.json"
CONF_ENV = "COVER_CFG"

DEFAULTS = {
    "output_dir": ".",
    "size": DEFAULT_SIZE,
    }


def positive_int(value):
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"invalid size: {value!r}") from None
    if size < 1:
        raise argparse.ArgumentTypeError(f"size must be > 0: {value!r}")
    return size


def load_config(path=None):
    """Read json config, return {} if there's none.

    Path is --config, else $COVER_CFG, else config.json in current dir.
    """
    if path is None:
        path = os.getenv(CONF_ENV) or CONF
        if not os.path.isfile(path):
            return {}
    with open(path, encoding='utf-8') as json_data_file:
        data = json.load(json_data_file)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a json object")
    return data


def make_parser():
    parser = argparse.ArgumentParser(
        prog='cbzcover',
        description='Extract the cover of an archive as a thumbnail',
        epilog='Supported archives: ZIP (.cbz, .epub, .zip). '
               'Cover is cover.jpg, cover.png, or 1st image found.',
    )
    parser.add_argument('-i', '--input', required=True, metavar='PATH',
                        help='source archive')
    parser.add_argument('-o', '--output-dir', metavar='PATH',
                        help='destination folder (default: {})'.format(
                            DEFAULTS["output_dir"]))
    parser.add_argument('-s', '--size', type=positive_int, metavar='WIDTH',
                        help='thumbnail width in pixels (default: {})'.format(
                            DEFAULTS["size"]))
    parser.add_argument('-c', '--config', metavar='PATH',
                        help='json config file (default: ${} or {})'.format(
                            CONF_ENV, CONF))
    parser.add_argument('--version', action='version',
                        version='%(prog)s {}'.format(__version__))
    return parser


def parse_args(argv=None):
    """Parse arguments, options left out are taken from config."""
    parser = make_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        parser.error(f"bad config: {e}")

    if args.output_dir is None:
        args.output_dir = config.get("output_dir", DEFAULTS["output_dir"])
    if args.size is None:
        try:
            args.size = positive_int(config.get("size", DEFAULTS["size"]))
        except argparse.ArgumentTypeError as e:
            parser.error(f"bad config: {e}")
    return args


def main(argv=None):
    setup_logging()
    args = parse_args(argv)
    logger.debug("args: %s", args)

    try:
        result = extract_cover(args.input, args.output_dir, args.size,
                               logger=logger)
    except CoverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
