import argparse
import logging
import os
import sys

from .compression import compress_file, decompress_file
from .config_loader import DEFAULT_CONFIG_PATH, load_config
from .exceptions import HuffException


def process_args(argv=None):
    parser = argparse.ArgumentParser(prog="huffproc", description="Huffman coding based compressor")
    parser.add_argument("mode", choices=("compress", "decompress"))
    parser.add_argument("input", type=str)
    parser.add_argument("output", type=str, nargs="?")
    parser.add_argument("--debug", type=int, default=None, help="diagnostic level (1 summary, 4 per symbol)")
    parser.add_argument("--config", type=str, default=DEFAULT_CONFIG_PATH)
    return parser.parse_args(argv)


def default_output(mode, filename, suffix):
    if mode == "compress":
        return filename + suffix
    if filename.endswith(suffix) and len(os.path.basename(filename)) > len(suffix):
        return filename[:-len(suffix)]
    return filename + ".out"


def main(argv=None):
    args = process_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"cannot load config: {e}", file=sys.stderr)
        return 1
    debug = config["debug_level"] if args.debug is None else args.debug
    output = args.output or default_output(args.mode, args.input, config["compressed_suffix"])

    logging.basicConfig(level=logging.INFO if debug else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.mode == "compress":
            compress_file(args.input, output, debug)
        else:
            decompress_file(args.input, output, debug)
    except (HuffException, OSError) as e:
        print(f"{args.mode} failed: {e}", file=sys.stderr)
        return 1

    print(f"{args.input} ({os.path.getsize(args.input)} bytes) -> {output} ({os.path.getsize(output)} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
