from __future__ import annotations
import argparse, json, logging, sys
from .errors import DecodeError
from .log import setup_logging
from .models.file import MatFile
from .models.options import DecoderOptions

def _positive_int(text: str) -> int:
    n = int(text)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {n}")
    return n

def _options(args) -> DecoderOptions:
    return DecoderOptions(chunk_size=args.chunk_size)

def cmd_info(args):
    # Fast path: counts only
    if args.summary:
        from .binary.reader import summarize_file
        matrices, compressed = summarize_file(args.input, _options(args))
        print(f"matrices={matrices}, compressed={compressed}")
        return 0

    f = MatFile.from_binary(args.input, _options(args))
    print(json.dumps(f.model_dump(mode="json"), indent=2))
    return 0

def cmd_to_json(args):
    f = MatFile.from_binary(args.input, _options(args))
    with open(args.output, "w", encoding="utf-8") as out:
        json.dump(f.model_dump(mode="json"), out, indent=2)
    return 0

def build_parser():
    p = argparse.ArgumentParser(prog="matstream", description="MAT level-5 stream decoder")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for progress, -vv for tag-level detail")
    p.add_argument("--log-file", default=None, help="also write the log to this file")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("info", help="print decoded structure as JSON or a fast summary")
    sp.add_argument("input", help="Path to .mat file")
    sp.add_argument("--summary", action="store_true", help="Print element counts only")
    sp.add_argument("--chunk-size", type=_positive_int, default=64 * 1024, help="Bytes read per chunk")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("to-json", help="write decoded structure to a JSON file")
    sp.add_argument("input")
    sp.add_argument("output")
    sp.add_argument("--chunk-size", type=_positive_int, default=64 * 1024, help="Bytes read per chunk")
    sp.set_defaults(func=cmd_to_json)

    return p

def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(ns.verbose, logging.DEBUG)
    setup_logging(level, ns.log_file)

    try:
        return ns.func(ns)
    except (DecodeError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
