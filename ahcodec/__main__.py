import argparse
import sys
from typing import List, Optional

from .codecs import AdaptiveHuffmanCodec, AdaptiveHuffmanCodecFile, CompressedDataFile
from .experiments import DEMO_TEXTS, STRESS_TEXTS, run_text_experiments
from .logger import Logger
from .models import TreeSettings
from .preprocessors import BytePreprocessor, TextPreprocessor


def _tree_settings(args) -> TreeSettings:
    return TreeSettings(
        exchanges_enabled=not args.no_exchanges,
        max_propagation_depth=args.max_depth,
        node_count_ceiling=args.node_ceiling,
    )


def _add_tree_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--no-exchanges", action="store_true", help="never reorder the tree (weights only)")
    parser.add_argument("--max-depth", type=int, default=TreeSettings().max_propagation_depth,
                        help="maximum nodes visited by one update")
    parser.add_argument("--node-ceiling", type=int, default=None,
                        help="stop exchanging once the tree has more nodes than this")


def _encode(args, logger: Logger) -> int:
    if args.text:
        preprocessor = TextPreprocessor(logger)
    else:
        preprocessor = BytePreprocessor(logger)
    compressed = AdaptiveHuffmanCodecFile().compress(
        args.input, args.output, preprocessor, _tree_settings(args), logger
    )
    print(f"[encode] wrote {args.output}")
    print(f"[encode] bits={compressed.bit_count}, bytes={len(compressed.data)}")
    return 0


def _decode(args, logger: Logger) -> int:
    compressed = CompressedDataFile.read_from_file(args.input)
    data = AdaptiveHuffmanCodec().decompress(compressed, logger)
    with open(args.output, "wb") as file:
        file.write(data)
    print(f"[decode] wrote {args.output} ({len(data)} bytes)")
    if compressed.original_file_name:
        print(f"[decode] original name: {compressed.original_file_name}")
    return 0


def _verify(args, logger: Logger) -> int:
    with open(args.first, "rb") as file:
        first = file.read()
    with open(args.second, "rb") as file:
        second = file.read()

    for position, (a, b) in enumerate(zip(first, second)):
        if a != b:
            print(f"[verify] mismatch at byte {position}: {a} != {b}")
            return 1
    if len(first) != len(second):
        print(f"[verify] length mismatch: {len(first)} != {len(second)}")
        return 1
    print(f"[verify] files match ({len(first)} bytes)")
    return 0


def _demo(args, logger: Logger) -> int:
    settings = _tree_settings(args)
    texts = list(DEMO_TEXTS)
    if args.stress:
        texts += STRESS_TEXTS
    failures = 0
    for result in run_text_experiments(texts, settings, logger):
        print(result)
        if args.verbose:
            print(f"  bits: {result.encoded}")
        if not result.verified:
            failures += 1
    return 1 if failures else 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ahcodec", description="Adaptive Huffman (FGK) coder")
    sub = ap.add_subparsers(dest="command", required=True)

    encode = sub.add_parser("encode", help="compress a file")
    encode.add_argument("--input", required=True, help="path to the file to compress")
    encode.add_argument("--output", required=True, help="path to the .ahc output")
    encode.add_argument("--text", action="store_true", help="code UTF-8 characters instead of bytes")
    _add_tree_arguments(encode)
    encode.set_defaults(handler=_encode)

    decode = sub.add_parser("decode", help="decompress a .ahc file")
    decode.add_argument("--input", required=True, help="path to the .ahc file")
    decode.add_argument("--output", required=True, help="path to the restored file")
    decode.set_defaults(handler=_decode)

    verify = sub.add_parser("verify", help="compare two files byte by byte")
    verify.add_argument("first")
    verify.add_argument("second")
    verify.set_defaults(handler=_verify)

    demo = sub.add_parser("demo", help="encode and decode the sample texts")
    demo.add_argument("--stress", action="store_true", help="include the stress inputs")
    demo.add_argument("--verbose", action="store_true", help="print the encoded bits")
    _add_tree_arguments(demo)
    demo.set_defaults(handler=_demo)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = Logger()
    logger.display_progress = False
    try:
        return args.handler(args, logger)
    except (ValueError, FileNotFoundError) as e:
        print(f"[{args.command}] error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
