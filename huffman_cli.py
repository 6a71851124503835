#!/usr/bin/env python3
"""
huffman_cli.py : build Huffman code trees and encode/decode text from the shell

Everything goes through stdin/stdout; storing the tree and the payload is
left to the caller.

Usage:
    python huffman_cli.py tree "some text" "more text"
    python huffman_cli.py encode "aaabbc" > artifact.json
    python huffman_cli.py decode < artifact.json
    python huffman_cli.py codes "aaabbc"
"""

import argparse
import os
import sys

from huffman_core import HuffmanTree
from huffman_errors import HuffcodeError
from huffman_service import HuffmanService


def default_indent():
    value = os.environ.get("HUFFCODE_JSON_INDENT")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise SystemExit(f"HUFFCODE_JSON_INDENT must be an integer, got {value!r}")


def format_bits(bits):
    return "".join("1" if b else "0" for b in bits)


def cmd_tree(args, service):
    tree = HuffmanTree.construct_multi(args.texts)
    print(tree.to_json(indent=service.indent))


def cmd_encode(args, service):
    if args.corpus:
        tree = HuffmanTree.construct_multi(args.corpus)
        artifact = service.compress_with(tree, args.text, sanitized=args.sanitized)
    else:
        artifact = service.compress(args.text, sanitized=args.sanitized)
    print(service.dumps(artifact))


def cmd_decode(args, service):
    artifact = service.loads(sys.stdin.read())
    # no trailing newline, so the text comes back byte for byte
    sys.stdout.write(service.decompress(artifact))


def cmd_codes(args, service):
    if not args.text:
        print("no symbols")
        return
    tree = HuffmanTree.construct(args.text)
    for symbol, bits in tree.generate_codes().items():
        print(f"{symbol!r}\t{format_bits(bits) or '-'}")


def build_parser():
    parser = argparse.ArgumentParser(description="Huffman code trees for text.")
    parser.add_argument(
        "--indent", type=int, default=default_indent(),
        help="JSON indentation (default: $HUFFCODE_JSON_INDENT or compact)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("tree", help="print the code tree built from TEXTS as JSON")
    p.add_argument("texts", nargs="+")
    p.set_defaults(func=cmd_tree)

    p = sub.add_parser("encode", help="print a JSON artifact holding the tree and payload")
    p.add_argument("text")
    p.add_argument(
        "--corpus", action="append", metavar="TEXT",
        help="build the tree from these texts instead of TEXT (repeatable)"
    )
    p.add_argument(
        "--sanitized", action="store_true",
        help="skip characters without a code instead of failing"
    )
    p.set_defaults(func=cmd_encode)

    p = sub.add_parser("decode", help="decode a JSON artifact read from stdin")
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("codes", help="print the bit path of every symbol in TEXT")
    p.add_argument("text")
    p.set_defaults(func=cmd_codes)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    service = HuffmanService(indent=args.indent)
    try:
        args.func(args, service)
    except (HuffcodeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
