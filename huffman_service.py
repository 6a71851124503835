# filename: huffman_service.py

import base64
import binascii
import json
from dataclasses import dataclass

from huffman_code import HuffmanCode
from huffman_core import HuffmanTree, Leaf


def _count(value, name):
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer: {value!r}")
    return value


@dataclass(frozen=True)
class CompressedText:
    """A code tree and the payload it encoded; neither decodes without the other.

    ``length`` is the number of encoded symbols. A single-leaf tree encodes
    every symbol as zero bits, so the count is the only record of them.
    """

    tree: HuffmanTree
    payload: bytes
    bit_length: int
    length: int

    def to_dict(self):
        return {
            "tree": self.tree.to_dict(),
            "payload": base64.b64encode(self.payload).decode("ascii"),
            "bits": self.bit_length,
            "length": self.length,
        }

    @classmethod
    def from_dict(cls, data):
        try:
            tree, payload = data["tree"], data["payload"]
            bits, length = data["bits"], data["length"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed artifact: missing {exc}") from exc
        _count(bits, "bit count")
        _count(length, "symbol count")
        try:
            raw = base64.b64decode(payload, validate=True)
        except (binascii.Error, TypeError) as exc:
            raise ValueError(f"payload is not valid base64: {exc}") from exc
        return cls(HuffmanTree.from_dict(tree), raw, bits, length)


class HuffmanService:
    def __init__(self, indent=None):
        self.indent = indent

    def compress(self, text, sanitized=False):
        tree = HuffmanTree.construct(text)
        return self.compress_with(tree, text, sanitized=sanitized)

    def compress_with(self, tree, text, sanitized=False):
        if sanitized:
            code = tree.encode_sanitized(text)
            length = sum(1 for ch in text if ch in tree)
        else:
            code = tree.encode(text)
            length = len(text)
        # Padding bits in the last byte are dropped again on decompress
        return CompressedText(tree, code.to_bytes(), len(code), length)

    def decompress(self, artifact):
        code = HuffmanCode.from_bytes(artifact.payload, artifact.bit_length)
        text = artifact.tree.decode(code)
        root = artifact.tree.root
        if isinstance(root, Leaf):
            return root.symbol * artifact.length
        if len(text) != artifact.length:
            raise ValueError(
                f"decoded {len(text)} symbols, artifact records {artifact.length}"
            )
        return text

    def dumps(self, artifact):
        return json.dumps(artifact.to_dict(), indent=self.indent, ensure_ascii=False)

    def loads(self, text):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"artifact is not valid JSON: {exc}") from exc
        return CompressedText.from_dict(data)
