# filename: huffman_core.py

import json
from collections import Counter
from dataclasses import dataclass

from huffman_code import HuffmanCode
from huffman_errors import DegenerateTreeError, NotFoundError

# Root symbol of a tree built from an empty corpus
SENTINEL = "\x00"


class HuffmanNode:
    """Base class of the two tree node variants, ``Leaf`` and ``Branch``."""

    def get(self, symbol):
        raise NotImplementedError

    def traverse(self, code):
        raise NotImplementedError

    def symbols(self):
        raise NotImplementedError

    def depth(self):
        raise NotImplementedError

    def to_dict(self):
        raise NotImplementedError


@dataclass(frozen=True, repr=False)
class Leaf(HuffmanNode):
    symbol: str

    def get(self, symbol):
        if self.symbol == symbol:
            return []
        raise NotFoundError(symbol)

    def traverse(self, code):
        return self.symbol

    def symbols(self):
        yield self.symbol

    def depth(self):
        return 0

    def to_dict(self):
        return {"Leaf": self.symbol}

    def __repr__(self):
        return f"({self.symbol!r})"


@dataclass(frozen=True, repr=False)
class Branch(HuffmanNode):
    left: HuffmanNode
    right: HuffmanNode

    def get(self, symbol):
        # True marks the left child, False the right one; traverse mirrors it
        try:
            return [True] + self.left.get(symbol)
        except NotFoundError:
            pass
        try:
            return [False] + self.right.get(symbol)
        except NotFoundError:
            raise NotFoundError(symbol) from None

    def traverse(self, code):
        child = self.left if code.next() else self.right
        return child.traverse(code)

    def symbols(self):
        yield from self.left.symbols()
        yield from self.right.symbols()

    def depth(self):
        return 1 + max(self.left.depth(), self.right.depth())

    def to_dict(self):
        return {"Branch": [self.left.to_dict(), self.right.to_dict()]}

    def __repr__(self):
        return f"({self.left!r}, {self.right!r})"


def node_from_dict(data):
    """Rebuild a node from its ``{"Leaf": ...}`` / ``{"Branch": [...]}`` form."""
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"malformed node: {data!r}")
    (tag, value), = data.items()
    if tag == "Leaf":
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(f"leaf symbol must be a single character: {value!r}")
        return Leaf(value)
    if tag == "Branch":
        if not isinstance(value, list) or len(value) != 2:
            raise ValueError(f"branch must hold exactly two children: {value!r}")
        return Branch(node_from_dict(value[0]), node_from_dict(value[1]))
    raise ValueError(f"unknown node kind: {tag!r}")


class HuffmanTree:
    """Prefix-free code tree built by greedy frequency merging.

    A tree is immutable once built. Equality and hashing follow the structure
    of the whole tree, so building twice from the same corpus gives equal trees.
    """

    __slots__ = ("_root",)

    def __init__(self, root):
        if not isinstance(root, HuffmanNode):
            raise TypeError(f"root must be a HuffmanNode, not {type(root).__name__}")
        self._root = root

    @property
    def root(self):
        return self._root

    @classmethod
    def construct(cls, text):
        return cls.construct_multi([text])

    @classmethod
    def construct_multi(cls, texts):
        freqs = cls.frequencies(texts)

        # (freq, order, node); order is first-seen position, then merge count
        nodes = [(freq, order, Leaf(ch)) for order, (ch, freq) in enumerate(freqs.items())]
        order = len(nodes)

        while len(nodes) > 1:
            # Sort descending and pop the two least frequent; on equal
            # frequency the lowest order comes off first
            nodes.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)
            a = nodes.pop()
            b = nodes.pop()
            nodes.append((a[0] + b[0], order, Branch(a[2], b[2])))
            order += 1

        if not nodes:
            return cls(Leaf(SENTINEL))
        return cls(nodes[0][2])

    @staticmethod
    def frequencies(texts):
        # Counter keeps first-insertion order, which the tie-break relies on
        freqs = Counter()
        for line in texts:
            freqs.update(line)
        return freqs

    def find(self, symbol):
        return HuffmanCode(self._root.get(symbol))

    def encode(self, text):
        code = HuffmanCode()
        paths = {}
        for ch in text:
            if ch not in paths:
                paths[ch] = self._root.get(ch)
            code.extend(paths[ch])
        return code

    def encode_sanitized(self, text):
        """Encode ``text``, skipping characters the tree has no leaf for.

        Skipped characters are lost: decoding the result does not restore them.
        """
        code = HuffmanCode()
        paths = {}
        for ch in text:
            if ch not in paths:
                try:
                    paths[ch] = self._root.get(ch)
                except NotFoundError:
                    paths[ch] = None
            if paths[ch] is not None:
                code.extend(paths[ch])
        return code

    def decode(self, code):
        if isinstance(self._root, Leaf) and not code.exhausted():
            raise DegenerateTreeError(len(code) - code.position)
        buffer = []
        while not code.exhausted():
            buffer.append(self._root.traverse(code))
        return "".join(buffer)

    def generate_codes(self):
        codes = {}

        def walk(node, prefix):
            if isinstance(node, Leaf):
                codes[node.symbol] = prefix
                return
            walk(node.left, prefix + [True])
            walk(node.right, prefix + [False])

        walk(self._root, [])
        return codes

    def symbols(self):
        return list(self._root.symbols())

    def depth(self):
        return self._root.depth()

    def to_dict(self):
        return {"root": self._root.to_dict()}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or "root" not in data:
            raise ValueError(f"malformed tree: {data!r}")
        root = node_from_dict(data["root"])
        # every symbol must sit in exactly one leaf
        seen = set()
        for symbol in root.symbols():
            if symbol in seen:
                raise ValueError(f"symbol {symbol!r} appears in more than one leaf")
            seen.add(symbol)
        return cls(root)

    def to_json(self, indent=None):
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"tree is not valid JSON: {exc}") from exc
        return cls.from_dict(data)

    def __contains__(self, symbol):
        try:
            self._root.get(symbol)
        except NotFoundError:
            return False
        return True

    def __len__(self):
        return sum(1 for _ in self._root.symbols())

    def __eq__(self, other):
        if not isinstance(other, HuffmanTree):
            return NotImplemented
        return self._root == other._root

    def __hash__(self):
        return hash(self._root)

    def __repr__(self):
        return f"HuffmanTree{self._root!r}"
