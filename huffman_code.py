# filename: huffman_code.py

from huffman_errors import StreamExhaustedError


class HuffmanCode:
    """Ordered bit sequence with a read cursor.

    Bits are stored as booleans. Appending never moves the cursor; ``next``
    is the only read that advances it.
    """

    __slots__ = ("bits", "position")

    def __init__(self, bits=None):
        self.bits = [bool(b) for b in bits] if bits is not None else []
        self.position = 0

    @classmethod
    def from_bytes(cls, data, bit_length=None):
        # Expand every byte into 8 bits, most significant first
        bits = [bool((byte >> i) & 1) for byte in data for i in range(7, -1, -1)]
        if bit_length is not None:
            if bit_length < 0 or bit_length > len(bits):
                raise ValueError(
                    f"bit_length {bit_length} out of range for {len(data)} bytes"
                )
            del bits[bit_length:]
        code = cls()
        code.bits = bits
        return code

    def to_bytes(self):
        """Pack the bits MSB-first; the last byte is padded with zeros."""
        out = bytearray()
        for i in range(0, len(self.bits), 8):
            chunk = self.bits[i:i + 8]
            byte = 0
            for bit in chunk:
                byte = (byte << 1) | bit
            out.append(byte << (8 - len(chunk)))
        return bytes(out)

    def extend(self, bits):
        if isinstance(bits, HuffmanCode):
            bits = bits.bits
        self.bits.extend(bool(b) for b in bits)

    def push(self, bit):
        self.bits.append(bool(bit))

    def next(self):
        if self.exhausted():
            raise StreamExhaustedError(self.position)
        self.position += 1
        return self.bits[self.position - 1]

    def exhausted(self):
        return self.position >= len(self.bits)

    def vec(self):
        return list(self.bits)

    into_vec = vec

    def to_dict(self):
        return {"code": list(self.bits), "pos": self.position}

    @classmethod
    def from_dict(cls, data):
        try:
            bits, pos = data["code"], data["pos"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed bit sequence: {data!r}") from exc
        if not isinstance(bits, list) or not all(isinstance(b, bool) for b in bits):
            raise ValueError("bit sequence 'code' must be a list of booleans")
        if not isinstance(pos, int) or isinstance(pos, bool) or not 0 <= pos <= len(bits):
            raise ValueError(f"cursor {pos!r} out of range")
        code = cls(bits)
        code.position = pos
        return code

    def __len__(self):
        return len(self.bits)

    def __iter__(self):
        return iter(self.bits)

    def __eq__(self, other):
        if not isinstance(other, HuffmanCode):
            return NotImplemented
        return self.bits == other.bits and self.position == other.position

    __hash__ = None

    def __repr__(self):
        text = "".join("1" if b else "0" for b in self.bits)
        return f"HuffmanCode('{text}', position={self.position})"
