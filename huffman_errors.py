# filename: huffman_errors.py


class HuffcodeError(Exception):
    """Base class for every failure raised by the Huffman coder.

    Each kind carries a stable numeric ``code`` so callers that persist or
    transmit failures can identify them without matching on messages.
    """

    code = 255
    message = "unknown error"

    def __init__(self, detail=None):
        self.detail = detail
        super().__init__(detail)

    def __str__(self):
        if self.detail is None:
            return self.message
        return f"{self.message}: {self.detail!r}"


class NotFoundError(HuffcodeError, KeyError):
    # symbol has no leaf in the tree
    code = 0
    message = "not found"


class StreamExhaustedError(HuffcodeError, EOFError):
    # bit stream ended before a read or a traversal could finish
    code = 1
    message = "stream exhausted"


class DegenerateTreeError(HuffcodeError):
    # a leaf-only tree cannot consume bits, so a non-empty stream is undecodable
    code = 2
    message = "degenerate tree cannot decode a non-empty stream"
