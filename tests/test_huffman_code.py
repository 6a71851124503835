import os
import sys

import pytest

# Add the project root to path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
	sys.path.insert(0, PROJECT_ROOT)

from huffman_code import HuffmanCode
from huffman_errors import HuffcodeError, StreamExhaustedError


def test_new_sequence_is_empty_and_exhausted():
	code = HuffmanCode()
	assert len(code) == 0
	assert code.position == 0
	assert code.exhausted()


def test_next_on_empty_raises_stream_exhausted():
	code = HuffmanCode()
	with pytest.raises(StreamExhaustedError) as info:
		code.next()
	# the error is also an EOFError and part of the coder's hierarchy
	assert isinstance(info.value, EOFError)
	assert isinstance(info.value, HuffcodeError)
	assert info.value.code == 1
	assert str(info.value).startswith("stream exhausted")


def test_sequential_reads_advance_cursor():
	code = HuffmanCode([True, False, True])
	assert [code.next(), code.next()] == [True, False]
	assert code.position == 2
	assert not code.exhausted()
	assert code.next() is True
	assert code.exhausted()
	with pytest.raises(StreamExhaustedError):
		code.next()
	# a failed read leaves the cursor where it was
	assert code.position == 3


def test_byte_expands_to_eight_bits_msb_first():
	code = HuffmanCode.from_bytes(bytes([0b10110000]))
	assert code.vec() == [True, False, True, True, False, False, False, False]
	assert len(code) == 8
	assert code.position == 0


def test_least_significant_bit_is_kept():
	code = HuffmanCode.from_bytes(b"\x01\xff")
	assert len(code) == 16
	assert code.vec()[:8] == [False] * 7 + [True]
	assert code.vec()[8:] == [True] * 8


def test_from_bytes_trims_to_bit_length():
	code = HuffmanCode.from_bytes(b"\xe0\x80", bit_length=9)
	assert code.vec() == [True, True, True, False, False, False, False, False, True]


@pytest.mark.parametrize("bit_length", [-1, 17])
def test_from_bytes_rejects_bad_bit_length(bit_length):
	with pytest.raises(ValueError):
		HuffmanCode.from_bytes(b"\x00\x00", bit_length=bit_length)


def test_to_bytes_pads_last_byte_with_zeros():
	assert HuffmanCode([True, False, True]).to_bytes() == b"\xa0"
	assert HuffmanCode([True] * 8 + [True]).to_bytes() == b"\xff\x80"
	assert HuffmanCode().to_bytes() == b""


def test_bytes_survive_packing():
	data = bytes(range(256))
	assert HuffmanCode.from_bytes(data).to_bytes() == data


def test_extend_and_push_do_not_move_cursor():
	code = HuffmanCode([True])
	code.next()
	code.extend([False, True])
	code.push(False)
	code.extend(HuffmanCode([True]))
	assert code.position == 1
	assert code.vec() == [True, False, True, False, True]
	assert [code.next() for _ in range(4)] == [False, True, False, True]


def test_vec_returns_a_copy():
	code = HuffmanCode([True, False])
	bits = code.into_vec()
	bits.append(True)
	assert len(code) == 2


def test_equality_includes_cursor():
	a = HuffmanCode([True, False])
	b = HuffmanCode([1, 0])
	assert a == b
	b.next()
	assert a != b
	assert a != [True, False]


def test_dict_form_keeps_bits_and_cursor():
	code = HuffmanCode([False, True, True])
	code.next()
	data = code.to_dict()
	assert data == {"code": [False, True, True], "pos": 1}
	assert HuffmanCode.from_dict(data) == code


@pytest.mark.parametrize("data", [
	{"code": [True], "pos": 2},
	{"code": [True], "pos": -1},
	{"code": [1, 0], "pos": 0},
	{"code": [True]},
	None,
])
def test_from_dict_rejects_malformed_input(data):
	with pytest.raises(ValueError):
		HuffmanCode.from_dict(data)


def test_repr_shows_bits_and_cursor():
	assert repr(HuffmanCode([True, False, True, True])) == "HuffmanCode('1011', position=0)"
