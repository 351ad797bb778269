import pytest

from relayhook.hook.payload import WORD_SIZE, decode_opt_in, encode_opt_in


@pytest.mark.parametrize("hook_data", [None, b""])
def test_absent_payload_opts_in(hook_data):
    assert decode_opt_in(hook_data) is True


def test_encoded_flags():
    assert decode_opt_in(encode_opt_in(True)) is True
    assert decode_opt_in(encode_opt_in(False)) is False
    assert len(encode_opt_in(True)) == WORD_SIZE


def test_any_nonzero_word_is_true():
    assert decode_opt_in(b"\x00" * 31 + b"\x02") is True
    assert decode_opt_in(b"\x80" + b"\x00" * 31) is True


def test_only_first_word_is_read():
    assert decode_opt_in(b"\x00" * WORD_SIZE + b"\x01" * WORD_SIZE) is False


def test_short_payload_does_not_raise():
    assert decode_opt_in(b"\x00") is False
    assert decode_opt_in(b"\x01") is True
    assert decode_opt_in(bytearray(b"\x00\x01")) is True
