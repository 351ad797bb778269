"""
Decoding of the optional hook payload passed along with a swap.

The payload is a single ABI-encoded bool: one 32-byte big-endian word.
"""

from __future__ import annotations

from typing import Optional

WORD_SIZE = 32


def decode_opt_in(hook_data: Optional[bytes]) -> bool:
    """
    Absent or empty payload means the user opted in.
    Otherwise any nonzero value in the first word is true. Never raises, so a
    malformed payload cannot block the swap; extra bytes are ignored.
    """
    if not hook_data:
        return True
    return int.from_bytes(bytes(hook_data[:WORD_SIZE]), "big") != 0


def encode_opt_in(opt_in: bool) -> bytes:
    return int(bool(opt_in)).to_bytes(WORD_SIZE, "big")
