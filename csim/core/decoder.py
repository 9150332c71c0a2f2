"""Trace line decoder.

A data access line looks like `` L 7ff000388,8``: one space, the operation
code (L, M or S), one space, the hex address, a comma and the access size.
Instruction fetches start with ``I`` and are skipped.

The address is split most-significant bits first into
``tag || set_index || offset`` where the offset is ``b`` bits wide and the
set index ``s`` bits wide; the tag takes whatever is left of the address as
written in the trace (4 bits per hex digit).
"""

import re
from dataclasses import dataclass
from typing import Optional

from csim.core.errors import AddressTooShort, MalformedLine

ACCESS_RE = re.compile(r" ([LMS]) ([0-9a-fA-F]+),([0-9]+)")

HEX_TO_BITS = {
    "0": "0000", "1": "0001", "2": "0010", "3": "0011",
    "4": "0100", "5": "0101", "6": "0110", "7": "0111",
    "8": "1000", "9": "1001", "a": "1010", "b": "1011",
    "c": "1100", "d": "1101", "e": "1110", "f": "1111",
}


def hex_to_binary(hex_string: str) -> str:
    """Return the 4-bits-per-digit binary form of `hex_string`.

    Leading zero digits are kept, so the result is always
    ``4 * len(hex_string)`` characters long.
    """
    try:
        return "".join(HEX_TO_BITS[c] for c in hex_string.lower())
    except KeyError as exc:
        raise ValueError(f"not a hex digit: {exc.args[0]!r}") from None


def _bits(value: int, width: int) -> str:
    # format(0, '00b') gives '0', an empty field has to stay empty
    return format(value, f"0{width}b") if width > 0 else ""


@dataclass(frozen=True)
class DecodedAccess:
    """One decoded data access.

    Fields:
    - code: 'L', 'M' or 'S'
    - tag / set_index: integer fields of the address
    - address: the hex address as written in the trace
    - size: access size in bytes (reported only, not simulated)
    - tag_width / set_width: field widths in bits
    """

    code: str
    tag: int
    set_index: int
    address: str
    size: int
    tag_width: int
    set_width: int

    @property
    def tag_bits(self) -> str:
        return _bits(self.tag, self.tag_width)

    @property
    def set_bits(self) -> str:
        return _bits(self.set_index, self.set_width)


def split_address(address: str, s: int, b: int):
    """Split a hex address into (tag, set_index, tag_width).

    Raises AddressTooShort when the address cannot hold the requested
    offset and set index bits with a tag in front of them.
    """
    total_bits = len(hex_to_binary(address))
    if b + s > total_bits:
        raise AddressTooShort(
            f"The sum of b (={b}) and s (={s}) exceeds the binary address size (={total_bits})."
        )
    if b == total_bits:
        raise AddressTooShort(
            f"The argument b (={b}) is equal to the binary address size (={total_bits})."
        )
    value = int(address, 16)
    block_addr = value >> b
    set_index = block_addr & ((1 << s) - 1)
    tag = block_addr >> s
    return tag, set_index, total_bits - b - s


def decode_line(line: str, s: int, b: int) -> Optional[DecodedAccess]:
    """Decode one trace line.

    Returns None for instruction fetches. Any other line that is not a
    well-formed data access raises MalformedLine.
    """
    if line.startswith("I"):
        return None
    m = ACCESS_RE.fullmatch(line)
    if m is None:
        raise MalformedLine(line)
    code, address, size = m.groups()
    tag, set_index, tag_width = split_address(address, s, b)
    return DecodedAccess(
        code=code,
        tag=tag,
        set_index=set_index,
        address=address,
        size=int(size),
        tag_width=tag_width,
        set_width=s,
    )


__all__ = ["DecodedAccess", "decode_line", "hex_to_binary", "split_address"]
