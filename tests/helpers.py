"""Encoders for building synthetic CFF data in tests."""

import struct


def encode_index(elements, off_size=None):
    """Encode a list of bytes objects as a CFF INDEX."""
    if not elements:
        return b"\x00\x00"
    offsets = [1]
    for element in elements:
        offsets.append(offsets[-1] + len(element))
    if off_size is None:
        last = offsets[-1]
        off_size = 1 if last <= 0xFF else 2 if last <= 0xFFFF else 3 if last <= 0xFFFFFF else 4
    header = struct.pack(">HB", len(elements), off_size)
    offset_array = b"".join(o.to_bytes(off_size, "big") for o in offsets)
    return header + offset_array + b"".join(elements)


def encode_operand(value):
    """Encode an integer DICT operand in its shortest form."""
    if -107 <= value <= 107:
        return bytes([value + 139])
    if 108 <= value <= 1131:
        value -= 108
        return bytes([247 + value // 256, value % 256])
    if -1131 <= value <= -108:
        value = -value - 108
        return bytes([251 + value // 256, value % 256])
    if -32768 <= value <= 32767:
        return b"\x1c" + struct.pack(">h", value)
    return b"\x1d" + struct.pack(">i", value)


def encode_fixed(value):
    """Encode an operand as a 3-byte int16 so its size never changes."""
    return b"\x1c" + struct.pack(">h", value)


def encode_operator(op):
    if isinstance(op, tuple):
        return bytes(op)
    return bytes([op])


def encode_dict(entries):
    """Encode {operator: [int operands]} as DICT data."""
    out = b""
    for op, operands in entries.items():
        out += b"".join(encode_operand(v) for v in operands) + encode_operator(op)
    return out


def build_cff(name=b"Test", strings=(), char_strings=(b"\x0e", b"\x8b\x0e"),
              private=b"\x8b\x14", global_subrs=()):
    """Build a minimal name-keyed CFF table.

    Layout: header, Name, Top DICT, String, Global Subr INDEXes, then the
    CharStrings INDEX and the Private DICT.  Top DICT offsets use the fixed
    3-byte operand form so the Top DICT size does not depend on them.
    """
    header = b"\x01\x00\x04\x01"
    name_index = encode_index([name])
    string_index = encode_index(list(strings))
    gsubr_index = encode_index(list(global_subrs))
    top_dict_size = len(encode_fixed(0) + b"\x11" + encode_fixed(0) + encode_fixed(0) + b"\x12")
    top_dict_index_size = len(encode_index([b"\x00" * top_dict_size]))

    char_strings_offset = (len(header) + len(name_index) + top_dict_index_size
                           + len(string_index) + len(gsubr_index))
    char_strings_index = encode_index(list(char_strings))
    private_offset = char_strings_offset + len(char_strings_index)

    top_dict = (encode_fixed(char_strings_offset) + b"\x11"
                + encode_fixed(len(private)) + encode_fixed(private_offset) + b"\x12")
    top_dict_index = encode_index([top_dict])
    assert len(top_dict_index) == top_dict_index_size

    return (header + name_index + top_dict_index + string_index + gsubr_index
            + char_strings_index + private)
