"""Reading and writing the FXB/FXP chunk containers used for banks and patches."""

from __future__ import annotations

import struct
import sys

FXB_VERSION = 1

FUTURE_SIZE = 128
PATCH_NAME_SIZE = 28
# Size of the fixed part of a bank chunk: seven header words, the reserved
# area and the chunk-size word.
BANK_HEADER_SIZE = 7 * 4 + FUTURE_SIZE + 4
# Size of the fixed part of a patch chunk: seven header words, the name and
# the chunk-size word.
PATCH_HEADER_SIZE = 7 * 4 + PATCH_NAME_SIZE + 4
# The smallest block that can hold the fields inspected by is_patch.
MIN_PATCH_SIZE = 28

_LITTLE_ENDIAN_HOST = sys.byteorder == "little"
_HEADER = struct.Struct("=7i")
_INT = struct.Struct("=i")
_FLOAT = struct.Struct("=f")
_UINT = struct.Struct("=I")


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _magic_bytes(name: str | bytes) -> bytes:
    raw = name.encode("ascii") if isinstance(name, str) else bytes(name)
    if len(raw) != 4:
        raise ValueError(f"a magic name has exactly four characters, got {name!r}")
    return raw


def compare_magic(magic: int, name: str | bytes) -> bool:
    """Return True if ``magic`` equals ``name`` read in either byte order."""
    raw = _magic_bytes(name)
    magic = _to_int32(magic)
    return magic in (
        int.from_bytes(raw, "little", signed=True),
        int.from_bytes(raw, "big", signed=True),
    )


def fxb_name(name: str | bytes) -> int:
    """Return the four-character ``name`` as a little-endian signed 32-bit value."""
    return int.from_bytes(_magic_bytes(name), "little", signed=True)


def fxb_swap(x: int) -> int:
    """Convert a 32-bit value between host order and big-endian order."""
    value = x & 0xFFFFFFFF
    if _LITTLE_ENDIAN_HOST:
        value = int.from_bytes(value.to_bytes(4, "little"), "big")
    return _to_int32(value)


def fxb_swap_float(x: float) -> float:
    """Convert a 32-bit float between host order and big-endian order."""
    if not _LITTLE_ENDIAN_HOST:
        return _FLOAT.unpack(_FLOAT.pack(x))[0]
    (bits,) = _UINT.unpack(_FLOAT.pack(x))
    swapped = int.from_bytes(bits.to_bytes(4, "little"), "big")
    return _FLOAT.unpack(_UINT.pack(swapped))[0]


def _header(kind: str, num_programs: int) -> bytes:
    return _HEADER.pack(
        fxb_name("CcnK"),
        0,
        fxb_name(kind),
        fxb_swap(FXB_VERSION),
        fxb_name("OBXf"),
        fxb_swap(FXB_VERSION),
        fxb_swap(num_programs),
    )


def _encode_name(name: str) -> bytes:
    """Encode ``name`` as UTF-8, truncated on a character boundary and null padded."""
    encoded = bytearray()
    for char in name:
        piece = char.encode("utf-8")
        if len(encoded) + len(piece) > PATCH_NAME_SIZE - 1:
            break
        encoded += piece
    return bytes(encoded).ljust(PATCH_NAME_SIZE, b"\0")


def pack_bank_chunk(chunk: bytes, num_programs: int = 0) -> bytes:
    """Wrap a bank state ``chunk`` in an 'FBCh' container."""
    chunk = bytes(chunk)
    return (
        _header("FBCh", num_programs)
        + bytes(FUTURE_SIZE)
        + _INT.pack(fxb_swap(len(chunk)))
        + chunk
    )


def pack_patch_chunk(chunk: bytes, num_programs: int = 0, name: str = "") -> bytes:
    """Wrap a single program's state ``chunk`` in an 'FPCh' container."""
    chunk = bytes(chunk)
    return (
        _header("FPCh", num_programs)
        + _encode_name(name)
        + _INT.pack(fxb_swap(len(chunk)))
        + chunk
    )


def is_patch(data: bytes) -> bool:
    """Return True if ``data`` starts with a 'CcnK' header of a supported version."""
    data = bytes(data)
    if len(data) < MIN_PATCH_SIZE:
        return False
    magic, _byte_size, _fx_magic, version = struct.unpack_from("=4i", data)
    return compare_magic(magic, "CcnK") and fxb_swap(version) <= FXB_VERSION