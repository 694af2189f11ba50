"""shadowcrypt.utils.h64 - hash64 encoding helpers"""
#=================================================================================
#imports
#=================================================================================
#core
import logging; log = logging.getLogger(__name__)
#site
#pkg
from shadowcrypt.exc import EncodingError
from shadowcrypt.utils import HASH64_CHARS
#local
__all__ = [
    "CHARS",
    "encode_int",
    "encode_int12", "encode_int18", "encode_int24",
    "encode_transposed_groups",
]

#=================================================================================
#6 bit value <-> char mapping
#=================================================================================
CHARS = HASH64_CHARS.encode("ascii")

#=================================================================================
# int -> b64 string
#=================================================================================
def encode_int(value, count):
    """encode integer into hash-64 format

    :arg value: non-negative integer to encode
    :arg count: number of output characters / 6 bit chunks to encode

    the lowest 6 bits are emitted first (little-endian order);
    any bits above ``6*count`` are discarded.

    :returns:
        a hash64 byte string of length ``count``.
    """
    if value < 0:
        raise ValueError("value cannot be negative")
    out = bytearray()
    while count > 0:
        out.append(CHARS[value & 0x3f])
        value >>= 6
        count -= 1
    return bytes(out)

def encode_int12(value):
    "encodes 12-bit integer -> 2 char hash64 string (little-endian order)"
    return encode_int(value, 2)

def encode_int18(value):
    "encodes 18-bit integer -> 3 char hash64 string (little-endian order)"
    return encode_int(value, 3)

def encode_int24(value):
    "encodes 24-bit integer -> 4 char hash64 string (little-endian order)"
    return encode_int(value, 4)

_group_encoders = {
    1: encode_int12,
    2: encode_int18,
    3: encode_int24,
}

#=================================================================================
#encode offsets from buffer - used by md5_crypt, sha_crypt
#=================================================================================
def encode_transposed_groups(source, groups):
    """encode digest to h64 format, using a permutation table.

    :arg source: raw digest bytes
    :arg groups:
        sequence of 1-3 element tuples of offsets into *source*.
        each group's bytes are packed most-significant first,
        so ``(a, b, c)`` becomes ``(source[a]<<16)|(source[b]<<8)|source[c]``,
        and encoded into ``len(group)+1`` characters.

    :raises EncodingError:
        if a group has the wrong size, or refers to an offset
        outside of *source*.

    :returns: hash64 encoded bytes
    """
    out = []
    end = len(source)
    for group in groups:
        encoder = _group_encoders.get(len(group))
        if encoder is None:
            raise EncodingError("permutation group must have 1-3 offsets: %r" %
                                (group,))
        value = 0
        for offset in group:
            if not 0 <= offset < end:
                raise EncodingError("permutation offset %r outside %d byte digest" %
                                    (offset, end))
            value = (value << 8) | source[offset]
        out.append(encoder(value))
    return b"".join(out)

#=================================================================================
#eof
#=================================================================================
