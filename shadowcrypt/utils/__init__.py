"""shadowcrypt utility functions"""
#=================================================================================
#imports
#=================================================================================
#core
import hmac
import logging; log = logging.getLogger(__name__)
import os
import random
#site
#pkg
from shadowcrypt.exc import ExpectedStringError
#local
__all__ = [
    #bytes<->unicode
    'to_bytes',
    'to_native_str',

    #string manipulation
    'consteq',
    'repeat_string',

    #charsets
    'HASH64_CHARS',

    #random
    'rng',
    'getrandstr',

    #constants
    'unix_crypt_schemes',
    'default_scheme',
]

#=================================================================================
#constants
#=================================================================================

#: names of the hashes found in unix crypt implementations which this
#: package is able to compute, in order of preference.
unix_crypt_schemes = ["sha512_crypt", "sha256_crypt", "md5_crypt"]

#: hash64 charset used by all the crypt schemes, ordered by digit value
HASH64_CHARS = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

#: error handler used when converting setting / hash strings between
#: text & bytes. salts may contain any byte except ``$:\n``, so this has
#: to round-trip bytes which aren't valid utf-8.
SETTING_ERRORS = "surrogateescape"

#=================================================================================
#configuration
#=================================================================================
def default_scheme():
    """return name of scheme used when genconfig() / encrypt() aren't told one.

    read from the ``SHADOWCRYPT_DEFAULT_SCHEME`` environment variable,
    defaulting to ``"sha512_crypt"``.
    """
    return os.environ.get("SHADOWCRYPT_DEFAULT_SCHEME") or unix_crypt_schemes[0]

#==========================================================
#bytes <-> unicode conversion helpers
#==========================================================
def to_bytes(source, encoding="utf-8", errname="value", errors="strict"):
    """helper to encoding unicode -> bytes

    if *source* is unicode, encodes it using the specified ``encoding``.
    if bytes, returns unchanged. all other types result in a :exc:`TypeError`.

    :arg source: source bytes/unicode to process
    :arg encoding: target character encoding
    :param errname: optional name of variable/noun to reference when raising errors
    :param errors: codec error handler

    :returns: bytes object
    """
    if isinstance(source, bytes):
        return source
    elif isinstance(source, str):
        return source.encode(encoding, errors)
    else:
        raise ExpectedStringError(source, errname)

def to_native_str(source, encoding="utf-8", errname="value", errors="strict"):
    """take in unicode or bytes, return native string

    decodes bytes using specified encoding, leaves unicode alone.

    :raises TypeError: if source is not unicode or bytes.
    """
    if isinstance(source, bytes):
        return source.decode(encoding, errors)
    elif isinstance(source, str):
        return source
    else:
        raise ExpectedStringError(source, errname)

#=================================================================================
#string helpers
#=================================================================================
def consteq(left, right):
    """check two strings/bytes for equality, taking constant time relative
    to the size of the righthand input.

    both arguments must be of the same type. unicode strings are encoded
    with :data:`SETTING_ERRORS` first, so that hashes containing arbitrary
    salt bytes can be compared.
    """
    if isinstance(left, str):
        if not isinstance(right, str):
            raise TypeError("inputs must be both unicode or both bytes")
        left = left.encode("utf-8", SETTING_ERRORS)
        right = right.encode("utf-8", SETTING_ERRORS)
    elif not isinstance(left, bytes) or not isinstance(right, bytes):
        raise TypeError("inputs must be both unicode or both bytes")
    return hmac.compare_digest(left, right)

def repeat_string(source, size):
    """repeat or truncate <source> string, so it has length <size>

    this is the "stretch to length" step shared by the crypt schemes:
    as many whole copies of *source* as fit, then a partial copy
    holding the remaining bytes.
    """
    cur = len(source)
    if size > cur:
        mult = (size + cur - 1) // cur
        return (source * mult)[:size]
    else:
        return source[:size]

#=================================================================================
#randomness
#=================================================================================

#NOTE:
# generating salts doesn't strictly require cryptographically strong
# randomness, just enough range of possible outputs that building a rainbow
# table is too costly. SystemRandom is used anyway, since it's always
# available on the platforms that have shadow files.
rng = random.SystemRandom()

def getrandstr(rng, charset, count):
    """return string containing *count* number of chars/bytes, whose elements are drawn from specified charset, using specified rng"""
    #check alphabet & count
    if count < 0:
        raise ValueError("count must be >= 0")
    letters = len(charset)
    if letters == 0:
        raise ValueError("alphabet must not be empty")
    if letters == 1:
        return charset * count

    #get random value, and write out to buffer
    def helper():
        value = rng.randrange(0, letters**count)
        i = 0
        while i < count:
            yield charset[value % letters]
            value //= letters
            i += 1

    if isinstance(charset, str):
        return "".join(helper())
    else:
        return bytes(helper())

#=================================================================================
#eof
#=================================================================================
