"""shadowcrypt.handlers.sha2_crypt - SHA256/512-CRYPT"""
#=========================================================
#imports
#=========================================================
#core
from hashlib import sha256, sha512
import logging; log = logging.getLogger(__name__)
#site
#libs
from shadowcrypt.utils import h64, repeat_string
import shadowcrypt.utils.handlers as uh
#pkg
#local
__all__ = [
    "sha256_crypt",
    "sha512_crypt",
    "raw_sha256_crypt",
    "raw_sha512_crypt",
]

#=========================================================
#pure-python backend (shared between sha256-crypt & sha512-crypt)
#=========================================================
def _raw_sha_crypt(secret, salt, rounds, hash):
    """perform raw sha crypt

    :arg secret: password, as bytes
    :arg salt: validated salt bytes (at most 16 bytes)
    :arg rounds: normalized rounds value
    :arg hash: hash constructor function for sha-256 or sha-512

    :returns: raw digest C
    """
    slen = len(secret)

    #calc digest B
    b = hash(secret + salt + secret).digest()

    #begin digest A
    a_ctx = hash(secret + salt)
    a_ctx.update(repeat_string(b, slen))

    #for each bit in slen, add B or SECRET
    i = slen
    while i:
        if i & 1:
            a_ctx.update(b)
        else:
            a_ctx.update(secret)
        i >>= 1

    #finish A
    a = a_ctx.digest()

    #calc DP - hash of password repeated len(password) times,
    #extended to size of password
    dp_ctx = hash()
    for _ in range(slen):
        dp_ctx.update(secret)
    dp = repeat_string(dp_ctx.digest(), slen)

    #calc DS - hash of salt repeated 16+A[0] times, extended to size of salt
    ds = repeat_string(hash(salt * (16 + a[0])).digest(), len(salt))

    #calc digest C, starting from A.
    c = a
    for i in range(rounds):
        ctx = hash()
        if i & 1:
            ctx.update(dp)
        else:
            ctx.update(c)
        if i % 3:
            ctx.update(ds)
        if i % 7:
            ctx.update(dp)
        if i & 1:
            ctx.update(c)
        else:
            ctx.update(dp)
        c = ctx.digest()

    return c

#: (msb, ..., lsb) offsets of each encoded group
_256_offsets = (
    (0, 10, 20),
    (21, 1, 11),
    (12, 22, 2),
    (3, 13, 23),
    (24, 4, 14),
    (15, 25, 5),
    (6, 16, 26),
    (27, 7, 17),
    (18, 28, 8),
    (9, 19, 29),
    (31, 30),
)

_512_offsets = (
    (0, 21, 42),
    (22, 43, 1),
    (44, 2, 23),
    (3, 24, 45),
    (25, 46, 4),
    (47, 5, 26),
    (6, 27, 48),
    (28, 49, 7),
    (50, 8, 29),
    (9, 30, 51),
    (31, 52, 10),
    (53, 11, 32),
    (12, 33, 54),
    (34, 55, 13),
    (56, 14, 35),
    (15, 36, 57),
    (37, 58, 16),
    (59, 17, 38),
    (18, 39, 60),
    (40, 61, 19),
    (62, 20, 41),
    (63,),
)

def raw_sha256_crypt(secret, salt, rounds):
    "perform raw sha256-crypt; returns encoded checksum bytes"
    result = _raw_sha_crypt(secret, salt, rounds, sha256)
    return h64.encode_transposed_groups(result, _256_offsets)

def raw_sha512_crypt(secret, salt, rounds):
    "perform raw sha512-crypt; returns encoded checksum bytes"
    result = _raw_sha_crypt(secret, salt, rounds, sha512)
    return h64.encode_transposed_groups(result, _512_offsets)

#=========================================================
#handlers
#=========================================================
class _SHA2_Common(uh.HasRounds, uh.HasSalt, uh.GenericHandler):
    "common code for sha256_crypt and sha512_crypt"
    #=========================================================
    #algorithm information
    #=========================================================
    #name, ident, checksum_size in subclass
    max_secret_size = 256

    #--HasSalt--
    max_salt_size = 16

    #--HasRounds--
    default_rounds = 5000 # used when setting has no rounds clause
    min_rounds = 1000
    max_rounds = 9999999

    #=========================================================
    #eoc
    #=========================================================

class sha256_crypt(_SHA2_Common):
    """This class implements the SHA256-Crypt password hash.

    Settings have the form ``$5$[rounds=<N>$]<salt>``.

    The :meth:`encrypt()` and :meth:`genconfig` methods accept the following optional keywords:

    :param salt:
        Optional salt string.
        If not specified, one will be autogenerated (this is recommended).
        If specified, it's truncated to 16 bytes, and must not contain
        ``$``, ``:`` or newline.

    :param salt_size:
        Optional size of the autogenerated salt, defaults to 16.

    :param rounds:
        Optional number of rounds to use.
        If omitted, 5000 rounds are used and the setting has no
        ``rounds=`` clause. Values below 1000 are raised to 1000;
        values above 9999999 are rejected.
    """
    name = "sha256_crypt"
    ident = b"$5$"
    checksum_size = 43

    def _calc_checksum(self, secret):
        return raw_sha256_crypt(secret, self.salt, self.rounds)

class sha512_crypt(_SHA2_Common):
    """This class implements the SHA512-Crypt password hash.

    It is identical to :class:`sha256_crypt` apart from the digest,
    ident (``$6$``) and the layout of the encoded checksum.
    """
    name = "sha512_crypt"
    ident = b"$6$"
    checksum_size = 86

    def _calc_checksum(self, secret):
        return raw_sha512_crypt(secret, self.salt, self.rounds)

#=========================================================
#eof
#=========================================================
