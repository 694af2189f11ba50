"""shadowcrypt.handlers.md5_crypt - md5-crypt algorithm"""
#=========================================================
#imports
#=========================================================
#core
from hashlib import md5
import logging; log = logging.getLogger(__name__)
#site
#libs
from shadowcrypt.utils import h64, repeat_string
import shadowcrypt.utils.handlers as uh
#pkg
#local
__all__ = [
    "md5_crypt",
    "raw_md5_crypt",
]

#=========================================================
#pure-python backend
#=========================================================
B_MD5_MAGIC = b"$1$"

#: number of fixed rounds performed by md5-crypt
MD5_ROUNDS = 1000

#: (msb, ..., lsb) offsets of each encoded group
_chk_offsets = (
    (0, 6, 12),
    (1, 7, 13),
    (2, 8, 14),
    (3, 9, 15),
    (4, 10, 5),
    (11,),
)

def raw_md5_crypt(secret, salt):
    """perform raw md5-crypt calculation

    :arg secret: password, as bytes
    :arg salt: validated salt bytes (at most 8 bytes)

    :returns:
        encoded checksum as bytes (22 chars)
    """
    # digest B = md5(secret + salt + secret)
    b = md5(secret + salt + secret).digest()

    # digest A starts with secret + magic + salt,
    # then len(secret) bytes of B
    a_ctx = md5(secret + B_MD5_MAGIC + salt)
    a_ctx.update(repeat_string(b, len(secret)))

    # then for each bit of len(secret), either a NUL or the first
    # byte of secret. the NUL comes from B[0] after it was zeroed;
    # this was probably meant to be B[0], but all implementations
    # have to reproduce it.
    zeroed = bytearray(b)
    zeroed[0] = 0
    nul = bytes(zeroed[:1])
    first = secret[:1]
    i = len(secret)
    while i:
        if i & 1:
            a_ctx.update(nul)
        else:
            a_ctx.update(first)
        i >>= 1
    c = a_ctx.digest()

    # 1000 rounds, each hashing a round-specific combination of
    # secret, salt & the previous digest.
    for i in range(MD5_ROUNDS):
        ctx = md5()
        if i & 1:
            ctx.update(secret)
        else:
            ctx.update(c)
        if i % 3:
            ctx.update(salt)
        if i % 7:
            ctx.update(secret)
        if i & 1:
            ctx.update(c)
        else:
            ctx.update(secret)
        c = ctx.digest()

    return h64.encode_transposed_groups(c, _chk_offsets)

#=========================================================
#handler
#=========================================================
class md5_crypt(uh.HasSalt, uh.GenericHandler):
    """This class implements the MD5-Crypt password hash.

    Settings have the form ``$1$<salt>``; the salt is truncated to
    8 bytes, and may contain any byte except ``$``, ``:`` and newline.
    Passwords longer than 30000 bytes are rejected.

    The :meth:`encrypt()` and :meth:`genconfig` methods accept the following optional keywords:

    :param salt:
        Optional salt string.
        If not specified, one will be autogenerated (this is recommended).

    :param salt_size:
        Optional size of the autogenerated salt, defaults to 8.
    """
    #=========================================================
    #algorithm information
    #=========================================================
    name = "md5_crypt"
    ident = B_MD5_MAGIC
    checksum_size = 22
    max_secret_size = 30000

    #--HasSalt--
    max_salt_size = 8

    #=========================================================
    #primary interface
    #=========================================================
    def _calc_checksum(self, secret):
        return raw_md5_crypt(secret, self.salt)

    #=========================================================
    #eoc
    #=========================================================

#=========================================================
#eof
#=========================================================
