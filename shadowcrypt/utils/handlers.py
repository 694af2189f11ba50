"""shadowcrypt.utils.handlers - framework for implementing crypt handlers"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
#site
#libs
from shadowcrypt import exc
from shadowcrypt.utils import HASH64_CHARS, SETTING_ERRORS, consteq, \
                              getrandstr, rng, to_bytes, to_native_str
#pkg
#local
__all__ = [
    #parsing helpers
    'parse_rounds',
    'parse_salt',
    'is_safe_salt',

    #framework for implementing handlers
    'GenericHandler',
        'HasSalt',
        'HasRounds',
]

#=========================================================
#constants
#=========================================================

#: separator between the fields of a modular crypt string
SEP = b"$"

#: bytes which may never appear in a salt, since they'd break
#: the hash string or the colon-delimited record it's stored in.
UNSAFE_SALT_CHARS = b"$:\n"

#: literal which opens the optional rounds clause
ROUNDS_PREFIX = b"rounds="

#: largest value the rounds clause may hold before parsing is
#: considered to have overflowed (unsigned 64-bit range).
ROUNDS_PARSE_MAX = (1 << 64) - 1
_ROUNDS_PARSE_DIGITS = len(str(ROUNDS_PARSE_MAX))

_DIGITS = b"0123456789"

#=========================================================
#parsing helpers
#=========================================================
def is_safe_salt(salt):
    "check salt bytes don't contain ``$``, ``:`` or newline"
    return not any(c in UNSAFE_SALT_CHARS for c in salt)

def parse_rounds(setting, pos):
    """parse optional ``rounds=<decimal>$`` clause at offset *pos* of *setting*.

    :returns:
        ``(rounds, pos)`` tuple; rounds is ``None`` and pos unchanged
        if the clause isn't present, otherwise pos points just past
        the terminating ``$``.

    :raises MalformedRoundsError:
        if the digits are missing, or aren't followed by ``$``.

    :raises RoundsOverflowError:
        if the value doesn't fit in :data:`ROUNDS_PARSE_MAX`.
    """
    if not setting.startswith(ROUNDS_PREFIX, pos):
        return None, pos
    start = pos + len(ROUNDS_PREFIX)
    end = start
    size = len(setting)
    while end < size and setting[end] in _DIGITS:
        end += 1
    if end == start:
        raise exc.MalformedRoundsError("rounds value must start with a digit")
    if end == size or setting[end] != SEP[0]:
        raise exc.MalformedRoundsError("rounds value must be terminated by '$'")
    digits = setting[start:end].lstrip(b"0") or b"0"
    if len(digits) > _ROUNDS_PARSE_DIGITS or int(digits) > ROUNDS_PARSE_MAX:
        raise exc.RoundsOverflowError("too many rounds")
    return int(digits), end + 1

def parse_salt(setting, pos):
    """split salt field (and anything following it) from *setting*.

    the salt runs from *pos* up to the next ``$`` or the end of the string.

    :returns:
        ``(salt, checksum)`` tuple; checksum is whatever follows
        the ``$`` after the salt, or ``None`` if that's empty.
    """
    salt, sep, chk = setting[pos:].partition(SEP)
    return salt, chk or None

#=========================================================
#GenericHandler
#=========================================================
class GenericHandler(object):
    """helper class for implementing crypt handlers.

    Each scheme is a subclass combining the mixins it needs;
    an instance holds one parsed & validated setting,
    plus the checksum once it's been calculated.

    :param checksum:
        the digest portion of a parsed hash, as raw bytes.
        only used by :meth:`verify` to tell hashes & bare settings apart.

    :param use_defaults:
        If ``True``, missing settings (salt, rounds) are filled in
        with fresh defaults. This is only set by :meth:`genconfig`.

    Class Attributes
    ================

    .. attribute:: name

        lower-case name of the scheme, used by the registry.

    .. attribute:: ident

        identifying prefix of the scheme's setting strings, as bytes.

    .. attribute:: checksum_size

        number of hash64 characters in the encoded digest.

    .. attribute:: max_secret_size

        longest password (in bytes) the scheme will accept.

    Required Methods
    ================
    .. automethod:: _calc_checksum
    """

    #=====================================================
    #class attr
    #=====================================================
    name = None
    ident = None
    checksum_size = None
    max_secret_size = None

    #=====================================================
    #instance attrs
    #=====================================================
    checksum = None

    #=====================================================
    #init
    #=====================================================
    def __init__(self, checksum=None, use_defaults=False, **kwds):
        self.use_defaults = use_defaults
        super(GenericHandler, self).__init__(**kwds)
        self.checksum = checksum

    #=====================================================
    #formatting interface
    #=====================================================
    @classmethod
    def identify(cls, hash):
        "check if hash/setting starts with this scheme's prefix"
        if not hash:
            return False
        hash = to_bytes(hash, errname="hash", errors=SETTING_ERRORS)
        return hash.startswith(cls.ident)

    @classmethod
    def from_string(cls, hash):
        """parse setting or hash string into a handler instance.

        :raises UnsupportedSchemeError: if hash has the wrong prefix
        :raises MalformedSettingError: if the parameters or salt are invalid

        anything after the salt's terminating ``$`` is kept as the
        (unvalidated) checksum.
        """
        hash = to_bytes(hash, errname="hash", errors=SETTING_ERRORS)
        if not hash.startswith(cls.ident):
            raise exc.InvalidHashError(cls)
        kwds = {}
        pos = cls._parse_params(hash, len(cls.ident), kwds)
        salt, chk = parse_salt(hash, pos)
        return cls(salt=salt, checksum=chk, **kwds)

    @classmethod
    def _parse_params(cls, hash, pos, kwds):
        "hook for mixins to parse parameters between ident & salt"
        return pos

    def to_config(self):
        "render canonical setting string (without checksum) as bytes"
        return self.ident + self._render_params()

    def _render_params(self):
        "hook for mixins to render parameters between ident & salt"
        return b""

    def to_string(self):
        "render canonical hash string (or setting, if no checksum) as bytes"
        config = self.to_config()
        if self.checksum:
            return config + SEP + self.checksum
        return config

    #=========================================================
    #checksum
    #=========================================================
    @classmethod
    def _check_secret_size(cls, secret):
        mx = cls.max_secret_size
        if mx is not None and len(secret) > mx:
            raise exc.PasswordSizeError(mx, cls.name)

    def calc_checksum(self, secret):
        """calculate encoded checksum for *secret*, using this instance's settings.

        :raises PasswordSizeError: if secret is too large for the scheme
        :raises EncodingError: if the encoded digest isn't :attr:`checksum_size` long
        """
        secret = to_bytes(secret, errname="secret")
        self._check_secret_size(secret)
        chk = self._calc_checksum(secret)
        if len(chk) != self.checksum_size:
            raise exc.EncodingError("%s produced %d char checksum, expected %d" %
                                    (self.name, len(chk), self.checksum_size))
        return chk

    def _calc_checksum(self, secret): #pragma: no cover
        "given secret bytes, return encoded checksum bytes"
        raise NotImplementedError("%s must implement _calc_checksum()" % (self.__class__,))

    #=========================================================
    #'crypt-style' interface
    #=========================================================
    @classmethod
    def genconfig(cls, **settings):
        "generate new setting string, filling in a random salt & default parameters"
        self = cls(use_defaults=True, **settings)
        return to_native_str(self.to_config(), errname="config",
                             errors=SETTING_ERRORS)

    @classmethod
    def genhash(cls, secret, config):
        """derive hash string for *secret* from *config*.

        *config* may be a bare setting, or a full hash; anything after
        the salt is ignored. the result has the same type as *config*.
        """
        secret = to_bytes(secret, errname="secret")
        cls._check_secret_size(secret)
        self = cls.from_string(config)
        self.checksum = self.calc_checksum(secret)
        result = self.to_string()
        if isinstance(config, bytes):
            return result
        return result.decode("utf-8", SETTING_ERRORS)

    #=========================================================
    #'application' interface
    #=========================================================
    @classmethod
    def encrypt(cls, secret, **settings):
        "hash *secret* using a freshly generated setting"
        return cls.genhash(secret, cls.genconfig(**settings))

    @classmethod
    def verify(cls, secret, hash):
        """check *secret* against existing *hash*.

        :raises MissingDigestError: if *hash* is a bare setting string
        :returns: ``True`` if re-deriving the hash reproduces it exactly
        """
        self = cls.from_string(hash)
        if self.checksum is None:
            raise exc.MissingDigestError("expected %s hash, got config string instead" %
                                         (cls.name,))
        return consteq(cls.genhash(secret, hash), hash)

    #=========================================================
    #eoc
    #=========================================================

#=====================================================
#GenericHandler mixin classes
#=====================================================
class HasSalt(GenericHandler):
    """mixin for validating salts.

    :param salt:
        salt as bytes or unicode. truncated to :attr:`max_salt_size`;
        must be non-empty afterwards, and free of ``$``, ``:``, ``\\n``.
        if omitted (and ``use_defaults=True``), a random salt is generated.

    :param salt_size:
        size of the random salt to generate, defaults to :attr:`max_salt_size`.
    """
    #=========================================================
    #class attrs
    #=========================================================
    max_salt_size = None
    salt_chars = HASH64_CHARS

    @classmethod
    def default_salt_size(cls):
        return cls.max_salt_size

    #=========================================================
    #instance attrs
    #=========================================================
    salt = None

    #=========================================================
    #init
    #=========================================================
    def __init__(self, salt=None, salt_size=None, **kwds):
        super(HasSalt, self).__init__(**kwds)
        self.salt = self._norm_salt(salt, salt_size)

    def _norm_salt(self, salt, salt_size=None):
        if salt is None:
            if not self.use_defaults:
                raise exc.MissingSaltError("no salt specified")
            if salt_size is None:
                salt_size = self.default_salt_size()
            salt = getrandstr(rng, self.salt_chars, salt_size)
        salt = to_bytes(salt, errname="salt", errors=SETTING_ERRORS)

        mx = self.max_salt_size
        if mx is not None and len(salt) > mx:
            salt = salt[:mx]
        if not salt:
            raise exc.MissingSaltError("%s setting is missing a salt" % (self.name,))
        if not is_safe_salt(salt):
            raise exc.UnsafeSaltError("invalid characters in %s salt" % (self.name,))
        return salt

    def to_config(self):
        return super(HasSalt, self).to_config() + self.salt

    #=========================================================
    #eoc
    #=========================================================

class HasRounds(GenericHandler):
    """mixin for validating rounds parameter

    :param rounds:
        rounds value. values below :attr:`min_rounds` are silently raised to it;
        values above :attr:`max_rounds` are rejected. if omitted,
        :attr:`default_rounds` is used, and the value is left out
        of the rendered setting.

    :param implicit_rounds:
        whether rounds was absent from the parsed setting.
        set by :meth:`from_string`; when true, the rendered setting
        omits the ``rounds=`` clause.
    """
    #=========================================================
    #class attrs
    #=========================================================
    min_rounds = 0
    max_rounds = None
    default_rounds = None

    #=========================================================
    #instance attrs
    #=========================================================
    rounds = None
    implicit_rounds = False

    #=========================================================
    #init
    #=========================================================
    def __init__(self, rounds=None, **kwds):
        super(HasRounds, self).__init__(**kwds)
        self.implicit_rounds = rounds is None
        self.rounds = self._norm_rounds(rounds)

    def _norm_rounds(self, rounds):
        if rounds is None:
            return self.default_rounds
        if not isinstance(rounds, int) or isinstance(rounds, bool):
            raise TypeError("rounds must be an integer")
        mn = self.min_rounds
        if rounds < mn:
            rounds = mn
        mx = self.max_rounds
        if mx is not None and rounds > mx:
            raise exc.RoundsTooLargeError("rounds too high (%s requires <= %d rounds)" %
                                          (self.name, mx))
        return rounds

    @classmethod
    def _parse_params(cls, hash, pos, kwds):
        rounds, pos = parse_rounds(hash, pos)
        if rounds is not None:
            kwds['rounds'] = rounds
        return super(HasRounds, cls)._parse_params(hash, pos, kwds)

    def _render_params(self):
        params = super(HasRounds, self)._render_params()
        if self.implicit_rounds:
            return params
        return params + ROUNDS_PREFIX + b"%d" % (self.rounds,) + SEP

    #=========================================================
    #eoc
    #=========================================================

#=========================================================
#eof
#=========================================================
