"""shadowcrypt.exc -- exceptions raised by shadowcrypt"""
#==========================================================================
# exceptions
#==========================================================================
class PasswordSizeError(ValueError):
    """Error raised if the password provided exceeds the limit of the scheme.

    The sha-crypt family repeats the password ``len(password)`` times
    while building the DP digest, so its cost grows quadratically with
    the size of the password. To keep that bounded, each handler
    declares a ``max_secret_size``: 30000 bytes for md5-crypt,
    256 bytes for sha256-crypt and sha512-crypt.

    :attr:`max_size` holds the limit that was exceeded.
    """
    def __init__(self, max_size, name=None):
        self.max_size = max_size
        if name:
            msg = "password exceeds maximum allowed size for %s (%d bytes)" % \
                  (name, max_size)
        else:
            msg = "password exceeds maximum allowed size (%d bytes)" % (max_size,)
        ValueError.__init__(self, msg)

class UnsupportedSchemeError(ValueError):
    """Error raised if a setting string doesn't start with the prefix
    of any supported scheme.

    This covers settings which are recognized but deliberately not
    implemented (bcrypt, traditional DES crypt), as well as anything
    unknown. Derivation never falls back to another scheme.
    """

class MalformedSettingError(ValueError):
    """base class for errors raised while parsing a setting string"""

class MissingSaltError(MalformedSettingError):
    "raised when the salt field of a setting is empty or absent"

class UnsafeSaltError(MalformedSettingError):
    """raised when the salt contains ``:`` or ``\\n``.

    Such a salt would corrupt the colon-delimited record
    the resulting hash is stored in.
    """

class MalformedRoundsError(MalformedSettingError):
    "raised when a ``rounds=`` clause isn't a ``$``-terminated decimal"

class RoundsOverflowError(MalformedSettingError):
    "raised when a ``rounds=`` value overflows the integer range while parsing"

class RoundsTooLargeError(ValueError):
    """raised when a parsed rounds value is above the scheme's ``max_rounds``.

    Unlike values below ``min_rounds``, which are silently raised,
    values above the maximum are never clamped.
    """

class MissingDigestError(ValueError):
    "raised when verify() is handed a bare setting instead of a full hash"

class EncodingError(RuntimeError):
    """Error raised if the hash64 encoder is handed a permutation table
    which doesn't fit the digest.

    This indicates a bug in a handler rather than bad input,
    and is a :exc:`RuntimeError` for that reason.
    """

#==========================================================================
# error constructors
#==========================================================================
def _get_name(handler):
    return handler.name if handler else "<unnamed>"

def type_name(value):
    "return pretty-printed string containing name of value's type"
    cls = value.__class__
    if cls.__module__ and cls.__module__ not in ["__builtin__", "builtins"]:
        return "%s.%s" % (cls.__module__, cls.__name__)
    elif value is None:
        return 'None'
    else:
        return cls.__name__

def ExpectedStringError(value, param):
    "error message when param was supposed to be unicode or bytes"
    # NOTE: value is never displayed, since it may sometimes be a password.
    return TypeError("%s must be unicode or bytes, not %s" %
                     (param, type_name(value)))

def InvalidHashError(handler=None):
    "error raised if a setting is handed to a handler with the wrong prefix"
    return UnsupportedSchemeError("not a valid %s hash (wrong prefix)" %
                                  _get_name(handler))

#==========================================================================
# eof
#==========================================================================
