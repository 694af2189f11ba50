"""shadowcrypt.context - crypt() style frontend over the registered handlers"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
#site
#libs
from shadowcrypt.exc import UnsupportedSchemeError
from shadowcrypt.registry import get_crypt_handler, identify_handler
from shadowcrypt.utils import default_scheme
#pkg
#local
__all__ = [
    "crypt",
    "verify",
    "identify",
    "genconfig",
    "encrypt",
]

#=========================================================
#frontend
#=========================================================
def crypt(key, setting):
    """derive a hash string from a password and a setting.

    :type key: bytes or str
    :arg key:
        the password. unicode passwords are encoded to utf-8.

    :type setting: bytes or str
    :arg setting:
        a setting string (eg ``$6$rounds=10000$salt``), or a full hash
        previously returned by this function, in which case everything
        after the salt is ignored. ``crypt(key, hash) == hash`` is
        therefore how a password is checked.

    :raises UnsupportedSchemeError:
        if the setting doesn't begin with ``$1$``, ``$5$`` or ``$6$``.
    :raises MalformedSettingError:
        (or a subclass) if the salt or rounds can't be parsed.
    :raises RoundsTooLargeError:
        if the rounds value exceeds the scheme's limit.
    :raises PasswordSizeError:
        if the password is too long for the scheme.

    :returns:
        the canonical hash string, of the same type as *setting*.
    """
    handler = identify_handler(setting)
    return handler.genhash(key, setting)

def verify(key, hash):
    """check a password against an existing hash.

    :raises MissingDigestError: if *hash* is only a setting string.
    :returns: ``True`` if the password matches, otherwise ``False``.
    """
    return identify_handler(hash).verify(key, hash)

def identify(hash):
    """identify which scheme generated a hash.

    :returns:
        the handler name (eg ``"sha512_crypt"``), or ``None``
        if the hash doesn't belong to a supported scheme.
    """
    try:
        return identify_handler(hash).name
    except UnsupportedSchemeError:
        return None

def genconfig(scheme=None, **settings):
    """generate a new setting string with a random salt.

    :param scheme:
        name of scheme to use, defaults to the value of
        ``SHADOWCRYPT_DEFAULT_SCHEME`` (``"sha512_crypt"`` if unset).

    all other keywords (``salt``, ``salt_size``, ``rounds``)
    are passed to the handler's genconfig() method.
    """
    return get_crypt_handler(scheme or default_scheme()).genconfig(**settings)

def encrypt(key, scheme=None, **settings):
    "hash *key* using a freshly generated setting; see :func:`genconfig`"
    return get_crypt_handler(scheme or default_scheme()).encrypt(key, **settings)

#=========================================================
#eof
#=========================================================
