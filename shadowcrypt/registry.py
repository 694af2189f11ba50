"""shadowcrypt.registry - registry for crypt handlers"""
#=========================================================
#imports
#=========================================================
#core
import re
import logging; log = logging.getLogger(__name__)
#site
#libs
from shadowcrypt.exc import UnsupportedSchemeError
from shadowcrypt.utils import SETTING_ERRORS, to_bytes
#pkg
#local
__all__ = [
    "register_crypt_handler_path",
    "register_crypt_handler",
    "get_crypt_handler",
    "list_crypt_handlers",
    "identify_handler",
]

#==========================================================
#internal registry state
#==========================================================

#: dict mapping name -> handler for all loaded handlers.
_handlers = {}

#: dict mapping name -> (module path, attribute) for lazy-loading of handlers
_handler_locations = {
    "md5_crypt":        ("shadowcrypt.handlers.md5_crypt",   "md5_crypt"),
    "sha256_crypt":     ("shadowcrypt.handlers.sha2_crypt",  "sha256_crypt"),
    "sha512_crypt":     ("shadowcrypt.handlers.sha2_crypt",  "sha512_crypt"),
}

#: prefix -> handler name, checked in this order by identify_handler()
_prefix_dispatch = (
    (b"$1$", "md5_crypt"),
    (b"$5$", "sha256_crypt"),
    (b"$6$", "sha512_crypt"),
)

#: prefixes of schemes which are recognized, but deliberately not implemented
_unsupported_prefixes = (
    (b"$2", "bcrypt is not supported"),
)

#: master regexp for detecting valid handler names
_name_re = re.compile("^[a-z][_a-z0-9]{2,}$")

#==========================================================
#registry frontend functions
#==========================================================
def register_crypt_handler_path(name, path):
    """register location to lazy-load handler when requested.

    :arg name: name of handler
    :arg path: module import path

    the specified module path should contain a crypt handler
    called :samp:`{name}`, or the path may contain a colon,
    specifying the module and module attribute to use.
    """
    if ':' in path:
        modname, modattr = path.split(":")
    else:
        modname, modattr = path, name
    _handler_locations[name] = (modname, modattr)

def register_crypt_handler(handler, force=False, name=None):
    """register crypt handler.

    :arg handler: the crypt handler to register
    :param force: force override of existing handler (defaults to False)
    :param name:
        [internal kwd] if specified, ensures ``handler.name``
        matches this value, or raises :exc:`ValueError`.

    :raises TypeError:
        if the specified object does not appear to be a valid handler.

    :raises ValueError:
        if the handler's name is invalid.

    :raises KeyError:
        if a (different) handler was already registered with
        the same name, and ``force=True`` was not specified.
    """
    #validate handler
    if not all(hasattr(handler, attr) for attr in ("name", "ident", "genhash")):
        raise TypeError("object does not appear to be a crypt handler: %r" % (handler,))

    #if name specified, make sure it matched
    if name:
        if name != handler.name:
            raise ValueError("handlers must be stored only under their own name")
    else:
        name = handler.name

    #validate name
    if not name or not _name_re.match(name) or '__' in name:
        raise ValueError("invalid handler name (must be 3+ characters, begin with a-z, and contain only underscore, a-z, 0-9): %r" % (name,))

    #check for existing handler
    other = _handlers.get(name)
    if other:
        if other is handler:
            return #already registered
        if force:
            log.warning("overriding previous handler registered to name %r: %r", name, other)
        else:
            raise KeyError("a handler has already registered for the name %r: %r (use force=True to override)" % (name, other))

    #register handler in dict
    _handlers[name] = handler
    log.debug("registered crypt handler %r: %r", name, handler)

def get_crypt_handler(name, default=KeyError):
    """return handler for specified crypt scheme.

    if the handler is not already loaded,
    it checks if the location is known, and loads it first.

    :arg name: name of handler to return
    :param default: optional default value to return if no handler with specified name is found.

    :raises KeyError: if no handler matching that name is found, and no default specified.

    :returns: handler attached to name, or default value (if specified).
    """
    #check if handler loaded
    handler = _handlers.get(name)
    if handler:
        return handler

    #normalize name (and if changed, check dict again)
    alt = name.replace("-", "_").lower()
    if alt != name:
        name = alt
        handler = _handlers.get(name)
        if handler:
            return handler

    #check if lazy load mapping has been specified for this handler
    route = _handler_locations.get(name)
    if route:
        modname, modattr = route
        log.debug("loading crypt handler %r from %s:%s", name, modname, modattr)
        mod = __import__(modname, None, None, ['dummy'], 0)
        handler = getattr(mod, modattr)
        register_crypt_handler(handler, name=name)
        return handler

    #fail!
    if default is KeyError:
        raise KeyError("no crypt handler found for algorithm: %r" % (name,))
    return default

def list_crypt_handlers(loaded_only=False):
    """return sorted list of all known crypt handler names.

    :param loaded_only: if ``True``, only returns names of handlers which have actually been loaded.
    """
    names = set(_handlers)
    if not loaded_only:
        names.update(_handler_locations)
    return sorted(names)

def _unload_handler_name(name, locations=True):
    """unloads a handler from the registry.

    .. warning::

        this is an internal function,
        used only by the unittests.
    """
    if name in _handlers:
        del _handlers[name]
    if locations and name in _handler_locations:
        del _handler_locations[name]

#==========================================================
#dispatch by prefix
#==========================================================
def identify_handler(setting):
    """return handler whose prefix starts *setting*.

    prefixes are checked in a fixed order (``$1$``, ``$5$``, ``$6$``).

    :raises UnsupportedSchemeError:
        if no supported prefix matches. settings for bcrypt and
        traditional DES crypt get a message saying so.
    """
    setting = to_bytes(setting, errname="setting", errors=SETTING_ERRORS)
    if not setting:
        raise UnsupportedSchemeError("no setting specified")
    for prefix, name in _prefix_dispatch:
        if setting.startswith(prefix):
            return get_crypt_handler(name)
    for prefix, msg in _unsupported_prefixes:
        if setting.startswith(prefix):
            raise UnsupportedSchemeError(msg)
    if not setting.startswith(b"$"):
        raise UnsupportedSchemeError("DES is no longer supported, use a modern hash instead")
    raise UnsupportedSchemeError("unknown crypt scheme: %r" %
                                 (setting.split(b"$", 2)[1],))

#=========================================================
# eof
#=========================================================
