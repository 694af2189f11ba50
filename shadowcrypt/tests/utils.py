"""helpers for shadowcrypt unittests"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
import re
import unittest
#site
#pkg
from shadowcrypt import exc
from shadowcrypt.registry import get_crypt_handler
#local
__all__ = [
    #unit testing
    'TestCase',
    'HandlerCase',
]

#=========================================================
#helpers
#=========================================================
class classproperty(object):
    """Function decorator which acts like a combination of classmethod+property (limited to read-only properties)"""

    def __init__(self, func):
        self.im_func = func

    def __get__(self, obj, cls):
        return self.im_func(cls)

#: unicode password used to check utf-8 is applied to text secrets
UPASS_TABLE = "táБℓə"

#=========================================================
#custom test base
#=========================================================
class TestCase(unittest.TestCase):
    """shadowcrypt-specific test case class

    this class adds a couple of features to the standard TestCase...
    * common prefix for all test descriptions
    * base classes (those whose names start with "_", or which
      set a private ``__unittest_skip`` flag) are skipped by the runner
    """
    #----------------------------------------------------------------
    # make it easy for test cases to add common prefix to shortDescription
    #----------------------------------------------------------------

    # string prepended to all tests in TestCase
    descriptionPrefix = None

    def shortDescription(self):
        "wrap shortDescription() method to prepend descriptionPrefix"
        desc = super(TestCase, self).shortDescription()
        prefix = self.descriptionPrefix
        if prefix:
            desc = "%s: %s" % (prefix, desc or str(self))
        return desc

    #----------------------------------------------------------------
    # skip subclasses who have "__unittest_skip=True" set,
    # or whose names start with "_"
    #----------------------------------------------------------------
    @classproperty
    def __unittest_skip__(cls):
        name = cls.__name__
        return name.startswith("_") or \
               getattr(cls, "_%s__unittest_skip" % name, False)

    @classproperty
    def __test__(cls):
        return not cls.__unittest_skip__

    # flag to skip *this* class
    __unittest_skip = True

    #----------------------------------------------------------------
    # tweak message formatting so longMessage mode is only enabled
    # if msg ends with ":", and turn on longMessage by default.
    #----------------------------------------------------------------
    longMessage = True

    def _formatMessage(self, msg, std):
        if self.longMessage and msg and msg.rstrip().endswith(":"):
            return '%s %s' % (msg.rstrip(), std)
        else:
            return msg or std

#=========================================================
#handler test case
#=========================================================
class HandlerCase(TestCase):
    """base class for testing crypt handlers

    In order to use this to test a handler,
    create a subclass with the attributes below filled in.
    """
    #=========================================================
    # attrs to be filled in by subclass for testing specific handler
    #=========================================================

    # specify handler object here (required)
    handler = None

    # list of (secret, hash) tuples which are known to be correct
    known_correct_hashes = []

    # list of (config, secret, hash) tuples which are known to be correct
    known_correct_configs = []

    # list of (config, error class) tuples which must be rejected
    known_malformed_configs = []

    # setting used by tests which only need *a* valid config;
    # should be cheap to compute.
    fast_config = None

    # list of passwords every handler is tested with
    stock_passwords = [
        "test",
        "€¥$",
        b'\xe2\x82\xac\xc2\xa5$',
    ]

    __unittest_skip = True

    @property
    def descriptionPrefix(self):
        return self.handler.name

    #=========================================================
    # basic tests
    #=========================================================
    def test_01_required_attributes(self):
        "validate required attributes"
        handler = self.handler
        name = handler.name
        self.assertTrue(name, "name not defined:")
        self.assertIsInstance(name, str, "name must be native str")
        self.assertTrue(re.match("^[a-z0-9_]+$", name),
                        "name must be alphanum + underscore: %r" % (name,))
        self.assertIsInstance(handler.ident, bytes)
        self.assertTrue(handler.checksum_size > 0)
        self.assertTrue(handler.max_salt_size > 0)
        self.assertIs(get_crypt_handler(name), handler)

    def test_02_config_workflow(self):
        "test genconfig() output is accepted by identify() & genhash(), but not verify()"
        config = self.handler.genconfig()
        self.assertIsInstance(config, str)
        self.assertTrue(self.handler.identify(config))
        result = self.handler.genhash("stub", config)
        self.assertIsInstance(result, str)
        self.assertTrue(result.startswith(config + "$"))
        self.assertRaises(exc.MissingDigestError, self.handler.verify, "stub", config)

    def test_03_hash_workflow(self):
        "test encrypt() hashes are accepted by verify(), and reproduced by genhash()"
        for secret in self.stock_passwords:
            result = self.handler.encrypt(secret)
            self.assertIsInstance(result, str)
            self.assertTrue(self.handler.verify(secret, result))
            self.assertFalse(self.handler.verify("stub", result))
            self.assertEqual(self.handler.genhash(secret, result), result)

    def test_04_salt_generation(self):
        "test genconfig() salt size and charset"
        handler = self.handler
        ident = handler.ident.decode("ascii")
        config = handler.genconfig()
        salt = config.rsplit("$", 1)[1]
        self.assertEqual(len(salt), handler.max_salt_size)
        self.assertTrue(re.match(r"^[./0-9A-Za-z]+$", salt))
        self.assertNotEqual(handler.genconfig(), config)

        config = handler.genconfig(salt_size=3)
        self.assertEqual(len(config.rsplit("$", 1)[1]), 3)

        config = handler.genconfig(salt="abc")
        self.assertEqual(config, ident + "abc")

        self.assertRaises(exc.MissingSaltError, handler.genconfig, salt="")
        self.assertRaises(exc.MissingSaltError, handler.genconfig, salt_size=0)
        self.assertRaises(exc.UnsafeSaltError, handler.genconfig, salt="ab:c")

    #=========================================================
    # parsing
    #=========================================================
    def test_10_salt_truncation(self):
        "test overlong salts are truncated"
        handler = self.handler
        mx = handler.max_salt_size
        config = self.fast_config.rsplit("$", 1)[0] + "$" + "s" * (mx + 10)
        result = handler.genhash("stub", config)
        salt = result.split("$")[-2]
        self.assertEqual(salt, "s" * mx)
        self.assertEqual(handler.genhash("stub", result), result)

    def test_11_unsafe_salt(self):
        "test salts containing ':' or newline are rejected"
        handler = self.handler
        base = self.fast_config.rsplit("$", 1)[0] + "$"
        for salt in ["ab:cd", "ab\ncd", ":", "\n"]:
            self.assertRaises(exc.UnsafeSaltError, handler.genhash, "stub", base + salt)
            self.assertRaises(exc.UnsafeSaltError, handler.genhash, "stub",
                              (base + salt).encode("ascii"))

    def test_12_missing_salt(self):
        "test settings without a salt are rejected"
        handler = self.handler
        base = self.fast_config.rsplit("$", 1)[0] + "$"
        self.assertRaises(exc.MissingSaltError, handler.genhash, "stub", base)
        self.assertRaises(exc.MissingSaltError, handler.genhash, "stub", base + "$")
        self.assertRaises(exc.MissingSaltError, handler.genhash, "stub",
                          base + "$" + "x" * handler.checksum_size)

    def test_13_wrong_prefix(self):
        "test settings for other schemes are rejected"
        for other in ["$1$abc", "$5$abc", "$6$abc", "$2a$05$abc", "ab"]:
            if other.encode("ascii").startswith(self.handler.ident):
                continue
            self.assertFalse(self.handler.identify(other))
            self.assertRaises(exc.UnsupportedSchemeError,
                              self.handler.genhash, "stub", other)

    def test_14_malformed_configs(self):
        "test known malformed configs are rejected"
        for config, error in self.known_malformed_configs:
            self.assertRaises(error, self.handler.genhash, "stub", config)

    def test_15_trailing_content(self):
        "test content after the salt is ignored"
        handler = self.handler
        result = handler.genhash("stub", self.fast_config)
        self.assertEqual(handler.genhash("stub", self.fast_config + "$"), result)
        self.assertEqual(handler.genhash("stub", self.fast_config + "$junk$more"), result)

    #=========================================================
    # password size
    #=========================================================
    def test_20_secret_size(self):
        "test password size limit is enforced"
        handler = self.handler
        mx = handler.max_secret_size
        result = handler.genhash(b"x" * mx, self.fast_config)
        self.assertTrue(result.startswith(self.fast_config + "$"))
        self.assertRaises(exc.PasswordSizeError, handler.genhash,
                          b"x" * (mx + 1), self.fast_config)

        # size is measured after utf-8 encoding
        self.assertRaises(exc.PasswordSizeError, handler.genhash,
                          "é" * (mx // 2 + 1), self.fast_config)

    def test_21_secret_types(self):
        "test secrets must be unicode or bytes"
        self.assertRaises(TypeError, self.handler.genhash, None, self.fast_config)
        self.assertRaises(TypeError, self.handler.genhash, 1, self.fast_config)
        self.assertRaises(TypeError, self.handler.genhash, "stub", None)

    #=========================================================
    # known hashes
    #=========================================================
    def test_30_known_hashes(self):
        "test known hashes are reproduced & verified"
        handler = self.handler
        for secret, hash in self.known_correct_hashes:
            self.assertEqual(handler.genhash(secret, hash), hash,
                             "secret=%r hash=%r:" % (secret, hash))
            self.assertTrue(handler.verify(secret, hash),
                            "secret=%r hash=%r:" % (secret, hash))
            wrong = secret + (b"x" if isinstance(secret, bytes) else "x")
            self.assertFalse(handler.verify(wrong, hash),
                             "secret=%r hash=%r:" % (wrong, hash))

    def test_31_known_configs(self):
        "test known configs produce the expected hashes"
        handler = self.handler
        for config, secret, hash in self.known_correct_configs:
            result = handler.genhash(secret, config)
            self.assertEqual(result, hash, "config=%r secret=%r:" % (config, secret))
            self.assertEqual(handler.genhash(secret, result), result)

    def test_32_bytes_in_bytes_out(self):
        "test genhash() returns bytes when given a bytes setting"
        handler = self.handler
        secret, hash = self.known_correct_hashes[0]
        result = handler.genhash(secret, hash.encode("ascii"))
        self.assertIsInstance(result, bytes)
        self.assertEqual(result, hash.encode("ascii"))
        self.assertTrue(handler.verify(secret, hash.encode("ascii")))

    def test_33_non_ascii_salt(self):
        "test salts containing non-ascii bytes round-trip"
        handler = self.handler
        config = self.fast_config.rsplit("$", 1)[0].encode("ascii") + b"$\xff\xfe\x00a"
        result = handler.genhash("stub", config)
        self.assertTrue(result.startswith(config + b"$"))
        self.assertEqual(handler.genhash("stub", result), result)

        # same setting as text, via surrogateescape
        text = config.decode("utf-8", "surrogateescape")
        self.assertEqual(handler.genhash("stub", text),
                         result.decode("utf-8", "surrogateescape"))

    #=========================================================
    #eoc
    #=========================================================

#=========================================================
#EOF
#=========================================================
