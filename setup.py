"""shadowcrypt setup script"""
#=========================================================
#init script env - ensure cwd = root of source dir
#=========================================================
import os
root_dir = os.path.abspath(os.path.join(__file__,".."))
os.chdir(root_dir)

#=========================================================
#imports
#=========================================================
import re

from setuptools import setup

#=========================================================
#version string
#=========================================================
with open(os.path.join(root_dir, "shadowcrypt", "__init__.py")) as vh:
    VERSION = re.search(r'^__version__\s*=\s*"(.*?)"\s*$', vh.read(), re.M).group(1)

#=========================================================
#static text
#=========================================================
SUMMARY = "pure-python crypt() for md5-crypt, sha256-crypt & sha512-crypt shadow hashes"

DESCRIPTION = """\
shadowcrypt derives the password hashes stored in unix shadow files,
byte-for-byte compatible with the system ``crypt()``.

It supports the three modular crypt schemes found on current systems:
md5-crypt (``$1$``), sha256-crypt (``$5$``) and sha512-crypt (``$6$``).
bcrypt and traditional DES settings are recognized and rejected
with a clear error rather than silently handled.
"""

KEYWORDS = "password secret hash security crypt shadow md5-crypt sha256-crypt sha512-crypt"

#=========================================================
#config setup
#=========================================================
config = dict(
    #package info
    packages = [
        "shadowcrypt",
            "shadowcrypt.handlers",
            "shadowcrypt.tests",
            "shadowcrypt.utils",
        ],
    zip_safe=True,
    python_requires = ">=3.6",

    #metadata
    name = "shadowcrypt",
    version = VERSION,
    license = "BSD",

    description = SUMMARY,
    long_description = DESCRIPTION,
    keywords = KEYWORDS,
    classifiers = [
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: BSD License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries",
    ],

    extras_require = {
        "test": ["pytest"],
    },
)

#=========================================================
#build
#=========================================================
setup(**config)

#=========================================================
#EOF
#=========================================================
