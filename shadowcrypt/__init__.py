"""shadowcrypt - pure-python crypt() for unix shadow password hashes"""

__version__ = "1.0"

#=========================================================
#quickstart interface
#=========================================================
from shadowcrypt.context import crypt, verify, identify, genconfig, encrypt

__all__ = [
    "crypt",
    "verify",
    "identify",
    "genconfig",
    "encrypt",
]

#=========================================================
#eof
#=========================================================
