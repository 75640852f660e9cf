"""Room privilege bits and the binary permission block ("userbuf")."""

from .flags import Privilege
from .userbuf import decode_userbuf, encode_userbuf

__all__ = ["Privilege", "encode_userbuf", "decode_userbuf"]
