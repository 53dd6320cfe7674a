"""addrbook: multi-tenant party, address and phone records behind token authorization."""

__version__ = "0.9.1"
