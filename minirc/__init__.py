"""A minimal one-to-one TCP chat: wire protocol, socket helpers, server and client."""

__version__ = "0.1.0"
__all__ = ["__version__"]