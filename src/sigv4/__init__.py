"""sigv4: sign and send AWS SigV4 requests from the command line.

Built on botocore's signer and requests with a strict layered
architecture.
"""

from sigv4.version import __version__

__all__: list[str] = ["__version__"]
