"""
Instagram private API SDK.

- `core`: configuration, errors, logging, DTO base
- `serialization`: request bodies and the response decoder
- `dto`: decodable response objects
- `api`: feature interfaces
- `client`: HTTP transport and the client implementation
"""

import logging

__version__ = "0.1.0"

# Stay silent until the application calls core.logging.configure_logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())
