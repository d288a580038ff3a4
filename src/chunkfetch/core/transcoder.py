"""Base64 transcoding of response bodies."""

import base64


def encode(content: bytes) -> str:
    """Encode raw body bytes as standard, unwrapped base64 text."""
    return base64.b64encode(content).decode("ascii")
