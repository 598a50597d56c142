# src/wasm_inliner/encoder.py

import base64


def encode_payload(payload: bytes) -> str:
    """Return `payload` as one contiguous standard base64 string (padded, no newlines)."""
    return base64.b64encode(payload).decode("ascii")
