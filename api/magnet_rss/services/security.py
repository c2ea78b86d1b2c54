import hmac


def timing_safe_equal(a: object, b: object) -> bool:
    """Compare two strings without leaking where they first differ.

    Non-strings and inputs of different encoded length are rejected up
    front; only equal-length UTF-8 byte strings reach the constant-time
    comparison.
    """
    if not isinstance(a, str) or not isinstance(b, str):
        return False
    a_bytes = a.encode("utf-8")
    b_bytes = b.encode("utf-8")
    if len(a_bytes) != len(b_bytes):
        return False
    return hmac.compare_digest(a_bytes, b_bytes)
