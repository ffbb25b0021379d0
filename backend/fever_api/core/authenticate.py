"""AuthGate: decides whether a request carries the registered Fever key.

Invariants:
    - Authenticated iff a non-empty key was supplied AND a key is registered AND they are equal
    - Comparison is exact: case-sensitive, no stripping, no normalization
    - Pure: no lookup, no logging, no side effects (the shell supplies the registered key)

Design Decisions:
    - hmac.compare_digest over ==: constant-time comparison for a shared secret
    - derive_api_key mirrors how Fever clients build the key: md5("email:password") hex
"""

import hashlib
import hmac


def is_authenticated(supplied_key: str | None, registered_key: str | None) -> bool:
    """True when the supplied api_key matches the registered key exactly."""
    if not supplied_key or not registered_key:
        return False
    return hmac.compare_digest(
        supplied_key.encode("utf-8"), registered_key.encode("utf-8"),
    )


def derive_api_key(email: str, password: str) -> str:
    """Fever api_key for an account: lowercase hex md5 of 'email:password'."""
    return hashlib.md5(f"{email}:{password}".encode("utf-8")).hexdigest()
