"""AuthGate: tests for exact api_key matching.

Tests cover:
    - Exact match authenticates
    - Mismatch, missing key, empty key, unregistered account all fail
    - No normalization (case, whitespace)
    - derive_api_key matches Fever's md5("email:password")
"""

import hashlib

from fever_api.core.authenticate import derive_api_key, is_authenticated


def test_matching_key_authenticates():
    assert is_authenticated("apisecretkey", "apisecretkey")


def test_wrong_key_fails():
    assert not is_authenticated("foo", "apisecretkey")


def test_missing_key_fails():
    assert not is_authenticated(None, "apisecretkey")


def test_empty_key_fails_even_when_registered_key_is_empty():
    assert not is_authenticated("", "")


def test_no_registered_key_fails():
    assert not is_authenticated("apisecretkey", None)


def test_comparison_is_case_sensitive():
    assert not is_authenticated("APISECRETKEY", "apisecretkey")


def test_comparison_does_not_strip_whitespace():
    assert not is_authenticated(" apisecretkey", "apisecretkey")


def test_derive_api_key_is_md5_of_email_and_password():
    expected = hashlib.md5(b"reader@example.com:hunter2").hexdigest()
    assert derive_api_key("reader@example.com", "hunter2") == expected


def test_derived_key_authenticates_against_itself():
    key = derive_api_key("reader@example.com", "hunter2")
    assert is_authenticated(key, key)
