"""Test suite for the streaming chat gateway.

Unit tests live under tests/unit/<domain>/ and are collected by the hook in
conftest.py; shared fakes are in the helpers/ subpackage.
"""
