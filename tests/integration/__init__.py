"""Integration tests for the notebook.

These tests wire the real components together (notebook session, YAML
key-value store, codec, gist API wrapper and backup sync) and only replace
the HTTP session with an in-memory gist server.
"""
