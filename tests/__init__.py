"""Test suite for gitkeeper.

This package contains unit and integration tests for command construction,
git execution, repository sessions, the workspace, the CLI and the HTTP
server. Integration tests run the real git binary against temporary
repositories.
"""
