# tests/integration/ - Runtime integration tests
"""
Integration tests for mounttool runtime behavior.

These tests run the toggle against shell-script stand-ins for gocryptfs,
zenity, fusermount and the file manager. They need a POSIX shell.
"""
