# SPDX-License-Identifier: MIT
"""Integration tests for Localization-Sync.

These tests wire real stores, caches and loaders together and exercise the
write, warm-up and lookup paths end to end. They use only local files.
"""
