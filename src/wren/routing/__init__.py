"""Routing — module route tables compiled into a trie router.

Route entries and the known-path set are built once when the app
freezes and are read-only afterwards.
"""
