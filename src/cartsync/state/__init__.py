"""State/store layer.

This package is the single source of truth for the client-side inventory
and cart. Optimistic edits, server reconciliations and rollbacks all go
through :class:`cartsync.state.store.AppState`.
"""
