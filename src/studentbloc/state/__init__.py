"""Event/state model and the in-memory store.

The store is the single owner of the student collection; events and
states are the only vocabulary the coordinator shares with consumers.
"""
