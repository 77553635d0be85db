"""
merkle-anchor command-line interface.

Hash content, build roots and proofs offline, and anchor or check
batches against the configured ledger.
"""

__version__ = "0.1.0"
