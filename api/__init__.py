"""
Minimal API (FastAPI)

HTTP API for Merkle batch anchoring:
- POST /anchor/batch - Anchor a batch of leaf hashes
- POST /anchor/check - Check a leaf + proof against the ledger
- POST /merkle/root - Compute a root offline
- POST /merkle/verify - Verify a proof offline
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
