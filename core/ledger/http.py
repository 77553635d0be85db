"""
HTTP Ledger

Client for a REST anchor service that fronts the real chain. The service
is responsible for signing, fee payment and waiting for finality.

Wire format:
    POST {endpoint}/anchors          {"root": "0x.."}
        -> 200/201 {"block_number": int, "block_hash": "0x.." | null}
    GET  {endpoint}/anchors/{root}
        -> 200 {"root": "0x..", "block_number": int, "block_hash": ..., "anchored_at": ...}
        -> 404 when the root is not anchored
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from core.crypto.hashing import to_hex
from core.http.client import HttpClient, HttpError
from core.schemas.anchor import AnchorRecord, BlockRef
from core.schemas.errors import LedgerQueryException, LedgerSubmitException


logger = logging.getLogger(__name__)


class HttpLedger:
    """
    Ledger backend that talks to an anchor service over HTTP.

    No retries are performed here; a failed submission raises
    LedgerSubmitException and the caller decides what to do.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        http_client: Optional[HttpClient] = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self.http = http_client or HttpClient(timeout=timeout, default_headers=headers)

    def submit_root(self, root: bytes) -> BlockRef:
        root_hex = to_hex(root)
        url = f"{self.endpoint}/anchors"

        try:
            response = self.http.post(url, json={"root": root_hex})
        except HttpError as e:
            raise LedgerSubmitException(
                f"Anchor service unreachable: {e}",
                root=root_hex,
            ) from e

        if not response.ok:
            raise LedgerSubmitException(
                f"Anchor service rejected root with HTTP {response.status_code}: {response.text[:200]}",
                root=root_hex,
                details={"status_code": response.status_code},
                retryable=response.status_code >= 500,
            )

        try:
            block = BlockRef.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise LedgerSubmitException(
                f"Malformed anchor service response: {e}",
                root=root_hex,
            ) from e

        logger.info(f"Submitted root {root_hex} to {self.endpoint}, block {block.block_number}")
        return block

    def lookup_root(self, root: bytes) -> Optional[AnchorRecord]:
        root_hex = to_hex(root)
        url = f"{self.endpoint}/anchors/{root_hex}"

        try:
            response = self.http.get(url)
        except HttpError as e:
            raise LedgerQueryException(
                f"Anchor service unreachable: {e}",
                root=root_hex,
            ) from e

        if response.status_code == 404:
            return None
        if not response.ok:
            raise LedgerQueryException(
                f"Anchor lookup failed with HTTP {response.status_code}",
                root=root_hex,
                details={"status_code": response.status_code},
            )

        try:
            record = AnchorRecord.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise LedgerQueryException(
                f"Malformed anchor service response: {e}",
                root=root_hex,
            ) from e

        if record.root != root_hex:
            raise LedgerQueryException(
                f"Anchor service returned record for {record.root}",
                root=root_hex,
                details={"returned_root": record.root},
            )
        return record

    def close(self) -> None:
        self.http.close()


__all__ = ["HttpLedger"]
