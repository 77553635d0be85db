"""
Anchor Client Unit Tests
Tests for core/anchor/client.py

Scenarios:
- Four-document batch: anchor, proofs in input order, check with right/wrong proof
- Single document: not anchored before, anchored after, empty proof
- Validation fails before ledger contact
- Ledger failures propagate unmodified
- Direct anchors
"""
import pytest

from core.anchor import AnchorClient, BatchReceipt
from core.crypto.hashing import blake2s256, pack_leaves, sha256
from core.ledger import InMemoryLedger
from core.merkle import compute_root, recompute_root
from core.schemas.anchor import AnchorRecord, BlockRef
from core.schemas.errors import (
    EmptyBatchException,
    InvalidLeafSizeException,
    LedgerSubmitException,
)


class RecordingLedger(InMemoryLedger):
    """In-memory ledger that counts calls."""

    def __init__(self):
        super().__init__()
        self.submitted: list[bytes] = []
        self.lookups: list[bytes] = []

    def submit_root(self, root):
        self.submitted.append(root)
        return super().submit_root(root)

    def lookup_root(self, root):
        self.lookups.append(root)
        return super().lookup_root(root)


class FailingLedger:
    """Ledger whose submissions always fail."""

    def __init__(self, error: Exception):
        self.error = error

    def submit_root(self, root):
        raise self.error

    def lookup_root(self, root):
        return None


class TestBatchScenario:
    """Batch of hash("a")..hash("d")."""

    def test_anchor_and_check(self, client, leaves):
        proofs = client.anchor_batched(leaves)

        assert len(proofs) == 4
        assert client.check_batched(leaves[0], proofs[0]) is not None
        assert client.check_batched(leaves[0], proofs[1]) is None

    def test_proofs_in_input_order(self, client, leaves):
        proofs = client.anchor_batched(leaves)
        root = compute_root(pack_leaves(leaves))

        for leaf, proof in zip(leaves, proofs):
            assert recompute_root(leaf, proof) == root

    def test_only_root_is_submitted(self, leaves):
        ledger = RecordingLedger()
        client = AnchorClient(ledger)

        receipt = client.submit_batch(leaves)

        assert ledger.submitted == [compute_root(pack_leaves(leaves))]
        assert receipt.root == ledger.submitted[0]

    def test_receipt_fields(self, client, leaves):
        receipt = client.submit_batch(leaves)

        assert isinstance(receipt, BatchReceipt)
        assert isinstance(receipt.block, BlockRef)
        assert len(receipt) == 4
        assert receipt.root_hex == "0x" + receipt.root.hex()

    def test_record_matches_block(self, client, leaves):
        receipt = client.submit_batch(leaves)
        record = client.check_batched(leaves[2], receipt.proofs[2])

        assert isinstance(record, AnchorRecord)
        assert record.block_number == receipt.block.block_number
        assert record.root == receipt.root_hex

    def test_every_leaf_checks(self, client):
        leaves = [blake2s256(f"doc{i}".encode()) for i in range(11)]
        proofs = client.anchor_batched(leaves)

        records = {client.check_batched(leaf, proof).block_number for leaf, proof in zip(leaves, proofs)}

        assert len(records) == 1


class TestSingleLeaf:
    """A batch of one anchors the leaf itself with an empty proof."""

    def test_not_anchored_then_anchored(self, client):
        single = blake2s256(b"random document")

        assert client.check_batched(single, []) is None

        proofs = client.anchor_batched([single])

        assert proofs == [[]]
        assert client.check_batched(single, []) is not None

    def test_root_is_leaf(self, client):
        single = blake2s256(b"doc")
        receipt = client.submit_batch([single])

        assert receipt.root == single
        assert client.check(single) is not None


class TestValidation:
    """Malformed batches are rejected before the ledger is contacted."""

    def test_empty_batch(self):
        ledger = RecordingLedger()
        client = AnchorClient(ledger)

        with pytest.raises(EmptyBatchException):
            client.anchor_batched([])

        assert ledger.submitted == []

    def test_bad_leaf_width(self):
        ledger = RecordingLedger()
        client = AnchorClient(ledger)

        with pytest.raises(InvalidLeafSizeException):
            client.anchor_batched([blake2s256(b"a"), b"short"])

        assert ledger.submitted == []

    def test_direct_anchor_width(self, client):
        with pytest.raises(InvalidLeafSizeException):
            client.anchor(b"\x00" * 16)


class TestLedgerFailures:
    """Ledger errors reach the caller unmodified."""

    def test_submit_failure_propagates(self, leaves):
        error = LedgerSubmitException("node rejected extrinsic")
        client = AnchorClient(FailingLedger(error))

        with pytest.raises(LedgerSubmitException) as exc_info:
            client.anchor_batched(leaves)

        assert exc_info.value is error

    def test_foreign_errors_not_wrapped(self, leaves):
        error = TimeoutError("finality timeout")
        client = AnchorClient(FailingLedger(error))

        with pytest.raises(TimeoutError) as exc_info:
            client.submit_batch(leaves)

        assert exc_info.value is error

    def test_no_retry(self, leaves):
        class CountingFailingLedger(FailingLedger):
            calls = 0

            def submit_root(self, root):
                CountingFailingLedger.calls += 1
                return super().submit_root(root)

        client = AnchorClient(CountingFailingLedger(LedgerSubmitException("down")))

        with pytest.raises(LedgerSubmitException):
            client.anchor_batched(leaves)

        assert CountingFailingLedger.calls == 1


class TestDirectAnchors:
    """anchor() / check() without batching."""

    def test_direct_anchor(self, client):
        value = blake2s256(blake2s256(b"document"))

        assert client.check(value) is None
        block = client.anchor(value)
        record = client.check(value)

        assert record.block_number == block.block_number

    def test_direct_anchor_checks_as_single_batch(self, client):
        """A direct anchor is indistinguishable from a batch of one."""
        value = blake2s256(b"document")
        client.anchor(value)

        assert client.check_batched(value, []) is not None


class TestHashAlgorithm:
    """Write and read paths must share the hash function."""

    def test_sha256_client(self, ledger, leaves):
        client = AnchorClient(ledger, hash_algorithm="sha256")
        receipt = client.submit_batch(leaves)

        assert receipt.root == compute_root(pack_leaves(leaves), sha256)
        assert client.check_batched(leaves[1], receipt.proofs[1]) is not None

    def test_mismatched_algorithm_never_verifies(self, ledger, leaves):
        proofs = AnchorClient(ledger, hash_algorithm="sha256").anchor_batched(leaves)

        assert AnchorClient(ledger).check_batched(leaves[1], proofs[1]) is None

    def test_hash_content(self, client):
        assert client.hash_content(b"x") == blake2s256(b"x")
