"""
CLI Tests
Tests for anchor_cli/main.py and anchor_cli/commands/

Tests:
- hash / root / prove / verify work offline
- anchor writes proofs and check finds them through the file ledger
- exit codes: 0 success, 1 error, 2 not anchored / verification failed
"""
import json

import pytest

from anchor_cli.main import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED, main
from core.crypto.hashing import blake2s256, pack_leaves, sha256, to_hex
from core.merkle import compute_root


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Config selecting a file ledger inside tmp_path."""
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "anchor.yaml"
    path.write_text(
        "ledger:\n"
        "  backend: file\n"
        f"  path: {tmp_path / 'anchors.jsonl'}\n"
    )
    return path


@pytest.fixture
def hex_leaves(leaves):
    return [to_hex(leaf) for leaf in leaves]


def _run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr().out


class TestOfflineCommands:

    def test_hash_text(self, capsys, config_file):
        code, out = _run(capsys, "--config", str(config_file), "hash", "--text", "a")

        assert code == EXIT_SUCCESS
        assert out.strip() == to_hex(blake2s256(b"a"))

    def test_hash_file_sha256(self, capsys, config_file, tmp_path, monkeypatch):
        monkeypatch.setenv("ANCHOR_HASH_ALGORITHM", "sha256")
        doc = tmp_path / "doc.txt"
        doc.write_bytes(b"document body")

        code, out = _run(capsys, "--config", str(config_file), "hash", str(doc), "--json")

        assert code == EXIT_SUCCESS
        data = json.loads(out)
        assert data["algorithm"] == "sha256"
        assert data["hash"] == to_hex(sha256(b"document body"))

    def test_root(self, capsys, config_file, leaves, hex_leaves):
        code, out = _run(capsys, "--config", str(config_file), "root", *hex_leaves)

        assert code == EXIT_SUCCESS
        assert out.strip() == to_hex(compute_root(pack_leaves(leaves)))

    def test_root_from_file(self, capsys, config_file, tmp_path, leaves, hex_leaves):
        leaf_file = tmp_path / "leaves.txt"
        leaf_file.write_text("\n".join(hex_leaves) + "\n")

        code, out = _run(capsys, "--config", str(config_file), "root", "--from-file", str(leaf_file), "--json")

        assert code == EXIT_SUCCESS
        assert json.loads(out)["leaf_count"] == 4

    def test_root_empty_batch(self, capsys, config_file):
        code, _ = _run(capsys, "--config", str(config_file), "root")

        assert code == EXIT_RUNTIME_ERROR

    def test_prove_and_verify(self, capsys, config_file, tmp_path, hex_leaves):
        code, out = _run(capsys, "--config", str(config_file), "prove", "2", *hex_leaves)
        assert code == EXIT_SUCCESS

        proof_file = tmp_path / "proof.json"
        proof_file.write_text(out)
        root = json.loads(out)["root"]

        code, out = _run(
            capsys, "--config", str(config_file),
            "verify", hex_leaves[2], "--proof", str(proof_file), "--root", root,
        )
        assert code == EXIT_SUCCESS
        assert out.strip() == "VALID"

        code, _ = _run(
            capsys, "--config", str(config_file),
            "verify", hex_leaves[1], "--proof", str(proof_file), "--root", root,
        )
        assert code == EXIT_VERIFICATION_FAILED

    def test_prove_index_out_of_range(self, capsys, config_file, hex_leaves):
        code, _ = _run(capsys, "--config", str(config_file), "prove", "4", *hex_leaves)

        assert code == EXIT_RUNTIME_ERROR


class TestLedgerCommands:

    def test_anchor_then_check(self, capsys, config_file, tmp_path, hex_leaves):
        out_file = tmp_path / "receipt.json"

        code, _ = _run(capsys, "--config", str(config_file), "anchor", *hex_leaves, "--out", str(out_file))
        assert code == EXIT_SUCCESS

        receipt = json.loads(out_file.read_text())
        assert len(receipt["proofs"]) == 4
        assert receipt["hash_algorithm"] == "blake2s"

        entry_file = tmp_path / "entry.json"
        entry_file.write_text(json.dumps(receipt["proofs"][1]))

        code, out = _run(
            capsys, "--config", str(config_file),
            "check", hex_leaves[1], "--proof", str(entry_file), "--json",
        )

        assert code == EXIT_SUCCESS
        data = json.loads(out)
        assert data["anchored"] is True
        assert data["record"]["root"] == receipt["root"]
        assert data["record"]["block_number"] == receipt["block_number"]

    def test_check_not_anchored(self, capsys, config_file):
        code, out = _run(capsys, "--config", str(config_file), "check", to_hex(blake2s256(b"never")))

        assert code == EXIT_VERIFICATION_FAILED
        assert out.strip() == "NOT ANCHORED"

    def test_single_leaf_round_trip(self, capsys, config_file):
        leaf = to_hex(blake2s256(b"single"))

        assert _run(capsys, "--config", str(config_file), "anchor", leaf)[0] == EXIT_SUCCESS
        assert _run(capsys, "--config", str(config_file), "check", leaf)[0] == EXIT_SUCCESS

    def test_anchor_bad_width(self, capsys, config_file, tmp_path):
        code, _ = _run(capsys, "--config", str(config_file), "anchor", "0xabcd")

        assert code == EXIT_RUNTIME_ERROR
        assert not (tmp_path / "anchors.jsonl").exists()

    def test_anchor_bad_hex(self, capsys, config_file):
        code, _ = _run(capsys, "--config", str(config_file), "anchor", "0xzz")

        assert code == EXIT_RUNTIME_ERROR


class TestWithoutConfigFile:
    """With no config file the CLI uses a file ledger in the working directory."""

    @pytest.fixture(autouse=True)
    def empty_workdir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            "anchor_cli.config.DEFAULT_CONFIG_PATHS",
            (tmp_path / "anchor.yaml", tmp_path / "anchor.json"),
        )

    def test_anchor_persists_between_runs(self, capsys, tmp_path, hex_leaves):
        code, out = _run(capsys, "anchor", hex_leaves[0])
        assert code == EXIT_SUCCESS
        assert (tmp_path / "anchors.jsonl").exists()

        code, out = _run(capsys, "check", hex_leaves[0])

        assert code == EXIT_SUCCESS
        assert out.startswith("Anchored in block 1")

    def test_effective_backend_is_file(self, capsys):
        code, out = _run(capsys, "config")

        assert code == EXIT_SUCCESS
        assert json.loads(out)["ledger"]["backend"] == "file"

    def test_memory_backend_refused(self, capsys, monkeypatch, tmp_path, hex_leaves):
        monkeypatch.setenv("ANCHOR_LEDGER_BACKEND", "memory")

        assert main(["anchor", hex_leaves[0]]) == EXIT_RUNTIME_ERROR
        assert main(["check", hex_leaves[0]]) == EXIT_RUNTIME_ERROR
        assert "does not persist" in capsys.readouterr().err
        assert not (tmp_path / "anchors.jsonl").exists()


class TestConfigCommand:

    def test_init_template(self, capsys, config_file):
        code, out = _run(capsys, "--config", str(config_file), "config", "--init")

        assert code == EXIT_SUCCESS
        assert "ledger:" in out

    def test_show_effective(self, capsys, config_file):
        code, out = _run(capsys, "--config", str(config_file), "config")

        assert code == EXIT_SUCCESS
        assert json.loads(out)["ledger"]["backend"] == "file"

    def test_missing_config_file(self, capsys, tmp_path):
        code, _ = _run(capsys, "--config", str(tmp_path / "missing.yaml"), "config")

        assert code == EXIT_RUNTIME_ERROR

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
