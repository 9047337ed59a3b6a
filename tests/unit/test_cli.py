"""
CLI Unit Tests
Tests for witness_cli: demo, root, prove, verify and config commands.
"""
import json

import pytest

from core.crypto.hashing import sha256, to_hex
from core.merkle import MerkleTree
from core.merkle.chunking import chunk_blob
from core.schemas.errors import ErrorCodes
from witness_cli.commands import demo as demo_module
from witness_cli.commands.demo import DEMO_BLOB, DemoSummary, run_demo
from witness_cli.main import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED, main
from witness_cli.output import format_proof, short_hex

from fixtures.common import make_blob


@pytest.fixture
def cli_env(clean_env, tmp_path):
    """Run CLI commands from an empty directory with no config files."""
    clean_env.chdir(tmp_path)
    clean_env.setenv("HOME", str(tmp_path))
    return tmp_path


def run_cli(*argv):
    return main(["--log-level", "ERROR", *argv])


@pytest.fixture
def blob_file(cli_env):
    path = cli_env / "account.bin"
    path.write_bytes(make_blob(num_chunks=5, chunk_size=32, tail=3))
    return path


class TestOutputHelpers:
    """Tests for witness_cli/output.py."""

    def test_short_hex(self):
        digest = sha256(b"x")

        assert short_hex(digest) == digest.hex()[:16]

    def test_format_proof(self):
        sibling = sha256(b"s")
        lines = format_proof([(sibling, True), (sibling, False)])

        assert lines == [
            f"  proof[0] sibling {short_hex(sibling)} is_left true",
            f"  proof[1] sibling {short_hex(sibling)} is_left false",
        ]


class TestDemo:
    """Tests for the demo command."""

    def test_run_demo(self):
        summary = run_demo(DEMO_BLOB, 32, 0)

        assert summary.applied
        assert summary.stale_proof_rejected
        assert summary.chunk_count == len(chunk_blob(DEMO_BLOB, 32))
        assert summary.initial_root == to_hex(MerkleTree.from_blob(DEMO_BLOB, 32).root())
        assert summary.final_root != summary.initial_root
        assert "errors" not in summary.to_dict()

    def test_demo_json(self, cli_env, capsys):
        exit_code = run_cli("demo", "--json")
        data = json.loads(capsys.readouterr().out)

        assert exit_code == EXIT_SUCCESS
        assert data["account_id"] == "Acct1"
        assert data["applied"] is True
        assert data["stale_proof_rejected"] is True
        assert len(data["proof"]) == MerkleTree.from_blob(DEMO_BLOB, 32).depth - 1

    def test_demo_human(self, cli_env, capsys):
        exit_code = run_cli("demo", "--blob", "hello world", "--chunk-size", "4")
        out = capsys.readouterr().out

        assert exit_code == EXIT_SUCCESS
        assert "Initial merkle root:" in out
        assert "Applied tx: merkle root ->" in out
        assert "proof[0] sibling" in out

    def test_demo_padded_index_not_applied(self, cli_env, capsys):
        # "hello" in 2-byte chunks: 3 chunks, 4 leaves
        exit_code = run_cli("demo", "--blob", "hello", "--chunk-size", "2", "--index", "3", "--json")
        data = json.loads(capsys.readouterr().out)

        assert exit_code == EXIT_RUNTIME_ERROR
        assert data["applied"] is False
        assert data["error_code"] == "PROOF_INDEX_OUT_OF_RANGE"
        assert data["errors"][0].startswith("PROOF_INDEX_OUT_OF_RANGE")

    def test_demo_rejected_proof_exits_verification_failed(self, cli_env, capsys, monkeypatch):
        rejected = DemoSummary(
            error_code=ErrorCodes.MERKLE_PROOF_INVALID,
            errors=["MERKLE_PROOF_INVALID: proof verification failed"],
        )
        monkeypatch.setattr(demo_module, "run_demo", lambda blob, chunk_size, leaf_index: rejected)

        assert run_cli("demo", "--json") == EXIT_VERIFICATION_FAILED
        assert json.loads(capsys.readouterr().out)["error_code"] == ErrorCodes.MERKLE_PROOF_INVALID

    def test_demo_index_outside_tree(self, cli_env, capsys):
        exit_code = run_cli("demo", "--index", "99")

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "Error" in capsys.readouterr().err

    def test_demo_zero_chunk_size(self, cli_env, capsys):
        assert run_cli("demo", "--chunk-size", "0") == EXIT_RUNTIME_ERROR


class TestRootCommand:
    """Tests for the root command."""

    def test_root_json(self, blob_file, capsys):
        exit_code = run_cli("root", str(blob_file), "--json")
        data = json.loads(capsys.readouterr().out)
        tree = MerkleTree.from_blob(blob_file.read_bytes(), 32)

        assert exit_code == EXIT_SUCCESS
        assert data["root"] == to_hex(tree.root())
        assert data["chunk_count"] == 6
        assert data["leaf_count"] == 8

    def test_root_uses_config_chunk_size(self, blob_file, capsys):
        (blob_file.parent / "witness.yaml").write_text("ledger:\n  chunk_size: 16\n")

        run_cli("root", str(blob_file), "--json")
        data = json.loads(capsys.readouterr().out)

        assert data["chunk_size"] == 16
        assert data["root"] == to_hex(MerkleTree.from_blob(blob_file.read_bytes(), 16).root())

    def test_root_missing_file(self, cli_env, capsys):
        assert run_cli("root", "missing.bin") == EXIT_RUNTIME_ERROR
        assert "File not found" in capsys.readouterr().err


class TestProveVerify:
    """Tests for prove and verify."""

    def test_prove_then_verify(self, blob_file, capsys):
        proof_path = blob_file.parent / "proof.json"

        assert run_cli("prove", str(blob_file), "--index", "2", "--out", str(proof_path)) == EXIT_SUCCESS
        capsys.readouterr()

        exit_code = run_cli("verify", str(blob_file), "--proof", str(proof_path), "--json")
        data = json.loads(capsys.readouterr().out)

        assert exit_code == EXIT_SUCCESS
        assert data["ok"] is True
        assert data["leaf_index"] == 2

    def test_prove_to_stdout(self, blob_file, capsys):
        assert run_cli("prove", str(blob_file), "-i", "0") == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)

        assert data["leaf_index"] == 0
        assert data["chunk_size"] == 32
        assert len(data["steps"]) == 3

    def test_prove_verbose_writes_skeleton_to_stderr(self, blob_file, capsys):
        run_cli("prove", str(blob_file), "-i", "0", "--verbose")

        assert "proof[0] sibling" in capsys.readouterr().err

    @pytest.mark.parametrize("index", ["-1", "6", "7"])
    def test_prove_index_out_of_range(self, blob_file, capsys, index):
        assert run_cli("prove", str(blob_file), "--index", index) == EXIT_RUNTIME_ERROR

    def test_verify_wrong_root(self, blob_file, capsys):
        proof_path = blob_file.parent / "proof.json"
        run_cli("prove", str(blob_file), "--index", "1", "--out", str(proof_path))

        exit_code = run_cli(
            "verify", str(blob_file), "--proof", str(proof_path),
            "--root", to_hex(sha256(b"wrong")),
        )

        assert exit_code == EXIT_VERIFICATION_FAILED
        assert "ok: false" in capsys.readouterr().out

    def test_verify_modified_file(self, blob_file, capsys):
        proof_path = blob_file.parent / "proof.json"
        run_cli("prove", str(blob_file), "--index", "0", "--out", str(proof_path))
        data = bytearray(blob_file.read_bytes())
        data[0] ^= 0xFF
        blob_file.write_bytes(bytes(data))

        assert run_cli("verify", str(blob_file), "--proof", str(proof_path)) == EXIT_VERIFICATION_FAILED

    def test_verify_bad_proof_file(self, blob_file, capsys):
        proof_path = blob_file.parent / "proof.json"
        proof_path.write_text(json.dumps({"chunk_size": 32, "leaf_index": 0, "root": "0x12"}))

        assert run_cli("verify", str(blob_file), "--proof", str(proof_path)) == EXIT_RUNTIME_ERROR
        assert "Error loading proof" in capsys.readouterr().err

    def test_verify_missing_proof(self, blob_file, capsys):
        assert run_cli("verify", str(blob_file), "--proof", "nope.json") == EXIT_RUNTIME_ERROR


class TestConfigCommand:
    """Tests for the config command."""

    def test_init_creates_template(self, cli_env, capsys):
        assert run_cli("config", "--init") == EXIT_SUCCESS
        assert (cli_env / "witness.yaml").exists()

    def test_init_refuses_to_overwrite(self, cli_env, capsys):
        (cli_env / "witness.yaml").write_text("ledger:\n  chunk_size: 8\n")

        assert run_cli("config", "--init") == EXIT_RUNTIME_ERROR
        assert (cli_env / "witness.yaml").read_text() == "ledger:\n  chunk_size: 8\n"

    def test_show(self, cli_env, capsys):
        cli_env.joinpath("witness.yaml").write_text("ledger:\n  chunk_size: 8\n")

        assert run_cli("config", "--show") == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)

        assert data["ledger"]["chunk_size"] == 8

    def test_bad_config_file(self, cli_env, capsys):
        assert run_cli("--config", str(cli_env / "missing.yaml"), "root", "x") == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err


class TestNoCommand:
    def test_no_command_prints_help(self, cli_env, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()
