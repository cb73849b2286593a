"""
CLI Tests

Runs arbor_cli.main.main() in-process:
1. root prints the expected root for lines / json / hex leaf files
2. prove writes a document that verify accepts
3. verify exits 2 on a wrong leaf or a foreign root
4. Bad input exits 1
5. config --init / --show
"""
import io
import json

import pytest

from arbor.crypto.hashing import sha256, to_hex
from arbor.merkle import MerkleTree
from arbor.schemas.proof import InclusionProof
from arbor_cli.leaves import LeafInputError, parse_leaves
from arbor_cli.main import create_parser, main

from fixtures.common import H, make_letter_leaves, merge


@pytest.fixture
def workdir(tmp_path, clean_env):
    """Run inside an empty directory so no stray arbor.yaml is picked up."""
    clean_env.chdir(tmp_path)
    clean_env.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def letters_file(workdir):
    path = workdir / "leaves.txt"
    path.write_text("A\nB\nC\nD\nE\n")
    return path


class TestParseLeaves:
    """Tests for arbor_cli.leaves.parse_leaves."""

    def test_lines(self):
        assert parse_leaves("A\nB\n") == [b"A", b"B"]

    def test_lines_crlf(self):
        assert parse_leaves("A\r\nB\r\n") == [b"A", b"B"]

    def test_lines_keeps_inner_empty_leaf(self):
        assert parse_leaves("A\n\nB") == [b"A", b"", b"B"]

    def test_lines_empty_text(self):
        assert parse_leaves("") == []

    def test_lines_encoding(self):
        assert parse_leaves("é", encoding="latin-1") == [b"\xe9"]

    def test_json(self):
        assert parse_leaves('["A", {"b": 1, "a": 2}, 3]', fmt="json") == [
            b"A", b'{"a":2,"b":1}', b"3",
        ]

    def test_json_not_array(self):
        with pytest.raises(LeafInputError, match="array"):
            parse_leaves('{"a": 1}', fmt="json")

    def test_json_invalid(self):
        with pytest.raises(LeafInputError, match="Invalid JSON"):
            parse_leaves("[1,", fmt="json")

    def test_hex(self):
        assert parse_leaves("0x41\n\n0x4243\n", fmt="hex") == [b"A", b"BC"]

    def test_hex_bad_line(self):
        with pytest.raises(LeafInputError, match="Line 2"):
            parse_leaves("0x41\nzz\n", fmt="hex")

    def test_lines_unencodable(self):
        with pytest.raises(LeafInputError, match="Leaf 1 cannot be encoded as ascii"):
            parse_leaves("A\né\n", encoding="ascii")

    def test_json_unencodable(self):
        with pytest.raises(LeafInputError, match="ascii"):
            parse_leaves('["é"]', fmt="json", encoding="ascii")

    def test_unknown_format(self):
        with pytest.raises(LeafInputError):
            parse_leaves("A", fmt="csv")


class TestParser:
    """Tests for create_parser()."""

    def test_prove_requires_index(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["prove", "leaves.txt"])

    def test_verify_requires_leaf(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["verify", "proof.json"])

    def test_verify_leaf_options_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["verify", "p.json", "--leaf", "A", "--leaf-hex", "0x41"])

    def test_unknown_hash_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["root", "leaves.txt", "--hash", "md5"])

    def test_no_command(self, workdir, capsys):
        assert main([]) == 1


class TestRootCommand:
    """Tests for `arbor root`."""

    def test_root_lines(self, letters_file, capsys):
        assert main(["root", str(letters_file)]) == 0
        out = capsys.readouterr().out
        expected = MerkleTree(make_letter_leaves(5)).get_root()
        assert "leaves: 5" in out
        assert "depth: 4" in out
        assert "hash: keccak256" in out
        assert f"root: {to_hex(expected)}" in out

    def test_root_json_output(self, letters_file, capsys):
        assert main(["root", str(letters_file), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["leaf_count"] == 5
        assert data["root"] == to_hex(MerkleTree(make_letter_leaves(5)).get_root())

    def test_root_hex_format(self, workdir, capsys):
        path = workdir / "leaves.hex"
        path.write_text("0x41\n0x42\n")
        assert main(["root", str(path), "--format", "hex", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["root"] == to_hex(merge(H("A"), H("B")))

    def test_root_json_format(self, workdir, capsys):
        path = workdir / "leaves.json"
        path.write_text('["A", "B", "C"]')
        assert main(["root", str(path), "-f", "json", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["root"] == to_hex(merge(merge(H("A"), H("B")), H("C")))

    def test_root_with_sha256(self, letters_file, capsys):
        assert main(["root", str(letters_file), "--hash", "sha256", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["hash_algorithm"] == "sha256"
        expected = MerkleTree(make_letter_leaves(5), hash_fn=sha256).get_root()
        assert data["root"] == to_hex(expected)

    def test_root_hash_from_env(self, letters_file, clean_env, capsys):
        clean_env.setenv("ARBOR_HASH_ALGORITHM", "sha256")
        assert main(["root", str(letters_file), "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["hash_algorithm"] == "sha256"

    def test_root_from_stdin(self, workdir, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("A\nB\n"))
        assert main(["root", "-", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["root"] == to_hex(merge(H("A"), H("B")))

    def test_root_empty_file(self, workdir, capsys):
        path = workdir / "empty.txt"
        path.write_text("")
        assert main(["root", str(path)]) == 1
        assert "empty" in capsys.readouterr().err

    def test_root_missing_file(self, workdir, capsys):
        assert main(["root", str(workdir / "missing.txt")]) == 1
        assert "not found" in capsys.readouterr().err


class TestProveAndVerify:
    """Tests for `arbor prove` and `arbor verify`."""

    def test_prove_to_stdout(self, letters_file, capsys):
        assert main(["prove", str(letters_file), "--index", "4"]) == 0
        doc = InclusionProof.model_validate_json(capsys.readouterr().out)
        assert doc.leaf_index == 4
        assert doc.leaf_count == 5
        assert len(doc.steps) == 1

    def test_prove_to_file(self, letters_file, workdir, capsys):
        out = workdir / "proofs" / "e.json"
        assert main(["prove", str(letters_file), "-i", "4", "-o", str(out)]) == 0
        printed = capsys.readouterr().out
        assert f"proof: {out}" in printed
        assert "steps: 1" in printed
        assert InclusionProof.model_validate_json(out.read_text()).leaf_index == 4

    def test_prove_out_of_range(self, letters_file, capsys):
        assert main(["prove", str(letters_file), "--index", "5"]) == 1
        assert "out of range" in capsys.readouterr().err

    def test_prove_then_verify(self, letters_file, workdir, capsys):
        out = workdir / "proof.json"
        assert main(["prove", str(letters_file), "-i", "2", "-o", str(out)]) == 0
        capsys.readouterr()

        assert main(["verify", str(out), "--leaf", "C"]) == 0
        printed = capsys.readouterr().out
        assert "valid: true" in printed
        assert "(document)" in printed

    def test_verify_with_trusted_root_json(self, letters_file, workdir, capsys):
        out = workdir / "proof.json"
        main(["prove", str(letters_file), "-i", "1", "-o", str(out)])
        capsys.readouterr()

        root = to_hex(MerkleTree(make_letter_leaves(5)).get_root())
        assert main(["verify", str(out), "--leaf-hex", "0x42", "--root", root, "--json"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is True
        assert report["leaf_hash_ok"] is True
        assert report["root_source"] == "argument"
        assert report["computed_root"] == root
        assert "errors" not in report

    def test_verify_wrong_leaf(self, letters_file, workdir, capsys):
        out = workdir / "proof.json"
        main(["prove", str(letters_file), "-i", "1", "-o", str(out)])
        capsys.readouterr()

        assert main(["verify", str(out), "--leaf", "Z", "--json"]) == 2
        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is False
        assert report["leaf_hash_ok"] is False
        assert len(report["errors"]) == 2

    def test_verify_foreign_root(self, letters_file, workdir, capsys):
        out = workdir / "proof.json"
        main(["prove", str(letters_file), "-i", "0", "-o", str(out)])
        capsys.readouterr()

        other_root = to_hex(MerkleTree(make_letter_leaves(6)).get_root())
        assert main(["verify", str(out), "--leaf", "A", "--root", other_root]) == 2
        assert "valid: false" in capsys.readouterr().out

    def test_verify_uses_document_hash(self, letters_file, workdir, capsys):
        out = workdir / "proof.json"
        main(["prove", str(letters_file), "-i", "3", "--hash", "sha3_256", "-o", str(out)])
        capsys.readouterr()
        assert main(["verify", str(out), "--leaf", "D"]) == 0

    def test_verify_missing_proof(self, workdir, capsys):
        assert main(["verify", str(workdir / "none.json"), "--leaf", "A"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_verify_invalid_document(self, workdir, capsys):
        path = workdir / "bad.json"
        path.write_text('{"leaf_index": 0}')
        assert main(["verify", str(path), "--leaf", "A"]) == 1
        assert "Invalid proof document" in capsys.readouterr().err

    def test_verify_folds_proof_once(self, letters_file, workdir, monkeypatch, capsys):
        from arbor.merkle import MerkleVerifier

        def _fail(*args, **kwargs):
            raise AssertionError("proof folded a second time")

        out = workdir / "proof.json"
        main(["prove", str(letters_file), "-i", "2", "-o", str(out)])
        capsys.readouterr()
        monkeypatch.setattr(MerkleVerifier, "verify_inclusion_proof", staticmethod(_fail))
        assert main(["verify", str(out), "--leaf", "C"]) == 0

    def test_verify_unencodable_leaf(self, letters_file, workdir, clean_env, capsys):
        out = workdir / "proof.json"
        main(["prove", str(letters_file), "-i", "0", "-o", str(out)])
        capsys.readouterr()
        clean_env.setenv("ARBOR_LEAF_ENCODING", "ascii")
        assert main(["verify", str(out), "--leaf", "é"]) == 1
        assert "ascii" in capsys.readouterr().err

    def test_root_unencodable_leaf(self, workdir, clean_env, capsys):
        path = workdir / "leaves.txt"
        path.write_text("A\né\n", encoding="utf-8")
        clean_env.setenv("ARBOR_LEAF_ENCODING", "ascii")
        assert main(["root", str(path)]) == 1
        assert "Leaf 1 cannot be encoded" in capsys.readouterr().err

    def test_verify_bad_leaf_hex(self, letters_file, workdir, capsys):
        out = workdir / "proof.json"
        main(["prove", str(letters_file), "-i", "0", "-o", str(out)])
        capsys.readouterr()
        assert main(["verify", str(out), "--leaf-hex", "41"]) == 1


class TestConfigCommand:
    """Tests for `arbor config`."""

    def test_init_creates_file(self, workdir, capsys):
        assert main(["config", "--init"]) == 0
        assert (workdir / "arbor.yaml").exists()

    def test_init_refuses_overwrite(self, workdir, capsys):
        (workdir / "arbor.yaml").write_text("tree:\n  hash_algorithm: sha256\n")
        assert main(["config", "--init"]) == 1

    def test_show_reflects_file(self, workdir, capsys):
        (workdir / "arbor.yaml").write_text("tree:\n  hash_algorithm: sha256\n")
        assert main(["config", "--show"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["tree"]["hash_algorithm"] == "sha256"

    def test_bad_config_file(self, workdir, capsys):
        (workdir / "arbor.yaml").write_text("tree:\n  hash_algorithm: md5\n")
        assert main(["config", "--show"]) == 1
        assert "Error loading configuration" in capsys.readouterr().err
