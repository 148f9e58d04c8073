#!/usr/bin/env python3
"""
Tests for the command-line interface.
"""
import json
import logging
import tempfile
from pathlib import Path

import pytest

from const_value.cli import load_json, main, resolve_type
from sample_messages import Foo


@pytest.fixture
def temp_files():
    """Create temporary files for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_dir_path = Path(temp_dir)

        valid_data_file = temp_dir_path / "valid_data.json"
        with open(valid_data_file, "w", encoding="utf-8") as f:
            json.dump({"bar": "quux", "baz": True}, f)

        invalid_data_file = temp_dir_path / "invalid_data.json"
        with open(invalid_data_file, "w", encoding="utf-8") as f:
            json.dump({"bar": "quux", "baz": False}, f)

        extra_data_file = temp_dir_path / "extra_data.json"
        with open(extra_data_file, "w", encoding="utf-8") as f:
            json.dump({"bar": "quux", "baz": True, "extra": 1}, f)

        message_file = temp_dir_path / "message.json"
        with open(message_file, "w", encoding="utf-8") as f:
            json.dump({"tag": 3}, f)

        invalid_json_file = temp_dir_path / "invalid_json.json"
        with open(invalid_json_file, "w", encoding="utf-8") as f:
            f.write("{invalid json")

        yield {
            "temp_dir": temp_dir_path,
            "valid_data_file": valid_data_file,
            "invalid_data_file": invalid_data_file,
            "extra_data_file": extra_data_file,
            "message_file": message_file,
            "invalid_json_file": invalid_json_file,
        }


def test_valid_file(temp_files, caplog):
    """A matching file exits with 0."""
    caplog.set_level(logging.INFO, logger="const_value")
    assert main([str(temp_files["valid_data_file"]), "sample_messages:Foo"]) == 0
    assert "Decoded" in caplog.text


def test_invalid_file(temp_files, caplog):
    """A mismatching file exits with 1 and logs each error."""
    assert main([str(temp_files["invalid_data_file"]), "sample_messages:Foo"]) == 1
    assert "Decoding failed" in caplog.text
    assert "Error at '/baz': Expected constant value true, got false" in caplog.text


def test_deny_unknown_fields(temp_files, caplog):
    """--deny-unknown-fields rejects extra keys."""
    args = [str(temp_files["extra_data_file"]), "sample_messages:Foo"]
    assert main(args) == 0
    assert main(args + ["--deny-unknown-fields"]) == 1
    assert "Unknown field 'extra'" in caplog.text


def test_union_failure_verbose(temp_files, caplog):
    """Verbose output includes why each variant was rejected."""
    caplog.set_level(logging.DEBUG, logger="const_value")
    assert main([str(temp_files["message_file"]), "sample_messages:Message", "-v"]) == 1
    assert "does not match any of the variants" in caplog.text
    assert "variant 0" in caplog.text
    assert "variant 1" in caplog.text


def test_missing_file(temp_files, caplog):
    """A missing data file exits with 2."""
    missing = temp_files["temp_dir"] / "missing.json"
    assert main([str(missing), "sample_messages:Foo"]) == 2
    assert "File not found" in caplog.text


def test_invalid_json(temp_files, caplog):
    """A malformed data file exits with 2."""
    assert main([str(temp_files["invalid_json_file"]), "sample_messages:Foo"]) == 2
    assert "Failed to parse JSON" in caplog.text


@pytest.mark.parametrize("type_spec", [
    "sample_messages",
    "sample_messages:Nope",
    "no_such_module_anywhere:Foo",
    ":Foo",
])
def test_bad_type(temp_files, caplog, type_spec):
    """Unresolvable type references exit with 2."""
    assert main([str(temp_files["valid_data_file"]), type_spec]) == 2


@pytest.mark.parametrize("extra_args", [[], ["--schema"]])
def test_undecodable_type(temp_files, caplog, extra_args):
    """A reference that imports but is not a decodable type exits with 2."""
    args = [str(temp_files["valid_data_file"]), "json:dumps"] + extra_args
    assert main(args) == 2
    assert "dumps" in caplog.text


def test_schema_output(temp_files, capsys):
    """--schema prints the JSON Schema for the type."""
    assert main([str(temp_files["valid_data_file"]), "sample_messages:Foo", "--schema"]) == 0
    schema = json.loads(capsys.readouterr().out)
    assert schema["title"] == "Foo"
    assert schema["properties"]["baz"] == {"type": "boolean", "const": True}


def test_resolve_type():
    """Type references resolve through the module and qualified name."""
    assert resolve_type("sample_messages:Foo") is Foo
    with pytest.raises(ValueError, match="module:QualName"):
        resolve_type("Foo")


def test_load_json(temp_files):
    """load_json reads files and reports problems."""
    assert load_json(temp_files["valid_data_file"]) == {"bar": "quux", "baz": True}
    with pytest.raises(FileNotFoundError):
        load_json(temp_files["temp_dir"] / "missing.json")
    with pytest.raises(json.JSONDecodeError):
        load_json(temp_files["invalid_json_file"])
