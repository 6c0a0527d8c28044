"""Tests for the package-lock schema validator."""

import json

import pytest

from pnpm_snyk.core import convert
from pnpm_snyk.validators.package_lock import main, validate_package_lock


class TestValidatePackageLock:
    def test_converted_lockfile_is_valid(self, sample_lockfile):
        validate_package_lock(convert(sample_lockfile).to_dict())

    def test_dev_false_is_rejected(self):
        doc = {"requires": True, "lockfileVersion": 1, "dependencies": {"a": {"version": "1.0.0", "dev": False}}}
        with pytest.raises(ValueError, match=r"a \[dev\]"):
            validate_package_lock(doc)

    def test_null_integrity_is_rejected(self):
        doc = {"requires": True, "lockfileVersion": 1, "dependencies": {"a": {"version": "1.0.0", "integrity": None}}}
        with pytest.raises(ValueError):
            validate_package_lock(doc)

    def test_wrong_lockfile_version(self):
        with pytest.raises(ValueError, match="lockfileVersion"):
            validate_package_lock({"requires": True, "lockfileVersion": 2, "dependencies": {}})

    def test_nested_record_fields_are_restricted(self):
        doc = {
            "requires": True,
            "lockfileVersion": 1,
            "dependencies": {"a": {"version": "1.0.0", "dependencies": {"b": {"version": "2.0.0", "requires": {}}}}},
        }
        with pytest.raises(ValueError, match=r"a > b: Additional properties"):
            validate_package_lock(doc)

    def test_missing_envelope_field_names_the_document(self):
        with pytest.raises(ValueError, match="document: 'requires' is a required property"):
            validate_package_lock({"lockfileVersion": 1, "dependencies": {}})


class TestMain:
    def test_valid_file(self, tmp_path, sample_lockfile, capsys):
        path = tmp_path / "package-lock.json"
        lock = convert(sample_lockfile)
        path.write_text(json.dumps(lock.to_dict()), encoding="utf-8")
        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        assert f"{len(lock.dependencies)} top-level dependencies, layout OK" in out

    def test_defaults_to_working_directory(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "package-lock.json").write_text(
            json.dumps({"requires": True, "lockfileVersion": 1, "dependencies": {}}), encoding="utf-8"
        )
        assert main([]) == 0
        assert capsys.readouterr().out.startswith("package-lock.json: 0 top-level")

    def test_invalid_file_lists_each_record(self, tmp_path, capsys):
        path = tmp_path / "package-lock.json"
        doc = {"requires": True, "lockfileVersion": 1, "dependencies": {"a": {"version": "1.0.0", "dev": False}}}
        path.write_text(json.dumps(doc), encoding="utf-8")
        assert main([str(path)]) == 1
        err = capsys.readouterr().err
        assert "is not a lockfileVersion 1 package-lock" in err
        assert "  a [dev]: True was expected" in err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 1
        assert "does not exist; run the conversion first" in capsys.readouterr().err

    def test_bad_json(self, tmp_path, capsys):
        path = tmp_path / "package-lock.json"
        path.write_text("{", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "is not JSON (line 1, column 2)" in capsys.readouterr().err
