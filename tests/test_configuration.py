"""
Tests for the configuration loader.
"""

import logging

import numpy as np
import pytest

from qompute import Configuration, Ket, QomputeError, config, load_config


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run in an empty directory with no QOMPUTE_CONF set."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("QOMPUTE_CONF", raising=False)
    return tmp_path


@pytest.fixture
def restore_config():
    """Reset the shared configuration after the test."""
    yield config
    config.reset()


class TestConfiguration:
    """Tests for Configuration discovery and access."""

    def test_defaults(self, isolated):
        cfg = Configuration()
        assert cfg["numeric.precision"] == "double"
        assert cfg.dtype == np.complex128
        assert cfg.atol == 1e-8
        assert cfg.rtol == 1e-5

    def test_load_from_current_directory(self, isolated):
        (isolated / "qompute.toml").write_text('[numeric]\nprecision = "single"\natol = 1e-4\n')
        cfg = Configuration()
        assert cfg.dtype == np.complex64
        assert cfg.atol == 1e-4
        # unspecified keys keep their defaults
        assert cfg.rtol == 1e-5
        assert cfg.path.endswith("qompute.toml")

    def test_load_from_environment(self, isolated, tmp_path_factory, monkeypatch):
        conf_dir = tmp_path_factory.mktemp("conf")
        (conf_dir / "qompute.toml").write_text('[numeric]\nrtol = 0.5\n')
        monkeypatch.setenv("QOMPUTE_CONF", str(conf_dir))
        cfg = Configuration()
        assert cfg.rtol == 0.5

    def test_invalid_precision(self, isolated):
        """A rejected precision leaves the previous settings in place."""
        cfg = Configuration()
        with pytest.raises(QomputeError):
            cfg["numeric.precision"] = "quad"
        assert cfg["numeric.precision"] == "double"
        assert cfg.dtype == np.complex128

    def test_invalid_file(self, isolated):
        """A file with a bad precision is rejected as a whole."""
        bad = isolated / "bad.toml"
        bad.write_text('[numeric]\nprecision = "quad"\natol = 0.5\n')
        cfg = Configuration()
        with pytest.raises(QomputeError):
            cfg.load(str(bad))
        assert cfg["numeric.precision"] == "double"
        assert cfg.atol == 1e-8
        assert cfg.path is None

    def test_missing_key(self, isolated):
        assert Configuration()["numeric.nothing"] == {}

    def test_save_round_trip(self, isolated):
        cfg = Configuration()
        cfg["numeric.atol"] = 0.25
        cfg.save(str(isolated / "saved.toml"))
        other = Configuration()
        other.load(str(isolated / "saved.toml"))
        assert other.atol == 0.25


class TestSharedConfiguration:
    """Tests for the module-level configuration instance."""

    def test_precision_sets_default_dtype(self, restore_config):
        config["numeric.precision"] = "single"
        assert Ket([1, 2]).dtype == np.complex64
        config["numeric.precision"] = "double"
        assert Ket([1, 2]).dtype == np.complex128

    def test_tolerance_drives_allclose(self, restore_config):
        a, b = Ket([1]), Ket([1.01])
        assert not a.allclose(b)
        config["numeric.atol"] = 0.1
        assert a.allclose(b)

    def test_load_config_missing_file(self, isolated, restore_config, caplog):
        with caplog.at_level(logging.WARNING, logger="qompute.configuration"):
            load_config(str(isolated / "absent.toml"))
        assert "not found" in caplog.text
        assert config["numeric.precision"] == "double"

    def test_rejected_precision_keeps_constructors_working(self, restore_config):
        with pytest.raises(QomputeError):
            config["numeric.precision"] = "quad"
        assert config["numeric.precision"] == "double"
        assert Ket([1, 0]).dtype == np.complex128

    def test_rejected_file_keeps_constructors_working(self, isolated, restore_config):
        bad = isolated / "bad.toml"
        bad.write_text('[numeric]\nprecision = "quad"\n')
        with pytest.raises(QomputeError):
            config.load(str(bad))
        assert config["numeric.precision"] == "double"
        assert Ket([1, 0]) == Ket([1, 0])

    def test_non_string_precision(self, restore_config):
        with pytest.raises(QomputeError):
            config["numeric"] = 5
        assert config.dtype == np.complex128
