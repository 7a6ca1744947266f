import pytest

from py_servecalc import basicConfig, PreferredUnits, Unit, loadMetricUnits, loadImperialUnits
from py_servecalc.interface import Calculator, get_default_config

CONFIG_TOML = """
[pyserve.preferred_units]
velocity = 'kmh'
clearance = 'inch'

[pyserve.engine]
cPreferredDepthWide = 5.5
cStrictBracketing = true
"""


class TestConfigLoader:

    @pytest.mark.parametrize(
        "test_name, config_func, expected_velocity, expected_clearance",
        [
            ("manual", lambda: basicConfig(preferred_units={'velocity': Unit.KMH}), Unit.KMH, Unit.Centimeter),
            ("imperial", loadImperialUnits, Unit.MPH, Unit.Inch),
            ("metric", loadMetricUnits, Unit.KMH, Unit.Centimeter),
        ],
    )
    def test_preferred_units_load(self, test_name, config_func, expected_velocity, expected_clearance):
        PreferredUnits.restore_defaults()
        config_func()
        assert PreferredUnits.velocity == expected_velocity
        assert PreferredUnits.clearance == expected_clearance

    def test_load_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(CONFIG_TOML)
        basicConfig(str(path))
        assert PreferredUnits.velocity == Unit.KMH
        assert PreferredUnits.clearance == Unit.Inch
        assert get_default_config() == {'cPreferredDepthWide': 5.5, 'cStrictBracketing': True}
        calc = Calculator()
        assert calc.config is None
        assert calc._engine_instance.config.cPreferredDepthWide == 5.5
        assert calc._engine_instance.config.cStrictBracketing is True

    def test_discovers_dotfile_in_parent_dirs(self, tmp_path, monkeypatch):
        (tmp_path / ".pyserve.toml").write_text(CONFIG_TOML)
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        basicConfig()
        assert PreferredUnits.velocity == Unit.KMH

    def test_missing_sections_warn(self, tmp_path, caplog):
        path = tmp_path / "pyserve.toml"
        path.write_text("title = 'empty'\n")
        basicConfig(str(path))
        assert "no `pyserve` section" in caplog.text

    def test_file_and_mapping_conflict(self, tmp_path):
        with pytest.raises(ValueError):
            basicConfig(str(tmp_path / "x.toml"), preferred_units={'velocity': Unit.KMH})

    def test_engine_mapping(self):
        basicConfig(engine={'cServiceLineSafety': 0.2})
        assert Calculator()._engine_instance.config.cServiceLineSafety == 0.2

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            basicConfig(str(tmp_path / "missing.toml"))

    def test_misspelled_engine_key(self, tmp_path):
        path = tmp_path / "pyserve.toml"
        path.write_text("[pyserve.engine]\ncPreferedDepthT = 5.0\n")
        basicConfig(engine={'cServiceLineSafety': 0.2})
        with pytest.raises(TypeError):
            basicConfig(str(path))
        assert get_default_config() == {'cServiceLineSafety': 0.2}
