"""Tests for configuration file support."""

import warnings

import pytest

from idf_tools.config import (
    Config,
    DefaultsConfig,
    GeometryConfig,
    RewriteConfig,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)
from idf_tools.exceptions import ConfigurationError


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr("idf_tools.config.USER_CONFIG_PATH", tmp_path / "no-exist.toml")


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_defaults_config_defaults(self):
        """DefaultsConfig has correct defaults."""
        config = DefaultsConfig()
        assert config.verbose is False
        assert config.quiet is False

    def test_rewrite_config_defaults(self):
        """RewriteConfig changes nothing by default."""
        config = RewriteConfig()
        assert config.source_prefix == ""
        assert config.remove_test_points is False
        assert config.part_numbers_from == "keep"
        assert config.dedupe_definitions is False

    def test_geometry_config_defaults(self):
        assert GeometryConfig().tolerance_mm == 1e-4

    def test_config_defaults(self):
        """Config has correct nested defaults."""
        config = Config()
        assert isinstance(config.defaults, DefaultsConfig)
        assert isinstance(config.rewrite, RewriteConfig)
        assert isinstance(config.geometry, GeometryConfig)


class TestConfigDiscovery:
    """Test config file discovery."""

    def test_find_project_config_in_current_dir(self, tmp_path):
        """Find config in current directory."""
        config_file = tmp_path / ".idf-tools.toml"
        config_file.write_text("[defaults]\nverbose = true\n")
        assert _find_project_config(tmp_path) == config_file.resolve()

    def test_find_non_hidden_name(self, tmp_path):
        config_file = tmp_path / "idf-tools.toml"
        config_file.write_text("")
        assert _find_project_config(tmp_path) == config_file.resolve()

    def test_find_project_config_in_parent(self, tmp_path):
        """Walk up to a parent directory."""
        config_file = tmp_path / ".idf-tools.toml"
        config_file.write_text("")
        subdir = tmp_path / "boards" / "rev2"
        subdir.mkdir(parents=True)
        assert _find_project_config(subdir) == config_file.resolve()

    def test_stop_at_git_root(self, tmp_path):
        """Do not search past a .git directory."""
        (tmp_path / ".idf-tools.toml").write_text("")
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        assert _find_project_config(repo) is None


class TestConfigLoading:
    """Test loading and merging config files."""

    def test_load_toml_file(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text("[geometry]\ntolerance_mm = 0.01\n")
        assert _load_toml_file(path) == {"geometry": {"tolerance_mm": 0.01}}

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text("[defaults\n")
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            _load_toml_file(path)

    def test_load_defaults_only(self, tmp_path, monkeypatch, no_user_config):
        """No files means default settings."""
        (tmp_path / ".git").mkdir()
        monkeypatch.chdir(tmp_path)
        config = Config.load()
        assert config == Config()
        assert config.get_source("rewrite.source_prefix") == "default"

    def test_load_project_config(self, tmp_path, no_user_config):
        (tmp_path / ".idf-tools.toml").write_text(
            "[rewrite]\n"
            'source_prefix = "PCB: "\n'
            "remove_test_points = true\n"
            'part_numbers_from = "package"\n'
            "[geometry]\n"
            "tolerance_mm = 0.05\n"
        )
        config = Config.load(tmp_path)
        assert config.rewrite.source_prefix == "PCB: "
        assert config.rewrite.remove_test_points is True
        assert config.rewrite.part_numbers_from == "package"
        assert config.rewrite.dedupe_definitions is False
        assert config.geometry.tolerance_mm == 0.05

    def test_integer_tolerance(self, tmp_path, no_user_config):
        (tmp_path / ".idf-tools.toml").write_text("[geometry]\ntolerance_mm = 1\n")
        assert Config.load(tmp_path).geometry.tolerance_mm == 1

    def test_load_user_config(self, tmp_path, monkeypatch):
        user_config = tmp_path / "user.toml"
        user_config.write_text("[defaults]\nverbose = true\n")
        monkeypatch.setattr("idf_tools.config.USER_CONFIG_PATH", user_config)
        project = tmp_path / "project"
        (project / ".git").mkdir(parents=True)

        config = Config.load(project)
        assert config.defaults.verbose is True

    def test_project_overrides_user(self, tmp_path, monkeypatch):
        user_config = tmp_path / "user.toml"
        user_config.write_text('[rewrite]\nsource_prefix = "user: "\ndedupe_definitions = true\n')
        monkeypatch.setattr("idf_tools.config.USER_CONFIG_PATH", user_config)
        project = tmp_path / "project"
        project.mkdir()
        (project / ".idf-tools.toml").write_text('[rewrite]\nsource_prefix = "project: "\n')

        config = Config.load(project)
        assert config.rewrite.source_prefix == "project: "
        assert config.rewrite.dedupe_definitions is True

    def test_get_source_tracking(self, tmp_path, monkeypatch):
        user_config = tmp_path / "user.toml"
        user_config.write_text("[defaults]\nquiet = true\n")
        monkeypatch.setattr("idf_tools.config.USER_CONFIG_PATH", user_config)
        project = tmp_path / "project"
        project.mkdir()
        project_config = project / ".idf-tools.toml"
        project_config.write_text("[defaults]\nverbose = true\n")

        config = Config.load(project)
        assert config.get_source("defaults.quiet") == str(user_config)
        assert config.get_source("defaults.verbose") == str(project_config.resolve())
        assert config.get_source("rewrite.source_prefix") == "default"


class TestConfigValidation:
    """Test value checking and unknown key warnings."""

    def test_warn_unknown_section(self, tmp_path, no_user_config):
        (tmp_path / ".idf-tools.toml").write_text("[routing]\nlayers = 4\n")
        with pytest.warns(UserWarning, match="Unknown config key 'routing'"):
            Config.load(tmp_path)

    def test_warn_unknown_key_in_section(self, tmp_path, no_user_config):
        (tmp_path / ".idf-tools.toml").write_text("[rewrite]\ncolour = 'red'\n")
        with pytest.warns(UserWarning, match="rewrite.colour"):
            Config.load(tmp_path)

    def test_known_keys_do_not_warn(self, tmp_path, no_user_config):
        (tmp_path / ".idf-tools.toml").write_text("[defaults]\nverbose = true\n")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            Config.load(tmp_path)

    def test_wrong_type(self, tmp_path, no_user_config):
        (tmp_path / ".idf-tools.toml").write_text('[defaults]\nverbose = "yes"\n')
        with pytest.raises(ConfigurationError, match="defaults.verbose"):
            Config.load(tmp_path)

    def test_bool_is_not_a_tolerance(self, tmp_path, no_user_config):
        (tmp_path / ".idf-tools.toml").write_text("[geometry]\ntolerance_mm = true\n")
        with pytest.raises(ConfigurationError):
            Config.load(tmp_path)

    def test_invalid_part_number_source(self, tmp_path, no_user_config):
        (tmp_path / ".idf-tools.toml").write_text('[rewrite]\npart_numbers_from = "bom"\n')
        with pytest.raises(ConfigurationError, match="part_numbers_from") as exc:
            Config.load(tmp_path)
        assert "geometry" in exc.value.context["available"]


class TestTemplate:
    """Test template generation."""

    def test_template_is_valid_toml(self, tmp_path):
        path = tmp_path / "template.toml"
        path.write_text(generate_template())
        # Every option is commented out
        assert _load_toml_file(path) == {"defaults": {}, "rewrite": {}, "geometry": {}}

    def test_template_mentions_every_key(self):
        template = generate_template()
        for key in (
            "verbose",
            "quiet",
            "source_prefix",
            "remove_test_points",
            "part_numbers_from",
            "dedupe_definitions",
            "tolerance_mm",
        ):
            assert key in template


class TestGetConfigPaths:
    """Test get_config_paths."""

    def test_returns_none_for_missing_files(self, tmp_path, monkeypatch, no_user_config):
        (tmp_path / ".git").mkdir()
        monkeypatch.chdir(tmp_path)
        assert get_config_paths() == {"user": None, "project": None}

    def test_finds_project_config(self, tmp_path, monkeypatch, no_user_config):
        config_file = tmp_path / ".idf-tools.toml"
        config_file.write_text("")
        monkeypatch.chdir(tmp_path)
        assert get_config_paths()["project"] == config_file.resolve()
