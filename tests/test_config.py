"""
Tests for configuration loading — script evaluation, descriptors, config.yml.
"""

import textwrap
from pathlib import Path

import pytest
import yaml

from goat.core.config.descriptor_loader import (
    load_package_manager,
    load_service_manager,
)
from goat.core.config.evaluator import evaluate_file
from goat.core.config.layout import Layout, ensure_directories
from goat.core.config.loader import generate_config, load_config
from goat.core.errors import (
    EvalError,
    FileAccessError,
    MissingField,
    NotFound,
    TypeMismatch,
)
from goat.core.models.config import DEFAULT_HOSTNAME


def _write(path: Path, content: str) -> Path:
    path.write_text(textwrap.dedent(content))
    return path


@pytest.fixture
def pacman_yml(tmp_path: Path) -> Path:
    return _write(tmp_path / "pacman.yml", """\
        binary_name: pacman
        install_command: pacman -S --noconfirm {}
        remove_command: pacman -Rns --noconfirm {}
        full_system_update_command: pacman -Syu --noconfirm
        list_explicit_packages_command: pacman -Qqe
        list_all_packages_command: pacman -Qq
        core_packages:
          - base
          - linux
    """)


# ── Evaluator ────────────────────────────────────────────────────────


class TestEvaluator:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(NotFound):
            evaluate_file(tmp_path / "nope.yml")

    def test_unsupported_suffix(self, tmp_path: Path):
        path = _write(tmp_path / "pacman.lua", "binary_name = 'pacman'\n")
        with pytest.raises(EvalError, match="Unsupported"):
            evaluate_file(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write(tmp_path / "bad.yml", "key: [unclosed\n")
        with pytest.raises(EvalError, match="Invalid YAML"):
            evaluate_file(path)

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "pacman.yml"
        path.write_bytes(b"binary_name: \xff\n")
        with pytest.raises(EvalError, match="Cannot read"):
            evaluate_file(path)

    def test_yaml_must_be_mapping(self, tmp_path: Path):
        path = _write(tmp_path / "list.yml", "- a\n- b\n")
        with pytest.raises(EvalError, match="mapping"):
            evaluate_file(path)

    def test_empty_yaml_has_no_values(self, tmp_path: Path):
        values = evaluate_file(_write(tmp_path / "empty.yml", ""))
        assert "anything" not in values

    def test_python_script(self, tmp_path: Path):
        path = _write(tmp_path / "apt.py", """\
            binary_name = "apt-get"
            core_packages = ["apt"] + ["dpkg"]
            _private = 1
        """)
        values = evaluate_file(path)
        assert values.get_string("binary_name") == "apt-get"
        assert values.get_string_list("core_packages") == ["apt", "dpkg"]

    def test_python_script_sees_goat_helper(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr("shutil.which", lambda name: "/bin/x" if name == "hostnamectl" else None)
        path = _write(tmp_path / "systemd.py", """\
            if goat.program_exists("hostnamectl"):
                hostname_reload_command = "hostnamectl hostname box"
            else:
                hostname_reload_command = "true"
        """)
        values = evaluate_file(path)
        assert values.get_string("hostname_reload_command") == "hostnamectl hostname box"

    def test_python_script_error(self, tmp_path: Path):
        path = _write(tmp_path / "broken.py", "raise RuntimeError('boom')\n")
        with pytest.raises(EvalError, match="boom"):
            evaluate_file(path)

    def test_typed_accessors(self, tmp_path: Path):
        path = _write(tmp_path / "values.yml", """\
            name: box
            count: 3
            items: [a, 1]
            flag: true
        """)
        values = evaluate_file(path)
        assert values.get_optional_string("missing") is None
        assert values.get_optional_string_list("missing") is None
        assert values.get_optional_bool("flag") is True
        assert values.get_optional_bool("missing", default=True) is True
        with pytest.raises(MissingField):
            values.get_string("missing")
        with pytest.raises(TypeMismatch):
            values.get_string("count")
        with pytest.raises(TypeMismatch):
            values.get_string_list("items")
        with pytest.raises(TypeMismatch):
            values.get_optional_bool("name")
        with pytest.raises(TypeMismatch):
            values.get_callable("name")

    def test_null_counts_as_absent(self, tmp_path: Path):
        values = evaluate_file(_write(tmp_path / "null.yml", "packages:\n"))
        assert values.get_optional_string_list("packages") is None


# ── Descriptors ──────────────────────────────────────────────────────


class TestDescriptorLoader:
    def test_load_package_manager(self, pacman_yml: Path):
        pm = load_package_manager(pacman_yml)
        assert pm.binary_name == "pacman"
        assert pm.install_command == "pacman -S --noconfirm {}"
        assert pm.list_all_packages_command == "pacman -Qq"
        assert pm.core_packages == ("base", "linux")

    def test_core_packages_optional(self, tmp_path: Path, pacman_yml: Path):
        data = yaml.safe_load(pacman_yml.read_text())
        del data["core_packages"]
        path = tmp_path / "minimal.yml"
        path.write_text(yaml.safe_dump(data))
        assert load_package_manager(path).core_packages == ()

    def test_missing_field(self, tmp_path: Path, pacman_yml: Path):
        data = yaml.safe_load(pacman_yml.read_text())
        del data["remove_command"]
        path = tmp_path / "partial.yml"
        path.write_text(yaml.safe_dump(data))
        with pytest.raises(MissingField) as exc:
            load_package_manager(path)
        assert exc.value.name == "remove_command"

    def test_type_mismatch(self, tmp_path: Path, pacman_yml: Path):
        data = yaml.safe_load(pacman_yml.read_text())
        data["core_packages"] = "base"
        path = tmp_path / "wrong.yml"
        path.write_text(yaml.safe_dump(data))
        with pytest.raises(TypeMismatch) as exc:
            load_package_manager(path)
        assert exc.value.name == "core_packages"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(NotFound):
            load_package_manager(tmp_path / "pacman.yml")

    def test_load_service_manager(self, tmp_path: Path):
        path = _write(tmp_path / "openrc.yml", """\
            binary_name: rc-service
            hostname_reload_command: rc-service hostname restart
        """)
        sm = load_service_manager(path)
        assert sm.binary_name == "rc-service"
        assert sm.hostname_reload_command == "rc-service hostname restart"

    def test_descriptor_from_python_script(self, tmp_path: Path):
        path = _write(tmp_path / "openrc.py", """\
            binary_name = "rc-service"
            hostname_reload_command = "rc-service " + "hostname restart"
        """)
        assert load_service_manager(path).hostname_reload_command == "rc-service hostname restart"


# ── config.yml ───────────────────────────────────────────────────────


class TestConfigLoader:
    def test_full_config(self, tmp_path: Path):
        path = _write(tmp_path / "config.yml", """\
            hostname: box1
            packages:
              - vim
              - git
            stages:
              - stages/motd.py
            reload_hostname: true
        """)
        config = load_config(path)
        assert config.hostname == "box1"
        assert config.packages == ["vim", "git"]
        assert config.stages == ["stages/motd.py"]
        assert config.reload_hostname is True

    def test_defaults(self, tmp_path: Path):
        config = load_config(_write(tmp_path / "config.yml", "{}\n"))
        assert config.hostname == DEFAULT_HOSTNAME
        assert config.packages is None
        assert config.stages == []
        assert config.reload_hostname is False

    def test_default_hostname_override(self, tmp_path: Path):
        config = load_config(_write(tmp_path / "config.yml", "{}\n"), default_hostname="live")
        assert config.hostname == "live"

    def test_hostname_is_stripped(self, tmp_path: Path):
        config = load_config(_write(tmp_path / "config.yml", 'hostname: " box1 "\n'))
        assert config.hostname == "box1"

    def test_blank_hostname_uses_default(self, tmp_path: Path):
        config = load_config(
            _write(tmp_path / "config.yml", 'hostname: "  "\n'), default_hostname="live"
        )
        assert config.hostname == "live"

    def test_invalid_utf8_config(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_bytes(b"hostname: \xff\n")
        with pytest.raises(EvalError):
            load_config(path)

    def test_empty_package_list_is_managed(self, tmp_path: Path):
        config = load_config(_write(tmp_path / "config.yml", "packages: []\n"))
        assert config.packages == []

    def test_missing_config(self, tmp_path: Path):
        with pytest.raises(NotFound):
            load_config(tmp_path / "config.yml")

    def test_bad_packages(self, tmp_path: Path):
        with pytest.raises(TypeMismatch):
            load_config(_write(tmp_path / "config.yml", "packages: vim\n"))

    def test_generate_then_load(self, tmp_path: Path):
        path = tmp_path / "etc" / "config.yml"
        generate_config(path, ["base", "vim"], "box1")
        assert path.read_text().startswith("# Generated by goat")

        config = load_config(path)
        assert config.hostname == "box1"
        assert config.packages == ["base", "vim"]


# ── Layout ───────────────────────────────────────────────────────────


class TestLayout:
    def test_default_paths(self):
        layout = Layout.default()
        assert layout.config_file == Path("/etc/goat/config.yml")
        assert layout.cache_file == Path("/var/goat/cache/cache.json")
        assert layout.hostname_file == Path("/etc/hostname")

    def test_under_root(self, tmp_path: Path):
        layout = Layout.under(tmp_path)
        assert layout.configuration_directory == tmp_path / "etc" / "goat"
        assert layout.package_manager_directory == tmp_path / "var" / "goat" / "package_managers"
        assert layout.hostname_file == tmp_path / "etc" / "hostname"

    def test_ensure_directories(self, tmp_path: Path):
        layout = Layout.under(tmp_path)
        created = ensure_directories(layout)
        assert created == layout.directories
        assert all(d.is_dir() for d in layout.directories)
        assert ensure_directories(layout) == []

    def test_ensure_directories_denied(self, tmp_path: Path, monkeypatch):
        def _denied(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "mkdir", _denied)
        with pytest.raises(FileAccessError, match="create directory"):
            ensure_directories(Layout.under(tmp_path))


def test_generate_config_denied(tmp_path: Path, monkeypatch):
    def _denied(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "write_text", _denied)
    with pytest.raises(FileAccessError, match="write config file"):
        generate_config(tmp_path / "config.yml", ["vim"], "box1")
