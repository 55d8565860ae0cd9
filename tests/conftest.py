"""
Shared test fixtures and configuration.
"""

import logging
import shlex
import textwrap
from pathlib import Path

import pytest

from goat.adapters.base import ExecutionContext
from goat.adapters.mock import MockAdapter
from goat.core.config.layout import Layout
from goat.core.models.action import Receipt

FAKE_PM_YML = textwrap.dedent("""\
    binary_name: fakepm
    install_command: fakepm install {}
    remove_command: fakepm remove {}
    full_system_update_command: fakepm upgrade
    list_explicit_packages_command: fakepm list --explicit
    list_all_packages_command: fakepm list --all
    core_packages:
      - base
""")

FAKE_SM_YML = textwrap.dedent("""\
    binary_name: fakeinit
    hostname_reload_command: fakeinit reload-hostname {}
""")


class FakePackageAdapter(MockAdapter):
    """In-memory package database behind the fakepm descriptor commands.

    Install marks packages explicit; remove drops them. Dependencies are
    listed by ``list --all`` but never by ``list --explicit``.
    """

    def __init__(self, explicit: list[str], dependencies: list[str] | None = None):
        super().__init__(adapter_name="fake")
        self.explicit = list(explicit)
        self.dependencies = list(dependencies or [])
        self.upgrades = 0
        self.reloaded_hostnames: list[str] = []

    def execute(self, context: ExecutionContext) -> Receipt:
        action_id = context.action.id
        if action_id in self._responses:
            return super().execute(context)

        self._call_log.append(context)
        command = context.params["command"]
        args = shlex.split(command)

        if action_id == "package_manager:list_explicit":
            output = " ".join(self.explicit)
        elif action_id == "package_manager:list_all":
            output = "\n".join(self.explicit + self.dependencies)
        elif action_id == "package_manager:install":
            for name in args[2:]:
                if name in self.dependencies:
                    self.dependencies.remove(name)
                self.explicit.append(name)
            output = ""
        elif action_id == "package_manager:remove":
            self.explicit = [p for p in self.explicit if p not in args[2:]]
            output = ""
        elif action_id == "package_manager:full_system_update":
            self.upgrades += 1
            output = ""
        elif action_id == "service_manager:reload_hostname":
            self.reloaded_hostnames.extend(args[2:])
            output = ""
        else:
            return Receipt.failure(
                adapter=self.name,
                action_id=action_id,
                error=f"unexpected action {action_id}",
                command=command,
            )

        return Receipt.success(
            adapter=self.name,
            action_id=action_id,
            output=output,
            command=command,
            return_code=0,
        )


@pytest.fixture
def layout(tmp_path: Path) -> Layout:
    """A goat tree under tmp_path with one fake backend of each kind."""
    layout = Layout.under(tmp_path)
    for directory in layout.directories:
        directory.mkdir(parents=True)
    (layout.package_manager_directory / "fakepm.yml").write_text(FAKE_PM_YML)
    (layout.service_manager_directory / "fakeinit.yml").write_text(FAKE_SM_YML)
    layout.hostname_file.parent.mkdir(parents=True, exist_ok=True)
    layout.hostname_file.write_text("box1\n")
    return layout


@pytest.fixture
def probe():
    """PATH lookup that only knows the fake backends."""
    known = {"fakepm", "fakeinit"}
    return lambda name: f"/usr/bin/{name}" if name in known else None


@pytest.fixture
def fake_adapter() -> FakePackageAdapter:
    return FakePackageAdapter(explicit=["base", "vim", "git"], dependencies=["glibc"])


@pytest.fixture
def write_config(layout: Layout):
    """Write config.yml content into the layout's configuration directory."""

    def _write(content: str) -> Path:
        path = layout.config_file
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def make_adapter():
    """Build a FakePackageAdapter with a chosen package state."""

    def _make(explicit: list[str], dependencies: list[str] | None = None) -> FakePackageAdapter:
        return FakePackageAdapter(explicit=explicit, dependencies=dependencies)

    return _make


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() calls made by a test (the CLI makes one per run)."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
