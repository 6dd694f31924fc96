import textwrap

import pytest
from conftest import FakeHostInfoProvider

from sysinfo_command import plugin_loader
from sysinfo_command.domain.models.report import CommandResult
from sysinfo_command.plugin_loader import CommandNotFoundError, PluginManager
from sysinfo_command.plugins import system_info


@pytest.fixture
def fake_provider(monkeypatch):
    monkeypatch.setattr(system_info, "make_host_provider", lambda: FakeHostInfoProvider())


def test_discovery_includes_builtin_commands():
    plugin_loader.reload_plugins()
    assert "system-info" in plugin_loader.COMMAND_FUNCTIONS
    names = [s["command"]["name"] for s in plugin_loader.COMMAND_SCHEMAS]
    assert names.count("system-info") == 1


def test_execute_system_info_defaults(fake_provider):
    manager = PluginManager()
    manager.load(reset=True)
    result = manager.execute("system-info")
    assert isinstance(result, CommandResult)
    assert result.send is False
    assert len(result.embeds[0].fields) == 8


def test_execute_publish_alias_and_unknown_args(fake_provider):
    manager = PluginManager()
    manager.load(reset=True)
    result = manager.execute("system-info", publish=True, detailed=True, channel="general")
    assert result.send is True
    assert "--- Additional Details ---" in result.content


def test_none_options_use_defaults(fake_provider):
    manager = PluginManager()
    manager.load(reset=True)
    result = manager.execute("system-info", send=None, detailed=None)
    assert result.embeds is not None


def test_schema_validation_rejects_non_boolean(fake_provider):
    manager = PluginManager()
    manager.load(reset=True)
    with pytest.raises(ValueError, match="failed schema validation"):
        manager.execute("system-info", send="yes")


def test_unknown_command():
    manager = PluginManager()
    manager.load(reset=True)
    with pytest.raises(CommandNotFoundError):
        manager.execute("does-not-exist")


def test_external_plugins_and_bad_modules(tmp_path, caplog):
    (tmp_path / "hello.py").write_text(textwrap.dedent('''
        COMMAND_SCHEMA = {
            "type": "command",
            "command": {
                "name": "hello",
                "description": "Say hello",
                "parameters": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                },
            },
        }

        def execute(name="world"):
            return f"Hello, {name}!"
    '''))
    (tmp_path / "broken.py").write_text("COMMAND_SCHEMA = {'type': 'function'}\n")
    (tmp_path / "dupe.py").write_text(textwrap.dedent('''
        COMMAND_SCHEMA = {
            "type": "command",
            "command": {"name": "system-info", "description": "Shadow", "parameters": True},
        }

        def execute():
            return "shadow"
    '''))

    manager = PluginManager()
    _, funcs = manager.load(reset=True, additional_paths=[str(tmp_path)])

    assert funcs["hello"]() == "Hello, world!"
    assert manager.execute("hello", name="Ada") == "Hello, Ada!"
    assert "broken" not in funcs
    assert funcs["system-info"] is not None
    assert [p.name for p in manager.plugins].count("system-info") == 1
    assert "Failed to load plugin" in caplog.text
    assert "Duplicate command name 'system-info'" in caplog.text


def test_plugin_metadata():
    manager = PluginManager()
    manager.load(reset=True)
    plugin = next(p for p in manager.plugins if p.name == "system-info")
    assert plugin.version == "1.0.0"
    assert plugin.module is system_info
