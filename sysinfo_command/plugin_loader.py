"""
Dynamic plugin loader for chat commands.

- Discovers command plugins from the internal package `sysinfo_command.plugins/`
  and any extra directories supplied by the caller (see SYSINFO_COMMANDS_DIR)
- Validates command schemas using jsonschema
- Builds COMMAND_SCHEMAS and COMMAND_FUNCTIONS for the dispatcher
- Exposes a PluginManager for advanced usage and testing

Plugin contract (any Python module):
- Must define COMMAND_SCHEMA: dict with keys {"type": "command", "command": {"name": str, "description": str, "parameters": object-schema}}
- Must provide an implementation, one of:
  * attribute COMMAND_IMPLEMENTATION: callable
  * a function named 'execute'
- Optional: COMMAND_VERSION: str, COMMAND_AUTHOR: str

At runtime, arguments passed to command implementations are validated against
the plugin's `parameters` JSON schema before execution. Validation errors are
raised to the caller as ValueError.
"""
from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import os
import sys
import threading
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional, Tuple

from jsonschema import validate as jsonschema_validate
from jsonschema.exceptions import ValidationError


# Minimal JSON Schema to validate the command definition structure itself
_COMMAND_DEFINITION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["type", "command"],
    "properties": {
        "type": {"const": "command"},
        "command": {
            "type": "object",
            "required": ["name", "description", "parameters"],
            "properties": {
                "name": {"type": "string", "minLength": 1, "pattern": "^[a-z0-9_-]+$"},
                "description": {"type": "string", "minLength": 1},
                "parameters": {"type": ["object", "boolean"]},  # allow True for no-arg commands
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

# Alternative argument names accepted from dispatchers
_ARG_ALIASES: Dict[str, str] = {
    "publish": "send",
}


@dataclass(frozen=True)
class CommandPlugin:
    name: str
    schema: Dict[str, Any]
    implementation: Callable[..., Any]
    module: ModuleType
    source_path: str
    version: Optional[str] = None


class PluginLoadError(Exception):
    pass


class CommandNotFoundError(KeyError):
    pass


class PluginManager:
    def __init__(self, plugin_paths: Optional[List[str]] = None, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._plugin_paths = plugin_paths or []
        self._plugins: List[CommandPlugin] = []
        self._schemas: List[Dict[str, Any]] = []
        self._functions: Dict[str, Callable[..., Any]] = {}

    @staticmethod
    def _builtin_dir() -> str:
        return os.path.join(os.path.dirname(os.path.abspath(__file__)), "plugins")

    @classmethod
    def _default_paths(cls) -> List[str]:
        return [cls._builtin_dir()]

    def _iter_module_files(self, base_dir: str) -> List[str]:
        files: List[str] = []
        if not os.path.isdir(base_dir):
            return files
        for name in sorted(os.listdir(base_dir)):
            if name.startswith("_"):
                continue
            path = os.path.join(base_dir, name)
            if os.path.isdir(path):
                # support package-style plugins: commands/foo/__init__.py
                init_py = os.path.join(path, "__init__.py")
                if os.path.isfile(init_py):
                    files.append(init_py)
            elif name.endswith(".py"):
                files.append(path)
        return files

    def _import_module_from_path(self, file_path: str, pkg_base: Optional[str]) -> ModuleType:
        if pkg_base:
            base_name = os.path.basename(file_path)
            if base_name == "__init__.py":
                rel = os.path.basename(os.path.dirname(file_path))
            else:
                rel = os.path.splitext(base_name)[0]
            # Built-ins are regular package modules; reuse an already imported copy
            return importlib.import_module(f"{pkg_base}.{rel}")
        module_name = f"command_plugin_{abs(hash(file_path))}"
        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            raise PluginLoadError(f"Cannot create import spec for {file_path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)  # type: ignore[attr-defined]
        return module

    def _validate_command_schema(self, schema: Dict[str, Any]) -> None:
        try:
            jsonschema_validate(instance=schema, schema=_COMMAND_DEFINITION_SCHEMA)
        except ValidationError as e:
            raise PluginLoadError(f"Command definition failed validation: {e.message}")

    def _wrap_with_arg_validation(self, name: str, schema: Dict[str, Any], func: Callable[..., Any]) -> Callable[..., Any]:
        params_schema = schema.get("command", {}).get("parameters")
        logger = self._logger

        def _apply_aliases(raw_kwargs: Dict[str, Any], param_names: set) -> Dict[str, Any]:
            out = dict(raw_kwargs)
            for alias, canonical in _ARG_ALIASES.items():
                if alias in out and alias not in param_names and canonical in param_names and canonical not in out:
                    out[canonical] = out.pop(alias)
            return out

        def wrapper(**kwargs: Any) -> Any:
            sig = inspect.signature(func)
            params = sig.parameters
            accepts_var_kw = any(p.kind == inspect.Parameter.VAR_KEYWORD for p in params.values())
            if accepts_var_kw:
                filtered = _apply_aliases(kwargs, set(params.keys()))
            else:
                param_names = {n for n, p in params.items() if p.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)}
                aliased = _apply_aliases(kwargs, param_names)
                filtered = {k: v for k, v in aliased.items() if k in param_names}
                dropped = [k for k in aliased.keys() if k not in param_names]
                if dropped:
                    logger.debug(f"Command '{name}': dropping unexpected arguments: {dropped}")

            # Unset options fall back to the implementation defaults
            cleaned = {k: v for k, v in filtered.items() if v is not None}

            if params_schema:
                try:
                    jsonschema_validate(instance=cleaned, schema=params_schema)
                except ValidationError as e:
                    raise ValueError(f"Arguments for {name} failed schema validation: {e.message}")

            return func(**cleaned)

        wrapper.__name__ = f"command_{name.replace('-', '_')}"
        wrapper.__doc__ = f"Auto-generated wrapper for command '{name}' with JSON schema validation."
        return wrapper

    def _extract_plugin(self, module: ModuleType, source_path: str) -> CommandPlugin:
        schema = getattr(module, "COMMAND_SCHEMA", None)
        if not isinstance(schema, dict):
            raise PluginLoadError("Missing or invalid COMMAND_SCHEMA (must be a dict)")
        self._validate_command_schema(schema)
        name = schema["command"]["name"]
        impl = getattr(module, "COMMAND_IMPLEMENTATION", None)
        if not callable(impl):
            impl = getattr(module, "execute", None)
        if not callable(impl):
            raise PluginLoadError("No callable implementation found (COMMAND_IMPLEMENTATION or execute)")

        wrapped = self._wrap_with_arg_validation(name, schema, impl)
        return CommandPlugin(
            name=name,
            schema=schema,
            implementation=wrapped,
            module=module,
            source_path=source_path,
            version=getattr(module, "COMMAND_VERSION", None),
        )

    def load(self, reset: bool = False, additional_paths: Optional[List[str]] = None) -> Tuple[List[Dict[str, Any]], Dict[str, Callable[..., Any]]]:
        with self._lock:
            if reset:
                self._plugins = []
                self._schemas = []
                self._functions = {}

            search_paths = list(self._plugin_paths or self._default_paths())
            if additional_paths:
                for p in additional_paths:
                    ap = os.path.abspath(p)
                    if ap not in search_paths:
                        search_paths.append(ap)

            self._logger.debug(f"Plugin search paths: {search_paths}")

            builtin = self._builtin_dir()
            loaded_names: set = set(self._functions.keys())
            for path in search_paths:
                pkg_base = None
                if os.path.abspath(path) == builtin:
                    pkg_base = f"{__package__}.plugins" if __package__ else "plugins"

                for file_path in self._iter_module_files(path):
                    try:
                        module = self._import_module_from_path(file_path, pkg_base)
                        plugin = self._extract_plugin(module, file_path)
                    except Exception as e:
                        self._logger.error(f"Failed to load plugin from {file_path}: {e}")
                        continue
                    if plugin.name in loaded_names:
                        self._logger.warning(f"Duplicate command name '{plugin.name}' from {file_path}; skipping")
                        continue
                    self._plugins.append(plugin)
                    self._schemas.append(plugin.schema)
                    self._functions[plugin.name] = plugin.implementation
                    loaded_names.add(plugin.name)
                    self._logger.info(f"Loaded plugin '{plugin.name}' from {file_path}")

            return list(self._schemas), dict(self._functions)

    def execute(self, name: str, /, **kwargs: Any) -> Any:
        """Dispatch a command by name with schema-validated arguments."""
        with self._lock:
            func = self._functions.get(name)
        if func is None:
            raise CommandNotFoundError(name)
        return func(**kwargs)

    @property
    def plugins(self) -> List[CommandPlugin]:
        with self._lock:
            return list(self._plugins)

    @property
    def command_schemas(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._schemas)

    @property
    def command_functions(self) -> Dict[str, Callable[..., Any]]:
        with self._lock:
            return dict(self._functions)


# Module-level default manager and aggregates for core usage
_default_manager = PluginManager()
COMMAND_SCHEMAS, COMMAND_FUNCTIONS = _default_manager.load(reset=True)


def get_manager() -> PluginManager:
    return _default_manager


def reload_plugins(additional_paths: Optional[List[str]] = None) -> Tuple[List[Dict[str, Any]], Dict[str, Callable[..., Any]]]:
    """Reload plugins into the default manager and update module-level aggregates."""
    global COMMAND_SCHEMAS, COMMAND_FUNCTIONS
    schemas, funcs = _default_manager.load(reset=True, additional_paths=additional_paths)
    COMMAND_SCHEMAS, COMMAND_FUNCTIONS = schemas, funcs
    return schemas, funcs
