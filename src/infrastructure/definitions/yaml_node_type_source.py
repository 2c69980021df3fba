"""YAML-backed node type definitions.

Loads `*.yaml` files from a directory; each file describes one node type whose
dynamic parameter methods are declarative request descriptors:

    name: example.issues
    versions: [1, 2]
    requestDefaults:
      baseURL: https://api.example.com
    methods:
      loadOptions:
        getProjects:
          routing:
            request: {method: GET, url: /projects}
      listSearch: {...}
      resourceMapping: {...}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from src.domain.entities.node_type_definition import NodeMethodKind, NodeTypeDefinition


class NodeTypeLoadError(ValueError):
    def __init__(self, source_path: Path, message: str) -> None:
        super().__init__(f"{source_path}: {message}")
        self.source_path = source_path
        self.message = message


class YamlNodeTypeSource:
    def __init__(self, *, definitions_dir: Path) -> None:
        self._definitions_dir = definitions_dir

    def load(self) -> list[NodeTypeDefinition]:
        if not self._definitions_dir.exists():
            raise NodeTypeLoadError(self._definitions_dir, "definitions_dir does not exist")

        return [
            self._load_one(yaml_path) for yaml_path in sorted(self._definitions_dir.glob("*.yaml"))
        ]

    def _load_one(self, yaml_path: Path) -> NodeTypeDefinition:
        try:
            raw_text = yaml_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise NodeTypeLoadError(yaml_path, f"read failed: {exc}") from exc

        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            line_info = ""
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                line_info = f":{mark.line + 1}:{mark.column + 1}"
            raise NodeTypeLoadError(yaml_path, f"yaml parse error{line_info}: {exc}") from exc

        if not isinstance(data, dict):
            raise NodeTypeLoadError(yaml_path, "top-level YAML must be a mapping")

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise NodeTypeLoadError(yaml_path, "name must be a non-empty string")

        return NodeTypeDefinition(
            name=name,
            versions=self._parse_versions(yaml_path, data.get("versions", [1])),
            methods=self._parse_methods(yaml_path, data.get("methods") or {}),
            base_url=self._parse_base_url(yaml_path, data.get("requestDefaults")),
        )

    def _parse_base_url(self, yaml_path: Path, raw: Any) -> str | None:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise NodeTypeLoadError(yaml_path, "requestDefaults must be a mapping")
        base_url = raw.get("baseURL")
        if base_url is None:
            return None
        parsed = urlparse(base_url) if isinstance(base_url, str) else None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise NodeTypeLoadError(yaml_path, "requestDefaults.baseURL must be an http(s) URL")
        return base_url

    def _parse_versions(self, yaml_path: Path, raw: Any) -> tuple[float, ...]:
        if not isinstance(raw, list):
            raw = [raw]
        if not raw or any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in raw):
            raise NodeTypeLoadError(yaml_path, "versions must be a non-empty list of numbers")
        return tuple(raw)

    def _parse_methods(self, yaml_path: Path, raw: Any) -> dict[NodeMethodKind, dict[str, Any]]:
        if not isinstance(raw, dict):
            raise NodeTypeLoadError(yaml_path, "methods must be a mapping")

        methods: dict[NodeMethodKind, dict[str, Any]] = {}
        for kind_name, table in raw.items():
            try:
                kind = NodeMethodKind(kind_name)
            except ValueError as exc:
                raise NodeTypeLoadError(yaml_path, f"unknown method kind: {kind_name}") from exc

            if not isinstance(table, dict):
                raise NodeTypeLoadError(yaml_path, f"methods.{kind_name} must be a mapping")
            for method_name, descriptor in table.items():
                if not isinstance(descriptor, dict) or "routing" not in descriptor:
                    raise NodeTypeLoadError(
                        yaml_path, f"methods.{kind_name}.{method_name} must define routing"
                    )
            methods[kind] = dict(table)

        return methods
