"""YamlNodeTypeSource 单元测试"""

from pathlib import Path

import pytest

from src.domain.entities.node_type_definition import NodeMethodKind
from src.infrastructure.definitions.yaml_node_type_source import (
    NodeTypeLoadError,
    YamlNodeTypeSource,
)

VALID_YAML = """
name: example.tickets
versions: [1, 2.5]
methods:
  loadOptions:
    getQueues:
      routing:
        request:
          url: https://tickets.test/queues
  resourceMapping:
    getFields:
      routing:
        request:
          url: https://tickets.test/fields
"""


def _write(directory: Path, filename: str, content: str) -> None:
    (directory / filename).write_text(content, encoding="utf-8")


class TestYamlNodeTypeSource:
    def test_loads_definitions_sorted_by_filename(self, tmp_path):
        _write(tmp_path, "b.yaml", VALID_YAML)
        _write(tmp_path, "a.yaml", "name: example.alpha\n")
        _write(tmp_path, "notes.txt", "ignored")

        definitions = YamlNodeTypeSource(definitions_dir=tmp_path).load()

        assert [definition.name for definition in definitions] == [
            "example.alpha",
            "example.tickets",
        ]
        alpha, tickets = definitions
        assert alpha.versions == (1,)
        assert tickets.versions == (1, 2.5)
        assert tickets.get_method(NodeMethodKind.LOAD_OPTIONS, "getQueues") == {
            "routing": {"request": {"url": "https://tickets.test/queues"}}
        }
        assert tickets.get_method(NodeMethodKind.RESOURCE_MAPPING, "getFields") is not None

    def test_request_defaults_base_url(self, tmp_path):
        _write(
            tmp_path,
            "crm.yaml",
            "name: example.crm\nrequestDefaults:\n  baseURL: https://crm.test/api\n",
        )
        _write(tmp_path, "plain.yaml", "name: example.plain\n")

        crm, plain = YamlNodeTypeSource(definitions_dir=tmp_path).load()

        assert crm.base_url == "https://crm.test/api"
        assert plain.base_url is None

    def test_bundled_definitions_load(self):
        definitions_dir = Path(__file__).parents[4] / "definitions" / "node_types"

        definitions = YamlNodeTypeSource(definitions_dir=definitions_dir).load()

        by_name = {definition.name: definition for definition in definitions}
        assert by_name["example.githubIssues"].base_url == "https://api.github.com"
        assert by_name["example.notionPages"].get_method(
            NodeMethodKind.LIST_SEARCH, "searchPages"
        )["routing"]["output"]["paginationToken"] == "={{ $response.next_cursor }}"

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(NodeTypeLoadError, match="does not exist"):
            YamlNodeTypeSource(definitions_dir=tmp_path / "missing").load()

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("name: [broken", "yaml parse error"),
            ("- a\n- b\n", "top-level YAML must be a mapping"),
            ("versions: [1]\n", "name must be a non-empty string"),
            ("name: x\nversions: [true]\n", "versions must be a non-empty list"),
            ("name: x\nmethods:\n  credentialTest: {}\n", "unknown method kind"),
            ("name: x\nrequestDefaults: https://a.test\n", "requestDefaults must be a mapping"),
            (
                "name: x\nrequestDefaults:\n  baseURL: file:///etc\n",
                "requestDefaults.baseURL must be an http\\(s\\) URL",
            ),
            (
                "name: x\nmethods:\n  listSearch:\n    search:\n      request: {}\n",
                "methods.listSearch.search must define routing",
            ),
        ],
    )
    def test_invalid_definition_reports_file(self, tmp_path, content, message):
        _write(tmp_path, "bad.yaml", content)

        with pytest.raises(NodeTypeLoadError, match=message) as exc_info:
            YamlNodeTypeSource(definitions_dir=tmp_path).load()

        assert exc_info.value.source_path == tmp_path / "bad.yaml"
