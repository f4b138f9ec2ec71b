"""End-to-end generation runs against the sample documents.

Each test writes into its own temporary directory and inspects the files
a platform produced.
"""

from __future__ import annotations

import json

import pytest

from sdkgen.__main__ import main
from sdkgen.errors import UnknownPlatformError
from sdkgen.generator import GenerateOptions, generate


def _files(directory):
    return {p.name: p.read_bytes() for p in sorted(directory.iterdir())}


# ===========================================================================
# TypeScript
# ===========================================================================

class TestTypescriptGeneration:
    def test_widgets(self, tmp_path, widgets_spec):
        written = generate(GenerateOptions(widgets_spec, "typescript", tmp_path))
        assert [p.name for p in written] == ["Widget.ts", "index.ts"]

        source = (tmp_path / "Widget.ts").read_text()
        assert "export interface Widget {\n  readonly id?: string\n}" in source
        assert "  readonly data?: Array<Widget>" in source
        assert "export class WidgetContext extends BaseContext {" in source
        assert (
            "  public async list(options?: RequestOptions): Promise<ListAllWidgetsResponse> {"
            in source
        )
        assert 'this.client.request("GET", `/v1/widgets`, {' in source
        assert "   * Lists every widget of the current account." in source
        assert "ImportedType" not in source

        index = (tmp_path / "index.ts").read_text()
        assert "import { WidgetContext } from './Widget'" in index
        assert "  widget: WidgetContext," in index

    def test_devices(self, tmp_path, devices_spec):
        generate(GenerateOptions(devices_spec, "typescript", tmp_path))
        assert sorted(_files(tmp_path)) == ["Device.ts", "Member.ts", "index.ts"]

        source = (tmp_path / "Device.ts").read_text()
        assert "type ImportedType = unknown" in source
        assert "  readonly id: string" in source
        assert "  readonly owner?: ImportedType" in source
        assert "  readonly metadata?: unknown" in source
        assert "   * Unique ID of the device." in source
        assert (
            "  public async retrieve(id: string, options?: RequestOptions): Promise<Device> {"
            in source
        )
        assert "`/v1/devices/${id}`" in source
        assert "public async list(params: ListAllDevicesParams, options?: RequestOptions)" in source
        assert "      params,\n" in source

    def test_idempotent(self, tmp_path, devices_spec):
        first, second = tmp_path / "first", tmp_path / "second"
        generate(GenerateOptions(devices_spec, "typescript", first))
        generate(GenerateOptions(devices_spec, "typescript", second))
        assert _files(first) == _files(second)


# ===========================================================================
# Python
# ===========================================================================

class TestPythonGeneration:
    def test_widgets(self, tmp_path, widgets_spec):
        written = generate(GenerateOptions(widgets_spec, "python", tmp_path))
        assert [p.name for p in written] == ["widget.py", "__init__.py"]

        source = (tmp_path / "widget.py").read_text()
        assert "@dataclasses.dataclass(frozen=True)\nclass Widget:\n" in source
        assert "    id: str | None = dataclasses.field(default=None)" in source
        assert "    data: list[Widget] | None = dataclasses.field(default=None)" in source
        assert "class WidgetContext:" in source
        assert "    def list(self) -> ListAllWidgetsResponse:" in source
        assert 'f"/v1/widgets"' in source
        compile(source, "widget.py", "exec")

        index = (tmp_path / "__init__.py").read_text()
        assert "from .widget import WidgetContext" in index
        assert '"widget": WidgetContext,' in index
        compile(index, "__init__.py", "exec")

    def test_devices_compile(self, tmp_path, devices_spec):
        generate(GenerateOptions(devices_spec, "python", tmp_path))
        for name, contents in _files(tmp_path).items():
            compile(contents, name, "exec")

        source = (tmp_path / "device.py").read_text()
        assert "ImportedType = Any" in source
        assert "    def retrieve(self, id: str) -> Device:" in source
        assert 'f"/v1/devices/{id}"' in source
        assert "    def list(self, params: ListAllDevicesParams) -> ListAllDevicesResponse:" in source


# ===========================================================================
# Runs
# ===========================================================================

class TestRuns:
    def test_unknown_language_fails_before_io(self, tmp_path):
        output = tmp_path / "out"
        options = GenerateOptions(str(tmp_path / "missing.json"), "cobol", output)
        with pytest.raises(UnknownPlatformError):
            generate(options)
        assert not output.exists()

    def test_spec_from_file(self, tmp_path, widgets_spec):
        spec_path = tmp_path / "openapi.json"
        spec_path.write_text(json.dumps(widgets_spec))
        written = generate(GenerateOptions(str(spec_path), "typescript", tmp_path / "out"))
        assert len(written) == 2

    def test_failed_resource_writes_nothing(self, tmp_path, widgets_spec):
        widgets_spec["components"]["schemas"]["Widget"]["properties"]["count"] = {"type": "integer"}
        output = tmp_path / "out"
        with pytest.raises(Exception, match="Unable to convert type"):
            generate(GenerateOptions(widgets_spec, "typescript", output))
        assert not output.exists()

    def test_custom_template_dir(self, tmp_path, widgets_spec):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "resource.ts.j2").write_text("{{ class_name }}\n")
        (templates / "index.ts.j2").write_text("{{ namespaces | length }}\n")
        output = tmp_path / "out"
        generate(GenerateOptions(widgets_spec, "typescript", output, template_dir=templates))
        assert (output / "Widget.ts").read_text() == "WidgetContext\n"
        assert (output / "index.ts").read_text() == "1\n"


class TestMain:
    def test_success(self, tmp_path, widgets_spec, capsys):
        spec_path = tmp_path / "openapi.json"
        spec_path.write_text(json.dumps(widgets_spec))
        output = tmp_path / "out"
        assert main([str(spec_path), "-l", "python", "-o", str(output)]) == 0
        assert (output / "widget.py").exists()
        assert "Generated 2 file(s)" in capsys.readouterr().out

    def test_unknown_language(self, tmp_path, capsys):
        assert main([str(tmp_path / "openapi.json"), "-l", "cobol", "-o", str(tmp_path)]) == 1
        assert 'No known platform "cobol"' in capsys.readouterr().err

    def test_unsupported_type_list(self, tmp_path, widgets_spec, capsys):
        spec = json.loads(json.dumps(widgets_spec))
        spec["components"]["schemas"]["Widget"]["properties"]["name"] = {"type": ["string", "null"]}
        spec_path = tmp_path / "openapi.json"
        spec_path.write_text(json.dumps(spec))
        assert main([str(spec_path), "-o", str(tmp_path / "out")]) == 1
        assert "Unable to convert type ['string', 'null']" in capsys.readouterr().err

    def test_missing_document(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json"), "-o", str(tmp_path / "out")]) == 1
        assert "Unable to read" in capsys.readouterr().err
