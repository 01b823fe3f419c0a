"""
End-to-end tests of the pipeline driver on real files.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from topb.pipeline import CodeGeneratorConfig, DiscoveryMode, PipelineGenerator, ReportStatus

ORDER = """package shop

// Order is a customer order.
// gen:topb
type Order struct {
	ID    int
	Total float64
}
"""

TWO_TYPES = """package shop

// gen:topb
type User struct {
	Name string
}

// gen:topb
type Address struct {
	Street, City string
}
"""

PLAIN = """package shop

type Draft struct {
	Body string
}
"""

BROKEN = """package shop

type Broken struct {
	ID int
"""


@pytest.fixture
def config():
    return CodeGeneratorConfig(wire_package="example.com/shop/pb")


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_order_scenario(tmp_path, config):
    source = _write(tmp_path / "order.go", ORDER)

    (report,) = PipelineGenerator(config).run([source])

    output = tmp_path / "autogen_topb_order.go"
    assert report.status == ReportStatus.WRITTEN
    assert report.output == output
    assert report.types == ["Order"]
    code = output.read_text(encoding="utf-8")
    assert "func (m *Order) ToPb() *pb.Order {" in code
    assert "\treturn &pb.Order{\n\t\tID: m.ID,\n\t\tTotal: m.Total,\n\t}\n" in code
    assert [p.name for p in tmp_path.iterdir() if p.name.startswith("autogen_")] == ["autogen_topb_order.go"]


def test_two_types_one_file(tmp_path, config):
    source = _write(tmp_path / "users.go", TWO_TYPES)

    (report,) = PipelineGenerator(config).run([source])

    code = report.output.read_text(encoding="utf-8")
    assert report.types == ["User", "Address"]
    assert code.startswith("package shop\n")
    assert code.count('import "example.com/shop/pb"') == 1
    assert code.count("func (m *") == 2


def test_idempotent(tmp_path, config):
    _write(tmp_path / "order.go", ORDER)
    _write(tmp_path / "users.go", TWO_TYPES)

    first = PipelineGenerator(config).run([tmp_path])
    contents = {r.output: r.output.read_bytes() for r in first}

    second = PipelineGenerator(config).run([tmp_path])

    assert [r.status for r in first] == [ReportStatus.WRITTEN, ReportStatus.WRITTEN]
    assert [r.status for r in second] == [ReportStatus.UNCHANGED, ReportStatus.UNCHANGED]
    assert {r.output: r.output.read_bytes() for r in second} == contents


def test_previous_output_replaced(tmp_path, config):
    source = _write(tmp_path / "order.go", ORDER)
    output = _write(tmp_path / "autogen_topb_order.go", "package stale\n\n// leftovers\n" * 20)

    PipelineGenerator(config).run([source])

    code = output.read_text(encoding="utf-8")
    assert "stale" not in code
    assert code.startswith("package shop\n")


def test_partial_failure_isolated(tmp_path, config):
    _write(tmp_path / "a.go", ORDER)
    _write(tmp_path / "b.go", BROKEN)
    _write(tmp_path / "c.go", TWO_TYPES)

    reports = PipelineGenerator(config).run([tmp_path])

    assert [r.status for r in reports] == [ReportStatus.WRITTEN, ReportStatus.FAILED, ReportStatus.WRITTEN]
    assert "b.go" in reports[1].error
    assert not reports[1].ok
    assert (tmp_path / "autogen_topb_a.go").exists()
    assert not (tmp_path / "autogen_topb_b.go").exists()
    assert (tmp_path / "autogen_topb_c.go").exists()


def test_missing_input_reported(tmp_path, config):
    (report,) = PipelineGenerator(config).run([tmp_path / "missing.go"])
    assert report.status == ReportStatus.FAILED
    assert "cannot read" in report.error


def test_no_eligible_type_writes_nothing(tmp_path, config):
    source = _write(tmp_path / "draft.go", PLAIN)

    (report,) = PipelineGenerator(config).run([source])

    assert report.status == ReportStatus.SKIPPED
    assert report.output is None
    assert sorted(p.name for p in tmp_path.iterdir()) == ["draft.go"]


def test_stale_output_kept_by_default(tmp_path, config):
    source = _write(tmp_path / "draft.go", PLAIN)
    stale = _write(tmp_path / "autogen_topb_draft.go", "package shop\n")

    (report,) = PipelineGenerator(config).run([source])

    assert report.status == ReportStatus.SKIPPED
    assert stale.exists()


def test_stale_output_pruned(tmp_path, config):
    config.output.prune_stale = True
    source = _write(tmp_path / "draft.go", PLAIN)
    stale = _write(tmp_path / "autogen_topb_draft.go", "package shop\n")

    (report,) = PipelineGenerator(config).run([source])

    assert report.status == ReportStatus.PRUNED
    assert report.output == stale
    assert not stale.exists()


def test_missing_wire_package(tmp_path):
    source = _write(tmp_path / "order.go", ORDER)

    (report,) = PipelineGenerator(CodeGeneratorConfig()).run([source])

    assert report.status == ReportStatus.FAILED
    assert "no wire package" in report.error


def test_missing_wire_package_irrelevant_without_eligible_types(tmp_path):
    source = _write(tmp_path / "draft.go", PLAIN)
    (report,) = PipelineGenerator(CodeGeneratorConfig()).run([source])
    assert report.status == ReportStatus.SKIPPED


def test_embedded_field_fails_only_its_file(tmp_path, config):
    _write(tmp_path / "a.go", "package shop\n\n// gen:topb\ntype A struct {\n\tBase\n}\n")
    _write(tmp_path / "b.go", ORDER)

    reports = PipelineGenerator(config).run([tmp_path])

    assert reports[0].status == ReportStatus.FAILED
    assert "embeds Base" in reports[0].error
    assert reports[1].status == ReportStatus.WRITTEN


def test_directive_mode(tmp_path):
    _write(
        tmp_path / "models" / "order.go",
        "//go:generate topb -in order.go -pb example.com/shop/pb\n\n" + ORDER,
    )
    _write(tmp_path / "models" / "draft.go", PLAIN)
    config = CodeGeneratorConfig(discovery=DiscoveryMode.DIRECTIVE)

    reports = PipelineGenerator(config).run([tmp_path])

    (report,) = reports
    assert report.status == ReportStatus.WRITTEN
    assert report.output == tmp_path / "models" / "autogen_topb_order.go"
    code = report.output.read_text(encoding="utf-8")
    assert code.startswith("// Code generated by topb. DO NOT EDIT.\n\npackage shop\n")
    assert 'import "example.com/shop/pb"' in code

    # A second run ignores the generated file and changes nothing
    assert [r.status for r in PipelineGenerator(config).run([tmp_path])] == [ReportStatus.UNCHANGED]


def test_directive_wire_package_overrides_config(tmp_path):
    _write(tmp_path / "order.go", "//go:generate topb -in order.go -pb example.com/other/wire\n\n" + ORDER)
    config = CodeGeneratorConfig(discovery=DiscoveryMode.DIRECTIVE, wire_package="example.com/shop/pb")

    (report,) = PipelineGenerator(config).run([tmp_path])

    assert 'import pb "example.com/other/wire"' in report.output.read_text(encoding="utf-8")


def test_formatter_applied_when_enabled(tmp_path, config, monkeypatch):
    config.formatter.enabled = True
    source = _write(tmp_path / "order.go", ORDER)
    generator = PipelineGenerator(config)
    monkeypatch.setattr(generator.formatter, "format", lambda code, cfg: code.replace("ID: m.ID", "ID:    m.ID"))

    (report,) = generator.run([source])

    assert "ID:    m.ID" in report.output.read_text(encoding="utf-8")


def test_generate_source_without_writing(tmp_path, config):
    source = _write(tmp_path / "order.go", ORDER)
    generator = PipelineGenerator(config)

    code = generator.generate_source(generator.loader.load(generator.loader.discover([source])[0]))

    assert "func (m *Order) ToPb() *pb.Order {" in code
    assert sorted(p.name for p in tmp_path.iterdir()) == ["order.go"]
