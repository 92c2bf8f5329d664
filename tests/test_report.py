import pytest

from sire.engine import StormImpactEngine
from sire.report import ReportConfig, generate_docx_report

docx = pytest.importorskip("docx")
pytest.importorskip("matplotlib")


def test_report_written(raw_events, tmp_path):
    engine = StormImpactEngine(events=raw_events)
    out = tmp_path / "reports" / "storm.docx"
    generate_docx_report(engine, str(out), config=ReportConfig(top_n=2, command_log=["health 2"]))
    assert out.exists()

    text = "\n".join(p.text for p in docx.Document(str(out)).paragraphs)
    assert "Top 2 categories by fatalities" in text
    assert "Top 2 categories by property damage" in text


def test_report_requires_categories(tmp_path):
    engine = StormImpactEngine(events=[])
    with pytest.raises(ValueError):
        generate_docx_report(engine, str(tmp_path / "empty.docx"))
