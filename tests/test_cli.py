import json
from pathlib import Path


def test_tokens(tmp_path: Path, run_cli):
    (tmp_path / "doc.md").write_text('# Title\n\n<Button label="Go"/>\n', encoding="utf-8")
    cp = run_cli(tmp_path, "tokens", "doc.md")
    assert cp.returncode == 0, cp.stderr
    data = json.loads(cp.stdout)
    assert [n["type"] for n in data] == ["heading", "component"]
    assert data[1]["props"] == {"label": "Go"}


def test_components_from_stdin(tmp_path: Path, run_cli):
    cp = run_cli(tmp_path, "components", "-", stdin="<Card>\n<Alert>x</Alert>\n</Card>\n\nText <Badge/>\n")
    assert cp.returncode == 0, cp.stderr
    assert [c["name"] for c in json.loads(cp.stdout)] == ["Card", "Alert", "Badge"]


def test_dialect_override(tmp_path: Path, run_cli):
    cp = run_cli(tmp_path, "components", "-", "--dialect", "legacy", stdin="<Step n=2/>\n")
    assert cp.returncode == 0, cp.stderr
    assert json.loads(cp.stdout)[0]["props"] == {"n": 2}


def test_config_file(tmp_path: Path, run_cli):
    (tmp_path / "cfg.yaml").write_text("attribute_dialect: legacy\n", encoding="utf-8")
    cp = run_cli(tmp_path, "components", "-", "--config", "cfg.yaml", stdin="<Step n=2/>\n")
    assert cp.returncode == 0, cp.stderr
    assert json.loads(cp.stdout)[0]["props"] == {"n": 2}


def test_scan_html(tmp_path: Path, run_cli):
    html = '<p>Hi</p><Alert kind="warn">Careful</Alert><code><Button/></code>'
    cp = run_cli(tmp_path, "scan-html", "-", stdin=html)
    assert cp.returncode == 0, cp.stderr
    data = json.loads(cp.stdout)
    assert [p["type"] for p in data] == ["text", "component", "text"]
    assert data[1]["name"] == "Alert"
    assert data[1]["children"] == "Careful"
    assert data[1]["position"] == {"start": 9, "end": 43}


def test_non_ascii_output(tmp_path: Path, run_cli):
    cp = run_cli(tmp_path, "components", "-", stdin='<Note title="Привет"/>\n')
    assert cp.returncode == 0, cp.stderr
    assert "Привет" in cp.stdout


def test_missing_source_is_user_error(tmp_path: Path, run_cli):
    cp = run_cli(tmp_path, "tokens", "nope.md")
    assert cp.returncode == 2
    assert "not found" in cp.stderr


def test_invalid_config_is_user_error(tmp_path: Path, run_cli):
    (tmp_path / "doc.md").write_text("x\n", encoding="utf-8")
    (tmp_path / "cfg.yaml").write_text("attribute_dialect: jsx\n", encoding="utf-8")
    cp = run_cli(tmp_path, "tokens", "doc.md", "--config", "cfg.yaml")
    assert cp.returncode == 2
    assert "attribute_dialect" in cp.stderr


def test_verbose_logs_to_stderr(tmp_path: Path, run_cli):
    cp = run_cli(tmp_path, "-v", "tokens", "-", stdin="<Open>\n")
    assert cp.returncode == 0
    assert "[DEBUG]" in cp.stderr


def test_version(tmp_path: Path, run_cli):
    cp = run_cli(tmp_path, "--version")
    assert cp.returncode == 0
    assert cp.stdout.startswith("markpage ")
