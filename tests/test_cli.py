from pathlib import Path

import pytest

import svgshrink.__main__ as cli
from svgshrink import TransformError


class FakeOptimizer:
    def __call__(self, content: bytes) -> bytes:
        if not content.startswith(b"<svg"):
            raise TransformError(Path("<memory>"), "not an svg document")
        return content.replace(b" ", b"")


@pytest.fixture(autouse=True)
def _isolate(monkeypatch, tmp_path: Path):
    for name in ("SVGSHRINK_CONFIG", "SVGSHRINK_EXTENSION", "SVGSHRINK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "Optimizer", FakeOptimizer)


def test_no_arguments_prints_usage(capsys):
    assert cli.main([]) == 1
    err = capsys.readouterr().err
    assert "usage: svgshrink" in err


def test_missing_root(tmp_path: Path, capsys):
    assert cli.main([str(tmp_path / "nope")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_root_is_a_file(tmp_path: Path, capsys):
    f = tmp_path / "a.svg"
    f.write_bytes(b"<svg />")
    assert cli.main([str(f)]) == 1
    assert "not a directory" in capsys.readouterr().err
    assert f.read_bytes() == b"<svg />"


def test_empty_tree(tmp_path: Path, capsys):
    root = tmp_path / "icons"
    root.mkdir()
    assert cli.main([str(root)]) == 0
    assert "Optimized: 0, Skipped: 0, Failed: 0" in capsys.readouterr().out


def test_processes_tree_and_continues_after_failure(tmp_path: Path, capsys):
    root = tmp_path / "icons"
    (root / "sub").mkdir(parents=True)
    (root / "a.svg").write_bytes(b"<svg   />")
    (root / "b.txt").write_bytes(b"<svg   />")
    (root / "bad.svg").write_bytes(b"garbage")
    (root / "sub" / "c.svg").write_bytes(b"<svg  />")

    assert cli.main([str(root)]) == 0

    out = capsys.readouterr().out
    assert f"✓ {root / 'a.svg'}" in out
    assert f"✓ {root / 'sub' / 'c.svg'}" in out
    assert f"✗ {root / 'bad.svg'}: transform error: not an svg document" in out
    assert "b.txt" not in out
    assert "Optimized: 2, Skipped: 0, Failed: 1" in out
    assert (root / "a.svg").read_bytes() == b"<svg/>"
    assert (root / "bad.svg").read_bytes() == b"garbage"
    assert (root / "b.txt").read_bytes() == b"<svg   />"


def test_report_option(tmp_path: Path):
    root = tmp_path / "icons"
    root.mkdir()
    (root / "a.svg").write_bytes(b"<svg   />")
    report = tmp_path / "report.md"

    assert cli.main([str(root), "--report", str(report)]) == 0

    text = report.read_text(encoding="utf-8")
    assert "# SVG Optimization Report" in text
    assert "- Optimized: 1" in text


def test_config_extension(tmp_path: Path, capsys):
    root = tmp_path / "icons"
    root.mkdir()
    (root / "a.svg").write_bytes(b"<svg   />")
    (root / "b.xml").write_bytes(b"<svg   />")
    cfg = tmp_path / "svgshrink.toml"
    cfg.write_text('extension = ".xml"\n', encoding="utf-8")

    assert cli.main([str(root), "--config", str(cfg)]) == 0

    assert (root / "b.xml").read_bytes() == b"<svg/>"
    assert (root / "a.svg").read_bytes() == b"<svg   />"


def test_invalid_config(tmp_path: Path, capsys):
    root = tmp_path / "icons"
    root.mkdir()
    cfg = tmp_path / "broken.toml"
    cfg.write_text("extension = \n", encoding="utf-8")

    assert cli.main([str(root), "--config", str(cfg)]) == 1
    assert "invalid configuration" in capsys.readouterr().err


def test_report_write_failure_exits_with_error(tmp_path: Path, capsys):
    root = tmp_path / "icons"
    root.mkdir()
    (root / "a.svg").write_bytes(b"<svg   />")
    not_a_dir = tmp_path / "blocker"
    not_a_dir.write_text("x", encoding="utf-8")

    assert cli.main([str(root), "--report", str(not_a_dir / "r.md")]) == 1

    captured = capsys.readouterr()
    assert "Error: could not write report" in captured.err
    assert "Optimized: 1" in captured.out
    assert (root / "a.svg").read_bytes() == b"<svg/>"


def test_unreadable_directory_is_printed(monkeypatch, tmp_path: Path, capsys):
    from svgshrink import ListError, TreeProcessor

    root = tmp_path / "icons"
    locked = root / "locked"
    locked.mkdir(parents=True)
    (root / "a.svg").write_bytes(b"<svg   />")
    original = TreeProcessor._list

    def fake_list(path: Path) -> list[str]:
        if path == locked:
            raise ListError(path, "Permission denied")
        return original(path)

    monkeypatch.setattr(TreeProcessor, "_list", staticmethod(fake_list))

    assert cli.main([str(root)]) == 0
    assert f"✗ {locked}: Permission denied" in capsys.readouterr().out
