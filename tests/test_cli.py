import json, logging, subprocess, sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from svdmin.cli import main


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)


def test_single_file_prints_result(tmp_path, capsys):
    p = tmp_path / "doc.svd"
    p.write_text("<xml><foo><bar>baz</bar></foo></xml>", encoding="utf-8")
    assert main([str(p), "--log-file", ""]) == 0
    out = capsys.readouterr().out
    assert out == "a=xml,b=foo,c=bar\n<a><b><c>baz</c></b></a>\n"


def test_single_file_error_goes_to_stderr(tmp_path, capsys):
    p = tmp_path / "doc.json"
    p.write_text("{}", encoding="utf-8")
    assert main([str(p), "--log-file", ""]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "unsupported file type: json" in captured.err


def test_single_file_with_output(tmp_path):
    p = tmp_path / "doc.xml"
    p.write_text("<r>x</r>", encoding="utf-8")
    dest = tmp_path / "result.txt"
    assert main([str(p), "-o", str(dest), "--log-file", str(tmp_path / "run.log")]) == 0
    assert dest.read_text(encoding="utf-8") == "a=r\n<a>x</a>\n"
    assert (tmp_path / "run.log").exists()


def test_missing_input_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.svd"), "--log-file", ""])
    assert exc.value.code == 2


def test_batch_directory_with_report(tmp_path, capsys):
    src = tmp_path / "svd"
    src.mkdir()
    (src / "a.svd").write_text("<r><name>A</name></r>", encoding="utf-8")
    (src / "b.svd").write_text("<r><name>B</name>", encoding="utf-8")
    out_dir = tmp_path / "out"
    report = tmp_path / "report.json"

    code = main([str(src), "-o", str(out_dir), "--report", str(report), "--log-file", ""])

    assert code == 1
    stdout = capsys.readouterr().out
    assert "a.svd:" in stdout
    assert "b.svd: FAILED" in stdout
    assert "TOTAL:" in stdout and "failed=1" in stdout
    records = json.loads(report.read_text(encoding="utf-8"))
    assert [r["success"] for r in records] == [True, False]
    assert (out_dir / "a.svd.min.txt").read_text(encoding="utf-8") == "a=r,b=name\n<a><b>A</b></a>\n"


def test_module_entrypoint_subprocess(tmp_path):
    p = tmp_path / "doc.svd"
    p.write_text("<root><baseAddress>0x40</baseAddress><x>keep</x></root>", encoding="utf-8")
    proc = subprocess.run(
        [sys.executable, "-m", "svdmin.cli", str(p), "--log-file", ""],
        capture_output=True, text=True, cwd=str(ROOT),
    )
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout == "a=root,b=x\n<a><b>keep</b></a>\n"


def test_setup_logging_replaces_handlers(tmp_path):
    from logging.handlers import RotatingFileHandler
    from svdmin.utils import setup_logging

    log_path = tmp_path / "svdmin.log"
    setup_logging(verbose=True, log_file=str(log_path))
    setup_logging(verbose=False, log_file=str(log_path))
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 2
    assert sum(isinstance(h, RotatingFileHandler) for h in root.handlers) == 1
    setup_logging(log_file=None)
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0], RotatingFileHandler)
