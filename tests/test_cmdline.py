import io
from pyoverload.cmdline import cmdline_main
from tests.util import MISSING_FUNCTIONS

BROKEN = """\
from typing import overload

@overload
def f(a: int) -> int: ...
"""


def run(argv):
    out = io.StringIO()
    code = cmdline_main(argv, out)
    return code, out.getvalue()


def test_report(tmp_path):
    tmp_path = tmp_path.resolve()
    path = tmp_path / "mod.py"
    path.write_text(BROKEN)
    code, output = run([str(path)])
    assert code == 1
    assert output.splitlines() == [f"{path}:4:5: warn: {MISSING_FUNCTIONS}"]


def test_clean(tmp_path):
    tmp_path = tmp_path.resolve()
    path = tmp_path / "mod.py"
    path.write_text("def f(): ...\n")
    code, output = run([str(path)])
    assert code == 0
    assert output == ""


def test_show_source(tmp_path):
    tmp_path = tmp_path.resolve()
    path = tmp_path / "mod.py"
    path.write_text(BROKEN)
    code, output = run([str(path), "--show-source", "--no-color"])
    assert code == 1
    assert output.splitlines()[1] == "    def f(a: int) -> int: ..."

    code, output = run([str(path), "--show-source"])
    lines = output.splitlines()
    assert len(lines) == 2
    assert "\x1b[" in lines[1]


def test_show_source_after_form_feed(tmp_path):
    tmp_path = tmp_path.resolve()
    path = tmp_path / "mod.py"
    path.write_text(BROKEN.replace("\n\n", "\n\x0c\n", 1))
    code, output = run([str(path), "--show-source", "--no-color"])
    assert code == 1
    assert output.split("\n") == [
        f"{path}:4:5: warn: {MISSING_FUNCTIONS}",
        "    def f(a: int) -> int: ...",
        "",
    ]


def test_package(tmp_path):
    tmp_path = tmp_path.resolve()
    pkg = tmp_path / "pkg"
    pkg.mkdir()
    (pkg / "a.py").write_text(BROKEN)
    (pkg / "a.pyi").write_text(BROKEN)
    code, output = run(["-p", str(pkg)])
    assert code == 1
    assert len(output.splitlines()) == 1
    assert output.startswith(str(pkg / "a.py") + ":4:5:")


def test_not_a_package(tmp_path):
    tmp_path = tmp_path.resolve()
    code, output = run(["-p", str(tmp_path / "missing")])
    assert code == 2
    assert "may not be a package" in output


def test_no_module():
    code, output = run([])
    assert code == 2
    assert "please enter module path" in output


def test_missing_file(tmp_path):
    tmp_path = tmp_path.resolve()
    code, output = run([str(tmp_path / "missing.py")])
    assert code == 1
    assert output.strip() == f"error: {tmp_path / 'missing.py'} not found"
