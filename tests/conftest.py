import sys
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """Create a flat directory of Java sources with known marker calls."""
    project_root = tmp_path / "project"
    project_root.mkdir()
    (project_root / "A.java").write_text(
        "class A {\n"
        "  void run() {\n"
        '    myFunction("Alpha first value");\n'
        '    myFunction("Beta second, value");\n'
        "  }\n"
        "}\n",
        encoding="utf-8",
    )
    (project_root / "B.java").write_text(
        "class B {\n"
        "  // myFunction is not called here\n"
        "}\n",
        encoding="utf-8",
    )
    (project_root / "C.java").write_text(
        'class C { void f() { myFunction(\n  "Gamma  quoted  text" ) ; } }\n',
        encoding="utf-8",
    )
    (project_root / "notes.txt").write_text(
        'myFunction("Delta ignored");\n', encoding="utf-8"
    )
    return project_root
