"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides the example template document shared by loader and CLI tests.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local exprlens package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of exprlens modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("exprlens"):
        del sys.modules[module_name]


EXAMPLE_DOCUMENT = """\
source: app.component.html
offset: 120
text: "title | uppercase"
expression:
  kind: pipe
  span: [0, 17]
  name: uppercase
  name_span: [128, 137]
  exp: {kind: property_read, span: [0, 5], name: title, name_span: [120, 125]}
types:
  Hero:
    documentation: A hero.
    members:
      name: {type: string}
      sidekick: {type: Hero, nullable: true}
scope:
  title: {type: string}
  hero: {type: Hero}
pipes:
  uppercase: {type: string, documentation: Transforms text to all upper case.}
  date: {type: string}
any_members:
  toString: {kind: method, callable: true}
"""


@pytest.fixture
def example_document(tmp_path: Path) -> Path:
    """``title | uppercase`` at offset 120 of app.component.html."""
    path = tmp_path / "title_pipe.yaml"
    path.write_text(EXAMPLE_DOCUMENT)
    return path
