"""Root-level conftest.py: make this checkout's fifths_dash take precedence.

If fifths-dash is also installed elsewhere (e.g. a non-editable install),
prepend the repo root so tests always exercise the working tree, and drop
any copy that was already imported.
"""

import sys
from pathlib import Path

_repo_root = str(Path(__file__).parent)
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

for _mod in list(sys.modules):
    if _mod == "fifths_dash" or _mod.startswith("fifths_dash."):
        del sys.modules[_mod]
