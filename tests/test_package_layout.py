"""The flat top-level packages import from this checkout."""

from pathlib import Path

import utils
import utils.timestamps

ROOT = Path(__file__).resolve().parents[1]


class TestUtilsPackage:

    def test_resolves_to_checkout(self):
        assert Path(utils.timestamps.__file__).resolve().parent == ROOT / "utils"

    def test_init_is_empty(self):
        assert (ROOT / "utils" / "__init__.py").read_text() == ""
        assert utils.__doc__ is None
