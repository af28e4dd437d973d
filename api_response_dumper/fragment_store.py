"""Write per-test fragment files and merge them into one JavaScript file."""

import logging
import os
import re
from pathlib import Path
from typing import Any

from api_response_dumper.models import controller_prefix
from api_response_dumper.serializer import (
    escape_js_string,
    escape_single_quotes,
    to_json,
)

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "api-response-dump"
PARTS_DIRECTORY = "apitest-parts"
MASTER_DIRECTORY = "apitest"
MASTER_FILE_NAME = "test-data.js"
HEADER_FILE_NAME = "test-header.txt"
FOOTER_FILE_NAME = "test-footer.txt"
FRAGMENT_SUFFIX = ".part.txt"

HEADER = "(function(global){var testData;"
FOOTER = "global.testData = testData;})(window);"


# Characters not allowed in file names on common filesystems
_UNSAFE_FILE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def safe_file_part(name: str) -> str:
    """Replace characters that cannot appear in a file name with '_'."""
    name = _UNSAFE_FILE_CHARS.sub("_", name)
    if os.altsep:
        name = name.replace(os.altsep, "_")
    return name.replace(os.sep, "_")


def render_fragment(prefix: str, method_name: str, test_name: str, json_text: str) -> str:
    """Build the script snippet that assigns one result into testData.

    Each level of testData is only created when missing, so fragments for
    the same controller and method do not overwrite each other. Keys are
    escaped, the JSON text is embedded as given.
    """
    prefix = escape_js_string(prefix)
    method_name = escape_js_string(method_name)
    test_name = escape_js_string(test_name)
    lines = [
        "testData = testData || {};",
        f"testData['{prefix}'] = testData['{prefix}'] || {{}};",
        f"testData['{prefix}']['{method_name}'] = testData['{prefix}']['{method_name}'] || {{}};",
        f"testData['{prefix}']['{method_name}']['{test_name}'] = JSON.parse('{json_text}');",
    ]
    return "\n".join(lines)


class FragmentStore:
    """Fragment files and the master file under a single root directory."""

    def __init__(self, root: Path | str = DEFAULT_ROOT):
        self.root = Path(root)

    @property
    def parts_dir(self) -> Path:
        return self.root / PARTS_DIRECTORY

    @property
    def header_path(self) -> Path:
        return self.parts_dir / HEADER_FILE_NAME

    @property
    def footer_path(self) -> Path:
        return self.parts_dir / FOOTER_FILE_NAME

    @property
    def master_path(self) -> Path:
        return self.root / MASTER_DIRECTORY / MASTER_FILE_NAME

    def fragment_path(self, controller_name: str, method_name: str, test_name: str) -> Path:
        """Fragment file for a call. Unsafe file name characters become '_'."""
        name = f"{controller_prefix(controller_name)}-{method_name}-{test_name}"
        return self.parts_dir / f"{safe_file_part(name)}{FRAGMENT_SUFFIX}"

    def fragment_paths(self) -> list[Path]:
        """Fragment files in directory listing order (not sorted)."""
        if not self.parts_dir.is_dir():
            return []
        return list(self.parts_dir.glob(f"*{FRAGMENT_SUFFIX}"))

    def record_fragment(
        self, controller_name: str, method_name: str, test_name: str, value: Any
    ) -> Path:
        """Serialize a value and write it as a fragment file.

        Args:
            controller_name: Controller class name, ending in 'Controller'
            method_name: Name of the controller method that was called
            test_name: Name of the test that made the call
            value: The value to store under testData[prefix][method][test]

        Returns:
            Path of the written fragment. An existing fragment for the same
            controller, method and test is overwritten.

        Raises:
            NotAController: If controller_name does not end in 'Controller'
        """
        prefix = controller_prefix(controller_name)
        json_text = escape_single_quotes(to_json(value))

        self.parts_dir.mkdir(parents=True, exist_ok=True)
        path = self.fragment_path(controller_name, method_name, test_name)
        path.write_text(render_fragment(prefix, method_name, test_name, json_text))
        logger.debug(f"Wrote fragment {path}")
        return path

    def reset_fragments(self) -> None:
        """Write fresh header and footer files and delete all fragments."""
        self.parts_dir.mkdir(parents=True, exist_ok=True)
        self.header_path.write_text(HEADER)
        self.footer_path.write_text(FOOTER)

        removed = 0
        for path in self.fragment_paths():
            path.unlink()
            removed += 1
        logger.info(f"Removed {removed} fragments from {self.parts_dir}")

    def build_master_file(self) -> Path:
        """Concatenate header, fragments and footer into the master file.

        Raises:
            FileNotFoundError: If the header or footer file is missing
        """
        parts = [self.header_path.read_text()]
        fragments = self.fragment_paths()
        for path in fragments:
            parts.append(path.read_text())
        parts.append(self.footer_path.read_text())

        self.master_path.parent.mkdir(parents=True, exist_ok=True)
        self.master_path.write_text("".join(f"{part}\n" for part in parts))
        logger.info(f"Wrote {len(fragments)} fragments to {self.master_path}")
        return self.master_path
