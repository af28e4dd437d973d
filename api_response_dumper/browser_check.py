"""Load a generated master file in a browser using Playwright."""

import logging
from pathlib import Path
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from api_response_dumper.models import DumpError

logger = logging.getLogger(__name__)

# Indirect eval runs the script in global scope, as a <script> tag would.
EVALUATE_SCRIPT = """(source) => {
  (0, eval)(source);
  return window.testData === undefined ? null : window.testData;
}"""


class MasterLoadError(DumpError):
    """Error loading a master file into the browser."""

    def __init__(self, message: str, phase: str = "reading"):
        super().__init__(message)
        self.phase = phase


class MasterFileLoader:
    """Evaluate master files in headless Chromium."""

    def __init__(self):
        self._playwright = None
        self._browser = None

    async def __aenter__(self):
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch()
        logger.info("Browser launched")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the browser and cleanup resources."""
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        logger.info("Browser closed")

    async def load(self, path: Path) -> dict[str, Any]:
        """Run a master file and return the testData object it exposes.

        Args:
            path: Path to the generated test-data.js

        Returns:
            testData as nested dictionaries, empty if no fragments were merged

        Raises:
            MasterLoadError: If the file cannot be read or the script fails
        """
        try:
            source = Path(path).read_text()
        except OSError as e:
            logger.error(f"Failed to read master file: {e}")
            raise MasterLoadError(str(e), phase="reading") from e

        page = await self._browser.new_page()
        try:
            logger.info(f"Evaluating master file: {path}")
            test_data = await page.evaluate(EVALUATE_SCRIPT, source)
        except PlaywrightError as e:
            logger.error(f"Master file failed to evaluate: {e}")
            raise MasterLoadError(str(e), phase="evaluation") from e
        finally:
            await page.close()

        return test_data or {}


async def load_test_data(path: Path) -> dict[str, Any]:
    """Evaluate a master file in a fresh browser and return its testData."""
    async with MasterFileLoader() as loader:
        return await loader.load(path)
