"""Remote browser provisioning and page extraction.

``kernel_provider`` provisions hosted Chromium sessions reachable over CDP;
``stagehand_client`` attaches to a session and runs LLM-backed extraction.
Both sit behind the abstract interfaces in ``base`` so the scout runner and
API can be exercised with fakes.
"""

from ycscout.browser.base import BrowserProvider, BrowserSession, ExtractionClient
from ycscout.browser.factory import create_browser_provider, create_extraction_client

__all__ = [
    "BrowserProvider",
    "BrowserSession",
    "ExtractionClient",
    "create_browser_provider",
    "create_extraction_client",
]
