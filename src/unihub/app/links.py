"""Hand institution websites to the platform's external browser."""

from __future__ import annotations

import webbrowser
from typing import Callable

from ..exceptions import LinkOpenError
from ..utils.logging import get_logger

Launcher = Callable[[str], bool]

NO_WEBSITE_MESSAGE = "No website link available."

_LOGGER = get_logger(module=__name__)


def _open_external(url: str) -> bool:
    return webbrowser.open(url, new=2)


class LinkOpener:
    """Open a stored website value with no normalisation or validation."""

    def __init__(self, launcher: Launcher | None = None) -> None:
        self._launcher = launcher or _open_external

    def open(self, website: str | None) -> str:
        """Launch ``website`` and return it, raising :class:`LinkOpenError` on failure."""

        if website is None:
            raise LinkOpenError(NO_WEBSITE_MESSAGE)
        try:
            launched = self._launcher(website)
        except Exception as exc:
            _LOGGER.warning("Launcher raised", url=website, error=str(exc))
            raise LinkOpenError(f"An error occurred while launching the URL: {exc}") from exc
        if not launched:
            raise LinkOpenError(f"Could not launch {website}")
        _LOGGER.info("Opened website", url=website)
        return website


__all__ = ["LinkOpener", "Launcher", "NO_WEBSITE_MESSAGE"]
