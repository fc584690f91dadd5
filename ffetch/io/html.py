"""BeautifulSoup-backed HTML parser."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from ..core.exceptions import OperationFailedError


class BeautifulSoupParser:
    """Parse HTML into a `BeautifulSoup` document.

    The stdlib-backed "html.parser" builder accepts malformed and empty
    markup, returning a best-effort tree.
    """

    def __init__(self, features: str = "html.parser") -> None:
        self.features = features

    def parse(self, html: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(html, self.features)
        except ParserRejectedMarkup as e:
            raise OperationFailedError(f"Parser rejected markup: {e}") from e
