from __future__ import annotations

from typing import Dict, Optional, Protocol


class Navigator(Protocol):
    def navigate(self, url: str, delay: float = 0.0) -> None: ...


class ResponseNavigator:
    """Remembers where a web request wants the browser to go next."""

    def __init__(self) -> None:
        self.target: Optional[str] = None
        self.delay = 0.0

    def navigate(self, url: str, delay: float = 0.0) -> None:
        self.target = url
        self.delay = max(delay, 0.0)

    @property
    def is_immediate(self) -> bool:
        return self.target is not None and self.delay == 0

    def refresh_headers(self) -> Dict[str, str]:
        """`Refresh` header for a delayed navigation, so the page shows first."""
        if self.target is None or self.delay == 0:
            return {}
        return {"Refresh": f"{self.delay:g}; url={self.target}"}
