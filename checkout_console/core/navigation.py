"""Navigation port used by the controllers to leave the current view"""

from typing import Any, Optional, Protocol


class Navigator(Protocol):
    """Routes the shopper to another view"""

    def navigate(self, path: str, state: Optional[dict[str, Any]] = None) -> None: ...
