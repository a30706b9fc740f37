from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IMessageService(Protocol):
    """
    Abstract UI port for asking the user things. Decouples presenters from Qt widgets.
    """

    def ask(self, parent: Any | None, title: str, text: str) -> bool:
        """True for an affirmative (Yes) answer, False for No/Cancel."""
        ...
