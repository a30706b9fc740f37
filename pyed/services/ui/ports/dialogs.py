from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IFileDialogService(Protocol):
    """
    Native file pickers, as seen by the async file service.

    Both calls block until the user answers and must run on the GUI thread.
    None means the dialog was dismissed.
    """

    def get_open_file(
        self, parent: Any | None, caption: str, start_dir: str | None, filter_str: str
    ) -> Path | None: ...

    def get_save_file(
        self, parent: Any | None, caption: str, start_path: str | None, filter_str: str
    ) -> Path | None: ...
