from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ErrorKind(Enum):
    DIALOG_CLOSED = "dialog_closed"
    IO = "io"
    FAILED_TO_SAVE = "failed_to_save"
    RECONCILIATION = "reconciliation"


@dataclass(frozen=True)
class EditorError:
    """
    Error value carried by async results and kept as the controller's current error.

    DIALOG_CLOSED is a user cancellation, not a fault. RECONCILIATION is always a
    logic defect (a completion that matches no tracked document).
    """

    kind: ErrorKind
    message: str = ""
    io_kind: str | None = None

    @classmethod
    def dialog_closed(cls) -> EditorError:
        return cls(ErrorKind.DIALOG_CLOSED, "Dialog closed")

    @classmethod
    def io(cls, exc: OSError) -> EditorError:
        detail = exc.strerror or str(exc) or type(exc).__name__
        return cls(ErrorKind.IO, detail, io_kind=type(exc).__name__)

    @classmethod
    def failed_to_save(cls, message: str) -> EditorError:
        return cls(ErrorKind.FAILED_TO_SAVE, message)

    @classmethod
    def reconciliation(cls, path: Path | None, document_id: int | None) -> EditorError:
        return cls(
            ErrorKind.RECONCILIATION,
            f"No open document matches save result (path={path}, id={document_id})",
        )

    @property
    def is_fault(self) -> bool:
        return self.kind is not ErrorKind.DIALOG_CLOSED

    def describe(self) -> str:
        if self.kind is ErrorKind.IO:
            return f"{self.io_kind}: {self.message}" if self.io_kind else self.message
        if self.kind is ErrorKind.FAILED_TO_SAVE:
            return f"Failed to save: {self.message}"
        if self.kind is ErrorKind.RECONCILIATION:
            return f"Internal error: {self.message}"
        return self.message
