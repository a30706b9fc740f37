from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, QTimer, pyqtSignal, pyqtSlot

from pyed.domain.errors import EditorError, ErrorKind
from pyed.domain.intents import LoadedFile, OpenCompleted, SaveCompleted
from pyed.domain.interfaces import IFileService
from pyed.domain.models import display_name_for
from pyed.services.ui.ports.dialogs import IFileDialogService
from pyed.utils.constants import OPEN_FILTER, SAVE_FILTER

LOGGER = logging.getLogger(__name__)


class _JobSignals(QObject):
    done = pyqtSignal(object)


class _FileJob(QRunnable):
    """Runs one blocking file operation on a pool thread and emits its result intent."""

    def __init__(self, work: Callable[[], object]) -> None:
        super().__init__()
        self.signals = _JobSignals()
        self._work = work

    def run(self) -> None:
        self.signals.done.emit(self._work())


def _unexpected(exc: Exception) -> EditorError:
    return EditorError(ErrorKind.IO, str(exc) or type(exc).__name__, io_kind=type(exc).__name__)


def save_path_problem(path: Path) -> str | None:
    """Why `path` cannot be a save target, or None when it can."""
    if path.is_dir():
        return f"{path} is a directory"
    if not path.parent.is_dir():
        return f"folder {path.parent} does not exist"
    return None


class QtAsyncFileService(QObject):
    """
    Dialogs on the GUI thread, disk I/O on a QThreadPool.

    Every request ends with exactly one OpenCompleted / SaveCompleted emitted on
    `finished`, always delivered on the GUI thread. Jobs never see editor state;
    they only get the path and text they were handed.
    """

    finished = pyqtSignal(object)  # OpenCompleted | SaveCompleted

    def __init__(
        self,
        files: IFileService,
        dialogs: IFileDialogService,
        *,
        pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._files = files
        self._dialogs = dialogs
        self._pool = pool or QThreadPool.globalInstance()
        self._jobs: set[_JobSignals] = set()
        # Parent widget for native dialogs; set once the window exists.
        self.dialog_parent: Any | None = None

    # ---------- IAsyncFileService ----------
    def pick_and_load(self) -> None:
        path = self._dialogs.get_open_file(
            self.dialog_parent, "Choose a text file…", None, OPEN_FILTER
        )
        if path is None:
            LOGGER.info("Open dialog closed without a selection")
            self._deliver_later(OpenCompleted(error=EditorError.dialog_closed()))
            return
        self.load(path)

    def load(self, path: Path) -> None:
        LOGGER.debug("Loading %s", path)
        self._submit(lambda: self._load_work(path))

    def save(
        self,
        path: Path | None,
        text: str,
        *,
        document_id: int | None = None,
        newline: str = "\n",
    ) -> None:
        if path is None:
            chosen = self._dialogs.get_save_file(self.dialog_parent, "Save File…", None, SAVE_FILTER)
            if chosen is None:
                LOGGER.info("Save dialog closed without a selection")
                self._deliver_later(
                    SaveCompleted(error=EditorError.dialog_closed(), document_id=document_id)
                )
                return
            problem = save_path_problem(chosen)
            if problem:
                LOGGER.warning("Rejected save target: %s", problem)
                self._deliver_later(
                    SaveCompleted(
                        error=EditorError.failed_to_save(problem), document_id=document_id
                    )
                )
                return
            path = chosen
        LOGGER.debug("Saving document %s to %s", document_id, path)
        target = path
        self._submit(lambda: self._save_work(target, text, document_id, newline))

    def wait_for_done(self, msecs: int = -1) -> bool:
        """Block until queued jobs finish (shutdown and tests)."""
        return self._pool.waitForDone(msecs)

    # ---------- work (pool threads) ----------
    def _load_work(self, path: Path) -> OpenCompleted:
        try:
            text = self._files.read_text(path)
        except OSError as exc:
            return OpenCompleted(error=EditorError.io(exc))
        except UnicodeDecodeError:
            return OpenCompleted(
                error=EditorError(
                    ErrorKind.IO, "File is not valid UTF-8 text", io_kind="UnicodeDecodeError"
                )
            )
        except Exception as exc:
            LOGGER.exception("Unexpected failure reading %s", path)
            return OpenCompleted(error=_unexpected(exc))
        return OpenCompleted(loaded=LoadedFile(path, text, display_name_for(path)))

    def _save_work(
        self, path: Path, text: str, document_id: int | None, newline: str
    ) -> SaveCompleted:
        on_disk = text if newline == "\n" else text.replace("\n", newline)
        try:
            self._files.write_text_atomic(path, on_disk)
        except OSError as exc:
            return SaveCompleted(error=EditorError.io(exc), document_id=document_id)
        except Exception as exc:
            LOGGER.exception("Unexpected failure writing %s", path)
            return SaveCompleted(error=_unexpected(exc), document_id=document_id)
        return SaveCompleted(path=path, document_id=document_id, text=text)

    # ---------- delivery (GUI thread) ----------
    def _submit(self, work: Callable[[], object]) -> None:
        job = _FileJob(work)
        self._jobs.add(job.signals)
        job.signals.done.connect(self._on_job_done)
        self._pool.start(job)

    @pyqtSlot(object)
    def _on_job_done(self, intent: object) -> None:
        self._jobs.discard(self.sender())  # type: ignore[arg-type]
        self.finished.emit(intent)

    def _deliver_later(self, intent: object) -> None:
        QTimer.singleShot(0, lambda: self.finished.emit(intent))
