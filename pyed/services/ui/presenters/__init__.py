from __future__ import annotations

from .main_presenter import EditorSnapshot, IMainView, MainPresenter

__all__ = ["EditorSnapshot", "IMainView", "MainPresenter"]
