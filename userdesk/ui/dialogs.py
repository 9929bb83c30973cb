"""Fenêtre modale d'erreur serveur."""

from __future__ import annotations

import tkinter as tk
from collections.abc import Callable
from tkinter import ttk

from userdesk.presenter import present_error, status_line
from userdesk.services import ServerError
from userdesk.ui.styles import CARD_COLOR, STATUS_ERROR_COLOR


class ErrorDialog:
    """Affiche une erreur du backend ; la fermeture est déléguée à ``on_close``."""

    def __init__(self, parent: tk.Misc, error: ServerError, on_close: Callable[[], None]) -> None:
        presentation = present_error(error)
        if presentation is None:
            raise ValueError("ErrorDialog requires an error")
        self._on_close = on_close

        self.window = tk.Toplevel(parent)
        self.window.title(presentation.title)
        self.window.configure(bg=CARD_COLOR)
        self.window.resizable(False, False)
        self.window.transient(parent.winfo_toplevel())
        self.window.protocol("WM_DELETE_WINDOW", self.close)

        frame = ttk.Frame(self.window, style="Card.TFrame", padding=(24, 20))
        frame.pack(fill=tk.BOTH, expand=True)

        ttk.Label(
            frame,
            text=f"⚠  {presentation.title}",
            style="FieldErrorTitle.TLabel",
            font=("Helvetica", 14, "bold"),
        ).pack(anchor="w")
        ttk.Label(
            frame,
            text=presentation.description,
            style="Field.TLabel",
            wraplength=360,
            font=("Helvetica", 11),
        ).pack(anchor="w", pady=(12, 12))

        ttk.Label(frame, text="Sugerencias:", style="FieldErrorTitle.TLabel").pack(anchor="w")
        for suggestion in presentation.suggestions:
            ttk.Label(frame, text=f"•  {suggestion}", style="Field.TLabel", font=("Helvetica", 10)).pack(
                anchor="w"
            )

        status = status_line(error)
        if status:
            tk.Label(frame, text=status, bg=CARD_COLOR, fg=STATUS_ERROR_COLOR).pack(anchor="w", pady=(12, 0))

        ttk.Button(frame, text="Cerrar", command=self.close).pack(anchor="e", pady=(16, 0))
        self.window.grab_set()

    def close(self) -> None:
        try:
            self.window.grab_release()
            self.window.destroy()
        except tk.TclError:
            pass
        self._on_close()
