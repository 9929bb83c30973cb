"""Interface Tkinter principale."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk

import sv_ttk

from userdesk.config import AppConfig
from userdesk.credentials import CredentialForm
from userdesk.roster import RosterController
from userdesk.services import UsersService
from userdesk.state import AppState, View
from userdesk.tasks import TaskRunner
from userdesk.ui.styles import BACKGROUND_COLOR, configure_styles
from userdesk.ui.views import CredentialsView, RosterView

logger = logging.getLogger(__name__)

APP_TITLE = "Usuarios"
WINDOW_SIZE = (860, 720)


class MainWindow:
    """Fenêtre principale : formulaire d'identification puis liste des utilisateurs."""

    def __init__(self, service: UsersService, state: AppState | None = None, *, config: AppConfig) -> None:
        self._service = service
        self._state = state or AppState()

        self.root = tk.Tk()
        self.root.title(APP_TITLE)
        width, height = WINDOW_SIZE
        self.root.geometry(f"{width}x{height}")
        self.root.minsize(width // 2, height // 2)

        sv_ttk.set_theme(config.theme)
        self.root.configure(bg=BACKGROUND_COLOR)
        configure_styles(self.root)

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        self._runner = TaskRunner(self.root)
        self._container = ttk.Frame(self.root, style="Main.TFrame")
        self._container.grid(row=0, column=0, sticky="nsew")
        self._container.columnconfigure(0, weight=1)
        self._container.rowconfigure(0, weight=1)

        self._controller: CredentialForm | RosterController | None = None
        self._view: CredentialsView | RosterView | None = None
        self._rendered_view: View | None = None

        self._sync_view()

    # ---------------------------------------------------------------- Vues -
    def _sync_view(self) -> None:
        """Affiche la vue correspondant à la phase de session courante."""
        target = self._state.current_view
        if target is self._rendered_view:
            return

        self._teardown()
        if target is View.ROSTER:
            roster = RosterController(
                self._service,
                self._runner,
                confirm=self._confirm,
                notify=self._notify,
            )
            self._controller = roster
            self._view = RosterView(self._container, roster, on_back=self.logout)
            roster.refresh()
        else:
            form = CredentialForm(
                self._service,
                self._runner,
                notify=self._notify,
                on_authenticated=self._authenticated,
            )
            self._controller = form
            self._view = CredentialsView(self._container, form)
            form.load_greeting()

        self._view.frame.grid(row=0, column=0, sticky="nsew")
        self._rendered_view = target
        logger.debug("Showing %s view", target.value)

    def _teardown(self) -> None:
        if self._controller is not None:
            self._controller.close()
            self._controller = None
        if self._view is not None:
            self._view.destroy()
            self._view = None
        self._rendered_view = None

    # ----------------------------------------------------------- Callbacks -
    def _authenticated(self, username: str) -> None:
        self._state.authenticate(username)
        logger.info("Logged in as %s", username)
        self.root.after_idle(self._sync_view)

    def logout(self) -> None:
        if not self._state.is_authenticated:
            return
        self._state.logout()
        self._sync_view()

    def _notify(self, message: str, *, error: bool = False) -> None:
        if error:
            messagebox.showerror(APP_TITLE, message, parent=self.root)
        else:
            messagebox.showinfo(APP_TITLE, message, parent=self.root)

    def _confirm(self, message: str) -> bool:
        return messagebox.askyesno(APP_TITLE, message, parent=self.root)

    # -------------------------------------------------------------- Public -
    def close(self) -> None:
        self._teardown()
        self._runner.shutdown()
        self._service.close()
        self.root.destroy()

    def run(self) -> None:
        self.root.mainloop()
