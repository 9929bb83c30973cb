"""Vues Tkinter : formulaire d'identification et liste des utilisateurs."""

from __future__ import annotations

import tkinter as tk
from collections.abc import Callable
from tkinter import ttk

from userdesk.credentials import CredentialForm
from userdesk.roster import EDIT_FIELDS, RosterController
from userdesk.ui.dialogs import ErrorDialog
from userdesk.validation import FIELDS

FIELD_LABELS = {
    "username": "Username",
    "password": "Password",
    "email": "Email",
    "birthDate": "Birth Date (AAAA-MM-DD)",
    "fullName": "Full Name",
}

EDIT_LABELS = {
    "email": "Email",
    "birthDate": "Fecha de Nacimiento",
    "fullName": "Nombre Completo",
    "password": "Password",
}

ROSTER_COLUMNS = (
    ("username", "Usuario", 120),
    ("email", "Email", 200),
    ("full_name", "Nombre Completo", 180),
    ("birth_date", "Fecha de Nacimiento", 140),
)


class CredentialsView:
    """Formulaire de connexion / inscription lié à un :class:`CredentialForm`."""

    def __init__(self, parent: tk.Misc, form: CredentialForm) -> None:
        self._form = form
        self._error_dialog: ErrorDialog | None = None
        self._syncing = False

        self.frame = ttk.Frame(parent, style="Main.TFrame", padding=(24, 16))
        self.frame.columnconfigure(0, weight=1)

        self._title_label = ttk.Label(self.frame, style="HeaderTitle.TLabel")
        self._title_label.grid(row=0, column=0, pady=(0, 8))

        self._welcome_label = ttk.Label(self.frame, style="Subtitle.TLabel")
        self._welcome_label.grid(row=1, column=0, pady=(0, 12))

        self._fields_frame = ttk.Frame(self.frame, style="Card.TFrame", padding=(20, 18))
        self._fields_frame.grid(row=2, column=0, sticky="ew")
        self._fields_frame.columnconfigure(0, weight=1)

        self._vars: dict[str, tk.StringVar] = {}
        self._rows: dict[str, ttk.Frame] = {}
        self._error_labels: dict[str, tuple[ttk.Label, ttk.Label]] = {}
        for name in FIELDS:
            self._build_field(name)

        self._submit_button = ttk.Button(
            self.frame,
            command=self._form.submit,
            style="Accent.TButton",
        )
        self._submit_button.grid(row=3, column=0, sticky="ew", pady=(16, 0))

        self._toggle_button = ttk.Button(
            self.frame,
            command=self._form.toggle_mode,
            style="Link.TButton",
            cursor="hand2",
        )
        self._toggle_button.grid(row=4, column=0, pady=(8, 0))

        self._ip_label = ttk.Label(self.frame, style="Subtitle.TLabel", justify="center")
        self._ip_label.grid(row=5, column=0, pady=(24, 0))

        form.subscribe(self.refresh)
        self.refresh()

    def _build_field(self, name: str) -> None:
        row = ttk.Frame(self._fields_frame, style="Card.TFrame")
        row.columnconfigure(0, weight=1)

        ttk.Label(row, text=FIELD_LABELS[name], style="Field.TLabel").grid(row=0, column=0, sticky="w")

        var = tk.StringVar(value=self._form.values[name])
        entry = ttk.Entry(row, textvariable=var, show="*" if name == "password" else "")
        entry.grid(row=1, column=0, sticky="ew", pady=(4, 0), ipady=4)
        entry.bind("<Return>", lambda _: self._form.submit())
        var.trace_add("write", lambda *_: self._on_var_changed(name))

        message_label = ttk.Label(row, style="FieldErrorTitle.TLabel")
        details_label = ttk.Label(row, style="FieldError.TLabel", justify="left")

        self._vars[name] = var
        self._rows[name] = row
        self._error_labels[name] = (message_label, details_label)

    def _on_var_changed(self, name: str) -> None:
        if self._syncing:
            return
        raw = self._vars[name].get()
        stored = self._form.change(name, raw)
        if stored != raw:
            self._syncing = True
            try:
                self._vars[name].set(stored)
            finally:
                self._syncing = False

    def refresh(self) -> None:
        form = self._form
        self._title_label.configure(text=form.mode.title)
        self._welcome_label.configure(text=form.welcome_message)
        self._submit_button.configure(
            text=form.mode.submit_label,
            state=tk.NORMAL if form.is_valid and not form.submitting else tk.DISABLED,
        )
        self._toggle_button.configure(text=form.mode.toggle_label)

        ip_text = f"Dirección IP: {form.ip}"
        if form.ip_data:
            ip_text += f"\n{form.ip_data}"
        self._ip_label.configure(text=ip_text)

        visible = form.visible_fields
        for position, name in enumerate(FIELDS):
            row = self._rows[name]
            if name not in visible:
                row.grid_remove()
                continue
            row.grid(row=position, column=0, sticky="ew", pady=(0, 12))
            self._sync_var(name)
            self._render_error(name)

        self._sync_error_dialog()

    def _sync_var(self, name: str) -> None:
        value = self._form.values[name]
        if self._vars[name].get() == value:
            return
        self._syncing = True
        try:
            self._vars[name].set(value)
        finally:
            self._syncing = False

    def _render_error(self, name: str) -> None:
        message_label, details_label = self._error_labels[name]
        error = self._form.errors.get(name)
        if error is None:
            message_label.grid_remove()
            details_label.grid_remove()
            return
        message_label.configure(text=error.message)
        details_label.configure(text="\n".join(f"•  {detail}" for detail in error.details))
        message_label.grid(row=2, column=0, sticky="w", pady=(6, 0))
        details_label.grid(row=3, column=0, sticky="w")

    def _sync_error_dialog(self) -> None:
        error = self._form.server_error
        if error is None:
            self._error_dialog = None
            return
        if self._error_dialog is None:
            self._error_dialog = ErrorDialog(self.frame, error, on_close=self._form.dismiss_error)

    def destroy(self) -> None:
        self.frame.destroy()


class RosterView:
    """Liste des utilisateurs avec édition en ligne et suppression."""

    def __init__(
        self,
        parent: tk.Misc,
        controller: RosterController,
        *,
        on_back: Callable[[], None],
    ) -> None:
        self._controller = controller

        self.frame = ttk.Frame(parent, style="Main.TFrame", padding=(24, 16))
        self.frame.columnconfigure(0, weight=1)
        self.frame.rowconfigure(4, weight=1)

        ttk.Button(
            self.frame,
            text="← Volver al Inicio",
            command=on_back,
            style="Link.TButton",
            cursor="hand2",
        ).grid(row=0, column=0, sticky="w")

        ttk.Label(self.frame, text="Usuarios Registrados", style="HeaderTitle.TLabel").grid(
            row=1, column=0, pady=(8, 8)
        )

        self._stale_label = ttk.Label(
            self.frame,
            text="No se pudo actualizar la lista; los datos pueden estar desactualizados.",
            style="Stale.TLabel",
        )

        self._edit_frame = ttk.Frame(self.frame, style="Card.TFrame", padding=(20, 18))
        self._edit_frame.columnconfigure(1, weight=1)
        self._edit_title = ttk.Label(self._edit_frame, style="Field.TLabel", font=("Helvetica", 14, "bold"))
        self._edit_title.grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 12))
        self._edit_vars: dict[str, tk.StringVar] = {}
        for position, name in enumerate(EDIT_FIELDS, start=1):
            ttk.Label(self._edit_frame, text=EDIT_LABELS[name], style="Field.TLabel").grid(
                row=position, column=0, sticky="w", padx=(0, 12), pady=4
            )
            var = tk.StringVar()
            var.trace_add("write", lambda *_, n=name: self._controller.change_edit(n, self._edit_vars[n].get()))
            ttk.Entry(self._edit_frame, textvariable=var, show="*" if name == "password" else "").grid(
                row=position, column=1, sticky="ew", pady=4
            )
            self._edit_vars[name] = var

        buttons = ttk.Frame(self._edit_frame, style="Card.TFrame")
        buttons.grid(row=len(EDIT_FIELDS) + 1, column=0, columnspan=2, sticky="ew", pady=(12, 0))
        ttk.Button(buttons, text="Actualizar", command=controller.submit_edit, style="Accent.TButton").pack(
            side=tk.LEFT
        )
        ttk.Button(buttons, text="Cancelar", command=controller.cancel_edit).pack(side=tk.RIGHT)

        list_container = ttk.Frame(self.frame, style="Card.TFrame", padding=(12, 12))
        list_container.grid(row=4, column=0, sticky="nsew", pady=(12, 0))
        list_container.columnconfigure(0, weight=1)
        list_container.rowconfigure(0, weight=1)

        self._tree = ttk.Treeview(
            list_container,
            columns=[column for column, _, _ in ROSTER_COLUMNS],
            show="headings",
            selectmode="browse",
        )
        for column, heading, width in ROSTER_COLUMNS:
            self._tree.heading(column, text=heading)
            self._tree.column(column, width=width, anchor="w")
        self._tree.grid(row=0, column=0, sticky="nsew")

        scrollbar = ttk.Scrollbar(list_container, orient=tk.VERTICAL, command=self._tree.yview)
        scrollbar.grid(row=0, column=1, sticky="ns")
        self._tree.configure(yscrollcommand=scrollbar.set)

        self._empty_label = ttk.Label(list_container, text="No hay usuarios registrados", style="Subtitle.TLabel")

        actions = ttk.Frame(self.frame, style="Main.TFrame")
        actions.grid(row=5, column=0, sticky="ew", pady=(12, 0))
        ttk.Button(actions, text="Editar", command=self._edit_selected).pack(side=tk.RIGHT)
        ttk.Button(actions, text="Eliminar", command=self._delete_selected).pack(side=tk.RIGHT, padx=(0, 12))

        controller.subscribe(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        controller = self._controller

        if controller.is_stale:
            self._stale_label.grid(row=2, column=0, pady=(0, 8))
        else:
            self._stale_label.grid_remove()

        if controller.editing is None:
            self._edit_frame.grid_remove()
        else:
            self._edit_title.configure(text=f"Editar Usuario: {controller.editing.username}")
            for name, var in self._edit_vars.items():
                if var.get() != controller.edit_values[name]:
                    var.set(controller.edit_values[name])
            self._edit_frame.grid(row=3, column=0, sticky="ew", pady=(0, 12))

        self._tree.delete(*self._tree.get_children())
        for index, user in enumerate(controller.users):
            self._tree.insert(
                "",
                tk.END,
                iid=str(index),
                values=[getattr(user, column) for column, _, _ in ROSTER_COLUMNS],
            )

        if controller.loaded and not controller.users:
            self._empty_label.grid(row=1, column=0, sticky="w", pady=(8, 0))
        else:
            self._empty_label.grid_remove()

    def _selected_user(self):
        selection = self._tree.selection()
        if not selection:
            return None
        return self._controller.users[int(selection[0])]

    def _edit_selected(self) -> None:
        user = self._selected_user()
        if user is not None:
            self._controller.begin_edit(user)

    def _delete_selected(self) -> None:
        user = self._selected_user()
        if user is not None:
            self._controller.delete(user.id)

    def destroy(self) -> None:
        self.frame.destroy()
