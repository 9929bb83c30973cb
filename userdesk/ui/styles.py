"""Palette et styles ttk partagés par les fenêtres."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

ACCENT_COLOR = "#3B82F6"
BACKGROUND_COLOR = "#121212"
CARD_COLOR = "#181818"
STATUS_NEUTRAL_COLOR = "#B3B3B3"
STATUS_ERROR_COLOR = "#F87171"
STATUS_WARNING_COLOR = "#FBBF24"


def configure_styles(root: tk.Tk) -> None:
    style = ttk.Style()
    style.configure("Main.TFrame", background=BACKGROUND_COLOR)
    style.configure("Card.TFrame", background=CARD_COLOR)
    style.configure(
        "HeaderTitle.TLabel",
        background=BACKGROUND_COLOR,
        foreground="#FFFFFF",
        font=("Helvetica", 20, "bold"),
    )
    style.configure(
        "Subtitle.TLabel",
        background=BACKGROUND_COLOR,
        foreground=STATUS_NEUTRAL_COLOR,
        font=("Helvetica", 11),
    )
    style.configure(
        "Field.TLabel",
        background=CARD_COLOR,
        foreground="#FFFFFF",
        font=("Helvetica", 11, "bold"),
    )
    style.configure(
        "FieldError.TLabel",
        background=CARD_COLOR,
        foreground=STATUS_ERROR_COLOR,
        font=("Helvetica", 10),
    )
    style.configure(
        "FieldErrorTitle.TLabel",
        background=CARD_COLOR,
        foreground=STATUS_ERROR_COLOR,
        font=("Helvetica", 10, "bold"),
    )
    style.configure(
        "Stale.TLabel",
        background=BACKGROUND_COLOR,
        foreground=STATUS_WARNING_COLOR,
        font=("Helvetica", 10, "italic"),
    )
    style.configure(
        "Link.TButton",
        foreground=ACCENT_COLOR,
        font=("Helvetica", 10, "underline"),
    )
    style.configure("Accent.TButton", font=("Helvetica", 11, "bold"))
    style.configure("TButton", padding=(16, 8))
    style.map("TButton", background=[("disabled", "#2B2B2B")])
    root.option_add("*Font", "Helvetica 11")
