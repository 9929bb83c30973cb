"""Fenêtre du widget d'entraînement (ajout / suppression d'éléments colorés)."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

import sv_ttk
from PIL import Image, ImageDraw, ImageTk

from userdesk.practice import PracticeBoard
from userdesk.ui.styles import BACKGROUND_COLOR, CARD_COLOR, configure_styles

SWATCH_SIZE = 20


def _swatch(color: str) -> ImageTk.PhotoImage:
    """Pastille ronde de la couleur de l'élément."""
    image = Image.new("RGBA", (SWATCH_SIZE, SWATCH_SIZE), (0, 0, 0, 0))
    drawer = ImageDraw.Draw(image)
    drawer.ellipse((0, 0, SWATCH_SIZE - 1, SWATCH_SIZE - 1), fill=color)
    return ImageTk.PhotoImage(image)


class PracticeWindow:
    """Liste d'éléments générés ; un clic sur un élément le supprime."""

    def __init__(self, board: PracticeBoard | None = None, *, theme: str = "dark") -> None:
        self._board = board or PracticeBoard()
        self._swatches: list[ImageTk.PhotoImage] = []

        self.root = tk.Tk()
        self.root.title("Modificador del DOM")
        self.root.geometry("420x560")
        sv_ttk.set_theme(theme)
        self.root.configure(bg=BACKGROUND_COLOR)
        configure_styles(self.root)

        frame = ttk.Frame(self.root, style="Card.TFrame", padding=(24, 20))
        frame.pack(fill=tk.BOTH, expand=True, padx=16, pady=16)

        ttk.Label(frame, text="Modificador del DOM", style="Field.TLabel", font=("Helvetica", 16, "bold")).pack()

        buttons = ttk.Frame(frame, style="Card.TFrame")
        buttons.pack(pady=(16, 0))
        ttk.Button(buttons, text="Add element to DOM", command=self.add, style="Accent.TButton").pack(
            side=tk.LEFT, padx=(0, 12)
        )
        ttk.Button(buttons, text="Clear DOM", command=self.clear).pack(side=tk.LEFT)

        self._list_frame = ttk.Frame(frame, style="Card.TFrame")
        self._list_frame.pack(fill=tk.BOTH, expand=True, pady=(16, 0))

    def add(self) -> None:
        self._board.add()
        self._render()

    def clear(self) -> None:
        self._board.clear()
        self._render()

    def remove(self, uid: int) -> None:
        self._board.remove(uid)
        self._render()

    def _render(self) -> None:
        for child in self._list_frame.winfo_children():
            child.destroy()
        self._swatches = []

        for item, label in zip(self._board.items, self._board.labels()):
            swatch = _swatch(item.color)
            self._swatches.append(swatch)
            row = tk.Label(
                self._list_frame,
                text=f"  {label}",
                image=swatch,
                compound=tk.LEFT,
                anchor="w",
                bg=item.color,
                fg="#000000",
                padx=8,
                pady=6,
                cursor="hand2",
                highlightbackground=CARD_COLOR,
            )
            row.pack(fill=tk.X, pady=(6, 0))
            row.bind("<Button-1>", lambda _event, uid=item.uid: self.remove(uid))

    def run(self) -> None:
        self.root.mainloop()
