"""Point d'entrée de l'application userdesk."""

from __future__ import annotations

import argparse
import logging

from userdesk.config import load_config
from userdesk.practice import PracticeBoard
from userdesk.services import UsersService
from userdesk.state import AppState
from userdesk.ui.app import MainWindow
from userdesk.ui.practice import PracticeWindow


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="userdesk", description="Cliente de usuarios y práctica del DOM.")
    parser.add_argument(
        "app",
        nargs="?",
        choices=("usuarios", "practica"),
        default="usuarios",
        help="ventana a abrir (por defecto: usuarios)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Initialise les dépendances puis lance l'interface Tkinter."""
    args = _parse_args(argv)
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.app == "practica":
        PracticeWindow(PracticeBoard(), theme=config.theme).run()
        return

    service = UsersService(config)
    state = AppState()
    app = MainWindow(service=service, state=state, config=config)
    app.run()


if __name__ == "__main__":
    main()
