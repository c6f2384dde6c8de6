"""Punto de entrada de la calculadora científica."""

import tkinter as tk

import structlog

from calculator_engine import CalculatorEngine, build_provider
from calculator_ui import CalculatorApp
from config import configure_logging, settings

logger = structlog.get_logger()


def main():
    configure_logging(settings.log_level)
    engine = CalculatorEngine(
        build_provider(settings.numeric_backend, settings.angle_mode)
    )
    logger.info(
        "Starting calculator",
        backend=settings.numeric_backend,
        angle_mode=settings.angle_mode,
    )

    root = tk.Tk()
    root.geometry(settings.window_geometry)
    root.minsize(380, 600)
    CalculatorApp(root, engine=engine, title=settings.app_name)
    root.mainloop()


if __name__ == "__main__":
    main()
