"""
Interfaz gráfica de la calculadora científica.

Usa tkinter. Cada clic o tecla se convierte en un InputEvent que el
ExpressionEditor aplica de forma síncrona; después se repinta la pantalla.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine
from expression_editor import ExpressionEditor
from input_events import EventKind, InputEvent, event_from_key, key_from_tk


def _digit(d):
    return InputEvent(EventKind.DIGIT, d)


def _op(o):
    return InputEvent(EventKind.OPERATOR, o)


def _func(f):
    return InputEvent(EventKind.FUNCTION, f)


def _paren(p):
    return InputEvent(EventKind.PARENTHESIS, p)


def _mem(m):
    return InputEvent(EventKind.MEMORY, m)


CLEAR = InputEvent(EventKind.CLEAR)
BACKSPACE = InputEvent(EventKind.BACKSPACE)
DECIMAL = InputEvent(EventKind.DECIMAL)
EQUALS = InputEvent(EventKind.EQUALS)


class CalculatorApp:
    """Ventana principal de la calculadora científica."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#89B4FA",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "clear":      "#4A2B35",
        "clear_fg":   "#F38BA8",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "toggle_on":  "#A6E3A1",
        "expr_fg":    "#7F849C",
        "result_fg":  "#CDD6F4",
        "error_fg":   "#F38BA8",
        "memory_fg":  "#89B4FA",
    }

    # ── Definiciones de filas ────────────────────────────────────
    #  Cada fila es una lista de (texto, evento, tipo_color)

    MEMORY_ROW = [
        ("MC", _mem("MC"), "special"), ("MR", _mem("MR"), "special"),
        ("M+", _mem("M+"), "special"), ("M-", _mem("M-"), "special"),
        ("AC", CLEAR, "clear"),
    ]

    SCIENCE_ROWS = [
        [("sin", _func("sin"), "func"), ("cos", _func("cos"), "func"),
         ("tan", _func("tan"), "func"), ("ln", _func("ln"), "func"),
         ("log", _func("log"), "func")],

        [("√", _func("√"), "func"), ("x²", _func("x²"), "func"),
         ("x^y", _func("x^y"), "func"), ("(", _paren("("), "func"),
         (")", _paren(")"), "func")],
    ]

    KEYPAD = [
        [("7", _digit("7"), "num"), ("8", _digit("8"), "num"),
         ("9", _digit("9"), "num"), ("÷", _op("÷"), "op")],

        [("4", _digit("4"), "num"), ("5", _digit("5"), "num"),
         ("6", _digit("6"), "num"), ("×", _op("×"), "op")],

        [("1", _digit("1"), "num"), ("2", _digit("2"), "num"),
         ("3", _digit("3"), "num"), ("−", _op("−"), "op")],

        [("0", _digit("0"), "num"), (".", DECIMAL, "num"),
         ("⌫", BACKSPACE, "special"), ("+", _op("+"), "op")],

        [("π", _func("π"), "func"), ("e", _func("e"), "func"),
         ("=", EQUALS, "equals")],
    ]

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None, title: str = "Calculadora Científica"):
        self.root = root
        self.root.title(title)
        self.root.configure(bg=self.C["bg"])

        self.engine = engine if engine is not None else CalculatorEngine()
        self.editor = ExpressionEditor(self.engine)

        self._init_fonts()
        self._create_display()
        self._create_toggle_bar()
        self._create_rows()
        self._bind_keyboard()
        self._render()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=12)
        self._f_result = tkfont.Font(family="Consolas", size=24, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=10)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Expresión (solo lectura, tenue)
        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, font=self._f_expr,
            bg=self.C["display_bg"], fg=self.C["expr_fg"],
            anchor="e", justify="right",
        ).pack(fill="x", pady=(4, 0))

        # Resultado (rojo si hay error)
        self.result_var = tk.StringVar()
        self.result_label = tk.Label(
            frame, textvariable=self.result_var, font=self._f_result,
            bg=self.C["display_bg"], fg=self.C["result_fg"],
            anchor="e", justify="right",
        )
        self.result_label.pack(fill="x", pady=(2, 4))

        # Indicador de memoria, solo visible si memoria ≠ 0
        self.memory_var = tk.StringVar()
        self.memory_label = tk.Label(
            frame, textvariable=self.memory_var, font=self._f_small,
            bg=self.C["display_bg"], fg=self.C["memory_fg"], anchor="e",
        )

    # ── Barra de modo angular ────────────────────────────────────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.angle_btn = tk.Button(
            frame, font=self._f_small, width=6, relief="flat",
            command=self._toggle_angle,
        )
        self.angle_btn.pack(side="left", padx=(0, 4))
        self._paint_angle_button()

    # ── Botones ──────────────────────────────────────────────────

    def _create_rows(self):
        self._create_grid([self.MEMORY_ROW], self._f_func,
                          expand=False)
        self._create_grid(self.SCIENCE_ROWS, self._f_func, expand=False)
        self._create_grid(self.KEYPAD, self._f_btn, expand=True)

    def _create_grid(self, rows, font, expand: bool):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        if expand:
            frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))
        else:
            frame.pack(fill="x", padx=6, pady=2)

        # Determinar el ancho máximo de las filas
        max_cols = max(len(row) for row in rows)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(rows):
            # Repartir columnas con colspan para filas cortas
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, event, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=font,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda ev=event: self._dispatch(ev),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=6)
                col_pos += spans[idx]

        if expand:
            for r in range(len(rows)):
                frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, tk_event):
        event = event_from_key(key_from_tk(tk_event.keysym, tk_event.char))
        if event is None:
            return None
        self._dispatch(event)
        return "break"

    # ── Acciones ─────────────────────────────────────────────────

    def _dispatch(self, event: InputEvent):
        self.editor.dispatch(event)
        self._render()

    def _render(self):
        state = self.editor.state
        self.expr_var.set(state.expression or " ")
        self.result_var.set(state.result)
        self.result_label.config(
            fg=self.C["error_fg"] if state.has_error else self.C["result_fg"]
        )

        memory_text = self.editor.memory_text
        if memory_text is None:
            self.memory_label.pack_forget()
        else:
            self.memory_var.set(f"Memoria: {memory_text}")
            self.memory_label.pack(fill="x")

    # ── Modo angular ─────────────────────────────────────────────

    def _toggle_angle(self):
        self.engine.angle_mode = "deg" if self.engine.angle_mode == "rad" else "rad"
        self._paint_angle_button()
        # La misma expresión puede valer otra cosa en el nuevo modo
        self.editor.refresh()
        self._render()

    def _paint_angle_button(self):
        if self.engine.angle_mode == "deg":
            self.angle_btn.config(text="DEG", bg=self.C["op"], fg=self.C["op_fg"],
                                  activebackground=self.C["op"])
        else:
            self.angle_btn.config(text="RAD", bg=self.C["toggle_on"], fg=self.C["bg"],
                                  activebackground=self.C["toggle_on"])
