#!/usr/bin/env python3
"""
Calculator GUI

Dark-themed keypad calculator with a graphing view (Tkinter + Matplotlib).

- The keypad drives a KeypadController, which feeds tokens to the engine.
- The display shows the result; the line above it shows the expression trace
  followed by "..." while an operation is pending or "=" when complete.
- "→M" stores the displayed value in memory, "M" uses memory as an operand.
- "Graph" plots the current program as y = f(M) using a FunctionSampler.
"""

import logging
import tkinter as tk
from tkinter import messagebox
from typing import Optional

import numpy as np
import matplotlib
matplotlib.use("TkAgg")  # use TkAgg backend for embedding in Tkinter windows
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg, NavigationToolbar2Tk

from backend.sampler import DEFAULT_VARIABLE, FunctionSampler
from frontend.keypad import KeypadController

logger = logging.getLogger("calculator.gui")


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_WIDTH = 420
WINDOW_HEIGHT = 600

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # panels / container background
BTN_BG = "#2b2d30"      # button tile background
OP_BG = "#3a3d41"       # operator tiles
FG = "#E6EEF3"          # foreground text (light)
ACCENT = "#cfeeff"      # accent color for titles, etc.
PLOT_BG = "#131416"
SPINE = "#44484C"

TITLE_FONT = ("Segoe UI", 13, "bold")
DISPLAY_FONT = ("Consolas", 22)
SEQUENCE_FONT = ("Consolas", 11)

DEFAULT_X_RANGE = (-10.0, 10.0)
DEFAULT_SAMPLES = 400
MIN_SAMPLES = 10

DIGITS = set("0123456789.")

TILES = [
    ["sin", "cos", "tan", "ln", "log", "RAD"],
    ["sin⁻¹", "cos⁻¹", "tan⁻¹", "π", "e", "Graph"],
    ["x²", "x⁻¹", "∧", "√", "→M", "M"],
    ["7", "8", "9", "÷", "C", "⌫"],
    ["4", "5", "6", "×", "±", ""],
    ["1", "2", "3", "−", "", ""],
    ["0", ".", "=", "+", "", ""],
]


class CalculatorGUI(tk.Tk):
    def __init__(self, keypad: Optional[KeypadController] = None):
        super().__init__()

        # Window setup
        self.title("Calculator")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(380, 520)
        self.configure(bg=BG)

        self.keypad = keypad or KeypadController()
        self.mode = "scientific"  # current UI mode: "scientific" or "graphing"
        self.grid_on = False

        self._build_header()
        self._build_main_frames()
        self._switch_to_mode("scientific")
        self._update_display()

        self.bind("<BackSpace>", self._on_backspace_key, add="+")
        self.bind("<Return>", self._on_return_key, add="+")
        self.bind("<Key>", self._on_key, add="+")

    # -------------------------
    # Header
    # -------------------------
    def _build_header(self):
        """Top header with title and mode buttons."""
        header = tk.Frame(self, bg=PANEL_BG, height=48)
        header.pack(fill="x", side="top")

        self.title_label = tk.Label(header, text="Scientific", bg=PANEL_BG, fg=ACCENT, font=TITLE_FONT)
        self.title_label.pack(side="left", padx=(10, 0), pady=6)

        tk.Frame(header, bg=PANEL_BG).pack(side="left", expand=True)

        tk.Button(header, text="Graphing", bg=PANEL_BG, fg=FG, relief="flat",
                  command=self._show_graph).pack(side="right", padx=(0, 8), pady=6)
        tk.Button(header, text="Scientific", bg=PANEL_BG, fg=FG, relief="flat",
                  command=lambda: self._switch_to_mode("scientific")).pack(side="right", padx=4, pady=6)

    # -------------------------
    # Main frames (scientific and graphing)
    # -------------------------
    def _build_main_frames(self):
        self.main_container = tk.Frame(self, bg=PANEL_BG)
        self.main_container.pack(fill="both", expand=True, padx=8, pady=8)

        self.scientific_frame = tk.Frame(self.main_container, bg=PANEL_BG)
        self._build_scientific_ui(self.scientific_frame)

        self.graph_frame = tk.Frame(self.main_container, bg=PANEL_BG)
        self._build_graph_ui(self.graph_frame)

    def _switch_to_mode(self, mode: str):
        """Show only the requested mode's frame."""
        self.mode = mode
        self.title_label.config(text=mode.capitalize())
        if mode == "scientific":
            self.graph_frame.pack_forget()
            self.scientific_frame.pack(fill="both", expand=True)
        else:
            self.scientific_frame.pack_forget()
            self.graph_frame.pack(fill="both", expand=True)

    # -------------------------
    # Scientific UI build
    # -------------------------
    def _build_scientific_ui(self, parent):
        """Display (sequence line + result) and the keypad grid."""
        disp = tk.Frame(parent, bg=PANEL_BG)
        disp.pack(fill="x")
        self.sequence_var = tk.StringVar(value=" ")
        tk.Label(disp, textvariable=self.sequence_var, bg=PANEL_BG, fg=ACCENT,
                 anchor="e", font=SEQUENCE_FONT).pack(fill="x", padx=6, pady=(6, 0))
        self.display_var = tk.StringVar(value="0")
        tk.Label(disp, textvariable=self.display_var, bg=BG, fg=FG,
                 anchor="e", font=DISPLAY_FONT).pack(fill="x", padx=6, pady=(2, 6), ipady=6)

        # Keypad grid of tiles (rows x columns). Buttons are uniform-sized by grid weight.
        tile_container = tk.Frame(parent, bg=PANEL_BG)
        tile_container.pack(fill="both", expand=True, pady=(6, 0))
        self.tile_buttons = {}
        for r, row in enumerate(TILES):
            for c, label in enumerate(row):
                if not label:
                    spacer = tk.Frame(tile_container, bg=PANEL_BG)
                    spacer.grid(row=r, column=c, sticky="nsew", padx=3, pady=3)
                else:
                    bg = BTN_BG if label in DIGITS else OP_BG
                    btn = tk.Button(tile_container, text=label, bg=bg, fg=FG, relief="flat",
                                    command=lambda l=label: self._press(l))
                    btn.grid(row=r, column=c, sticky="nsew", padx=3, pady=3)
                    self.tile_buttons[label] = btn
                tile_container.grid_columnconfigure(c, weight=1)
            tile_container.grid_rowconfigure(r, weight=1)

    def _press(self, label: str):
        """Route a keypad label to the controller."""
        keypad = self.keypad
        if label in DIGITS:
            keypad.digit(label)
        elif label == "C":
            keypad.clear()
        elif label == "⌫":
            keypad.backspace()
        elif label == "±":
            keypad.toggle_sign()
        elif label == "→M":
            keypad.store_memory(DEFAULT_VARIABLE)
        elif label == "M":
            keypad.recall_memory(DEFAULT_VARIABLE)
        elif label in ("RAD", "DEG"):
            self._toggle_angle_mode()
        elif label == "Graph":
            self._show_graph()
            return
        else:
            keypad.operation(label)
        self._update_display()

    # Window-level bindings also fire for the graph panel's Entry fields;
    # keys typed there belong to the field, not to the keypad.
    @staticmethod
    def _from_entry(event) -> bool:
        return isinstance(event.widget, tk.Entry)

    def _on_key(self, event):
        """Typed digits and '.' behave like the keypad tiles."""
        if self._from_entry(event):
            return
        if event.char and event.char in DIGITS:
            self._press(event.char)

    def _on_backspace_key(self, event):
        if self._from_entry(event):
            return
        self._press("⌫")

    def _on_return_key(self, event):
        if self._from_entry(event):
            return
        self._press("=")

    def _toggle_angle_mode(self):
        engine = self.keypad.engine
        engine.set_mode("deg" if engine.mode == "rad" else "rad")
        self.tile_buttons["RAD"].config(text=engine.mode.upper())
        # a number being typed stays on the display
        if not self.keypad.typing:
            self.keypad.refresh()

    def _update_display(self):
        self.display_var.set(self.keypad.display)
        self.sequence_var.set(self.keypad.sequence or " ")
        state = "normal" if self.keypad.can_graph else "disabled"
        self.tile_buttons["Graph"].config(state=state)

    # -------------------------
    # Graphing UI build
    # -------------------------
    def _build_graph_ui(self, parent):
        """
        Build the graphing UI:
        - x-range and sample count input, Plot button
        - Embedded Matplotlib canvas with toolbar
        - Floating buttons for Grid/Zoom/Fit
        """
        rng = tk.Frame(parent, bg=PANEL_BG); rng.pack(fill="x", padx=6, pady=(6, 6))
        tk.Label(rng, text="x-min", bg=PANEL_BG, fg=FG).pack(side="left")
        self.xmin_var = tk.StringVar(value=str(DEFAULT_X_RANGE[0])); tk.Entry(rng, textvariable=self.xmin_var, width=7).pack(side="left", padx=(4, 10))
        tk.Label(rng, text="x-max", bg=PANEL_BG, fg=FG).pack(side="left")
        self.xmax_var = tk.StringVar(value=str(DEFAULT_X_RANGE[1])); tk.Entry(rng, textvariable=self.xmax_var, width=7).pack(side="left", padx=(4, 10))
        tk.Label(rng, text="samples", bg=PANEL_BG, fg=FG).pack(side="left")
        self.samples_var = tk.StringVar(value=str(DEFAULT_SAMPLES)); tk.Entry(rng, textvariable=self.samples_var, width=5).pack(side="left", padx=(4, 10))
        tk.Button(rng, text="▶ Plot", bg=BTN_BG, fg=FG, command=self._plot_program).pack(side="right")

        canvas_frame = tk.Frame(parent, bg=PANEL_BG); canvas_frame.pack(fill="both", expand=True, padx=6, pady=(0, 6))
        self.fig = Figure(figsize=(5, 3), dpi=100, facecolor=PANEL_BG)
        self.ax = self.fig.add_subplot(111)
        self._reset_axes()

        self.canvas = FigureCanvasTkAgg(self.fig, master=canvas_frame)
        self.canvas.get_tk_widget().pack(fill="both", expand=True)

        self.toolbar = NavigationToolbar2Tk(self.canvas, canvas_frame)
        self.toolbar.update()
        self.toolbar.pack(fill="x")

        floatbar = tk.Frame(canvas_frame, bg=PANEL_BG)
        floatbar.place(relx=0.97, rely=0.02, anchor="ne")
        tk.Button(floatbar, text="Grid", bg=BTN_BG, fg=FG, command=self._toggle_grid).pack(side="top", pady=3, padx=3, fill="x")
        tk.Button(floatbar, text="+", bg=BTN_BG, fg=FG, command=lambda: self._zoom(0.8)).pack(side="top", pady=3, padx=3, fill="x")
        tk.Button(floatbar, text="-", bg=BTN_BG, fg=FG, command=lambda: self._zoom(1.25)).pack(side="top", pady=3, padx=3, fill="x")
        tk.Button(floatbar, text="Fit", bg=BTN_BG, fg=FG, command=self._plot_program).pack(side="top", pady=3, padx=3, fill="x")

    def _reset_axes(self):
        self.ax.clear()
        self.ax.set_facecolor(PLOT_BG)
        for spine in self.ax.spines.values():
            spine.set_color(SPINE)
        self.ax.tick_params(colors=FG)
        self.ax.axhline(0, color=SPINE, linewidth=0.8)
        self.ax.axvline(0, color=SPINE, linewidth=0.8)

    # -------------------------
    # Graphing actions
    # -------------------------
    def _show_graph(self):
        if not self.keypad.can_graph:
            messagebox.showinfo("Graph", "Finish the pending operation before graphing")
            return
        self._switch_to_mode("graphing")
        self._plot_program()

    def _plot_program(self):
        """Sample the current program as y = f(M) over the x-range and draw it."""
        try:
            xmin = float(self.xmin_var.get()); xmax = float(self.xmax_var.get())
            if xmin >= xmax:
                raise ValueError("x-min must be < x-max")
        except ValueError as e:
            messagebox.showerror("Range error", f"Invalid x-range: {e}")
            return

        try:
            samples = max(int(self.samples_var.get()), MIN_SAMPLES)
        except ValueError:
            samples = DEFAULT_SAMPLES

        sampler = FunctionSampler(self.keypad.engine, DEFAULT_VARIABLE)
        xs = np.linspace(xmin, xmax, samples)
        ys = sampler.sample_many(xs)
        ys_valid = ys[~np.isnan(ys)]
        if ys_valid.size == 0:
            messagebox.showerror("Plot error", "No valid points to plot for this program")
            return
        logger.info("Plotting %r over [%s, %s]", sampler.title, xmin, xmax)

        self._reset_axes()
        self.ax.plot(xs, ys, color=ACCENT)
        self.ax.set_title(sampler.title or "", color=FG, fontsize="small")

        ymin, ymax = ys_valid.min(), ys_valid.max()
        if ymin == ymax:
            ymin -= 1; ymax += 1
        margin = (ymax - ymin) * 0.08
        self.ax.set_xlim(xmin, xmax); self.ax.set_ylim(ymin - margin, ymax + margin)
        self.ax.grid(self.grid_on, color="#2A2D30")
        self.canvas.draw()

    def _toggle_grid(self):
        self.grid_on = not self.grid_on
        self.ax.grid(self.grid_on, color="#2A2D30")
        self.canvas.draw()

    def _zoom(self, factor: float):
        """Zoom the plot by a multiplicative factor around the current center."""
        x0, x1 = self.ax.get_xlim(); y0, y1 = self.ax.get_ylim()
        cx = 0.5 * (x0 + x1); cy = 0.5 * (y0 + y1)
        halfw = (x1 - x0) * 0.5 * factor; halfh = (y1 - y0) * 0.5 * factor
        self.xmin_var.set(f"{cx - halfw:g}"); self.xmax_var.set(f"{cx + halfw:g}")
        self.ax.set_xlim(cx - halfw, cx + halfw); self.ax.set_ylim(cy - halfh, cy + halfh)
        self.canvas.draw()


# -------------------------
# Run the application
# -------------------------
def main():
    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
