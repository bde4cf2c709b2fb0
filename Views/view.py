import tkinter as tk
from tkinter import ttk
from tkinter import messagebox

import config

# Matplotlib imports
try:
    from matplotlib.figure import Figure
    from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

ERROR_COLOR = "#ff9999"
SELECTED_COLOR = "#ffe599"


class SudokuView:
    def __init__(self, root, controller):
        self.root = root
        self.controller = controller
        self.board_widgets = []
        self.number_buttons = []
        self.prefilled = set()
        self.selected_cell = None
        self.palette = config.THEMES[config.DEFAULT_THEME]

        self.root.title("Sudoku")
        self.root.geometry("1000x750")

        self.style = ttk.Style()
        self.style.theme_use('clam')

        self._build_sidebar()
        self._build_grid_area()
        self._build_number_bar()
        self.root.bind("<Key>", self._on_key)

    def _build_sidebar(self):
        frame = ttk.Frame(self.root, padding="10")
        frame.pack(side=tk.RIGHT, fill=tk.Y)

        ttk.Label(frame, text="Sudoku", font=("Arial", 16, "bold")).pack(pady=10)

        ttk.Label(frame, text="Board Size:").pack(anchor=tk.W)
        self.size_var = tk.StringVar()
        self.cb_size = ttk.Combobox(frame, textvariable=self.size_var,
                                    values=self._size_labels(), state="readonly")
        self.cb_size.pack(fill=tk.X, pady=5)
        self.cb_size.bind("<<ComboboxSelected>>",
                          lambda e: self.controller.change_size(self.get_selected_size()))

        ttk.Label(frame, text="Theme:").pack(anchor=tk.W, pady=(10, 0))
        self.theme_var = tk.StringVar(value=config.DEFAULT_THEME)
        self.cb_theme = ttk.Combobox(frame, textvariable=self.theme_var,
                                     values=list(config.THEMES), state="readonly")
        self.cb_theme.pack(fill=tk.X, pady=5)
        self.cb_theme.bind("<<ComboboxSelected>>",
                           lambda e: self.controller.change_theme(self.theme_var.get()))

        # Buttons
        ttk.Button(frame, text="New Game", command=self.controller.new_game).pack(fill=tk.X, pady=(20, 5))
        ttk.Button(frame, text=f"Regenerate (-{config.REGENERATE_COST} pts)",
                   command=self.controller.regenerate).pack(fill=tk.X, pady=5)

        ttk.Separator(frame, orient=tk.HORIZONTAL).pack(fill=tk.X, pady=10)
        ttk.Button(frame, text="Show Stats Graph", command=self.show_stats_plot).pack(fill=tk.X, pady=5)

        # Stats
        ttk.Separator(frame, orient=tk.HORIZONTAL).pack(fill=tk.X, pady=10)
        self.lbl_time = ttk.Label(frame, text="Time: 00:00", font=("Arial", 11, "bold"))
        self.lbl_time.pack(pady=5)
        self.lbl_points = ttk.Label(frame, text="Points: 0", font=("Arial", 11))
        self.lbl_points.pack(pady=2)
        self.lbl_best = ttk.Label(frame, text="Best: --:--", font=("Arial", 11))
        self.lbl_best.pack(pady=2)
        self.lbl_lives = ttk.Label(frame, text="Lives: 0", foreground="red", font=("Arial", 11))
        self.lbl_lives.pack(pady=2)
        self.lbl_status = ttk.Label(frame, text="Ready", font=("Arial", 12))
        self.lbl_status.pack(pady=10)

    def _build_grid_area(self):
        self.grid_frame = tk.Frame(self.root, padx=20, pady=20)
        self.grid_frame.pack(side=tk.LEFT, expand=True, fill=tk.BOTH)

    def _build_number_bar(self):
        self.number_frame = tk.Frame(self.root, padx=5, pady=20)
        self.number_frame.pack(side=tk.LEFT, fill=tk.Y)

    def _size_labels(self):
        return [f"{n*n}x{n*n}" for n in config.OFFERED_BLOCK_SIZES]

    def get_selected_size(self):
        side = int(self.size_var.get().split("x")[0])
        return int(round(side ** 0.5))

    def set_selected_size(self, n):
        self.size_var.set(f"{n*n}x{n*n}")

    def draw_grid(self, n, board):
        for widget in self.grid_frame.winfo_children(): widget.destroy()
        self.board_widgets = []
        self.prefilled = {(r, c) for r, row in enumerate(board) for c, v in enumerate(row) if v != 0}
        self.selected_cell = None
        size = n * n
        _, cell_bg, prefilled_bg, text_fg, _ = self.palette
        for r in range(size):
            row_widgets = []
            for c in range(size):
                pad_y = (6, 0) if r % n == 0 and r != 0 else (0, 0)
                pad_x = (6, 0) if c % n == 0 and c != 0 else (0, 0)
                cell_frame = tk.Frame(self.grid_frame, bg="gray", bd=1)
                cell_frame.grid(row=r, column=c, padx=pad_x, pady=pad_y, sticky="nsew")
                val = board[r][c]
                text = str(val) if val != 0 else ""
                color = prefilled_bg if val != 0 else cell_bg
                lbl = tk.Label(cell_frame, text=text, bg=color, fg=text_fg,
                               font=("Arial", 14 if size < 16 else 10), width=3 if size < 16 else 2, height=1)
                lbl.pack(fill=tk.BOTH, expand=True)
                lbl.bind("<Button-1>", lambda e, rr=r, cc=c: self.controller.cell_clicked(rr, cc))
                row_widgets.append(lbl)
            self.board_widgets.append(row_widgets)
        for i in range(size):
            self.grid_frame.rowconfigure(i, weight=1)
            self.grid_frame.columnconfigure(i, weight=1)

    def draw_number_bar(self, size, selected):
        for widget in self.number_frame.winfo_children(): widget.destroy()
        self.number_buttons = []
        for i in range(1, size + 1):
            btn = tk.Button(self.number_frame, text=str(i), width=3,
                            font=("Arial", 12 if size < 16 else 9),
                            command=lambda v=i: self.controller.select_number(v))
            btn.pack(fill=tk.BOTH, expand=True, pady=1)
            self.number_buttons.append(btn)
        self.highlight_number(selected)

    def highlight_number(self, selected):
        accent = self.palette[4]
        for i, btn in enumerate(self.number_buttons, start=1):
            if i == selected:
                btn.config(relief=tk.SUNKEN, bg=accent, fg="white")
            else:
                btn.config(relief=tk.RAISED, bg="#f0f0f0", fg="black")

    # --- Themes ---
    def apply_theme(self, theme):
        self.palette = config.THEMES.get(theme, config.THEMES[config.DEFAULT_THEME])
        self.theme_var.set(theme)
        background = self.palette[0]
        self.root.configure(bg=background)
        self.grid_frame.configure(bg=background)
        self.number_frame.configure(bg=background)
        self.style.configure("TFrame", background=background)
        self.style.configure("TLabel", background=background, foreground=self.palette[3])

    def _cell_bg(self, r, c):
        if (r, c) == self.selected_cell:
            return SELECTED_COLOR
        return self.palette[2] if (r, c) in self.prefilled else self.palette[1]

    def restyle_cells(self):
        for r, row in enumerate(self.board_widgets):
            for c, lbl in enumerate(row):
                lbl.config(bg=self._cell_bg(r, c), fg=self.palette[3])

    # --- Stats Graph ---
    def show_stats_plot(self):
        if not HAS_MATPLOTLIB:
            messagebox.showerror("Error", "Matplotlib is not installed.\nRun: pip install matplotlib")
            return

        history = self.controller.win_history()
        if not history:
            messagebox.showinfo("Stats", "No games won yet.")
            return

        plot_window = tk.Toplevel(self.root)
        plot_window.title("Solve Times")
        plot_window.geometry("600x400")

        fig = Figure(figsize=(5, 4), dpi=100)
        ax = fig.add_subplot(111)
        ax.set_title("Solve Time per Win")
        ax.set_xlabel("Win #")
        ax.set_ylabel("Time (s)")

        for n in config.SUPPORTED_BLOCK_SIZES:
            wins = [(i, h['elapsed_ms'] / 1000) for i, h in enumerate(history, start=1) if h.get('size') == n]
            if wins:
                ax.plot([w[0] for w in wins], [w[1] for w in wins], marker='o', markersize=3,
                        label=f"{n*n}x{n*n}")
        ax.legend()
        ax.grid(True)

        canvas = FigureCanvasTkAgg(fig, master=plot_window)
        canvas.draw()
        canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True)

    # --- Helper Methods ---
    def _on_key(self, event):
        if event.char and event.char.isdigit():
            self.controller.key_pressed(event.char)

    def update_cell_value(self, r, c, val):
        text = str(val) if val != 0 else ""
        self.board_widgets[r][c].config(text=text)

    def set_cell_color(self, r, c, color):
        self.board_widgets[r][c].config(bg=color)

    def select_cell(self, r, c):
        previous = self.selected_cell
        self.selected_cell = (r, c)
        if previous is not None:
            self.set_cell_color(*previous, self._cell_bg(*previous))
        self.set_cell_color(r, c, SELECTED_COLOR)

    def flash_error(self, r, c):
        self.set_cell_color(r, c, ERROR_COLOR)

    def clear_error(self, r, c):
        self.set_cell_color(r, c, self._cell_bg(r, c))

    def update_stats(self, status=None, time_text=None, points=None, best_text=None, lives=None, color="black"):
        if status: self.lbl_status.config(text=status, foreground=color)
        if time_text is not None: self.lbl_time.config(text=f"Time: {time_text}")
        if points is not None: self.lbl_points.config(text=f"Points: {points}")
        if best_text is not None: self.lbl_best.config(text=f"Best: {best_text}")
        if lives is not None: self.lbl_lives.config(text=f"Lives: {lives}")

    def show_info(self, title, message):
        messagebox.showinfo(title, message)

    def show_warning(self, title, message):
        messagebox.showwarning(title, message)
