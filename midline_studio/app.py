import logging
import tkinter as tk
from tkinter import filedialog, messagebox
from tkinter import ttk

import cv2
from PIL import Image, ImageTk

from . import __version__
from .errors import ExportError, ImageLoadError, NothingToExport, PlacementRefused
from .landmarks import LANDMARK_SEQUENCE
from .measurement import format_degrees
from .report import ReportExporter
from .scene import CircleElement, LineElement, RectElement, TextElement, contain_rect, overlay_elements
from .session import AnalysisSession
from .settings import REPORT_FILENAME, SURFACE_BG

logger = logging.getLogger(__name__)

# Modern UI palette
APP_BG = "#eef2f7"
CARD_BG = "#f8fafc"
TEXT_PRIMARY = "#0f172a"
TEXT_SECONDARY = "#334155"
ACCENT = "#2563eb"

PROGRESS_COLORS = {
    "placed": "#22c55e",
    "current": "#eab308",
    "pending": "#d1d5db",
}
SIGNIFICANT_COLOR = "#dc2626"
NORMAL_COLOR = "#16a34a"


class MidlineAnalyzerApp:
    """Desktop app for 8-point incisor marker placement and midline analysis."""

    def __init__(self, root: tk.Tk):
        self.root = root
        self.root.title("MetaOrtho Midline Studio")
        self.root.geometry("1100x720")

        self.session = AnalysisSession()
        self.display_photo = None  # Keep reference to prevent garbage collection.
        self.base_image_item = None
        self.last_render_key = None
        self.progress_win = None
        self.progress_label_var = tk.StringVar(value="")
        self.progress_value_var = tk.DoubleVar(value=0.0)

        self._configure_styles()
        self._build_ui()
        self._refresh_panels()

    def _configure_styles(self):
        """Define ttk styles used by the app."""
        style = ttk.Style(self.root)
        style.theme_use("clam")

        style.configure("App.TFrame", background=APP_BG)
        style.configure("Card.TFrame", background=CARD_BG, relief="flat")
        style.configure("WorkspaceTitle.TLabel", background=CARD_BG, foreground=TEXT_PRIMARY, font=("Helvetica", 11, "bold"))
        style.configure("CardTitle.TLabel", background=CARD_BG, foreground=TEXT_PRIMARY, font=("Helvetica", 15, "bold"))
        style.configure("Section.TLabel", background=CARD_BG, foreground=TEXT_SECONDARY, font=("Helvetica", 10, "bold"))
        style.configure("Meta.TLabel", background=CARD_BG, foreground="#64748b", font=("Helvetica", 9))
        style.configure("Body.TLabel", background=CARD_BG, foreground=TEXT_PRIMARY, font=("Helvetica", 10))
        style.configure("Status.TLabel", background="#e2e8f0", foreground="#0f172a", font=("Helvetica", 9))

        style.configure(
            "Primary.TButton",
            background=ACCENT,
            foreground="#ffffff",
            font=("Helvetica", 10, "bold"),
            borderwidth=0,
            focusthickness=0,
            padding=(10, 7),
        )
        style.map("Primary.TButton", background=[("active", "#1d4ed8"), ("pressed", "#1e40af"), ("disabled", "#93c5fd")])

        style.configure(
            "Action.TButton",
            background="#ffffff",
            foreground=TEXT_PRIMARY,
            font=("Helvetica", 10),
            bordercolor="#cbd5e1",
            lightcolor="#ffffff",
            darkcolor="#ffffff",
            padding=(10, 7),
        )
        style.map("Action.TButton", background=[("active", "#eff6ff"), ("pressed", "#dbeafe")])

    # ------------------------------
    # UI setup
    # ------------------------------
    def _build_ui(self):
        """Create main layout: left canvas and right control panel."""
        self.root.configure(bg=APP_BG)
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        app_frame = ttk.Frame(self.root, style="App.TFrame", padding=12)
        app_frame.grid(row=0, column=0, sticky="nsew")
        app_frame.columnconfigure(0, weight=1)
        app_frame.columnconfigure(1, weight=0)
        app_frame.rowconfigure(0, weight=1)

        # Left: visual surface
        canvas_frame = tk.Frame(app_frame, bg=SURFACE_BG, bd=1, relief="solid", highlightthickness=0)
        canvas_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 10))
        canvas_frame.rowconfigure(1, weight=1)
        canvas_frame.columnconfigure(0, weight=1)

        canvas_title = ttk.Frame(canvas_frame, style="Card.TFrame", padding=(8, 6))
        canvas_title.grid(row=0, column=0, sticky="ew")
        ttk.Label(canvas_title, text="Photo Workspace", style="WorkspaceTitle.TLabel").pack(side="left")
        ttk.Label(canvas_title, text="Press Start, then click each incisor in turn", style="Meta.TLabel").pack(side="right")

        self.canvas = tk.Canvas(canvas_frame, bg=SURFACE_BG, highlightthickness=0, cursor="crosshair")
        self.canvas.grid(row=1, column=0, sticky="nsew")
        self.canvas.bind("<Button-1>", self._on_canvas_click)
        self.canvas.bind("<Configure>", self._on_canvas_resize)

        # Right: controls
        controls = ttk.Frame(app_frame, style="Card.TFrame", padding=14, width=300)
        controls.grid(row=0, column=1, sticky="ns")

        ttk.Label(controls, text="MetaOrtho Midline", style="CardTitle.TLabel", anchor="w").pack(fill="x")
        ttk.Label(controls, text="8-point incisor placement and midline analysis", style="Meta.TLabel", anchor="w").pack(
            fill="x", pady=(0, 10)
        )

        ttk.Button(controls, text="Upload Photo", command=self.upload_image, style="Action.TButton").pack(fill="x", pady=3)
        self.arm_button = ttk.Button(controls, text="Start", command=self.toggle_armed, style="Action.TButton")
        self.arm_button.pack(fill="x", pady=3)
        ttk.Button(controls, text="Reset", command=self.reset_markers, style="Action.TButton").pack(fill="x", pady=3)

        ttk.Separator(controls, orient="horizontal").pack(fill="x", pady=(8, 8))
        ttk.Label(controls, text="Placement Progress", style="Section.TLabel", anchor="w").pack(fill="x", pady=(0, 4))
        self.progress_rows = {}
        for landmark in LANDMARK_SEQUENCE:
            row = ttk.Frame(controls, style="Card.TFrame")
            row.pack(fill="x", pady=1)
            dot = tk.Label(row, text="●", bg=CARD_BG, fg=PROGRESS_COLORS["pending"], font=("Helvetica", 11))
            dot.pack(side="left")
            ttk.Label(row, text=landmark.display_name, style="Body.TLabel").pack(side="left", padx=(4, 0))
            self.progress_rows[landmark] = dot

        ttk.Separator(controls, orient="horizontal").pack(fill="x", pady=(8, 8))
        ttk.Label(controls, text="Midline Measurements", style="Section.TLabel", anchor="w").pack(fill="x", pady=(0, 4))
        self.upper_var = tk.StringVar(value="Upper Angle: -")
        self.lower_var = tk.StringVar(value="Lower Angle: -")
        self.deviation_var = tk.StringVar(value="Midline Deviation: -")
        ttk.Label(controls, textvariable=self.upper_var, style="Body.TLabel").pack(fill="x")
        ttk.Label(controls, textvariable=self.lower_var, style="Body.TLabel").pack(fill="x")
        self.deviation_label = tk.Label(
            controls, textvariable=self.deviation_var, bg=CARD_BG, fg=TEXT_PRIMARY, font=("Helvetica", 10, "bold"), anchor="w"
        )
        self.deviation_label.pack(fill="x")

        ttk.Separator(controls, orient="horizontal").pack(fill="x", pady=(8, 8))
        ttk.Label(controls, text="Reports", style="Section.TLabel", anchor="w").pack(fill="x", pady=(0, 4))
        self.export_button = ttk.Button(controls, text="Export PDF", command=self.export_pdf_report, style="Primary.TButton")
        self.export_button.pack(fill="x", pady=3)
        ttk.Label(
            controls, text="Exports current midline measurement with screenshot", style="Meta.TLabel", wraplength=230
        ).pack(fill="x")

        self.status_var = tk.StringVar(value="Upload a photo, then press Start.")
        ttk.Label(
            controls,
            textvariable=self.status_var,
            wraplength=230,
            justify="left",
            style="Status.TLabel",
            padding=8,
        ).pack(fill="x", pady=(12, 0))

    # ------------------------------
    # Image loading and display
    # ------------------------------
    def upload_image(self):
        """Load a dental photo onto the workspace. Placed markers are kept."""
        file_path = filedialog.askopenfilename(
            title="Select Dental Photo",
            filetypes=[("Image files", "*.jpg *.jpeg *.png *.bmp *.webp")],
        )
        if not file_path:
            return

        try:
            self.session.load_image(file_path)
        except ImageLoadError as exc:
            logger.warning("%s", exc)
            messagebox.showerror("Error", f"Failed to load image.\n{exc}")
            return

        self.last_render_key = None
        self._render_canvas()
        self.status_var.set("Photo loaded. Press Start to place markers.")

    def _on_canvas_resize(self, event):
        self.session.set_surface_size(event.width, event.height)
        self._render_canvas()

    def _render_canvas(self):
        """Draw the contained photo (cached) and overlays."""
        if self.session.image_bgr is None:
            self.canvas.delete("base_image")
            self.base_image_item = None
            self.last_render_key = None
            self.display_photo = None
            self._draw_overlays()
            return

        canvas_w = max(self.canvas.winfo_width(), 1)
        canvas_h = max(self.canvas.winfo_height(), 1)
        img_h, img_w = self.session.image_bgr.shape[:2]
        render_key = (id(self.session.image_bgr), canvas_w, canvas_h)

        # Expensive resize/conversion happens only when canvas or image changes.
        if self.last_render_key != render_key or self.base_image_item is None:
            x, y, w, h = contain_rect(img_w, img_h, canvas_w, canvas_h)
            rgb = cv2.cvtColor(self.session.image_bgr, cv2.COLOR_BGR2RGB)
            pil_img = Image.fromarray(rgb).resize((max(1, int(w)), max(1, int(h))), Image.LANCZOS)
            self.display_photo = ImageTk.PhotoImage(pil_img)

            if self.base_image_item is None:
                self.base_image_item = self.canvas.create_image(
                    x, y, image=self.display_photo, anchor="nw", tags=("base_image",)
                )
            else:
                self.canvas.coords(self.base_image_item, x, y)
                self.canvas.itemconfig(self.base_image_item, image=self.display_photo)
            self.last_render_key = render_key

        self._draw_overlays()

    def _draw_overlays(self):
        """Redraw vector overlays from the scene description, keeping the base image."""
        self.canvas.delete("overlay")
        elements = overlay_elements(
            dict(self.session.placed),
            self.session.measurement,
            prompt=self.session.prompt(),
            surface_size=self.session.surface_size,
        )
        for element in elements:
            if isinstance(element, LineElement):
                self.canvas.create_line(
                    *element.start,
                    *element.end,
                    fill=element.color,
                    width=element.width,
                    dash=element.dash or "",
                    tags=("overlay",),
                )
            elif isinstance(element, CircleElement):
                cx, cy = element.center
                r = element.radius
                self.canvas.create_oval(
                    cx - r, cy - r, cx + r, cy + r, fill=element.fill, outline="", tags=("overlay",)
                )
            elif isinstance(element, RectElement):
                self.canvas.create_rectangle(
                    element.x,
                    element.y,
                    element.x + element.width,
                    element.y + element.height,
                    fill=element.fill,
                    outline="",
                    tags=("overlay",),
                )
            elif isinstance(element, TextElement):
                # Negative size means pixels in Tk fonts.
                self.canvas.create_text(
                    *element.position,
                    text=element.text,
                    fill=element.color,
                    font=("Helvetica", -element.size),
                    tags=("overlay",),
                )

    # ------------------------------
    # Marker placement
    # ------------------------------
    def toggle_armed(self):
        armed = self.session.toggle_armed()
        self.status_var.set("Placement started." if armed else "Placement stopped. Progress kept.")
        self._refresh_panels()
        self._draw_overlays()

    def _on_canvas_click(self, event):
        """Place a marker for the current landmark at the clicked surface position."""
        try:
            landmark = self.session.place_marker(event.x, event.y)
        except PlacementRefused as exc:
            self.status_var.set(str(exc))
            return

        if self.session.measurement is not None:
            self.status_var.set("All markers placed. Measurements ready.")
        else:
            self.status_var.set(f"{landmark.display_name} placed.")
        self._refresh_panels()
        self._draw_overlays()

    def reset_markers(self):
        """Clear markers, measurements and the loaded photo."""
        self.session.reset()
        self.last_render_key = None
        self._render_canvas()
        self._refresh_panels()
        self.status_var.set("Reset. Upload a photo, then press Start.")

    def _refresh_panels(self):
        """Sync start/stop button, progress list, measurements and export button with the session."""
        self.arm_button.configure(text="Stop" if self.session.armed else "Start")

        for landmark, status in self.session.placement.progress():
            self.progress_rows[landmark].configure(fg=PROGRESS_COLORS[status])

        measurement = self.session.measurement
        if measurement is None:
            self.upper_var.set("Upper Angle: -")
            self.lower_var.set("Lower Angle: -")
            self.deviation_var.set("Midline Deviation: -")
            self.deviation_label.configure(fg=TEXT_PRIMARY)
            self.export_button.state(["disabled"])
            return

        self.upper_var.set(f"Upper Angle: {format_degrees(measurement.upper_angle_deg)}")
        self.lower_var.set(f"Lower Angle: {format_degrees(measurement.lower_angle_deg)}")
        self.deviation_var.set(f"Midline Deviation: {format_degrees(measurement.midline_deviation_deg)}")
        self.deviation_label.configure(fg=SIGNIFICANT_COLOR if measurement.is_significant else NORMAL_COLOR)
        self.export_button.state(["!disabled"])

    # ------------------------------
    # Export progress popup
    # ------------------------------
    def _show_export_popup(self, measurement):
        """
        Non-modal export progress window docked at the top-right of the main
        window. The workspace keeps accepting clicks while it is open; the
        export itself runs on the values shown here.
        """
        self._close_progress_popup()
        self.progress_value_var.set(0.0)
        self.progress_label_var.set("Capturing workspace...")

        self.progress_win = tk.Toplevel(self.root, bg=CARD_BG)
        self.progress_win.title("Exporting Midline Report")
        self.progress_win.transient(self.root)
        self.progress_win.resizable(False, False)

        frame = ttk.Frame(self.progress_win, style="Card.TFrame", padding=12)
        frame.pack(fill="both", expand=True)
        ttk.Label(
            frame,
            text=f"Deviation {format_degrees(measurement.midline_deviation_deg)}",
            style="Section.TLabel",
        ).pack(fill="x")
        ttk.Label(frame, textvariable=self.progress_label_var, style="Meta.TLabel").pack(fill="x", pady=(2, 6))
        ttk.Progressbar(
            frame, length=260, mode="determinate", variable=self.progress_value_var, maximum=100.0
        ).pack(fill="x")

        self.progress_win.update_idletasks()
        x = self.root.winfo_rootx() + self.root.winfo_width() - self.progress_win.winfo_width() - 24
        y = self.root.winfo_rooty() + 24
        self.progress_win.geometry(f"+{max(x, 0)}+{max(y, 0)}")

    def _update_progress_popup(self, value, text):
        """Update progress bar and let the main window keep handling events."""
        if self.progress_win is None or not self.progress_win.winfo_exists():
            return
        self.progress_value_var.set(float(value))
        self.progress_label_var.set(text)
        self.progress_win.update_idletasks()
        self.root.update()

    def _close_progress_popup(self):
        if self.progress_win is not None and self.progress_win.winfo_exists():
            self.progress_win.destroy()
        self.progress_win = None

    # ------------------------------
    # PDF export
    # ------------------------------
    def export_pdf_report(self):
        """Export a one-page PDF with the measurements and the annotated photo."""
        if self.session.measurement is None:
            messagebox.showwarning("Warning", "No measurements to export. Place all markers first.")
            return

        pdf_path = filedialog.asksaveasfilename(
            title="Save Midline PDF Report",
            defaultextension=".pdf",
            filetypes=[("PDF files", "*.pdf")],
            initialfile=REPORT_FILENAME,
        )
        if not pdf_path:
            return

        exporter = ReportExporter(progress=self._update_progress_popup)
        self._show_export_popup(self.session.measurement)
        try:
            exporter.export(self.session, pdf_path)
        except NothingToExport as exc:
            messagebox.showwarning("Warning", str(exc))
        except ExportError:
            messagebox.showerror(
                "Export Error", "Failed to export PDF. Ensure all markers are placed and try again."
            )
        else:
            messagebox.showinfo("Success", f"PDF exported successfully:\n{pdf_path}")
        finally:
            self._close_progress_popup()


def show_startup_splash(root):
    """Borderless splash listing the landmark order while the window is built."""
    splash = tk.Toplevel(root, bg=TEXT_PRIMARY)
    splash.overrideredirect(True)
    splash.attributes("-topmost", True)

    tk.Label(
        splash,
        text=f"MetaOrtho Midline Studio {__version__}",
        font=("Helvetica", 16, "bold"),
        fg=CARD_BG,
        bg=TEXT_PRIMARY,
    ).pack(padx=24, pady=(18, 8))
    for i, landmark in enumerate(LANDMARK_SEQUENCE, start=1):
        tk.Label(
            splash,
            text=f"{i}. {landmark.display_name}",
            font=("Helvetica", 9),
            fg=landmark.color,
            bg=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", padx=32)
    tk.Label(splash, text="", bg=TEXT_PRIMARY).pack(pady=4)

    splash.update_idletasks()
    x = (splash.winfo_screenwidth() - splash.winfo_reqwidth()) // 2
    y = (splash.winfo_screenheight() - splash.winfo_reqheight()) // 2
    splash.geometry(f"+{x}+{y}")
    return splash


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app_root = tk.Tk()
    app_root.withdraw()
    splash_win = show_startup_splash(app_root)

    def start_main_app():
        splash_win.destroy()
        app_root.deiconify()
        app_root.app = MidlineAnalyzerApp(app_root)

    app_root.after(1200, start_main_app)
    app_root.mainloop()
