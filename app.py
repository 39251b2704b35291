"""
Module: app.py
Description: Tkinter front-end for the ASL Sign Translator
Author: Hackathon Team
Date: 2026

Shows the live camera, the detected ASL letter and its English, Hindi
and Gujarati translations, each with a speak button. The window only
renders TranslatorSession snapshots and forwards button presses; all
detection, translation and speech work runs on the session's event loop.
"""
import sys
import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Dict, Optional
from PIL import Image, ImageTk

import config
from asl_translator.core.errors import ConfigurationError
from asl_translator.core.state import Language, SessionState
from asl_translator.pipelines.session import TranslatorSession, create_session

# Setup logging
logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

# Try to import OpenCV (preview only)
try:
    import cv2
    OPENCV_AVAILABLE = True
except ImportError:
    OPENCV_AVAILABLE = False
    logger.warning("OpenCV not available")


class SignTranslatorApp:
    """
    Main application window.

    Layout:
    - Left: camera preview, error banner, Start/Stop Camera button
    - Right: detected sign panel and one card per language
    """

    def __init__(self, session: TranslatorSession):
        self.session = session

        self.root = tk.Tk()
        self.root.title(config.WINDOW_TITLE)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")
        self.root.configure(bg=config.COLORS['bg_primary'])

        self._camera_photo = None
        self._cards: Dict[Language, dict] = {}
        self._last_rendered: Optional[SessionState] = None

        self._setup_styles()
        self._build_ui()

        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _setup_styles(self):
        """Configure ttk styles."""
        style = ttk.Style()
        style.theme_use('clam')

        style.configure('TFrame', background=config.COLORS['bg_primary'])
        style.configure('Card.TFrame', background=config.COLORS['bg_secondary'])
        style.configure('TLabel',
                        background=config.COLORS['bg_primary'],
                        foreground=config.COLORS['text_primary'])
        style.configure('Header.TLabel',
                        font=('Segoe UI', 24, 'bold'),
                        foreground=config.COLORS['accent'])
        style.configure('CardTitle.TLabel',
                        font=('Segoe UI', 14, 'bold'),
                        background=config.COLORS['bg_secondary'],
                        foreground=config.COLORS['accent'])
        style.configure('CardText.TLabel',
                        font=('Segoe UI', 18),
                        background=config.COLORS['bg_secondary'],
                        foreground=config.COLORS['text_primary'])
        style.configure('Sign.TLabel',
                        font=('Segoe UI', 32, 'bold'),
                        background=config.COLORS['bg_secondary'],
                        foreground=config.COLORS['accent'])
        style.configure('Error.TLabel',
                        font=('Segoe UI', 11),
                        background=config.COLORS['error_bg'],
                        foreground=config.COLORS['error'])
        style.configure('TButton',
                        background=config.COLORS['accent'],
                        foreground=config.COLORS['text_primary'],
                        padding=[15, 8])
        style.map('TButton',
                  background=[('active', config.COLORS['accent_hover']),
                              ('disabled', config.COLORS['bg_tertiary'])])
        style.configure('Stop.TButton', background=config.COLORS['error'])

    def _build_ui(self):
        """Build the main UI layout."""
        main_container = ttk.Frame(self.root, padding="10")
        main_container.pack(fill=tk.BOTH, expand=True)

        header = ttk.Label(main_container, text=config.WINDOW_TITLE, style='Header.TLabel')
        header.pack(pady=(0, 10))

        columns = ttk.Frame(main_container)
        columns.pack(fill=tk.BOTH, expand=True)

        # Left column: camera and controls
        left = ttk.Frame(columns)
        left.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 10))

        width, height = config.PREVIEW_SIZE
        self.camera_canvas = tk.Canvas(left, width=width, height=height,
                                       bg=config.COLORS['camera_bg'], highlightthickness=0)
        self.camera_canvas.pack(pady=(0, 10))

        self.error_var = tk.StringVar(value="")
        self.error_label = ttk.Label(left, textvariable=self.error_var,
                                     style='Error.TLabel', padding=10, wraplength=width)

        self.camera_button = ttk.Button(left, text="Start Camera", command=self._on_toggle_camera)
        self.camera_button.pack(pady=10)

        # Right column: detection and translations
        right = ttk.Frame(columns)
        right.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        sign_card = ttk.Frame(right, style='Card.TFrame', padding=20)
        sign_card.pack(fill=tk.X, pady=(0, 10))
        ttk.Label(sign_card, text="Detected Sign:", style='CardTitle.TLabel').pack(side=tk.LEFT)
        self.sign_var = tk.StringVar(value="Camera off")
        ttk.Label(sign_card, textvariable=self.sign_var, style='Sign.TLabel').pack(side=tk.LEFT, padx=15)

        for language in Language:
            self._cards[language] = self._build_card(right, language)

    def _build_card(self, parent, language: Language) -> dict:
        """Build one translation card."""
        card = ttk.Frame(parent, style='Card.TFrame', padding=15)
        card.pack(fill=tk.X, pady=5)

        top = ttk.Frame(card, style='Card.TFrame')
        top.pack(fill=tk.X)
        ttk.Label(top, text=language.value, style='CardTitle.TLabel').pack(side=tk.LEFT)

        button = ttk.Button(top, text="Speak",
                            command=lambda lang=language: self._on_speak(lang))
        button.pack(side=tk.RIGHT)

        text_var = tk.StringVar(value="...")
        ttk.Label(card, textvariable=text_var, style='CardText.TLabel').pack(anchor=tk.W, pady=(8, 0))

        return {'button': button, 'text': text_var}

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _on_toggle_camera(self):
        self.session.submit(self.session.toggle_camera())

    def _on_speak(self, language: Language):
        self.session.submit(self.session.speak(language))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh(self):
        """Render the latest state and preview frame, then reschedule."""
        state = self.session.snapshot()
        if state is not self._last_rendered:
            self._render(state)
            self._last_rendered = state

        self._render_preview(state)
        self.root.after(config.UI_REFRESH_MS, self._refresh)

    def _render(self, state: SessionState):
        if state.last_error:
            self.error_var.set(state.last_error)
            self.error_label.pack(fill=tk.X, before=self.camera_button)
        else:
            self.error_label.pack_forget()

        if state.camera_active:
            self.camera_button.configure(text="Stop Camera", style='Stop.TButton')
        else:
            self.camera_button.configure(text="Start Camera", style='TButton')

        self.sign_var.set(state.symbol_display)

        for language, card in self._cards.items():
            text = state.translations[language]
            card['text'].set(text or "...")

            speaking = state.loading.speech[language]
            card['button'].configure(text="Speaking..." if speaking else "Speak")
            if speaking or not text or state.is_muted:
                card['button'].state(['disabled'])
            else:
                card['button'].state(['!disabled'])

    def _render_preview(self, state: SessionState):
        if not state.camera_active or not OPENCV_AVAILABLE:
            if self._camera_photo is not None:
                self.camera_canvas.delete("all")
                self._camera_photo = None
            return

        frame = self.session.camera.get_latest_frame()
        if frame is None:
            return

        # Mirror for display only; detection sees the raw frame
        rgb_frame = cv2.cvtColor(cv2.flip(frame, 1), cv2.COLOR_BGR2RGB)
        img = Image.fromarray(rgb_frame).resize(config.PREVIEW_SIZE, Image.Resampling.LANCZOS)
        photo = ImageTk.PhotoImage(img)

        self._camera_photo = photo
        width, height = config.PREVIEW_SIZE
        self.camera_canvas.delete("all")
        self.camera_canvas.create_image(width // 2, height // 2, image=photo)

    def _on_close(self):
        """Handle window close."""
        logger.info("Closing application")
        self.session.shutdown()
        self.root.destroy()

    def run(self):
        """Start the application."""
        logger.info("Starting Sign Language Translator")
        self.session.start_background()
        self._refresh()
        self.root.mainloop()


def main():
    """Main entry point."""
    try:
        session = create_session()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        root = tk.Tk()
        root.withdraw()
        messagebox.showerror(config.WINDOW_TITLE,
                             f"{e}\n\nSet GEMINI_API_KEY and start the app again.")
        root.destroy()
        sys.exit(1)

    app = SignTranslatorApp(session)
    app.run()


if __name__ == "__main__":
    main()
