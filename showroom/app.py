"""Application - main loop orchestrator.

Each frame:
- Input → Commands (InputHandler)
- Commands → State changes (GalleryController)
- Timers fire, finished media uploads become textures
- State → Rendering (Renderer)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import os
import traceback

from . import config as cfg
from .state import ViewerState
from .controller import GalleryController
from .renderer import Renderer
from .input_handler import InputHandler, get_input_handler
from .media import MediaLoader
from .commands import Command, CloseApp, ReloadCatalog
from .layout import grid_content_height
from .rl_compat import rl, load_texture, unload_texture, _text_arg
from .types import Interior
from .logging import log, increment_frame, get_frame


@dataclass
class Application:
    """
    Main application orchestrator.

    Usage:
        app = Application(interiors, base_dir)
        if app.initialize():
            app.run()
    """

    interiors: List[Interior] = field(default_factory=list)
    base_dir: str = ""
    catalog_path: str = ""
    controller: GalleryController = field(default_factory=GalleryController)
    input_handler: InputHandler = field(default_factory=get_input_handler)
    loader: Optional[MediaLoader] = None
    renderer: Optional[Renderer] = None
    running: bool = False

    @property
    def state(self) -> ViewerState:
        return self.controller.state

    def initialize(self) -> bool:
        """Open the window and start the media workers."""
        try:
            rl.SetConfigFlags(rl.FLAG_WINDOW_RESIZABLE | rl.FLAG_MSAA_4X_HINT)
            rl.InitWindow(cfg.WINDOW_WIDTH, cfg.WINDOW_HEIGHT, _text_arg(cfg.WINDOW_TITLE))
            rl.SetExitKey(0)
            rl.SetTargetFPS(cfg.TARGET_FPS)
        except (OSError, RuntimeError) as e:
            log(f"[INIT][CRITICAL] Failed to initialize window: {e!r}")
            return False

        self.state.interiors = list(self.interiors)
        self.loader = MediaLoader(load_texture, base_dir=self.base_dir,
                                  cache_dir=os.path.join(self.base_dir, cfg.MEDIA_CACHE_DIR))
        self.renderer = Renderer(self.loader)
        self._sync_window()
        log(f"[APP] Application initialized: {len(self.interiors)} interiors")
        return True

    def run(self) -> None:
        self.running = True
        log("[APP] Starting main loop")

        try:
            while self.running:
                self._frame()
        except Exception as e:
            log(f"[APP][CRITICAL] Unhandled exception: {e!r}")
            log(f"[APP][CRITICAL] Traceback:\n{traceback.format_exc()}")
            raise
        finally:
            self._cleanup()

    def _sync_window(self) -> None:
        window = self.state.window
        window.screen_w = rl.GetScreenWidth()
        window.screen_h = rl.GetScreenHeight()
        page = self.state.page
        page.content_height = grid_content_height(window, len(self.state.interiors))
        # Keep the scroll position valid after a resize
        page.scroll_by(0.0, window.screen_h)

    def _frame(self) -> None:
        if rl.WindowShouldClose():
            self.running = False
            return

        if rl.IsWindowResized():
            self._sync_window()

        # 1. Poll input and generate commands
        commands = self.input_handler.poll(self.state)

        # 2. Execute commands
        for cmd in commands:
            self._execute_command(cmd)
            if not self.running:
                return

        # 3. Timers and media uploads
        self.controller.update()
        self.loader.poll()

        # 4. Render
        self.renderer.draw_frame(self.state)

        # 5. Frame bookkeeping
        increment_frame()

    def _execute_command(self, cmd: Command) -> None:
        if isinstance(cmd, CloseApp):
            cmd.execute(self.controller)
            self.running = False
            return
        if isinstance(cmd, ReloadCatalog):
            if ReloadCatalog(cmd.path or self.catalog_path).execute(self.controller):
                self._sync_window()
            return
        cmd.execute(self.controller)

    def _cleanup(self) -> None:
        log("[APP] Starting cleanup")
        self.controller.scheduler.cancel_all()
        if self.loader is not None:
            log("[APP] Shutting down media loader")
            self.loader.shutdown(unload=unload_texture)
        log("[APP] Closing window")
        rl.CloseWindow()
        log(f"[APP] Cleanup complete, frames={get_frame()}")


def create_app(interiors: List[Interior], base_dir: str = "", catalog_path: str = "") -> Application:
    return Application(interiors=interiors, base_dir=base_dir, catalog_path=catalog_path)
