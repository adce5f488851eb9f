import logging

import pygame

from stepsort.algorithms import Algorithm
from stepsort.controller import RunController
from stepsort.errors import EngineError
from stepsort.frames import LatestFrameSink
from stepsort.render import draw_frame
from stepsort.settings import MAX_SIZE, MIN_SIZE, SIZE_STEP, SPEED_STEP

logger = logging.getLogger(__name__)

ALGO_KEYS = {
    pygame.K_1: Algorithm.BUBBLE,
    pygame.K_2: Algorithm.SELECTION,
    pygame.K_3: Algorithm.INSERTION,
    pygame.K_4: Algorithm.MERGE,
    pygame.K_5: Algorithm.QUICK,
}


class Window:
    """
    Keyboard-driven shell around a RunController.

    1-5 pick the algorithm, SPACE starts or stops, S shuffles, UP/DOWN
    resize, LEFT/RIGHT change speed, ESC quits. Edits that the controller
    rejects while a run is in progress are ignored.
    """

    def __init__(self, controller: RunController, sink: LatestFrameSink,
                 algorithm: Algorithm, cfg: dict):
        self.controller = controller
        self.sink       = sink
        self.algorithm  = algorithm
        self.cfg        = cfg

    def handle_key(self, key) -> bool:
        """Apply one key press. Returns False when the window should close."""
        c = self.controller
        if key == pygame.K_ESCAPE:
            return False
        try:
            if key in ALGO_KEYS:
                if not c.is_running():
                    self.algorithm = ALGO_KEYS[key]
            elif key == pygame.K_SPACE:
                if c.is_running():
                    c.request_stop()
                else:
                    c.start(self.algorithm)
            elif key == pygame.K_s:
                c.shuffle()
            elif key in (pygame.K_UP, pygame.K_DOWN):
                step = SIZE_STEP if key == pygame.K_UP else -SIZE_STEP
                c.resize(max(MIN_SIZE, min(MAX_SIZE, c.store.length() + step)))
            elif key in (pygame.K_LEFT, pygame.K_RIGHT):
                step = SPEED_STEP if key == pygame.K_RIGHT else -SPEED_STEP
                c.pacing.set_speed(c.pacing.current_speed() + step)
        except EngineError as e:
            logger.debug("Ignored key: %s", e)
        return True

    def run(self):
        pygame.init()
        screen = pygame.display.set_mode((self.cfg["window_width"], self.cfg["window_height"]))
        pygame.display.set_caption("StepSort")
        font  = pygame.font.SysFont("consolas", 16)
        clock = pygame.time.Clock()
        try:
            while True:
                clock.tick(self.cfg["fps"])
                for ev in pygame.event.get():
                    if ev.type == pygame.QUIT:
                        return
                    if ev.type == pygame.KEYDOWN and not self.handle_key(ev.key):
                        return
                # Mid-run, draw the newest step; otherwise poll so edits show
                # up even before anything was published.
                latest = self.sink.latest()
                if latest is None or not self.controller.is_running():
                    latest = self.controller.frame()
                draw_frame(screen, font, latest, self.algorithm)
        finally:
            self.controller.close(timeout=1.0)
            pygame.quit()


def run_window(cfg: dict, seed=None) -> int:
    sink = LatestFrameSink()
    controller = RunController(sink=sink, seed=seed)
    controller.resize(cfg["size"])
    controller.set_delay(cfg["delay"])
    Window(controller, sink, Algorithm.parse(cfg["algorithm"]), cfg).run()
    return 0

