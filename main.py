"""
Pygame host for chip8vm: window, keyboard and audio glue around System.
"""

import pygame
import numpy as np
import hydra
from omegaconf import DictConfig

from chip8vm import System, Chip8Error, SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.logging import EmulatorLogger
from chip8vm.rendering import display_to_rgb, create_color_scheme

# COSMAC VIP keypad layout on the left side of a QWERTY keyboard
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


def draw_frame(screen, frame: np.ndarray, scale: int, on_color, off_color):
    """Blit the framebuffer to the window."""
    rgb = display_to_rgb(frame, scale=scale, on_color=on_color, off_color=off_color)
    # pygame surfaces are indexed (x, y)
    pygame.surfarray.blit_array(screen, rgb.transpose(1, 0, 2))


def run_emulator(cfg: DictConfig):
    """Main emulator loop."""
    logger = EmulatorLogger(log_level=cfg.log_level)
    system = System(seed=cfg.seed, legacy_timers=cfg.legacy_timers, logger=logger)

    try:
        system.load_rom(cfg.rom)
    except Chip8Error as e:
        logger.log_error(e)
        return

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * cfg.scale, SCREEN_HEIGHT * cfg.scale))
    pygame.display.set_caption("chip8vm")
    clock = pygame.time.Clock()
    on_color, off_color = create_color_scheme(cfg.color_scheme, invert=cfg.invert_colors)

    keys = {index: False for index in KEY_MAP.values()}
    running = True
    paused = False

    logger.info("Controls: ESC=Quit, P=Pause, F5=Reset")

    while running:
        clock.tick(cfg.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                elif event.key == pygame.K_F5:
                    system.reset()
                    logger.info("Reset")
                elif event.key in KEY_MAP:
                    keys[KEY_MAP[event.key]] = True
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    keys[KEY_MAP[event.key]] = False

        if not paused:
            system.set_keys(keys)
            try:
                system.run_frame(cfg.steps_per_frame)
            except Chip8Error:
                # Already logged by the session
                paused = True

        if system.beep:
            system.acknowledge_beep()

        if system.redraw:
            draw_frame(screen, system.frame, cfg.scale, on_color, off_color)
            system.acknowledge_frame()
            pygame.display.flip()

    pygame.quit()


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    run_emulator(cfg)


if __name__ == "__main__":
    main()
