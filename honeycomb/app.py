#!/usr/bin/env python3
"""
Honeycomb — energy-spilling hexagons that sing
----------------------------------------------
Click a cell to charge it. Charged cells spill into their neighbours and every
spill plays a chord from the receiving cell's palette.
"""
from __future__ import annotations

import argparse
import logging
import os
import random
import time
from typing import Dict, List, Optional, Tuple

import pygame

from honeycomb.audio import ToneSynth
from honeycomb.config import DEFAULT_CONFIG_PATH, load_config, validate_config
from honeycomb.grid import Cell
from honeycomb.render import Renderer
from honeycomb.simulation import Simulation

LOG = logging.getLogger("honeycomb")

HELP_ITEMS = [
    ("LMB", "Toggle cell (charge / let decay)"),
    ("Space", "Pause / Resume"),
    ("R", "Reset all cells"),
    ("M", "Mute / Unmute"),
    ("F2", "Toggle this help"),
    ("F3", "Toggle debug overlay"),
    ("F4", "Screenshot to frames dir"),
    ("Esc", "Quit"),
]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Honeycomb energy/sound toy")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to a JSON config file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for pitches and spillage rolls")
    parser.add_argument("--width", type=int, default=None, help="Window width override")
    parser.add_argument("--height", type=int, default=None, help="Window height override")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging verbosity (e.g. DEBUG, INFO, WARNING)",
    )
    return parser.parse_args(argv)


def build_runtime_config(args: argparse.Namespace) -> Dict:
    config = load_config(args.config)
    if args.width is not None:
        config["width"] = args.width
    if args.height is not None:
        config["height"] = args.height
    if args.seed is not None:
        config["seed"] = args.seed
    return validate_config(config)


# ---------------------- Help overlay --------------------------
def _draw_help_overlay(screen: pygame.Surface) -> None:
    pad = 16
    width, height = screen.get_size()
    max_w = min(560, int(width * 0.8))
    max_h = min(36 + 24 * len(HELP_ITEMS) + pad * 2, int(height * 0.8))
    surf = pygame.Surface((max_w, max_h), pygame.SRCALPHA)
    surf.fill((0, 0, 0, 200))
    title_font = pygame.font.Font(None, 30)
    item_font = pygame.font.Font(None, 22)

    y = pad
    surf.blit(title_font.render("Honeycomb — Help (F2 to close)", True, (230, 230, 235)), (pad, y))
    y += 36
    for key, desc in HELP_ITEMS:
        surf.blit(item_font.render(f"{key:>6}  —  {desc}", True, (235, 235, 240)), (pad, y))
        y += 24

    dst = screen.get_rect()
    screen.blit(surf, (dst.centerx - max_w // 2, dst.centery - max_h // 2))


def _draw_debug_overlay(screen: pygame.Surface, clock: pygame.time.Clock, sim: Simulation, synth: ToneSynth, paused: bool) -> None:
    audio = "MUTE" if synth.muted else ("ON" if synth.ready else "OFF")
    txt = (
        f"FPS:{clock.get_fps():5.1f}  CELLS:{len(sim.cells)}  ACTIVE:{sim.active_count}  "
        f"E:{sim.mean_energy:5.1f}  AUDIO:{audio}"
    )
    if paused:
        txt += "  PAUSED"
    screen.blit(pygame.font.Font(None, 20).render(txt, True, (230, 230, 235)), (12, 10))


# -------------------------- Input -----------------------------
def handle_click(sim: Simulation, synth: ToneSynth, pos: Tuple[int, int], state: Dict) -> Optional[Cell]:
    """Toggle the cell under ``pos``; the first click also retries a suspended mixer."""
    if state.get("first_gesture", True):
        state["first_gesture"] = False
        if not synth.ready and not synth.resume():
            LOG.info("Audio still unavailable after first click; running silent")
    return sim.toggle_at(*pos)


# -------------------------- Main ------------------------------
def run(config: Dict) -> None:
    pygame.mixer.pre_init(config["sample_rate"], -16, 2, config["mixer_buffer"])
    pygame.init()
    screen = pygame.display.set_mode((config["width"], config["height"]), pygame.RESIZABLE)
    pygame.display.set_caption("Honeycomb")
    clock = pygame.time.Clock()

    synth = ToneSynth.from_config(config)
    if not synth.resume():
        LOG.info("Audio suspended; will retry on first click")

    rng = random.Random(config["seed"])
    sim = Simulation.for_surface(config["width"], config["height"], config, rng, synth)
    renderer = Renderer(config)

    paused = False
    debug = config["debug_overlay"]
    help_visible = False
    pointer_state = {"first_gesture": True}

    running = True
    while running:
        dt = clock.tick(config["fps"]) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                sim.rebuild(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_r:
                    sim.reset()
                    LOG.info("Honeycomb reset")
                elif event.key == pygame.K_m:
                    synth.muted = not synth.muted
                    LOG.info("Audio %s", "muted" if synth.muted else "unmuted")
                elif event.key == pygame.K_F2:
                    help_visible = not help_visible
                elif event.key == pygame.K_F3:
                    debug = not debug
                elif event.key == pygame.K_F4:
                    os.makedirs(config["save_frames_dir"], exist_ok=True)
                    path = os.path.join(config["save_frames_dir"], f"honeycomb_{int(time.time() * 1000)}.png")
                    pygame.image.save(screen, path)
                    LOG.info("Saved screenshot: %s", path)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                handle_click(sim, synth, event.pos, pointer_state)

        if not paused:
            sim.step(dt)

        renderer.draw(screen, sim.cells)
        if help_visible:
            _draw_help_overlay(screen)
        if debug:
            _draw_debug_overlay(screen, clock, sim, synth, paused)
        pygame.display.flip()

    synth.close()
    pygame.quit()


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    log_level = getattr(logging, str(args.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = build_runtime_config(args)
    LOG.info("Launching honeycomb (%dx%d, seed=%s)", config["width"], config["height"], config["seed"])
    run(config)


if __name__ == "__main__":
    main()
