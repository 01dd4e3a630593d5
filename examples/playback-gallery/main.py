"""Playback Gallery - one orb per play mode, driven by tick-anim.

Each lane owns a PlaybackEngine moving an orb along its track (ease_in_out)
while a keyframe curve pulses its radius. FORWARD and REVERSE share the
"spotlight" label, so only one of them can play at a time.

Controls:
  1-5     Play the lane's mode
  Space   Play every lane
  S       Finish current cycle, then stop
  B       Finish by backtracking to the start
  X       Stop immediately
  Esc     Quit
"""
from __future__ import annotations

import logging
import sys

import pygame

from tick_anim import (
    KeyframeCurve,
    LabelRegistry,
    PlaybackEngine,
    PlayMode,
    Scheduler,
    StopMode,
)

from ui.constants import (
    BG_COLOR,
    DURATION,
    FPS,
    IDLE_COLOR,
    LABEL_W,
    LANE_BG,
    LANE_BORDER,
    LANE_H,
    MODE_COLORS,
    SCREEN_H,
    SCREEN_W,
    STATUS_BG,
    STATUS_H,
    TEXT_COLOR,
    TEXT_DIM,
    TRACK_PAD,
    TRACK_RAIL,
    TRACK_W,
    UPDATE_HZ,
)

PULSE = KeyframeCurve([(0.0, 8.0), (0.5, 16.0), (1.0, 8.0)], smooth=True)

SHARED_LABEL = "spotlight"


class Lane:
    """One mode, one engine, one orb."""

    def __init__(self, mode: PlayMode, scheduler: Scheduler, registry: LabelRegistry) -> None:
        self.mode = mode
        self.progress = 0.0
        self.radius = PULSE(0.0)
        self.cycles = 0
        self.completions = 0
        label = SHARED_LABEL if mode in (PlayMode.FORWARD, PlayMode.REVERSE) else None
        self.engine = PlaybackEngine(
            DURATION,
            UPDATE_HZ,
            scheduler=scheduler,
            label=label,
            registry=registry if label is not None else None,
        )
        self.engine.add_property("ease_in_out", 0.0, 1.0, self._set_progress)
        self.engine.add_property(PULSE, 0.0, 0.0, self._set_radius)

    def _set_progress(self, value: float) -> None:
        self.progress = value

    def _set_radius(self, value: float) -> None:
        self.radius = value

    def _on_cycle_end(self) -> None:
        self.cycles += 1

    def _on_complete(self) -> None:
        self.completions += 1

    def play(self) -> bool:
        return self.engine.play(
            self.mode, on_complete=self._on_complete, on_cycle_end=self._on_cycle_end
        )


class GalleryState:
    """Holds the scheduler, the lanes and the last status message."""

    def __init__(self) -> None:
        self.scheduler = Scheduler()
        self.registry = LabelRegistry()
        self.lanes = [Lane(mode, self.scheduler, self.registry) for mode in PlayMode]
        self.message = "Press 1-5 or Space"

    def play(self, index: int) -> None:
        lane = self.lanes[index]
        if lane.play():
            self.message = f"{lane.mode.name} playing"
        else:
            self.message = f"{lane.mode.name} blocked: {SHARED_LABEL!r} busy"

    def play_all(self) -> None:
        blocked = [lane.mode.name for lane in self.lanes if not lane.play()]
        self.message = f"blocked: {', '.join(blocked)}" if blocked else "all lanes playing"

    def stop_all(self, mode: StopMode) -> None:
        for lane in self.lanes:
            lane.engine.stop(mode)
        self.message = f"stop {mode.name}"


def draw_lane(surface: pygame.Surface, font: pygame.font.Font, lane: Lane, index: int) -> None:
    y = index * LANE_H
    pygame.draw.rect(surface, LANE_BG, (0, y, SCREEN_W, LANE_H))
    pygame.draw.line(surface, LANE_BORDER, (0, y + LANE_H - 1), (SCREEN_W, y + LANE_H - 1))

    color = MODE_COLORS[lane.mode.name]
    title = font.render(f"{index + 1}  {lane.mode.name}", True, color)
    surface.blit(title, (10, y + 12))
    stats = font.render(
        f"cycles {lane.cycles}  done {lane.completions}", True, TEXT_DIM
    )
    surface.blit(stats, (10, y + 34))

    rail_y = y + LANE_H // 2
    x0 = LABEL_W + TRACK_PAD
    x1 = LABEL_W + TRACK_W - TRACK_PAD
    pygame.draw.line(surface, TRACK_RAIL, (x0, rail_y), (x1, rail_y), 2)

    orb_x = int(x0 + lane.progress * (x1 - x0))
    orb_color = color if lane.engine.is_playing() else IDLE_COLOR
    pygame.draw.circle(surface, orb_color, (orb_x, rail_y), int(lane.radius))


def draw_status_bar(surface: pygame.Surface, font: pygame.font.Font, message: str) -> None:
    y = SCREEN_H - STATUS_H
    pygame.draw.rect(surface, STATUS_BG, (0, y, SCREEN_W, STATUS_H))
    help_text = "1-5 play  Space all  S finish  B backtrack  X immediate  Esc quit"
    surface.blit(font.render(help_text, True, TEXT_DIM), (10, y + 8))
    surface.blit(font.render(message, True, TEXT_COLOR), (10, y + 30))


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Playback Gallery - tick-anim demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 13)

    state = GalleryState()
    lane_keys = [pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5]
    running = True

    while running:
        clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in lane_keys:
                    state.play(lane_keys.index(event.key))
                elif event.key == pygame.K_SPACE:
                    state.play_all()
                elif event.key == pygame.K_s:
                    state.stop_all(StopMode.FINISH_CYCLE)
                elif event.key == pygame.K_b:
                    state.stop_all(StopMode.FINISH_CYCLE_REVERSE)
                elif event.key == pygame.K_x:
                    state.stop_all(StopMode.IMMEDIATE)

        # --- Tick ---
        state.scheduler.step()

        # --- Render ---
        screen.fill(BG_COLOR)
        for i, lane in enumerate(state.lanes):
            draw_lane(screen, font, lane, i)
        draw_status_bar(screen, font, state.message)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
