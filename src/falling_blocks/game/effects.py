from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .grid import ClearedCell
from .shapes import Color, color_for_value


PARTICLES_PER_CELL = 4
PARTICLE_GRAVITY = 12.0  # cells / s^2
PARTICLE_FADE = 2.5  # life units / s


@dataclass
class Particle:
    # Position and velocity are in cell units so the renderer can scale freely.
    x: float
    y: float
    vx: float
    vy: float
    color: Color
    life: float = 1.0
    size: int = 3


class ParticleSystem:
    """Cosmetic bursts spawned from cleared cells. Never touches game state."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)
        self.particles: List[Particle] = []

    def spawn(self, cells: Iterable[ClearedCell]) -> None:
        for cell in cells:
            color = color_for_value(cell.color)
            for _ in range(PARTICLES_PER_CELL):
                angle = self.rng.uniform(0, math.pi * 2)
                speed = self.rng.uniform(3.0, 9.0)
                self.particles.append(
                    Particle(
                        x=cell.x + 0.5,
                        y=cell.y + 0.5,
                        vx=math.cos(angle) * speed,
                        vy=math.sin(angle) * speed,
                        color=color,
                        size=self.rng.randint(2, 5),
                    )
                )

    def update(self, dt_ms: float) -> None:
        dt = dt_ms / 1000.0
        i = 0
        while i < len(self.particles):
            p = self.particles[i]
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.vy += PARTICLE_GRAVITY * dt
            p.life -= PARTICLE_FADE * dt
            if p.life <= 0:
                # swap-remove
                self.particles[i] = self.particles[-1]
                self.particles.pop()
            else:
                i += 1

    def clear(self) -> None:
        self.particles.clear()

    def __len__(self) -> int:
        return len(self.particles)
