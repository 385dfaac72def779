import math

import pygame

from .constants import (
    FULL_TURN, SECTION_COLORS, FONT_SIZES,
    UI_BG, UI_TEXT, UI_TEXT_DIM, POINTER, POINTER_DARK, RIM, VICTORY_GOLD, BLACK
)
from .outcome import ease_out


def displayed_rotation(start, end, elapsed, duration):
    """Wheel angle part way through a spin animation."""
    if duration <= 0:
        return end
    return start + (end - start) * ease_out(elapsed / duration)


def section_label(entries, max_chars=14):
    """First name in the wedge, shortened, with a "+N" tail for the rest."""
    if not entries:
        return ''
    name = entries[0].name
    if len(name) > max_chars:
        name = name[:max_chars - 2] + '..'
    if len(entries) > 1:
        name = f"{name} +{len(entries) - 1}"
    return name


def create_fonts() -> dict:
    pygame.font.init()
    fonts = {}
    for name, size in FONT_SIZES.items():
        try:
            fonts[name] = pygame.font.SysFont('Arial', size, bold=(name == 'large'))
        except (OSError, pygame.error):
            fonts[name] = pygame.font.Font(None, size)
    return fonts


class WheelView:
    """Draws the engine's sections and animates spins towards their committed angle."""

    def __init__(self, engine, fonts, center, radius):
        self.engine = engine
        self.fonts = fonts
        self.center = center
        self.radius = radius

        self.angle = 0.0  # Degrees, clockwise, as shown on screen
        self.spin_start = 0.0
        self.spin_end = 0.0
        self.spin_started_at = None
        self.spin_duration = 0.0

    def start_spin(self, result, now):
        """Animate from where the wheel is now to the spin's final rotation."""
        self.spin_start = result.start_rotation % FULL_TURN
        self.spin_end = result.target_rotation_degrees
        self.spin_started_at = now
        self.spin_duration = result.duration_seconds

    def update(self, now):
        if self.spin_started_at is None:
            return
        elapsed = now - self.spin_started_at
        self.angle = displayed_rotation(self.spin_start, self.spin_end, elapsed, self.spin_duration)
        if elapsed >= self.spin_duration:
            self.spin_started_at = None

    def draw(self, screen):
        cx, cy = self.center
        r = self.radius
        sections = self.engine.sections

        pygame.draw.circle(screen, RIM, (cx, cy), r + 8)
        if not sections:
            pygame.draw.circle(screen, UI_BG, (cx, cy), r)
        else:
            width = FULL_TURN / len(sections)
            for i in range(len(sections)):
                color = SECTION_COLORS[i % len(SECTION_COLORS)]
                start = i * width + self.angle
                self._draw_segment(screen, cx, cy, r, start, start + width, color)
            self._draw_labels(screen, cx, cy, r, sections, width)

        # Hub
        pygame.draw.circle(screen, POINTER_DARK, (cx, cy), int(r * 0.12) + 3)
        pygame.draw.circle(screen, POINTER, (cx, cy), int(r * 0.12))

        self._draw_pointer(screen, cx, cy - r - 15)

    def _to_screen(self, cx, cy, r, degrees):
        """Clockwise degrees from the top to a screen point."""
        rad = math.radians(degrees)
        return cx + int(r * math.sin(rad)), cy - int(r * math.cos(rad))

    def _draw_segment(self, screen, cx, cy, r, start_deg, end_deg, color):
        """Draw a pie segment."""
        points = [(cx, cy)]
        steps = max(3, int((end_deg - start_deg) / 3))
        for i in range(steps + 1):
            points.append(self._to_screen(cx, cy, r, start_deg + (end_deg - start_deg) * i / steps))
        if len(points) > 2:
            pygame.draw.polygon(screen, color, points)
            pygame.draw.polygon(screen, UI_BG, points, 2)

    def _draw_labels(self, screen, cx, cy, r, sections, width):
        font = self.fonts['small'] if len(sections) <= 6 else self.fonts['tiny']
        max_chars = self.engine.config.max_section_label_chars
        for i, members in enumerate(sections):
            mid = i * width + width / 2 + self.angle
            tx, ty = self._to_screen(cx, cy, r * 0.62, mid)
            text = font.render(section_label(members, max_chars), True, BLACK)
            screen.blit(text, text.get_rect(center=(tx, ty)))

    def _draw_pointer(self, screen, x, y):
        """Triangle pointer at the top, pointing down into the wheel."""
        points = [(x, y + 25), (x - 15, y - 10), (x + 15, y - 10)]
        pygame.draw.polygon(screen, POINTER, points)
        pygame.draw.polygon(screen, POINTER_DARK, points, 3)
        pygame.draw.circle(screen, POINTER_DARK, (x, y - 10), 6)

    def draw_banner(self, screen, y):
        """Status line, name count and, once decided, the winner."""
        width = screen.get_width()
        status = self.fonts['medium'].render(self.engine.status_message(), True, UI_TEXT)
        screen.blit(status, status.get_rect(center=(width // 2, y)))

        progress = self.engine.progress()
        counts = self.fonts['small'].render(
            f"Total names: {progress['total']}   Removed: {progress['removed_count']}",
            True, UI_TEXT_DIM)
        screen.blit(counts, counts.get_rect(center=(width // 2, y + 32)))

        if self.engine.winner:
            winner = self.fonts['large'].render(f"Winner: {self.engine.winner}", True, VICTORY_GOLD)
            screen.blit(winner, winner.get_rect(center=(width // 2, screen.get_height() - 50)))
