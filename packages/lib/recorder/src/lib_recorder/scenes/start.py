from typing import Optional

import pygame

from ..sequence import SceneInterface


class StartScene(SceneInterface):
    """Idle screen shown between recordings."""

    def __init__(self, manager=None):
        super().__init__(manager)
        self._font = None

    def enter(self):
        print("StartScene: enter")
        if not pygame.font.get_init():
            pygame.font.init()
        self._font = pygame.font.SysFont(None, 48)

    def exit(self):
        self._font = None
        print("StartScene: exit")

    def render(self, surface: Optional[pygame.Surface]) -> None:
        """Draw the key help centered on the surface."""
        if surface is None or self._font is None:
            return

        surface.fill((20, 20, 20))
        surf_w, surf_h = surface.get_size()
        lines = ("Press R to record", "Press Q to quit")
        for i, line in enumerate(lines):
            text = self._font.render(line, True, (230, 230, 230))
            rect = text.get_rect()
            rect.center = (surf_w // 2, surf_h // 2 + i * 60)
            surface.blit(text, rect)

    def handle_event(self, event) -> None:
        """'r' starts a recording, 'q' quits."""
        if event is None:
            return None

        if event.type == pygame.KEYDOWN and self.manager is not None:
            if event.key == pygame.K_r:
                self.manager.start("record")
            elif event.key == pygame.K_q:
                self.manager.running = False
