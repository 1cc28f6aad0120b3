from dataclasses import dataclass

from lovehop.config import CAMERA_LEAD, CAMERA_LERP, CAMERA_START_Y, TILE, WINDOW_H


@dataclass
class Camera:
    # y is the world pixel at the top of the screen
    y: float = CAMERA_START_Y
    target_y: float = CAMERA_START_Y
    max_progress: int = 0  # furthest (most negative) row reached

    def reset(self):
        self.y = CAMERA_START_Y
        self.target_y = CAMERA_START_Y
        self.max_progress = 0

    def record_progress(self, world_y: int) -> bool:
        """Move the target only when the player beats their best row."""
        if world_y >= self.max_progress:
            return False
        self.max_progress = world_y
        self.target_y = self.max_progress * TILE - WINDOW_H * CAMERA_LEAD
        return True

    def snap(self):
        self.y = self.target_y

    def update(self):
        self.y += (self.target_y - self.y) * CAMERA_LERP
