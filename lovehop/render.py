"""pygame renderer. Draws a FrameSnapshot and nothing else."""

import math
import random
from typing import Tuple

import pygame

from lovehop.config import CAUSE_CAR, GRID_W, LANE_GRASS, LANE_ROAD, LANE_WATER, TILE, WINDOW_H, WINDOW_W
from lovehop.lanes import classify
from lovehop.scenes import HomePhase, Scene, SoupPhase
from lovehop.services import Renderer

# Colors
COL_BG = (144, 238, 144)
COL_GRASS = (144, 238, 144)
COL_GRASS_DARK = (120, 214, 120)
COL_ROAD = (105, 105, 105)
COL_ROAD_SIDE = (88, 88, 88)
COL_ROAD_LINE = (255, 255, 224)
COL_WATER = (135, 206, 235)
COL_WATER_DARK = (100, 180, 220)
COL_WATER_LIGHT = (170, 225, 245)
COL_PLAYER = (253, 188, 180)
COL_PLAYER_EYE = (50, 50, 50)
COL_SHADOW = (0, 0, 0, 80)
COL_TEXT = (255, 255, 255)
COL_UI_BG = (30, 30, 30, 150)
COL_HOUSE = (222, 184, 135)
COL_ROOF = (178, 34, 34)
COL_DOOR = (139, 69, 19)
COL_FENCE = (245, 245, 245)
COL_PATH = (210, 180, 140)
COL_INGREDIENT = (255, 236, 140)
COL_ROOM = (245, 222, 179)
COL_HEART = (255, 105, 180)
COL_SOUP_BG = (245, 128, 61)
COL_RING = (248, 187, 217)
COL_CAT = (255, 140, 0)


def darker(color, by=40) -> Tuple[int, int, int]:
    return tuple(max(0, c - by) for c in color[:3])


def lighter(color, by=30) -> Tuple[int, int, int]:
    return tuple(min(255, c + by) for c in color[:3])


class PygameRenderer(Renderer):
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.font = pygame.font.SysFont("consolas", 18)
        self.font_big = pygame.font.SysFont("consolas", 40, bold=True)
        self.font_small = pygame.font.SysFont("consolas", 14)

    def draw(self, snap):
        self.screen.fill(COL_BG)

        scene = snap.scene
        if scene is Scene.TITLE:
            self._draw_title()
        elif scene is Scene.PLAY:
            self._draw_play(snap)
        elif scene is Scene.HOME_INTERIOR and snap.home is not None:
            self._draw_home(snap.home)
        elif scene is Scene.TOFU_SOUP and snap.soup is not None:
            self._draw_soup(snap.soup)
        elif scene is Scene.ENDING:
            self._draw_ending(snap)
        elif scene is Scene.BONUS and snap.bonus is not None:
            self._draw_bonus(snap.bonus)
        elif scene is Scene.BONUS_OVER:
            self._card("BONUS OVER", ["Press Enter for the title screen"])

        if snap.toast:
            self._draw_toast(snap.toast)

        pygame.display.flip()

    # ----------------------------- Play -----------------------------

    def _draw_play(self, snap):
        cam = snap.camera_y
        first_row = math.floor(cam / TILE)
        for row in range(first_row, first_row + math.ceil(WINDOW_H / TILE) + 2):
            self._draw_lane(row, classify(row, snap.goal), row * TILE - cam)

        if snap.house.visible and snap.entrance is not None:
            self._draw_house(snap, cam)

        for vehicle in snap.vehicles:
            self._draw_car(vehicle, cam)
        for log in snap.logs:
            self._draw_log(log, cam)
        for slot in snap.slots:
            if not slot.taken:
                self._draw_ingredient(slot, cam)

        self._draw_player(snap.player, cam)
        self._draw_hud(snap)

        if not snap.alive:
            reason = "Hit by a car!" if snap.death_cause == CAUSE_CAR else "Splash!"
            self._card("GAME OVER", [reason, f"Score: {snap.score}", "Press  R  to Restart"])

    def _draw_lane(self, row: int, lane: str, y: float):
        lane_rect = pygame.Rect(0, int(y), WINDOW_W, TILE)

        if lane == LANE_GRASS:
            pygame.draw.rect(self.screen, COL_GRASS, lane_rect)
            # Same patches every frame for a given row
            rng = random.Random(row)
            for i in range(0, WINDOW_W, TILE):
                if rng.random() < 0.25:
                    pygame.draw.rect(self.screen, COL_GRASS_DARK, (i, int(y), TILE, TILE))

        elif lane == LANE_ROAD:
            pygame.draw.rect(self.screen, COL_ROAD_SIDE, lane_rect)
            pygame.draw.rect(self.screen, COL_ROAD, (0, int(y) + 3, WINDOW_W, TILE - 6))
            dash_w = TILE // 2
            dash_y = int(y) + TILE // 2 - 1
            for x in range(0, WINDOW_W, 60):
                pygame.draw.rect(self.screen, COL_ROAD_LINE, (x + 10, dash_y, dash_w, 2))

        elif lane == LANE_WATER:
            pygame.draw.rect(self.screen, COL_WATER, lane_rect)
            wave_offset = (pygame.time.get_ticks() // 100) % (TILE * 2)
            for x in range(-TILE * 2, WINDOW_W + TILE * 2, TILE):
                wave_x = x + wave_offset
                pygame.draw.ellipse(self.screen, COL_WATER_DARK, (wave_x, int(y) + 6, TILE, 6))
                pygame.draw.ellipse(self.screen, COL_WATER_LIGHT, (wave_x + TILE // 2, int(y) + TILE - 10, TILE // 2, 4))

    def _draw_car(self, vehicle, cam: float):
        x = vehicle.grid_x * TILE
        y = vehicle.world_y * TILE - cam + (TILE - vehicle.height) / 2
        r = pygame.Rect(int(x), int(y), int(vehicle.width), int(vehicle.height))

        shadow = pygame.Surface((r.w + 4, r.h // 2), pygame.SRCALPHA)
        pygame.draw.ellipse(shadow, (0, 0, 0, 60), shadow.get_rect())
        self.screen.blit(shadow, (r.x - 2, r.y + r.h - 4))

        pygame.draw.rect(self.screen, vehicle.color, r, border_radius=6)
        bottom = pygame.Rect(r.x, r.y + r.h // 2, r.w, r.h // 2)
        pygame.draw.rect(self.screen, darker(vehicle.color), bottom, border_radius=6)

        window_w = max(5, r.w // 5)
        window_y = r.y + r.h // 4
        front_x = r.right - window_w - 3 if vehicle.speed > 0 else r.x + 3
        pygame.draw.rect(self.screen, (100, 180, 220), (front_x, window_y, window_w, r.h // 3), border_radius=2)

    def _draw_log(self, log, cam: float):
        x = log.grid_x * TILE
        y = log.world_y * TILE - cam + (TILE - log.height) / 2
        r = pygame.Rect(int(x), int(y), int(log.width), int(log.height))

        pygame.draw.rect(self.screen, log.color, r, border_radius=6)
        grain = darker(log.color, 30)
        for i in range(3):
            line_y = r.y + (i + 1) * r.h // 4
            pygame.draw.line(self.screen, grain, (r.x + 4, line_y), (r.right - 4, line_y), 2)
        pygame.draw.rect(self.screen, lighter(log.color), (r.x + 6, r.y + 3, max(0, r.w - 12), 3), border_radius=2)

    def _draw_ingredient(self, slot, cam: float):
        cx = int(slot.gx * TILE + TILE / 2)
        cy = int(slot.gy * TILE - cam + TILE / 2)
        pygame.draw.circle(self.screen, COL_INGREDIENT, (cx, cy), TILE // 3)
        pygame.draw.circle(self.screen, darker(COL_INGREDIENT, 80), (cx, cy), TILE // 3, 2)
        label = self.font_small.render(slot.label[0], True, (80, 50, 20))
        self.screen.blit(label, (cx - label.get_width() // 2, cy - label.get_height() // 2))

    def _draw_house(self, snap, cam: float):
        house, entrance = snap.house, snap.entrance

        path_top = house.world_y * TILE - cam + TILE
        path_bottom = entrance.path_start * TILE - cam + TILE
        path_x = (house.grid_x + 1.5) * TILE
        pygame.draw.rect(self.screen, COL_PATH, (int(path_x), int(path_top), 2 * TILE, int(path_bottom - path_top)))

        fence_y = int(entrance.gate_y * TILE - cam + TILE / 2)
        gate_l, gate_r = (house.grid_x + 1) * TILE, (house.grid_x + 4) * TILE
        left, right = max(0, entrance.fence_left) * TILE, min(GRID_W, entrance.fence_right) * TILE
        pygame.draw.line(self.screen, COL_FENCE, (left, fence_y), (gate_l, fence_y), 4)
        pygame.draw.line(self.screen, COL_FENCE, (gate_r, fence_y), (right, fence_y), 4)

        x = house.grid_x * TILE
        y = house.world_y * TILE - cam
        body = pygame.Rect(x, int(y - 2 * TILE), 5 * TILE, 3 * TILE)
        pygame.draw.rect(self.screen, COL_HOUSE, body)
        roof = [(x - 8, body.y), (x + 5 * TILE + 8, body.y), (x + 5 * TILE // 2, body.y - 2 * TILE)]
        pygame.draw.polygon(self.screen, COL_ROOF, roof)
        door = pygame.Rect(x + 2 * TILE, int(y), TILE, TILE)
        pygame.draw.rect(self.screen, COL_DOOR, door, border_radius=4)

    def _draw_player(self, player, cam: float):
        base = pygame.Rect(int(player.grid_x * TILE), int(player.world_y * TILE - cam), TILE, TILE)
        r = base.inflate(-int(TILE * 0.2), -int(TILE * 0.2))

        shadow = pygame.Surface((r.w + 4, 8), pygame.SRCALPHA)
        pygame.draw.ellipse(shadow, COL_SHADOW, shadow.get_rect())
        self.screen.blit(shadow, (r.x - 2, r.bottom - 4))

        pygame.draw.ellipse(self.screen, COL_PLAYER, pygame.Rect(r.x, r.y + 6, r.w, r.h - 6))
        head = (r.centerx, r.y + 8)
        pygame.draw.circle(self.screen, COL_PLAYER, head, r.w // 2 - 2)
        pygame.draw.circle(self.screen, COL_PLAYER_EYE, (head[0] - 4, head[1] - 1), 2)
        pygame.draw.circle(self.screen, COL_PLAYER_EYE, (head[0] + 4, head[1] - 1), 2)

    def _draw_hud(self, snap):
        hud = pygame.Surface((WINDOW_W - 16, 64), pygame.SRCALPHA)
        pygame.draw.rect(hud, COL_UI_BG, hud.get_rect(), border_radius=14)
        pygame.draw.rect(hud, (255, 200, 60, 100), hud.get_rect(), width=2, border_radius=14)
        self.screen.blit(hud, (8, 8))

        score = self.font_big.render(f"{snap.score}", True, (255, 230, 80))
        self.screen.blit(score, (20, 16))
        best = self.font_small.render(f"BEST {snap.best_score}", True, (180, 220, 255))
        self.screen.blit(best, (20, 54))

        # Ingredient checklist, 3 per line
        for i, (item, taken) in enumerate(snap.checklist):
            row, col = divmod(i, 3)
            mark = "x" if taken else "o"
            color = (150, 255, 150) if taken else (200, 200, 200)
            txt = self.font_small.render(f"{mark} {item.label}", True, color)
            self.screen.blit(txt, (110 + col * 120, 22 + row * 22))

    # ----------------------------- Epilogue -----------------------------

    def _draw_home(self, home):
        room = pygame.Surface((WINDOW_W, WINDOW_H))
        room.fill(COL_ROOM)
        pygame.draw.rect(room, (160, 110, 70), (0, int(WINDOW_H * 0.8), WINDOW_W, int(WINDOW_H * 0.2)))
        room.set_alpha(int(255 * home.fade_opacity))
        self.screen.fill((0, 0, 0))
        self.screen.blit(room, (0, 0))

        floor_y = int(WINDOW_H * 0.75)
        pygame.draw.rect(self.screen, COL_PLAYER, (int(home.player_x) - 14, floor_y - 40, 28, 40), border_radius=8)
        pygame.draw.rect(self.screen, (180, 200, 255), (int(home.partner_x) - 14, floor_y - 44, 28, 44), border_radius=8)

        for heart in home.hearts:
            size = max(2, int(12 * heart.scale))
            surf = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
            alpha = max(0, min(255, int(255 * heart.opacity)))
            pygame.draw.circle(surf, (*COL_HEART, alpha), (size // 2 + 1, size // 2 + 1), size // 2)
            pygame.draw.circle(surf, (*COL_HEART, alpha), (size + size // 2 - 1, size // 2 + 1), size // 2)
            pygame.draw.polygon(surf, (*COL_HEART, alpha), [(0, size // 2 + 2), (size * 2, size // 2 + 2), (size, size * 2)])
            self.screen.blit(surf, (int(heart.x) - size, int(heart.y) - size))

        if home.phase is HomePhase.SHOW_BUTTON:
            bx, by, bw, bh = home.button_rect
            bounce = math.sin(pygame.time.get_ticks() * 0.002) * 4
            r = pygame.Rect(int(bx), int(by + bounce), int(bw), int(bh))
            pygame.draw.rect(self.screen, (255, 140, 0), r, border_radius=10)
            pygame.draw.rect(self.screen, COL_DOOR, r, width=3, border_radius=10)
            txt = self.font.render("Enjoy Tofu Soup", True, COL_TEXT)
            self.screen.blit(txt, (r.centerx - txt.get_width() // 2, r.centery - txt.get_height() // 2))

    def _draw_soup(self, soup):
        self.screen.fill(COL_SOUP_BG)
        bowl = pygame.Rect(WINDOW_W // 2 - 90, WINDOW_H // 2 + 80, 180, 90)
        pygame.draw.ellipse(self.screen, (250, 250, 250), bowl)
        pygame.draw.ellipse(self.screen, (240, 200, 120), bowl.inflate(-20, -40).move(0, -18))

        for puff in soup.steam:
            size = max(2, int(14 * puff.scale))
            surf = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
            alpha = max(0, min(255, int(200 * puff.opacity)))
            pygame.draw.circle(surf, (255, 255, 255, alpha), (size, size), size)
            self.screen.blit(surf, (int(puff.x) - size, int(puff.y) - size))

        if soup.phase is SoupPhase.FADE_IN:
            veil = pygame.Surface((WINDOW_W, WINDOW_H))
            veil.set_alpha(int(255 * (1 - soup.fade_opacity)))
            self.screen.blit(veil, (0, 0))

    def _draw_ending(self, snap):
        narrative = snap.ending
        if narrative is None:
            return
        lines = [f"{narrative.player_name} & {narrative.partner_name}", ""]
        lines += [f"{i + 1}. {reason}" for i, reason in enumerate(narrative.reasons)]
        lines += ["", "B  bonus round   |   R  play again"]
        self._card("HOME AT LAST", lines, height=WINDOW_H - 80)

    def _draw_bonus(self, bonus):
        self.screen.fill(COL_ROOM)
        cx, cy = int(bonus.cat[0]), int(bonus.cat[1])
        pygame.draw.rect(self.screen, COL_CAT, (cx - 16, cy - 16, 32, 32))
        pygame.draw.rect(self.screen, (255, 255, 255), (cx - 8, cy - 12, 16, 16))
        pygame.draw.rect(self.screen, (220, 20, 60), (cx - 6, cy - 8, 4, 4))
        pygame.draw.rect(self.screen, (220, 20, 60), (cx + 2, cy - 8, 4, 4))

        for ring in bonus.rings:
            if ring.r > ring.w / 2:
                pygame.draw.circle(self.screen, COL_RING, (int(ring.x), int(ring.y)), int(ring.r), int(ring.w))

        tx, ty = bonus.token
        pygame.draw.rect(self.screen, COL_PLAYER, (int(tx) - 12, int(ty) - 12, 24, 24))

        timer = self.font.render(f"Time: {math.ceil(max(0.0, bonus.time_left))}s", True, (139, 75, 124))
        self.screen.blit(timer, (20, 20))

    # ----------------------------- Overlays -----------------------------

    def _draw_title(self):
        self.screen.fill((255, 228, 225))
        title = self.font_big.render("Love Journey", True, (200, 60, 100))
        self.screen.blit(title, ((WINDOW_W - title.get_width()) // 2, WINDOW_H // 3))
        hint = self.font.render("Press Space to start", True, (120, 80, 90))
        self.screen.blit(hint, ((WINDOW_W - hint.get_width()) // 2, WINDOW_H // 3 + 70))

    def _card(self, heading: str, lines, height: int = 220):
        card_w = WINDOW_W - 60
        x = (WINDOW_W - card_w) // 2
        y = (WINDOW_H - height) // 2

        card = pygame.Surface((card_w, height), pygame.SRCALPHA)
        pygame.draw.rect(card, (40, 40, 60, 220), card.get_rect(), border_radius=20)
        pygame.draw.rect(card, (100, 200, 255, 50), card.get_rect(), width=3, border_radius=20)

        title = self.font_big.render(heading, True, (255, 120, 140))
        card.blit(title, ((card_w - title.get_width()) // 2, 20))
        ty = 80
        for line in lines:
            txt = self.font.render(line, True, (220, 220, 220))
            card.blit(txt, ((card_w - txt.get_width()) // 2, ty))
            ty += 24

        self.screen.blit(card, (x, y))

    def _draw_toast(self, message: str):
        txt = self.font.render(message, True, COL_TEXT)
        box = pygame.Surface((txt.get_width() + 24, txt.get_height() + 12), pygame.SRCALPHA)
        pygame.draw.rect(box, (0, 0, 0, 170), box.get_rect(), border_radius=10)
        box.blit(txt, (12, 6))
        self.screen.blit(box, ((WINDOW_W - box.get_width()) // 2, WINDOW_H - box.get_height() - 16))
