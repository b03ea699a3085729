# visualizer.py
import pygame, time, math
from config import *
from piano_mapping import PITCH_TABLE, WHITE_KEYS, BLACK_KEYS

# ------- Styling -------
WHITE = (238,238,238)
BLACK = (28,28,28)
GREY  = (92,92,92)
BG    = (16,16,16)
RED   = (225,70,70)
CARD  = (24,24,24)
OUTL  = (54,54,54)
GLOW  = (90,180,255)
LABEL_DARK  = (60,60,60)
LABEL_LIGHT = (200,200,200)

# ------- Layout (tweak freely) -------
TOP_PAD     = 18
BOTTOM_PAD  = 18
KEY_W       = 48
KEY_H       = 120
KEY_GAP     = 5
CARD_PAD    = 16
GLOW_SECONDS = 0.35
GLOW_FRAME_MS = 30     # redraw interval while a glow is fading

class Visualizer:
    """Keyboard card with the last played key lit, plus octave/REC/status lines."""
    def __init__(self, surface):
        self.surf = surface
        self.lit_key = None
        self.lit_at = 0.0
        self.glow_drawn = False  # last frame showed a glow; another frame is due
        self._font = None
        self._compute_layout()

    # ---------- Public hooks ----------
    def note_on(self, key):
        self.lit_key = key.lower()
        self.lit_at = time.time()

    # ---------- Draw ----------
    def draw(self, octave, rec_on, saved_notes, status_msg=""):
        w, h = self.surf.get_size()
        if (w, h) != (self._w, self._h):
            self._compute_layout()

        self.surf.fill(BG)
        self._draw_header()
        self._draw_keyboard_card()
        self._draw_status(octave, rec_on, saved_notes, status_msg)

    # ---------- Geometry ----------
    def _compute_layout(self):
        self._w, self._h = self.surf.get_size()

        kb_width = len(WHITE_KEYS) * KEY_W + (len(WHITE_KEYS)-1) * KEY_GAP
        kb_card_w = min(self._w - 32, kb_width + CARD_PAD*2)
        kb_card_h = KEY_H + CARD_PAD*2
        kb_card_x = (self._w - kb_card_w) // 2
        kb_card_y = TOP_PAD + 24
        self.kb_card = pygame.Rect(kb_card_x, kb_card_y, kb_card_w, kb_card_h)

        self.kb_left = self.kb_card.x + (self.kb_card.w - kb_width)//2
        self.kb_top = self.kb_card.y + CARD_PAD
        self.rows = self._compute_key_positions()
        self.status_y = self.kb_card.bottom + BOTTOM_PAD

    def _font_obj(self):
        if self._font is None:
            self._font = pygame.font.SysFont(None, 22)
        return self._font

    # ---------- Drawing pieces ----------
    def _draw_header(self):
        font = self._font_obj()
        hint = "[z-m] notes | [R] record | [P] play | [+/-] octave | [Q] quit"
        img = font.render(hint, True, (180,180,180))
        self.surf.blit(img, (16, TOP_PAD))

    def _draw_keyboard_card(self):
        pygame.draw.rect(self.surf, CARD, self.kb_card, border_radius=14)
        pygame.draw.rect(self.surf, OUTL, self.kb_card, width=1, border_radius=14)
        font = self._font_obj()

        # whites first, then blacks for layering
        for key in WHITE_KEYS:
            x, y, _ = self.rows[key]
            pygame.draw.rect(self.surf, WHITE, (x,y,KEY_W,KEY_H), border_radius=6)
            pygame.draw.rect(self.surf, OUTL,  (x,y,KEY_W,KEY_H), width=1, border_radius=6)
            self._draw_label(font, key, x, y + KEY_H - 22, LABEL_DARK)
        for key in BLACK_KEYS:
            x, y, _ = self.rows[key]
            pygame.draw.rect(self.surf, BLACK, (x,y,KEY_W,KEY_H//2), border_radius=6)
            pygame.draw.rect(self.surf, OUTL,  (x,y,KEY_W,KEY_H//2), width=1, border_radius=6)
            self._draw_label(font, key, x, y + KEY_H//2 - 20, LABEL_LIGHT)

        # fading glow on the last played key
        age = time.time() - self.lit_at
        pos = self.rows.get(self.lit_key)
        self.glow_drawn = bool(pos) and age < GLOW_SECONDS
        if self.glow_drawn:
            x, y, is_black = pos
            breath = 0.55 + 0.45*math.cos(age * math.pi / GLOW_SECONDS)
            h = KEY_H//2 if is_black else KEY_H
            s = pygame.Surface((KEY_W, h), pygame.SRCALPHA)
            pygame.draw.rect(s, (*GLOW, max(60, int(200*breath))), s.get_rect(), border_radius=6)
            self.surf.blit(s, (x, y))

    def _draw_label(self, font, key, x, y, color):
        img = font.render(f"{key.upper()} {PITCH_TABLE[key][0]}", True, color)
        self.surf.blit(img, (x + (KEY_W - img.get_width())//2, y))

    def _draw_status(self, octave, rec_on, saved_notes, status_msg):
        font = self._font_obj()
        info = f"Octave {octave}"
        if not rec_on and saved_notes:
            info += f" | Recording saved: {saved_notes} notes"
        img = font.render(info, True, (230,230,230))
        self.surf.blit(img, (16, self.status_y))

        # right-aligned REC and message
        if rec_on:
            rec = font.render("REC ●", True, RED)
            rw = rec.get_width()
            self.surf.blit(rec, (self._w - 16 - rw, self.status_y))
        if status_msg:
            sm = font.render(status_msg, True, (180,220,180))
            self.surf.blit(sm, (16, self.status_y + 24))

    # ---------- Key positions (for highlighting) ----------
    def _compute_key_positions(self):
        rows = {}
        for i, k in enumerate(WHITE_KEYS):
            x = self.kb_left + i*(KEY_W+KEY_GAP)
            rows[k] = (x, self.kb_top, False)

        # blacks straddle the gap after their white slot
        for k, i in BLACK_KEYS.items():
            x = self.kb_left + i*(KEY_W+KEY_GAP) + KEY_W - KEY_W//3
            rows[k] = (x, self.kb_top - 2, True)
        return rows
