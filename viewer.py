import pygame
import numpy as np
import sys
import math

from disks import DiskColor, DiskRow
from sorters import (ALGORITHMS, get_generator, load_custom_sorter,
                     sort_lawnmower, sort_left_to_right)

try:
    import tkinter as tk
    from tkinter import filedialog
    HAS_TK = True
except ImportError:
    HAS_TK = False

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH   = 1100
WINDOW_HEIGHT  = 680
MIN_DISK_PAIRS = 1
MAX_DISK_PAIRS = 64
FPS            = 30

BACKGROUND_COLOR = (5, 5, 10)
ACTIVE_COLOR     = (255, 60, 60)
DARK_DISK        = (40, 40, 60)
LIGHT_DISK       = (230, 225, 200)
DISK_EDGE        = (90, 90, 120)
MAX_RADIUS       = 36

ENABLE_SOUND = True
FREQ_LOW     = 120.0
FREQ_HIGH    = 960.0
SAMPLE_RATE  = 44100
CHUNK_SIZE   = 512

# ============================================================
# ====================== SOUND SETTINGS ======================
# ============================================================
#
# Every swap plays one short tone whose pitch follows the swap
# position: left end of the row = FREQ_LOW, right end = FREQ_HIGH.
#
# TONE_LENGTH  - seconds per tone.
# TONE_ATTACK  - raised-cosine fade-in, seconds.
#   env[t] = 0.5 * (1 - cos(pi * t / A))
# TONE_RELEASE - raised-cosine fade-out, seconds.
#   env[t] = 0.5 * (1 + cos(pi * t / R))
# TONE_VOLUME  - fraction of int16 full scale.
TONE_LENGTH  = 0.09
TONE_ATTACK  = 0.005
TONE_RELEASE = 0.040
TONE_VOLUME  = 0.6

TWO_PI = 2.0 * math.pi

# ============================================================
# ========================= UI THEME =========================
# ============================================================

UI_BG         = (8,   8,  14)
UI_PANEL      = (14, 14,  22)
UI_ACCENT     = (255, 55,  55)
UI_TEXT       = (215, 215, 228)
UI_SUBTEXT    = (105, 105, 130)
UI_HOVER      = (30,  22,  38)
UI_SEL_BG     = (50,  12,  12)
UI_BORDER     = (38,  38,  58)
UI_SEL_BORDER = (255, 55,  55)
UI_DIM        = (60,  60,  80)
UI_GREEN      = (60, 200, 100)

# ============================================================
# ======================= TONE FEEDBACK ======================
# ============================================================

def tone_samples(freq: float, duration: float = TONE_LENGTH) -> np.ndarray:
    """Stereo int16 buffer of one enveloped sine tone."""
    n   = max(1, int(duration * SAMPLE_RATE))
    t   = np.arange(n, dtype=np.float64) / SAMPLE_RATE
    env = np.ones(n, dtype=np.float64)

    a = min(n, max(1, int(TONE_ATTACK * SAMPLE_RATE)))
    r = min(n - a, max(1, int(TONE_RELEASE * SAMPLE_RATE)))
    env[:a] = 0.5 * (1.0 - np.cos(math.pi * np.arange(a) / a))
    if r > 0:
        env[n - r:] = 0.5 * (1.0 + np.cos(math.pi * np.arange(1, r + 1) / r))

    mono = np.sin(TWO_PI * freq * t) * env
    pcm  = (np.clip(mono, -1.0, 1.0) * 32767 * TONE_VOLUME).astype(np.int16)
    return np.column_stack((pcm, pcm))


def position_freq(index: int, total: int) -> float:
    if total <= 1:
        return FREQ_LOW
    return FREQ_LOW + (index / (total - 1)) * (FREQ_HIGH - FREQ_LOW)


class ToneBank:
    """Caches one mixer Sound per disk position of the current row."""

    def __init__(self, total: int):
        self.total   = total
        self._sounds = {}

    def play(self, index: int):
        snd = self._sounds.get(index)
        if snd is None:
            pcm = tone_samples(position_freq(index, self.total))
            snd = pygame.mixer.Sound(buffer=pcm.tobytes())
            self._sounds[index] = snd
        snd.play()


def init_sound() -> bool:
    pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, CHUNK_SIZE)
    try:
        pygame.mixer.init()
    except pygame.error as e:
        print(f"Sound disabled: {e}")
        return False
    return True

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================

def disk_geometry(total: int, width: int):
    """Cell width and disk radius for a row of `total` disks."""
    cell = width / total
    return cell, max(2, int(min(cell * 0.42, MAX_RADIUS)))


def draw_row(screen, row, active, label="", font=None):
    screen.fill(BACKGROUND_COLOR)
    w, h = screen.get_size()
    cell, radius = disk_geometry(row.total_count(), w)
    cy = h // 2
    for i, color in enumerate(row.colors()):
        cx   = int(i * cell + cell / 2)
        fill = DARK_DISK if color == DiskColor.DARK else LIGHT_DISK
        pygame.draw.circle(screen, fill, (cx, cy), radius)
        if i in active:
            pygame.draw.circle(screen, ACTIVE_COLOR, (cx, cy), radius, 2)
        else:
            pygame.draw.circle(screen, DISK_EDGE, (cx, cy), radius, 1)
    if label and font:
        screen.blit(font.render(label, True, (140, 140, 160)), (12, 10))

# ============================================================
# ========================= TEXT MODE ========================
# ============================================================

def summary(pairs: int) -> list:
    before = DiskRow(pairs)
    lines  = [f"{pairs} disk pair(s)", f"before: {before}"]
    for name, fn in (("left-to-right", sort_left_to_right), ("lawnmower", sort_lawnmower)):
        res = fn(before)
        lines.append(f"{name:<14} after: {res.after}   swaps: {res.swap_count}"
                     f"   passes: {res.pass_count}")
    return lines


def open_file_dialog():
    if not HAS_TK: return None
    root = tk.Tk()
    root.withdraw()
    root.attributes("-topmost", True)
    path = filedialog.askopenfilename(
        title="Load Custom Disk Sorter",
        filetypes=[("Python files", "*.py"), ("All files", "*.*")]
    )
    root.destroy()
    return path if path else None

# ============================================================
# ========================= LAYOUT CONSTANTS =================
# ============================================================

PAD      = 16
LIST_W   = 300
ROW_H    = 42
PANEL_X  = PAD + LIST_W + 40
PANEL_W  = WINDOW_WIDTH - PANEL_X - PAD

FONT_FACES = "consolas,couriernew,dejavusansmono"
FONT_SIZES = dict(title=26, big=22, mid=17, small=13)

# ============================================================
# ========================= UI WIDGETS =======================
# ============================================================

class Slider:
    """Horizontal track whose value snaps to multiples of `step` in [lo, hi]."""

    def __init__(self, x, y, w, lo, hi, val, label, step=1):
        self.track = pygame.Rect(x, y + 18, w, 4)
        self.grab  = self.track.inflate(10, 30)
        self.lo, self.hi, self.step = lo, hi, step
        self.value = val
        self.label = label
        self.held  = False

    def set_from_x(self, mx):
        frac  = min(1.0, max(0.0, (mx - self.track.x) / self.track.width))
        steps = round(frac * (self.hi - self.lo) / self.step)
        val   = min(self.hi, self.lo + steps * self.step)
        self.value = int(val) if isinstance(self.step, int) else val

    def text(self):
        return f"{self.value:.2f}x" if isinstance(self.step, float) else str(self.value)

    def handle(self, ev):
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            self.held = self.grab.collidepoint(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONUP:
            self.held = False
        if self.held and ev.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION):
            self.set_from_x(ev.pos[0])

    def draw(self, s, fonts):
        frac = (self.value - self.lo) / (self.hi - self.lo)
        knob = (self.track.x + int(frac * self.track.width), self.track.centery)
        s.blit(fonts['small'].render(f"{self.label}:  {self.text()}", True, UI_SUBTEXT),
               (self.track.x, self.track.y - 18))
        pygame.draw.rect(s, UI_BORDER, self.track)
        pygame.draw.rect(s, UI_ACCENT, (self.track.x, self.track.y, knob[0] - self.track.x, 4))
        pygame.draw.circle(s, UI_ACCENT, knob, 6)


def draw_button(s, font, rect, label, sel=False, hov=False):
    bg = UI_SEL_BG if sel else (UI_HOVER if hov else UI_PANEL)
    pygame.draw.rect(s, bg, rect, border_radius=5)
    pygame.draw.rect(s, UI_SEL_BORDER if sel else UI_BORDER, rect, 1, border_radius=5)
    t = font.render(label, True, UI_TEXT if (sel or hov) else UI_SUBTEXT)
    s.blit(t, t.get_rect(midleft=(rect.x + 12, rect.centery)))

# ============================================================
# ========================= MENU =============================
# ============================================================

class Menu:
    """Algorithm list on the left, run settings on the right.

    One Menu lives for the whole session, so choices survive each run.
    """

    def __init__(self, screen, fonts):
        self.screen = screen
        self.fonts  = fonts
        self.sel    = 0
        self.sound_on = ENABLE_SOUND
        self.notice   = None       # (text, ok, expires_at_ms)

        self.sl_pairs = Slider(PANEL_X, 100, PANEL_W, MIN_DISK_PAIRS, MAX_DISK_PAIRS, 8, "Disk Pairs")
        self.sl_speed = Slider(PANEL_X, 154, PANEL_W, 0.25, 8.0, 1.0, "Speed", step=0.25)
        self.sound_rect = pygame.Rect(PANEL_X, 208, PANEL_W, 30)
        self.start_rect = pygame.Rect(PANEL_X, WINDOW_HEIGHT - 62, PANEL_W, 46)

    def algo_rects(self):
        return [pygame.Rect(PAD, 80 + i * (ROW_H + 5), LIST_W, ROW_H)
                for i in range(len(ALGORITHMS))]

    def load_rect(self):
        return pygame.Rect(PAD, 84 + len(ALGORITHMS) * (ROW_H + 5), LIST_W, 30)

    def handle(self, ev):
        self.sl_pairs.handle(ev)
        self.sl_speed.handle(ev)
        if ev.type != pygame.MOUSEBUTTONDOWN or ev.button != 1:
            return None

        for i, rect in enumerate(self.algo_rects()):
            if rect.collidepoint(ev.pos): self.sel = i
        if self.sound_rect.collidepoint(ev.pos):
            self.sound_on = not self.sound_on
        if self.load_rect().collidepoint(ev.pos):
            self._do_load()
        return "start" if self.start_rect.collidepoint(ev.pos) else None

    def _do_load(self):
        path = open_file_dialog()
        if not path: return
        result, err = load_custom_sorter(path)
        now = pygame.time.get_ticks()
        if err:
            print(f"Custom sorter load error: {err}")
            self.notice = (f"Error: {err[:55]}", False, now + 4000)
            return
        name, key = result
        self.sel = [k for _, k in ALGORITHMS].index(key)
        self.notice = (f"Loaded: {name}", True, now + 4000)

    def draw(self):
        s, f = self.screen, self.fonts
        mouse = pygame.mouse.get_pos()
        s.fill(UI_BG)
        s.blit(f['title'].render("Alternating Disks", True, UI_TEXT), (PAD, 22))

        for i, rect in enumerate(self.algo_rects()):
            draw_button(s, f['mid'], rect, ALGORITHMS[i][0], i == self.sel, rect.collidepoint(mouse))
        load = self.load_rect()
        draw_button(s, f['small'], load, "[+] Load Custom Sorter", hov=load.collidepoint(mouse))
        if self.notice and pygame.time.get_ticks() < self.notice[2]:
            text, ok, _ = self.notice
            s.blit(f['small'].render(text, True, UI_GREEN if ok else UI_ACCENT), (PAD, load.bottom + 6))

        pygame.draw.rect(s, UI_PANEL, (PANEL_X - 10, 76, PANEL_W + 20, WINDOW_HEIGHT - 82),
                         border_radius=7)
        self.sl_pairs.draw(s, f)
        self.sl_speed.draw(s, f)
        draw_button(s, f['small'], self.sound_rect,
                    "Sound: ON" if self.sound_on else "Sound: OFF", sel=self.sound_on)
        s.blit(f['small'].render("ESC during sort returns to menu", True, UI_DIM),
               (PANEL_X, self.sound_rect.bottom + 12))
        draw_button(s, f['big'], self.start_rect, "> START", sel=True)
        pygame.display.flip()

    def config(self):
        nm, ky = ALGORITHMS[self.sel]
        return dict(name=nm, key=ky, pairs=self.sl_pairs.value,
                    speed=self.sl_speed.value, sound=self.sound_on)

# ============================================================
# ========================= MAIN =============================
# ============================================================

def build_fonts():
    pygame.font.init()
    face = pygame.font.match_font(FONT_FACES)
    return {name: pygame.font.Font(face, px) for name, px in FONT_SIZES.items()}


def run_sort(screen, fonts, cfg, sound_ok):
    """Animate one sort. Returns "menu" when done or on ESC, "quit" if the window closes."""
    row   = DiskRow(cfg["pairs"])
    gen   = get_generator(cfg["key"], row)
    tones = ToneBank(row.total_count()) if (sound_ok and cfg["sound"]) else None
    clock = pygame.time.Clock()
    swaps = 0

    draw_row(screen, row, [], cfg["name"], fonts['small'])
    pygame.display.flip()
    while True:
        clock.tick(FPS * cfg["speed"])
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT: return "quit"
            if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE: return "menu"
        try:
            state, active = next(gen)
        except StopIteration:
            draw_row(screen, row, [], f"{cfg['name']}  [SORTED]  swaps: {swaps}", fonts['small'])
            pygame.display.flip()
            pygame.time.wait(1800)
            return "menu"
        swaps += 1
        draw_row(screen, state, active, f"{cfg['name']}  swaps: {swaps}", fonts['small'])
        pygame.display.flip()
        if tones:
            tones.play(active[0])


def menu_loop(screen, fonts, sound_ok, menu=None):
    menu  = menu or Menu(screen, fonts)
    clock = pygame.time.Clock()
    while True:
        for ev in pygame.event.get():
            quitting = ev.type == pygame.QUIT or (
                ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE)
            action = "quit" if quitting else menu.handle(ev)
            if action == "start":
                action = run_sort(screen, fonts, menu.config(), sound_ok)
            if action == "quit":
                return 0
        menu.draw()
        clock.tick(60)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "--text":
        try:
            pairs = int(argv[1])
        except (IndexError, ValueError):
            pairs = 0
        if pairs < 1:
            print("usage: viewer.py --text PAIRS   (PAIRS >= 1)")
            return 2
        for line in summary(pairs):
            print(line)
        return 0

    pygame.init(); sound_ok = init_sound()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("Alternating Disks")
    try:
        return menu_loop(screen, build_fonts(), sound_ok)
    finally:
        pygame.quit()

if __name__ == "__main__":
    sys.exit(main())
