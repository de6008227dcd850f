"""Tests for the viewer: helpers off-screen, and the run and menu loops on the dummy SDL driver."""

import numpy as np
import pygame
import pytest

import viewer
from disks import DiskRow
from viewer import (DARK_DISK, LIGHT_DISK, Slider, disk_geometry, draw_row,
                    main, position_freq, summary, tone_samples)


class TestTones:

    def test_buffer_shape(self):
        pcm = tone_samples(440.0)
        assert pcm.dtype == np.int16
        assert pcm.shape == (int(viewer.TONE_LENGTH * viewer.SAMPLE_RATE), 2)
        assert np.array_equal(pcm[:, 0], pcm[:, 1])

    def test_envelope_fades_in_and_out(self):
        pcm = tone_samples(440.0)
        assert pcm[0, 0] == 0
        assert pcm[-1, 0] == 0
        assert np.abs(pcm).max() <= int(32767 * viewer.TONE_VOLUME)
        assert np.abs(pcm).max() > 0

    def test_very_short_tone(self):
        assert tone_samples(440.0, duration=0.0).shape == (1, 2)

    def test_position_freq(self):
        assert position_freq(0, 8) == viewer.FREQ_LOW
        assert position_freq(7, 8) == pytest.approx(viewer.FREQ_HIGH)
        assert position_freq(0, 1) == viewer.FREQ_LOW
        assert position_freq(2, 8) < position_freq(3, 8)


class TestDrawing:

    def test_geometry(self):
        assert disk_geometry(8, 800) == (100.0, viewer.MAX_RADIUS)
        cell, radius = disk_geometry(128, 1100)
        assert cell == pytest.approx(1100 / 128)
        assert radius == 3

    def test_disk_colors_on_surface(self):
        surface = pygame.Surface((200, 100))
        row = DiskRow(2)
        row.swap(0)
        draw_row(surface, row, [0, 1])
        # centres at x = 25, 75, 125, 175 for four disks on 200px
        assert tuple(surface.get_at((25, 50)))[:3] == LIGHT_DISK
        assert tuple(surface.get_at((75, 50)))[:3] == DARK_DISK
        assert tuple(surface.get_at((125, 50)))[:3] == DARK_DISK
        assert tuple(surface.get_at((175, 50)))[:3] == LIGHT_DISK

    def test_background_cleared(self):
        surface = pygame.Surface((200, 100))
        surface.fill((255, 255, 255))
        draw_row(surface, DiskRow(1), [])
        assert tuple(surface.get_at((0, 0)))[:3] == viewer.BACKGROUND_COLOR


class TestSlider:

    def test_clamps_to_range(self):
        s = Slider(0, 0, 100, 1, 64, 8, "Disk Pairs")
        s.set_from_x(500)
        assert s.value == 64
        s.set_from_x(-20)
        assert s.value == 1
        assert s.text() == "1"

    def test_float_step(self):
        s = Slider(0, 0, 100, 0.25, 8.0, 1.0, "Speed", step=0.25)
        s.set_from_x(0)
        assert s.value == 0.25
        assert s.text() == "0.25x"


class TestTextMode:

    def test_summary(self):
        lines = summary(4)
        assert lines[0] == "4 disk pair(s)"
        assert lines[1] == "before: D L D L D L D L"
        assert "after: L L L L D D D D   swaps: 10   passes: 4" in lines[2]
        assert lines[2].startswith("left-to-right")
        assert "after: L L L L D D D D   swaps: 10   passes: 2" in lines[3]
        assert lines[3].startswith("lawnmower")

    def test_main_text(self, capsys):
        assert main(["--text", "1"]) == 0
        out = capsys.readouterr().out
        assert "before: D L" in out
        assert "after: L D   swaps: 1   passes: 1" in out

    @pytest.mark.parametrize("argv", [["--text"], ["--text", "0"], ["--text", "many"]])
    def test_main_text_bad_count(self, argv, capsys):
        assert main(argv) == 2
        assert "usage" in capsys.readouterr().out


@pytest.fixture
def window(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.display.init()
    screen = pygame.display.set_mode((viewer.WINDOW_WIDTH, viewer.WINDOW_HEIGHT))
    fonts = viewer.build_fonts()
    pygame.event.clear()
    yield screen, fonts
    pygame.quit()


def _click(pos):
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos))


def _cfg(key="lawnmower", pairs=3):
    return dict(name="Lawnmower", key=key, pairs=pairs, speed=1.0, sound=False)


class TestRunLoop:

    def test_closing_window_returns_quit(self, window):
        screen, fonts = window
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        assert viewer.run_sort(screen, fonts, _cfg(), sound_ok=False) == "quit"
        assert pygame.display.get_init()

    def test_escape_returns_to_menu(self, window):
        screen, fonts = window
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        assert viewer.run_sort(screen, fonts, _cfg(), sound_ok=False) == "menu"

    def test_quit_during_run_ends_menu_loop(self, window, monkeypatch):
        screen, fonts = window
        monkeypatch.setattr(viewer, "run_sort", lambda *args: "quit")
        menu = viewer.Menu(screen, fonts)
        _click(menu.start_rect.center)
        assert viewer.menu_loop(screen, fonts, False, menu) == 0


class TestMenu:

    def test_settings_survive_runs(self, window, monkeypatch):
        screen, fonts = window
        seen = []

        def fake_run(screen, fonts, cfg, sound_ok):
            seen.append(cfg)
            return "menu"

        monkeypatch.setattr(viewer, "run_sort", fake_run)
        menu = viewer.Menu(screen, fonts)
        _click(menu.algo_rects()[1].center)
        menu.sl_pairs.set_from_x(menu.sl_pairs.track.x)
        _click(menu.sound_rect.center)
        _click(menu.start_rect.center)
        _click(menu.start_rect.center)
        pygame.event.post(pygame.event.Event(pygame.QUIT))

        assert viewer.menu_loop(screen, fonts, False, menu) == 0
        assert len(seen) == 2
        assert seen[0] == seen[1]
        assert seen[1]["key"] == "lawnmower"
        assert seen[1]["pairs"] == viewer.MIN_DISK_PAIRS
        assert seen[1]["sound"] == (not viewer.ENABLE_SOUND)

    def test_config_defaults(self):
        menu = viewer.Menu(None, None)
        cfg = menu.config()
        assert cfg["key"] == "left_to_right"
        assert cfg["pairs"] == 8
        assert cfg["speed"] == 1.0
