"""
ANSI truecolor painting of colour grids.

Two grid rows share one character cell: the upper half block takes the top
row as foreground and the bottom row as background.
"""

import ctypes
import os
import shutil
import sys

import numpy as np

from .config import PIXEL_CHAR

RESET = "\033[0m"


# --- Windows ANSI Support ---
def enable_windows_ansi():
    if os.name == "nt":
        kernel32 = ctypes.windll.kernel32
        hStdOut = kernel32.GetStdHandle(-11)
        mode = ctypes.c_ulong()
        kernel32.GetConsoleMode(hStdOut, ctypes.byref(mode))
        mode.value |= 4  # ENABLE_VIRTUAL_TERMINAL_PROCESSING
        kernel32.SetConsoleMode(hStdOut, mode)


def grid_size_for_terminal():
    """Colour grid ``(width, height)`` that fills the terminal."""
    cols, rows = shutil.get_terminal_size()
    # One row short to avoid scroll jitter at the bottom
    return max(cols, 1), max(rows - 1, 1) * 2


def hide_cursor():
    sys.stdout.write("\033[?25l")


def show_cursor():
    sys.stdout.write("\033[?25h")


def move_cursor(x, y):
    sys.stdout.write(f"\033[{y};{x}H")


def clear_screen():
    sys.stdout.write("\033[2J")


def _ansi(prefix, rgb):
    channels = [rgb[..., i].astype(str) for i in range(3)]
    out = np.char.add(prefix, channels[0])
    out = np.char.add(out, ";")
    out = np.char.add(out, channels[1])
    out = np.char.add(out, ";")
    out = np.char.add(out, channels[2])
    return np.char.add(out, "m")


def ansi_fg(rgb):
    return _ansi("\033[38;2;", rgb)


def ansi_bg(rgb):
    return _ansi("\033[48;2;", rgb)


def frame_string(colors):
    """Render a ``(height, width, 3)`` grid as ANSI text, one line per row pair."""
    colors = np.asarray(colors, dtype=np.uint8)
    if colors.shape[0] % 2:
        pad = np.zeros((1,) + colors.shape[1:], dtype=np.uint8)
        colors = np.concatenate([colors, pad])

    top = colors[0::2]
    bot = colors[1::2]
    cells = np.char.add(np.char.add(ansi_fg(top), ansi_bg(bot)), PIXEL_CHAR)

    lines = ["".join(row) for row in cells]
    return (RESET + "\n").join(lines) + RESET


def paint(colors):
    move_cursor(1, 1)
    sys.stdout.buffer.write(frame_string(colors).encode("utf-8"))
    sys.stdout.flush()
