"""Runs every test in the tests directory (a test file must start with test)."""

import os

from unittest import TestLoader, TestSuite, TextTestRunner
from sys import exit
from typing import Final

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import pygame as pg

pg.init()

_TEST_SUITE: Final[TestSuite] = TestLoader().discover("tests")
exit(not TextTestRunner().run(_TEST_SUITE).wasSuccessful())
