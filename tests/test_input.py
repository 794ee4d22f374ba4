import unittest

import pygame

from blockfall_input import KEYMAP, decode
from blockfall_loop import Command


def keydown(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


class TestDecode(unittest.TestCase):
    def test_keys(self):
        self.assertIs(Command.START_GAME, decode(keydown(pygame.K_RETURN)))
        self.assertIs(Command.STOP_GAME, decode(keydown(pygame.K_ESCAPE)))
        self.assertIs(Command.MOVE_LEFT, decode(keydown(pygame.K_LEFT)))
        self.assertIs(Command.MOVE_RIGHT, decode(keydown(pygame.K_RIGHT)))
        self.assertIs(Command.ROTATE_CW, decode(keydown(pygame.K_UP)))
        self.assertIs(Command.SOFT_DROP, decode(keydown(pygame.K_DOWN)))
        self.assertIs(Command.HARD_DROP, decode(keydown(pygame.K_SPACE)))

    def test_ignored(self):
        self.assertIsNone(decode(keydown(pygame.K_F1)))
        self.assertIsNone(decode(pygame.event.Event(pygame.KEYUP, key=pygame.K_LEFT)))

    def test_custom_keymap(self):
        keymap = dict(KEYMAP)
        keymap[pygame.K_a] = Command.MOVE_LEFT
        self.assertIs(Command.MOVE_LEFT, decode(keydown(pygame.K_a), keymap))


if __name__ == '__main__':
    unittest.main()
