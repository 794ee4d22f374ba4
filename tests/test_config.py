import unittest

from blockfall_config import CONFIG, SessionConfig
from blockfall_errors import InvalidConfig, InvalidDimension


class TestSessionConfig(unittest.TestCase):
    def test_defaults_follow_config(self):
        c = SessionConfig.from_dict()
        self.assertEqual(CONFIG["W_ARENA"], c.width)
        self.assertEqual(CONFIG["H_ARENA"], c.height)
        self.assertEqual(CONFIG["GRAVITY_MS"], c.gravity_interval_ms)
        self.assertEqual(CONFIG["TICK_COUNTER_MS"], c.tick_counter_interval_ms)

    def test_overrides(self):
        c = SessionConfig.from_dict({"W_ARENA": 10}, height=22, seed=7)
        self.assertEqual((10, 22, 7), (c.width, c.height, c.seed))

    def test_invalid_dimension(self):
        with self.assertRaises(InvalidDimension):
            SessionConfig(width=0)
        with self.assertRaises(InvalidDimension):
            SessionConfig.from_dict({"H_ARENA": -2})
        with self.assertRaises(InvalidDimension):
            SessionConfig(width=True)

    def test_invalid_interval(self):
        with self.assertRaises(InvalidConfig):
            SessionConfig(gravity_interval_ms=0)
        with self.assertRaises(InvalidConfig):
            SessionConfig(tick_counter_interval_ms=1.5)

    def test_unknown_keys(self):
        with self.assertRaises(InvalidConfig):
            SessionConfig.from_dict({"LEVEL": 3})
        with self.assertRaises(InvalidConfig):
            SessionConfig.from_dict(speed=2)


if __name__ == '__main__':
    unittest.main()
