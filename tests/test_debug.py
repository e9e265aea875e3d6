import unittest

from c4engine.debug import DebugLevel, DebugManager


class TestDebugManager(unittest.TestCase):
    def setUp(self):
        self.manager = DebugManager("c4engine.test")

    def test_level_filtering(self):
        self.manager.configure(level=DebugLevel.INFO)
        with self.assertLogs("c4engine.test", level="DEBUG") as logs:
            self.manager.info("shown", "solver")
            self.manager.debug("hidden", "solver")
        self.assertEqual(logs.output, ["INFO:c4engine.test:[solver] shown"])

    def test_component_filtering(self):
        self.manager.configure(level=DebugLevel.TRACE, components=["player"])
        self.assertTrue(self.manager.is_enabled_for(DebugLevel.TRACE, "player"))
        self.assertFalse(self.manager.is_enabled_for(DebugLevel.ERROR, "solver"))

    def test_none_silences_everything(self):
        self.manager.configure(level=DebugLevel.NONE)
        self.assertFalse(self.manager.is_enabled_for(DebugLevel.ERROR))

    def test_timer(self):
        with self.manager.timer("block") as timing:
            pass
        self.assertGreaterEqual(timing['elapsed'], 0.0)
        self.assertIsNone(self.manager.end_timer("never started"))


if __name__ == '__main__':
    unittest.main()
