import unittest

from falling_blocks.game import ScoringRules


class ScoringRulesTests(unittest.TestCase):
    def test_table(self):
        rules = ScoringRules()
        self.assertEqual([rules.score_for_lines(n) for n in range(6)], [0, 100, 300, 500, 1000, 0])

    def test_negative_counts_score_nothing(self):
        self.assertEqual(ScoringRules().score_for_lines(-1), 0)


if __name__ == "__main__":
    unittest.main()
