import unittest

from quizrunner.models import AnswerOutcome
from quizrunner.policy.feedback import AlwaysReveal, ImmediateReveal, make_policy


class ImmediateRevealTests(unittest.TestCase):
    def test_correct_with_and_without_explanation(self) -> None:
        p = ImmediateReveal()
        fb = p.decide(AnswerOutcome(correct=True, chosen=1, correct_answer="2", explanation="One plus one."))
        self.assertEqual((fb.tone, fb.message), ("correct", "Correct! One plus one."))
        fb = p.decide(AnswerOutcome(correct=True, chosen=1, correct_answer="2"))
        self.assertEqual(fb.message, "Correct!")

    def test_wrong_prefers_explanation(self) -> None:
        p = ImmediateReveal()
        fb = p.decide(AnswerOutcome(correct=False, chosen=0, correct_answer="2", explanation="One plus one."))
        self.assertEqual((fb.tone, fb.message), ("wrong", "Wrong. One plus one."))
        fb = p.decide(AnswerOutcome(correct=False, chosen=0, correct_answer="2"))
        self.assertEqual(fb.message, "Wrong. Correct answer: 2")


class PolicyRegistryTests(unittest.TestCase):
    def test_always_reveal_names_the_answer(self) -> None:
        fb = AlwaysReveal().decide(AnswerOutcome(correct=False, chosen=0, correct_answer="2", explanation="Sum."))
        self.assertEqual(fb.message, "Wrong. Correct answer: 2. Sum.")

    def test_make_policy(self) -> None:
        self.assertIsInstance(make_policy("immediate"), ImmediateReveal)
        self.assertIsInstance(make_policy("reveal"), AlwaysReveal)
        with self.assertRaises(KeyError):
            make_policy("nope")


if __name__ == "__main__":
    unittest.main()
