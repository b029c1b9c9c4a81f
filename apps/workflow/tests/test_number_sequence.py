from django.test import TestCase

from apps.workflow.models import NumberSequence


class NumberSequenceTests(TestCase):
    def test_first_value_uses_seed(self):
        self.assertEqual(NumberSequence.next_value("invoice", seed=lambda: 41), 42)
        self.assertEqual(NumberSequence.next_value("invoice", seed=lambda: 999), 43)

    def test_unseeded_sequence_starts_at_one(self):
        self.assertEqual(NumberSequence.next_value("quote"), 1)
        self.assertEqual(NumberSequence.next_value("quote"), 2)

    def test_sequences_are_independent(self):
        NumberSequence.next_value("a")
        NumberSequence.next_value("a")

        self.assertEqual(NumberSequence.next_value("b"), 1)
        self.assertEqual(NumberSequence.objects.get(name="a").last_value, 2)
