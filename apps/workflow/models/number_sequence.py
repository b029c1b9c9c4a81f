import logging
from typing import Callable, Optional

from django.db import IntegrityError, models, transaction

logger = logging.getLogger(__name__)


class NumberSequence(models.Model):
    """
    A named counter for human-readable document numbers (jobs, RFQs).

    Each call to ``next_value`` locks the row, bumps it and returns the new
    value inside one transaction, so two concurrent creates can never be
    handed the same number.
    """

    name = models.CharField(max_length=50, primary_key=True)
    last_value = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "workflow_number_sequence"

    def __str__(self):
        return f"{self.name}: {self.last_value}"

    @classmethod
    def next_value(cls, name: str, seed: Optional[Callable[[], int]] = None) -> int:
        """
        Return the next number for ``name``.

        ``seed`` is only consulted the first time a sequence is used and must
        return the last value already issued (e.g. scanned from existing rows).
        """
        with transaction.atomic():
            sequence = cls.objects.select_for_update().filter(name=name).first()
            if sequence is None:
                initial = seed() if seed else 0
                try:
                    with transaction.atomic():
                        sequence = cls.objects.create(name=name, last_value=initial)
                    logger.info(f"Started number sequence {name} at {initial}")
                except IntegrityError:
                    # Another request created it first
                    sequence = cls.objects.select_for_update().get(name=name)

            sequence.last_value += 1
            sequence.save(update_fields=["last_value", "updated_at"])
            return sequence.last_value
