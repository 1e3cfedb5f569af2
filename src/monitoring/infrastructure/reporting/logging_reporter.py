"""
Failure reporter backed by the standard logging module.
"""
import logging
from collections import Counter
from datetime import datetime
from typing import Dict

from ...domain.entities import FailureReport
from ....common.logging import setup_logger


class LoggingFailureReporter:
    """
    Logs every abandoned cycle and keeps a running count per failure kind.
    """

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or setup_logger(__name__)
        self._counts: Counter = Counter()

    def report(self, failure: FailureReport):
        self._counts[failure.kind] += 1
        when = datetime.fromtimestamp(failure.timestamp).isoformat()
        self.logger.warning(
            f"Cycle abandoned [{failure.kind}] at {when}: {failure.message} "
            f"(occurrences={self._counts[failure.kind]})"
        )

    def counts(self) -> Dict[str, int]:
        return dict(self._counts)
