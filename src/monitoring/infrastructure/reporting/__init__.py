from .logging_reporter import LoggingFailureReporter
