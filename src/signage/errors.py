"""Error hierarchy for snapshot loading and retry classification.

This hierarchy lets tenacity retry decorators tell transient failures
(should retry) apart from permanent failures (should not retry).

Example usage with tenacity:
    @retry(retry=retry_if_exception_type(TransientError), stop=stop_after_attempt(3))
    def read_snapshot(path: Path):
        ...

The content selector itself never raises; these errors only occur at the
boundary where snapshots are produced.
"""


class SignageError(Exception):
    """Base exception for all signage errors."""

    pass


class TransientError(SignageError):
    """Temporary failure that may succeed on retry.

    Examples: data file caught mid-write by the admin, network timeouts,
    503 Service Unavailable from the snapshot endpoint.
    """

    pass


class PermanentError(SignageError):
    """Failure that won't succeed on retry.

    Examples: missing data file, payload failing validation.
    """

    pass


class SnapshotMissingError(PermanentError):
    """No content sources were provided at all.

    Rejected at the boundary before the selector is ever called.
    """

    pass


class InvalidSnapshotError(PermanentError):
    """Snapshot payload is structurally wrong and cannot be used."""

    pass
