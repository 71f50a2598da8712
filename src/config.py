from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """
    Run-time policy for a PaymentsEngine.

    strict: abort the run on the first malformed input row instead of skipping it.
    freeze_locked_accounts: ignore every transaction for a client after a chargeback.
    """

    strict: bool = False
    freeze_locked_accounts: bool = True
