"""Exceptions raised by the mining engine."""


class MiningError(Exception):
    """Base class for all mining errors."""


class InvalidArgumentError(MiningError, ValueError):
    """
    A caller supplied an argument the engine cannot work with.

    Raised at the call boundary, before any computation starts: thresholds
    outside (0, 1], empty transaction lists, malformed rules, unknown
    algorithm names.
    """


class InternalConsistencyError(MiningError, RuntimeError):
    """
    The engine reached a state that signals a bug in its own bookkeeping.

    Not recoverable. Examples: two identical itemsets reaching the Apriori
    merge step, or a confidence requested for an antecedent with zero count.
    """
