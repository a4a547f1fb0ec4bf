from .config import (
    MinerConfig,
    RuleMiningConfig,
    FilterConfig
)
from .base import (
    run_rule_mining,
    create_miner,
    apply_filters
)

__all__ = [
    'MinerConfig',
    'RuleMiningConfig',
    'FilterConfig',
    'run_rule_mining',
    'create_miner',
    'apply_filters'
]
