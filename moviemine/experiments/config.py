from dataclasses import dataclass, field
from typing import List, Dict, Any


@dataclass
class MinerConfig:
    algorithm: str = 'fpgrowth'  # 'apriori', 'fpgrowth', 'mlxtend_apriori', 'mlxtend_fpgrowth'
    min_support: float = 0.1
    min_confidence: float = 0.5

    def to_dict(self) -> Dict[str, Any]:
        return {
            'algorithm': self.algorithm,
            'min_support': self.min_support,
            'min_confidence': self.min_confidence
        }


@dataclass
class FilterConfig:
    metric: str
    threshold: float

    def to_dict(self) -> Dict[str, Any]:
        return {'metric': self.metric, 'threshold': self.threshold}


@dataclass
class RuleMiningConfig:
    miner_config: MinerConfig = field(default_factory=MinerConfig)
    mode: str = 'rules'  # 'rules', 'itemsets', 'both'
    filters: List[FilterConfig] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'miner_config': self.miner_config.to_dict(),
            'mode': self.mode,
            'filters': [f.to_dict() for f in self.filters]
        }
