"""Dataset loading and explorer session state."""
from explorer.dataset import RegulationDataset, load_regulations

__all__ = [
    "RegulationDataset",
    "load_regulations",
]
