from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from medianstream import config as app_config

class BaseProcessor(ABC):
    """Lifecycle shared by sample processors: initialize, process samples, clean up."""

    config_section = "median_filter"

    def __init__(self, processor_id: str, config: Optional[Dict[str, Any]] = None):
        self.processor_id = processor_id
        self.config = app_config.merge_configs(config)[self.config_section]
        self.samples_processed = 0
        self.samples_rejected = 0
        self._is_initialized = False

    @abstractmethod
    def initialize(self) -> bool:
        pass

    @abstractmethod
    def process_sample(self, value: float, timestamp: float) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def cleanup(self):
        pass

    def get_stats(self) -> Dict[str, Any]:
        return {
            'processor_id': self.processor_id,
            'initialized': self._is_initialized,
            'samples_processed': self.samples_processed,
            'samples_rejected': self.samples_rejected,
        }

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized
