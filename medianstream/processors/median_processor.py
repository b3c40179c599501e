from typing import Dict, Any, Optional
import numpy as np
import logging
from medianstream.processors.base_processor import BaseProcessor
from medianstream.utils.filters import MedianFilter

logger = logging.getLogger(__name__)

class MedianProcessor(BaseProcessor):
    """Drives a MedianFilter from a stream of timestamped samples."""

    def __init__(self, processor_id: str, config_dict: Optional[Dict[str, Any]] = None):
        super().__init__(processor_id, config_dict)
        logger.debug(f"[DATA] Median processor config: {self.config}")

        try:
            self.sample_dtype = np.dtype(self.config['sample_dtype'])
            self.accumulator_dtype = np.dtype(self.config['accumulator_dtype'])
        except TypeError as e:
            raise ValueError(f"Invalid dtype in {self.config_section} config: {e}") from e

        if np.issubdtype(self.sample_dtype, np.integer):
            info = np.iinfo(self.sample_dtype)
        else:
            info = np.finfo(self.sample_dtype)
        self.sample_min, self.sample_max = info.min, info.max

        self.compute_std = bool(self.config['compute_std'])
        self.filter: Optional[MedianFilter] = None

    def initialize(self) -> bool:
        self.filter = MedianFilter(
            window_size=self.config['window_size'],
            seed=self.config['seed'],
            sample_dtype=self.sample_dtype,
            accumulator_dtype=self.accumulator_dtype,
        )
        self._is_initialized = True
        logger.info(f"[INIT] Median processor {self.processor_id} initialized "
                    f"(window_size={self.filter.window_size}, sample={self.sample_dtype}, "
                    f"accumulator={self.accumulator_dtype})")
        return True

    def process_sample(self, value: float, timestamp: float) -> Optional[Dict[str, Any]]:
        if not self._is_initialized:
            raise RuntimeError("Processor not initialized")

        if not self._accepts(value):
            self.samples_rejected += 1
            logger.debug(f"[DATA] Rejected sample at {timestamp}: {value}")
            return None

        if np.issubdtype(self.sample_dtype, np.integer) and value != int(value):
            logger.debug(f"[DATA] Sample {value} truncated to {int(value)} for {self.sample_dtype}")

        median = self.filter.insert(value)
        self.samples_processed += 1
        return self.get_output(timestamp, median)

    def _accepts(self, value) -> bool:
        """Finite samples the sample dtype can hold; None, NaN and inf are refused."""
        if value is None or not np.isfinite(value):
            return False
        return self.sample_min <= value <= self.sample_max

    def get_output(self, timestamp: float, median=None) -> Dict[str, Any]:
        if median is None:
            median = self.filter.peek()

        output = {
            'timestamp': timestamp,
            'median': median.item(),
            'min': self.filter.min().item(),
            'max': self.filter.max().item(),
            'mean': self.filter.mean().item(),
        }
        if self.compute_std:
            output['std'] = self.filter.standard_deviation().item()
        return output

    def cleanup(self):
        if self.filter is not None:
            self.filter.release()
            self.filter = None
        self._is_initialized = False
        logger.info(f"[CLEANUP] Median processor {self.processor_id} cleaned up")
