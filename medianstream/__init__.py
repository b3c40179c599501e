from medianstream.utils.filters import MedianFilter, MIN_WINDOW_SIZE, MAX_WINDOW_SIZE

__version__ = "1.0.0"
