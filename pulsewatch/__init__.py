"""PulseWatch - periodic price and weather monitoring with deduplicated alerts."""

__version__ = "0.1.0"
